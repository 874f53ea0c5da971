"""VOI LUT 变换服务"""
from .transform import (
    LinearVOITransform,
    NonLinearVOITransform,
    VOITransform,
    generate_linear_voi_lut,
    generate_non_linear_voi_lut,
    get_voi_lut,
    get_voi_lut_for_window
)
from .windowing import CT_WINDOWS, get_window_preset, apply_voi_lut, get_optimal_window
