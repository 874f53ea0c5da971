"""VOI LUT - 模态值到显示灰度的 VOI 变换"""
from .schemas import WindowSettings, DeviceLUT
from .services.voi import (
    LinearVOITransform,
    NonLinearVOITransform,
    get_voi_lut,
    get_voi_lut_for_window,
    apply_voi_lut
)

__version__ = "1.0.0"
