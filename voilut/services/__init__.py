"""服务模块"""
from .voi import get_voi_lut, apply_voi_lut
