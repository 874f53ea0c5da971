"""
CT 窗宽窗位处理
"""
import numpy as np
from typing import Tuple, Optional, Any

from voilut.core.config import settings
from voilut.core.logging import logger
from voilut.core.exceptions import InvalidInputError, PresetNotFoundError
from voilut.schemas.voi import WindowSettings
from .transform import DISPLAY_MAX, get_voi_lut


# 常用 CT 窗口预设
CT_WINDOWS = {
    "lung": WindowSettings(center=-600, width=1500),      # 肺窗
    "mediastinum": WindowSettings(center=40, width=400),  # 纵隔窗
    "bone": WindowSettings(center=400, width=1800),       # 骨窗
    "brain": WindowSettings(center=40, width=80),         # 脑窗
    "liver": WindowSettings(center=60, width=150),        # 肝窗
    "abdomen": WindowSettings(center=40, width=350),      # 腹部窗
    "soft_tissue": WindowSettings(center=50, width=350),  # 软组织窗
}


def get_window_preset(name: Optional[str] = None) -> WindowSettings:
    """
    获取窗口预设

    Args:
        name: 预设名称, 为空时使用 settings.DEFAULT_WINDOW_PRESET

    Returns:
        预设窗宽窗位
    """
    name = name or settings.DEFAULT_WINDOW_PRESET
    if name not in CT_WINDOWS:
        raise PresetNotFoundError(f"未知的窗口预设: {name} (可选: {', '.join(CT_WINDOWS)})")
    return CT_WINDOWS[name]


def apply_voi_lut(
    image: np.ndarray,
    window_center: Optional[float] = None,
    window_width: Optional[float] = None,
    preset: Optional[str] = None,
    voi_lut: Any = None,
    clip: bool = True
) -> np.ndarray:
    """
    对整幅图像应用 VOI 变换
    
    Args:
        image: 模态值数组 (Modality LUT 之后)
        window_center: 窗位
        window_width: 窗宽
        preset: 预设窗口名称 (lung, mediastinum, bone, etc.), 仅在未给出窗宽窗位时使用
        voi_lut: 设备 LUT, 给出时使用非线性变换
        clip: 是否截断到 [0, 255]
        
    Returns:
        显示灰度图像 (float32)
    """
    if window_center is None or window_width is None:
        if preset is None:
            raise InvalidInputError("必须提供窗宽窗位或预设名称", field="window")
        window = get_window_preset(preset)
        window_center, window_width = window.center, window.width
    
    transform = get_voi_lut(window_width, window_center, voi_lut)
    logger.debug(f"应用 {transform.kind} VOI 变换: 窗宽 {window_width}, 窗位 {window_center}")
    
    displayed = transform(np.asarray(image))
    if clip:
        displayed = np.clip(displayed, 0.0, DISPLAY_MAX)
    
    return np.asarray(displayed, dtype=np.float32)


def get_optimal_window(
    image: np.ndarray,
    percentile: Optional[Tuple[float, float]] = None
) -> Tuple[float, float]:
    """
    自动计算最优窗宽窗位
    
    Args:
        image: CT 图像数组
        percentile: 百分位数范围, 默认 settings.AUTO_WINDOW_PERCENTILE
        
    Returns:
        (window_center, window_width)
    """
    image = np.asarray(image)
    if image.size == 0:
        raise InvalidInputError("图像为空, 无法计算窗口", field="image")
    
    percentile = percentile or settings.AUTO_WINDOW_PERCENTILE
    p_low, p_high = np.percentile(image, percentile)
    window_width = float(p_high - p_low)
    window_center = float(p_high + p_low) / 2
    return window_center, window_width
