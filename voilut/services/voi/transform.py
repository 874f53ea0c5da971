"""
VOI LUT 变换生成

将模态值 (Modality LUT 输出) 映射为 8 位显示灰度:
- 线性变换: 仅由窗宽窗位决定
- 非线性变换: 由设备 VOI LUT 决定, 窗宽窗位作用于移位后的 LUT 输出
"""
from typing import Any, Mapping, Union

import numpy as np
from pydantic import ValidationError

from voilut.core.logging import logger
from voilut.core.exceptions import InvalidInputError
from voilut.schemas.voi import DeviceLUT, WindowSettings


# 显示灰度上限与位深
DISPLAY_MAX = 255.0
DISPLAY_BITS = 8


def _shift_right(value, shift: int):
    """算术右移, 位移量只取低 5 位 (负的位移量如 -1 等同于 31)"""
    return value >> (shift & 31)


def _linear_window(values: np.ndarray, width: float, center: float) -> np.ndarray:
    # 窗宽为 0 时得到 inf/nan, 不抛出异常
    with np.errstate(divide="ignore", invalid="ignore"):
        return ((values - center) / width + 0.5) * DISPLAY_MAX


def _to_output(result: np.ndarray, scalar: bool):
    return float(result) if scalar else result


class LinearVOITransform:
    """
    线性 VOI 变换

    f(v) = ((v - center) / width + 0.5) * 255.0, 不做截断
    """

    kind = "linear"

    def __init__(self, window_width: float, window_center: float):
        self._width = float(window_width)
        self._center = float(window_center)

    @property
    def window_width(self) -> float:
        return self._width

    @property
    def window_center(self) -> float:
        return self._center

    def __call__(self, modality_lut_value):
        """
        计算显示灰度

        Args:
            modality_lut_value: 模态值 (标量或数组)

        Returns:
            标量输入返回 float, 数组输入返回同形状的 float64 数组
        """
        values = np.asarray(modality_lut_value, dtype=np.float64)
        result = _linear_window(values, self._width, self._center)
        return _to_output(result, values.ndim == 0)

    def __repr__(self) -> str:
        return f"LinearVOITransform(window_width={self._width}, window_center={self._center})"


class NonLinearVOITransform:
    """
    基于设备 LUT 的非线性 VOI 变换

    位深由表中最大值推断, 不使用设备声明的位深 (部分厂商会写错)。
    窗宽窗位按同样的位数右移后, 作用于移位后的 LUT 输出。
    """

    kind = "non_linear"

    def __init__(self, window_width: float, window_center: float, voi_lut: Any):
        lut = np.array(voi_lut.lut, dtype=np.int64)
        lut.setflags(write=False)

        self._lut = lut
        self._first_value_mapped = int(voi_lut.first_value_mapped)
        self._bits_per_entry = max(int(lut.max()).bit_length(), 1)
        self._shift = self._bits_per_entry - DISPLAY_BITS
        self._min_value = _shift_right(int(lut[0]), self._shift)
        self._max_value = _shift_right(int(lut[-1]), self._shift)
        self._max_value_mapped = self._first_value_mapped + len(lut) - 1
        self._linear = LinearVOITransform(
            _shift_right(int(window_width), self._shift),
            _shift_right(int(window_center), self._shift)
        )

    @property
    def lut(self) -> np.ndarray:
        """只读的 LUT 副本"""
        return self._lut

    @property
    def first_value_mapped(self) -> int:
        return self._first_value_mapped

    @property
    def max_value_mapped(self) -> int:
        return self._max_value_mapped

    @property
    def bits_per_entry(self) -> int:
        return self._bits_per_entry

    @property
    def shift(self) -> int:
        return self._shift

    @property
    def min_value(self) -> int:
        return self._min_value

    @property
    def max_value(self) -> int:
        return self._max_value

    @property
    def window_width(self) -> float:
        """移位后的窗宽"""
        return self._linear.window_width

    @property
    def window_center(self) -> float:
        """移位后的窗位"""
        return self._linear.window_center

    def __call__(self, modality_lut_value):
        """
        计算显示灰度

        低于 first_value_mapped 返回 min_value;
        大于等于 max_value_mapped 返回 max_value;
        其余查表、移位后做线性窗口变换。

        Args:
            modality_lut_value: 模态值 (标量或数组)

        Returns:
            标量输入返回 float, 数组输入返回同形状的 float64 数组
        """
        values = np.asarray(modality_lut_value, dtype=np.float64)

        # 越界的索引不会被采用, 先截断到表内以便整体查表
        # 非整数模态值取 floor 后查表, NaN 查第 0 项 (不回退为 linear(0))
        offset = np.nan_to_num(values - self._first_value_mapped, nan=0.0)
        index = np.clip(offset, 0, len(self._lut) - 1).astype(np.int64)
        entries = _shift_right(self._lut[index], self._shift)
        windowed = _linear_window(
            np.asarray(entries, dtype=np.float64),
            self._linear.window_width,
            self._linear.window_center
        )

        result = np.where(
            values < self._first_value_mapped,
            float(self._min_value),
            np.where(values >= self._max_value_mapped, float(self._max_value), windowed)
        )
        return _to_output(result, values.ndim == 0)

    def __repr__(self) -> str:
        return (
            f"NonLinearVOITransform(first_value_mapped={self._first_value_mapped}, "
            f"entries={len(self._lut)}, bits_per_entry={self._bits_per_entry}, shift={self._shift})"
        )


VOITransform = Union[LinearVOITransform, NonLinearVOITransform]


def generate_linear_voi_lut(window_width: float, window_center: float) -> LinearVOITransform:
    """
    生成线性 VOI 变换

    Args:
        window_width: 窗宽 (不能为 0, 不做校验)
        window_center: 窗位

    Returns:
        线性 VOI 变换
    """
    return LinearVOITransform(window_width, window_center)


def generate_non_linear_voi_lut(window_width: float, window_center: float, voi_lut: Any) -> NonLinearVOITransform:
    """
    生成非线性 VOI 变换

    Args:
        window_width: 窗宽
        window_center: 窗位
        voi_lut: 设备 LUT, 需提供 first_value_mapped 与 lut (非空)

    Returns:
        非线性 VOI 变换
    """
    transform = NonLinearVOITransform(window_width, window_center, voi_lut)
    logger.debug(
        f"非线性 VOI LUT: {len(transform.lut)} 项, 推断位深 {transform.bits_per_entry}, 移位 {transform.shift}"
    )
    return transform


def _coerce_device_lut(voi_lut: Any) -> Any:
    if isinstance(voi_lut, Mapping):
        try:
            return DeviceLUT.model_validate(voi_lut)
        except ValidationError as e:
            raise InvalidInputError(f"无效的 VOI LUT: {e}", field="voi_lut") from e
    return voi_lut


def get_voi_lut(window_width: float, window_center: float, voi_lut: Any = None) -> VOITransform:
    """
    根据窗宽窗位与可选的设备 LUT 获取 VOI 变换

    Args:
        window_width: 窗宽
        window_center: 窗位
        voi_lut: 设备 LUT (DeviceLUT 或等价的 dict), 为 None 时使用线性变换

    Returns:
        VOI 变换
    """
    if voi_lut is not None:
        return generate_non_linear_voi_lut(window_width, window_center, _coerce_device_lut(voi_lut))

    return generate_linear_voi_lut(window_width, window_center)


def get_voi_lut_for_window(window: WindowSettings, voi_lut: Any = None) -> VOITransform:
    """按 WindowSettings 获取 VOI 变换"""
    return get_voi_lut(window.width, window.center, voi_lut)
