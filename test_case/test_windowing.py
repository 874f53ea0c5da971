#!/usr/bin/env python3
"""
窗宽窗位辅助函数测试用例
测试窗口预设、整幅图像应用 VOI 变换以及自动窗口
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# 添加项目路径
sys.path.insert(0, str(Path(__file__).parent.parent))

from voilut.core.config import settings
from voilut.core.exceptions import InvalidInputError, PresetNotFoundError
from voilut.schemas import DeviceLUT, WindowSettings
from voilut.services.voi import (
    CT_WINDOWS,
    apply_voi_lut,
    get_optimal_window,
    get_voi_lut,
    get_window_preset,
)


def create_test_image(shape=(32, 32)):
    """创建测试用的 CT 切片 (空气背景 + 软组织圆盘)"""
    image = np.full(shape, -1000, dtype=np.int16)
    cy, cx = shape[0] // 2, shape[1] // 2
    yy, xx = np.ogrid[:shape[0], :shape[1]]
    image[(yy - cy) ** 2 + (xx - cx) ** 2 < (min(shape) // 4) ** 2] = 50
    return image


class TestWindowPresets:
    """测试窗口预设"""

    def test_presets_are_window_settings(self):
        assert set(CT_WINDOWS) == {
            "lung", "mediastinum", "bone", "brain", "liver", "abdomen", "soft_tissue"
        }
        for window in CT_WINDOWS.values():
            assert isinstance(window, WindowSettings)
            assert window.width > 0

    def test_lookup_by_name(self):
        lung = get_window_preset("lung")
        assert lung.center == -600
        assert lung.width == 1500

    def test_default_preset(self):
        assert get_window_preset() == CT_WINDOWS[settings.DEFAULT_WINDOW_PRESET]

    def test_unknown_preset_raises(self):
        with pytest.raises(PresetNotFoundError) as exc_info:
            get_window_preset("kidney")
        assert exc_info.value.code == "PRESET_NOT_FOUND"


class TestApplyVOILut:
    """测试整幅图像应用 VOI 变换"""

    def test_explicit_window(self):
        image = create_test_image()
        displayed = apply_voi_lut(image, window_center=40, window_width=400)
        assert displayed.dtype == np.float32
        assert displayed.shape == image.shape
        assert displayed.min() == 0.0
        expected = np.float32(get_voi_lut(400, 40)(50))
        assert displayed[16, 16] == expected

    def test_preset_window(self):
        image = create_test_image()
        by_preset = apply_voi_lut(image, preset="brain")
        by_value = apply_voi_lut(image, window_center=40, window_width=80)
        np.testing.assert_array_equal(by_preset, by_value)

    def test_missing_window_raises(self):
        with pytest.raises(InvalidInputError):
            apply_voi_lut(create_test_image())

    def test_clip_disabled_keeps_out_of_range_values(self):
        image = np.array([-1000, 0, 1000])
        displayed = apply_voi_lut(image, window_center=0, window_width=100, clip=False)
        assert displayed[0] < 0
        assert displayed[2] > 255

    def test_clip_enabled(self):
        image = np.array([-1000, 0, 1000])
        displayed = apply_voi_lut(image, window_center=0, window_width=100)
        np.testing.assert_array_equal(displayed, np.array([0.0, 127.5, 255.0], dtype=np.float32))

    def test_device_lut(self):
        lut = DeviceLUT(first_value_mapped=0, lut=list(range(0, 4096, 16)))
        image = np.array([-5, 0, 100, 255, 1000])
        displayed = apply_voi_lut(image, window_center=2048, window_width=4096, voi_lut=lut)
        transform = get_voi_lut(4096, 2048, lut)
        expected = np.clip(transform(image), 0, 255).astype(np.float32)
        np.testing.assert_array_equal(displayed, expected)


class TestOptimalWindow:
    """测试自动窗口"""

    def test_percentile_window(self):
        image = np.arange(0, 101, dtype=np.float32)
        center, width = get_optimal_window(image, percentile=(10, 90))
        assert center == pytest.approx(50.0)
        assert width == pytest.approx(80.0)

    def test_default_percentile(self):
        image = np.arange(0, 101, dtype=np.float32)
        center, width = get_optimal_window(image)
        low, high = settings.AUTO_WINDOW_PERCENTILE
        assert width == pytest.approx(high - low)
        assert center == pytest.approx((high + low) / 2)

    def test_empty_image_raises(self):
        with pytest.raises(InvalidInputError):
            get_optimal_window(np.array([]))


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
