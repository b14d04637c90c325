from __future__ import annotations

import numpy as np
import pytest

from rasterkit.core import color_reducer
from rasterkit.core.pixel_buffer import PixelBuffer
from rasterkit.core.selection import Channel


def test_average_of_sample_pixel() -> None:
    buffer = PixelBuffer.filled(1, 1, (30, 60, 90, 255))
    color_reducer.to_grayscale_average(buffer)
    assert buffer.pixel(0, 0) == (60, 60, 60, 255)


def test_average_truncates() -> None:
    buffer = PixelBuffer.filled(1, 1, (255, 255, 254, 9))
    color_reducer.to_grayscale_average(buffer)
    # 764 / 3 = 254.67
    assert buffer.pixel(0, 0) == (254, 254, 254, 9)


def test_luma_keeps_white_white() -> None:
    buffer = PixelBuffer.filled(2, 2, (255, 255, 255, 255))
    color_reducer.to_grayscale_luma(buffer)
    assert buffer.pixel(1, 1) == (255, 255, 255, 255)


@pytest.mark.parametrize(
    "rgb,expected",
    [
        ((255, 0, 0), 54),
        ((0, 255, 0), 182),
        ((0, 0, 255), 18),
        ((0, 0, 0), 0),
    ],
)
def test_luma_uses_bt709_weights(rgb: tuple[int, int, int], expected: int) -> None:
    buffer = PixelBuffer.filled(1, 1, (*rgb, 128))
    color_reducer.to_grayscale_luma(buffer)
    assert buffer.pixel(0, 0) == (expected, expected, expected, 128)


@pytest.mark.parametrize("convert", [color_reducer.to_grayscale_average, color_reducer.to_grayscale_luma])
def test_grayscale_equalises_channels_and_keeps_alpha(gradient_buffer: PixelBuffer, convert) -> None:
    alpha = gradient_buffer.channel_view(Channel.ALPHA).copy()
    convert(gradient_buffer)

    rgba = gradient_buffer.as_array()
    assert np.array_equal(rgba[..., 0], rgba[..., 1])
    assert np.array_equal(rgba[..., 1], rgba[..., 2])
    assert np.array_equal(gradient_buffer.channel_view(Channel.ALPHA), alpha)
    assert len(gradient_buffer) == 5 * 4 * 4


def test_reducer_facade(uniform_buffer: PixelBuffer) -> None:
    reducer = color_reducer.ColorReducer(uniform_buffer)
    reducer.to_grayscale_average()
    assert uniform_buffer.pixel(0, 0) == (80, 80, 80, 200)

    reducer.to_grayscale_luma()
    assert uniform_buffer.pixel(5, 4) == (80, 80, 80, 200)


@pytest.mark.parametrize(
    "rgb,expected",
    [
        ((255, 0, 0), (0.0, 1.0, 0.5)),
        ((0, 255, 0), (1 / 3, 1.0, 0.5)),
        ((0, 0, 255), (2 / 3, 1.0, 0.5)),
        ((255, 255, 255), (0.0, 0.0, 1.0)),
        ((0, 0, 0), (0.0, 0.0, 0.0)),
        ((255, 0, 255), (5 / 6, 1.0, 0.5)),
    ],
)
def test_rgb_to_hsl(rgb: tuple[int, int, int], expected: tuple[float, float, float]) -> None:
    assert color_reducer.rgb_to_hsl(*rgb) == pytest.approx(expected)


def test_rgb_to_hsl_gray_has_no_saturation() -> None:
    hue, saturation, lightness = color_reducer.rgb_to_hsl(128, 128, 128)
    assert hue == 0.0
    assert saturation == 0.0
    assert lightness == pytest.approx(128 / 255)


def test_buffer_to_hsl_matches_scalar_conversion(random_buffer: PixelBuffer) -> None:
    hsl = color_reducer.buffer_to_hsl(random_buffer)
    assert hsl.shape == (random_buffer.height, random_buffer.width, 3)

    for y in range(random_buffer.height):
        for x in range(random_buffer.width):
            r, g, b, _ = random_buffer.pixel(x, y)
            assert tuple(hsl[y, x]) == pytest.approx(color_reducer.rgb_to_hsl(r, g, b))
