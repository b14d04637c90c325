"""Grayscale reduction and RGB to HSL helpers."""

from __future__ import annotations

import logging

import numpy as np

from ..config import LUMA_SCALE, LUMA_WEIGHTS
from .pixel_buffer import PixelBuffer

_LOGGER = logging.getLogger(__name__)


def _write_gray(buffer: PixelBuffer, gray: np.ndarray) -> None:
    rgba = buffer.as_array()
    gray_bytes = gray.astype(np.uint8)
    rgba[..., 0] = gray_bytes
    rgba[..., 1] = gray_bytes
    rgba[..., 2] = gray_bytes


def to_grayscale_average(buffer: PixelBuffer) -> None:
    """Replace R, G and B with their truncated mean ``(R + G + B) // 3``."""

    _LOGGER.debug("Grayscale (average) on %dx%d buffer", buffer.width, buffer.height)
    rgb = buffer.as_array()[..., :3].astype(np.uint16)
    _write_gray(buffer, rgb.sum(axis=-1) // 3)


def to_grayscale_luma(buffer: PixelBuffer) -> None:
    """Replace R, G and B with the BT.709 luma ``0.2126 R + 0.7152 G + 0.0722 B``.

    The weighted sum is evaluated in integer units of ``1 / 10000`` and then
    floored, so saturated inputs such as pure white map back to exactly 255.
    """

    _LOGGER.debug("Grayscale (luma) on %dx%d buffer", buffer.width, buffer.height)
    rgb = buffer.as_array()[..., :3].astype(np.int64)
    weights = np.asarray(LUMA_WEIGHTS, dtype=np.int64)
    _write_gray(buffer, (rgb @ weights) // LUMA_SCALE)


def rgb_to_hsl(r: float, g: float, b: float) -> tuple[float, float, float]:
    """Return ``(hue, saturation, lightness)`` in ``[0, 1]`` for 8-bit RGB input."""

    r /= 255.0
    g /= 255.0
    b /= 255.0

    maximum = max(r, g, b)
    minimum = min(r, g, b)
    lightness = (maximum + minimum) / 2.0

    if maximum == minimum:
        return 0.0, 0.0, lightness

    delta = maximum - minimum
    if lightness > 0.5:
        saturation = delta / (2.0 - maximum - minimum)
    else:
        saturation = delta / (maximum + minimum)

    if maximum == r:
        hue = (g - b) / delta + (6.0 if g < b else 0.0)
    elif maximum == g:
        hue = (b - r) / delta + 2.0
    else:
        hue = (r - g) / delta + 4.0
    return hue / 6.0, saturation, lightness


def buffer_to_hsl(buffer: PixelBuffer) -> np.ndarray:
    """Vectorised :func:`rgb_to_hsl` returning a ``(height, width, 3)`` float array."""

    rgb = buffer.as_array()[..., :3].astype(np.float64) / 255.0
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]

    maximum = rgb.max(axis=-1)
    minimum = rgb.min(axis=-1)
    delta = maximum - minimum
    lightness = (maximum + minimum) / 2.0

    chromatic = delta > 0.0
    safe_delta = np.where(chromatic, delta, 1.0)
    denominator = np.where(lightness > 0.5, 2.0 - maximum - minimum, maximum + minimum)
    saturation = np.where(chromatic, delta / np.where(chromatic, denominator, 1.0), 0.0)

    hue_r = (g - b) / safe_delta + np.where(g < b, 6.0, 0.0)
    hue_g = (b - r) / safe_delta + 2.0
    hue_b = (r - g) / safe_delta + 4.0
    hue = np.where(maximum == r, hue_r, np.where(maximum == g, hue_g, hue_b))
    hue = np.where(chromatic, hue / 6.0, 0.0)

    return np.stack([hue, saturation, lightness], axis=-1)


class ColorReducer:
    """Object facade over the grayscale conversions."""

    def __init__(self, buffer: PixelBuffer) -> None:
        self.buffer = buffer

    def to_grayscale_average(self) -> None:
        to_grayscale_average(self.buffer)

    def to_grayscale_luma(self) -> None:
        to_grayscale_luma(self.buffer)


__all__ = [
    "ColorReducer",
    "buffer_to_hsl",
    "rgb_to_hsl",
    "to_grayscale_average",
    "to_grayscale_luma",
]
