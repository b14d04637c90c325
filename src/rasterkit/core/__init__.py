"""Pixel-buffer editing core: the raster, its codec and the filter engines.

:mod:`rasterkit.core.qt_bridge` is not imported here so the core stays usable
without a Qt runtime.
"""

from __future__ import annotations

from .color_reducer import ColorReducer, buffer_to_hsl, rgb_to_hsl, to_grayscale_average, to_grayscale_luma
from .editor import ImageEditor
from .filters import ConvolutionEngine, apply_filter
from .pixel_buffer import PixelBuffer
from .point_ops import PointOperationEngine, change_brightness
from .point_ops import apply as apply_point
from .selection import ArithmeticOp, Channel, EdgeMode, FilterKind

__all__ = [
    "ArithmeticOp",
    "Channel",
    "ColorReducer",
    "ConvolutionEngine",
    "EdgeMode",
    "FilterKind",
    "ImageEditor",
    "PixelBuffer",
    "PointOperationEngine",
    "apply_filter",
    "apply_point",
    "buffer_to_hsl",
    "change_brightness",
    "rgb_to_hsl",
    "to_grayscale_average",
    "to_grayscale_luma",
]
