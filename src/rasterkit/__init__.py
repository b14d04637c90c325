"""rasterkit: deterministic filters over packed RGBA8 pixel buffers."""

from __future__ import annotations

from .core import (
    ArithmeticOp,
    Channel,
    ColorReducer,
    ConvolutionEngine,
    EdgeMode,
    FilterKind,
    ImageEditor,
    PixelBuffer,
    PointOperationEngine,
)
from .core.codec import encode, load, load_path
from .errors import DecodeError, EditorError, EncodeError, InvalidSelection, RasterKitError
from .utils.logging import get_logger

__version__ = "0.1.0"

get_logger()

__all__ = [
    "ArithmeticOp",
    "Channel",
    "ColorReducer",
    "ConvolutionEngine",
    "DecodeError",
    "EdgeMode",
    "EditorError",
    "EncodeError",
    "FilterKind",
    "ImageEditor",
    "InvalidSelection",
    "PixelBuffer",
    "PointOperationEngine",
    "RasterKitError",
    "encode",
    "get_logger",
    "load",
    "load_path",
]
