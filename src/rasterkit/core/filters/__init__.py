"""3x3 neighbourhood filters over an RGBA8 :class:`~rasterkit.core.pixel_buffer.PixelBuffer`.

This package separates the filter engine into:
- neighborhood: the shared sampling pattern and boundary policies
- executors: a Numba JIT loop and a vectorised NumPy path with identical output
- facade: executor selection and the public filter functions
"""

from __future__ import annotations

from .facade import (
    ConvolutionEngine,
    apply_filter,
    filter_edges,
    filter_gaussian_blur,
    filter_median,
    filter_sharpen,
    filter_smooth,
)

__all__ = [
    "ConvolutionEngine",
    "apply_filter",
    "filter_edges",
    "filter_gaussian_blur",
    "filter_median",
    "filter_sharpen",
    "filter_smooth",
]
