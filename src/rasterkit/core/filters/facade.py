"""Entry points selecting an executor for the neighbourhood filters."""

from __future__ import annotations

import logging

from numba.core.errors import NumbaError

from ...config import BACKENDS, backend_from_env, edge_mode_from_env
from ...errors import InvalidSelection
from ..pixel_buffer import PixelBuffer
from ..selection import EdgeMode, FilterKind, parse_edge_mode, parse_filter
from . import jit_executor, numpy_executor

_LOGGER = logging.getLogger(__name__)

# Set once the JIT path failed to compile so later calls skip straight to NumPy.
_JIT_BROKEN = False


def resolve_edge_mode(edge_mode: EdgeMode | str | None) -> EdgeMode:
    """Return *edge_mode* or the configured default when it is ``None``."""

    if edge_mode is None:
        return parse_edge_mode(edge_mode_from_env())
    return parse_edge_mode(edge_mode)


def resolve_backend(backend: str | None) -> str:
    """Return *backend* or the configured default when it is ``None``."""

    if backend is None:
        return backend_from_env()
    key = str(backend).strip().lower()
    if key not in BACKENDS:
        raise InvalidSelection("backend", backend, BACKENDS)
    return key


def _run_jit_with_fallback(buffer: PixelBuffer, kind: FilterKind, edge_mode: EdgeMode):
    global _JIT_BROKEN
    if not _JIT_BROKEN:
        try:
            return jit_executor.convolve(buffer.pixels, buffer.width, buffer.height, kind, edge_mode)
        except NumbaError as exc:
            _JIT_BROKEN = True
            _LOGGER.warning("JIT filter kernel unavailable, falling back to NumPy: %s", exc)
    return numpy_executor.convolve(buffer.pixels, buffer.width, buffer.height, kind, edge_mode)


def apply_filter(
    buffer: PixelBuffer,
    kind: FilterKind | str,
    *,
    edge_mode: EdgeMode | str | None = None,
    backend: str | None = None,
) -> None:
    """Run the 3x3 filter *kind* over *buffer*.

    The result is computed into a fresh array (so no pass ever reads a
    neighbour it has already overwritten) and then swapped into *buffer* in a
    single step.  Width, height and byte count never change.

    Parameters
    ----------
    kind:
        A :class:`FilterKind` or one of its string tokens (``"smooth"``,
        ``"median"``, ``"edges"``, ``"sharpen"``, ``"gaussian"``).
    edge_mode:
        Boundary policy.  Defaults to ``RASTERKIT_EDGE_MODE`` or ``"clamp"``.
    backend:
        ``"jit"``, ``"numpy"`` or ``"auto"`` (JIT with NumPy fallback).
        Defaults to ``RASTERKIT_BACKEND`` or ``"auto"``.
    """

    kind = parse_filter(kind)
    mode = resolve_edge_mode(edge_mode)
    selected = resolve_backend(backend)

    _LOGGER.debug(
        "Filter %s on %dx%d buffer (edges=%s, backend=%s)",
        kind.value,
        buffer.width,
        buffer.height,
        mode.value,
        selected,
    )

    if selected == "numpy":
        result = numpy_executor.convolve(buffer.pixels, buffer.width, buffer.height, kind, mode)
    elif selected == "jit":
        result = jit_executor.convolve(buffer.pixels, buffer.width, buffer.height, kind, mode)
    else:
        result = _run_jit_with_fallback(buffer, kind, mode)

    buffer.replace_pixels(result)


def filter_smooth(buffer: PixelBuffer, **options) -> None:
    """3x3 box blur: unweighted mean of the nine samples."""

    apply_filter(buffer, FilterKind.SMOOTH, **options)


def filter_median(buffer: PixelBuffer, **options) -> None:
    apply_filter(buffer, FilterKind.MEDIAN, **options)


def filter_edges(buffer: PixelBuffer, **options) -> None:
    """Gradient magnitude ``sqrt(gx^2 + gy^2)`` clamped to 255."""

    apply_filter(buffer, FilterKind.EDGES, **options)


def filter_sharpen(buffer: PixelBuffer, **options) -> None:
    """Add the clamped high-pass response back onto the image (saturating)."""

    apply_filter(buffer, FilterKind.SHARPEN, **options)


def filter_gaussian_blur(buffer: PixelBuffer, **options) -> None:
    apply_filter(buffer, FilterKind.GAUSSIAN, **options)


class ConvolutionEngine:
    """Object facade binding a buffer to a boundary policy and backend."""

    def __init__(
        self,
        buffer: PixelBuffer,
        *,
        edge_mode: EdgeMode | str | None = None,
        backend: str | None = None,
    ) -> None:
        self.buffer = buffer
        self.edge_mode = resolve_edge_mode(edge_mode)
        self.backend = resolve_backend(backend)

    def apply(self, kind: FilterKind | str) -> None:
        apply_filter(self.buffer, kind, edge_mode=self.edge_mode, backend=self.backend)

    def smooth(self) -> None:
        self.apply(FilterKind.SMOOTH)

    def median(self) -> None:
        self.apply(FilterKind.MEDIAN)

    def edges(self) -> None:
        self.apply(FilterKind.EDGES)

    def sharpen(self) -> None:
        self.apply(FilterKind.SHARPEN)

    def gaussian_blur(self) -> None:
        self.apply(FilterKind.GAUSSIAN)
