"""NumPy vectorised executor for the 3x3 neighbourhood filters.

The whole image is processed at once, one neighbourhood slot at a time: each
slot's samples come from :func:`~.neighborhood.shifted_samples` as a ``uint8``
plane and the linear filters fold it into an ``int32`` accumulator straight
away.  Only the median keeps all nine planes alive, still as bytes.
"""

from __future__ import annotations

from typing import Iterator

import numpy as np

from ...config import (
    GAUSSIAN_DIVISOR,
    GAUSSIAN_KERNEL,
    HIGHPASS_CENTER_WEIGHT,
    HIGHPASS_DIVISOR,
    SMOOTH_DIVISOR,
)
from ..selection import EdgeMode, FilterKind
from .neighborhood import CENTER_SLOT, NEIGHBORHOOD_SIZE, OFFSETS, shifted_samples

_GAUSSIAN_WEIGHTS = tuple(w for row in GAUSSIAN_KERNEL for w in row)


def _slots(rgb: np.ndarray, width: int, height: int, edge_mode: EdgeMode) -> Iterator[tuple[int, np.ndarray]]:
    for slot, (dx, dy) in enumerate(OFFSETS):
        yield slot, shifted_samples(rgb, width, height, dx, dy, edge_mode)


def _weighted_sum(rgb: np.ndarray, width: int, height: int, edge_mode: EdgeMode, weights) -> np.ndarray:
    total = np.zeros(rgb.shape, dtype=np.int32)
    for slot, samples in _slots(rgb, width, height, edge_mode):
        weight = weights[slot]
        if weight == 1:
            total += samples
        elif weight:
            total += weight * samples.astype(np.int32)
    return total


def _smooth(rgb: np.ndarray, width: int, height: int, edge_mode: EdgeMode) -> np.ndarray:
    return _weighted_sum(rgb, width, height, edge_mode, (1,) * NEIGHBORHOOD_SIZE) // SMOOTH_DIVISOR


def _median(rgb: np.ndarray, width: int, height: int, edge_mode: EdgeMode) -> np.ndarray:
    stack = np.empty((NEIGHBORHOOD_SIZE,) + rgb.shape, dtype=np.uint8)
    for slot, samples in _slots(rgb, width, height, edge_mode):
        stack[slot] = samples
    stack.sort(axis=0)
    return stack[CENTER_SLOT]


def _edges(rgb: np.ndarray, width: int, height: int, edge_mode: EdgeMode) -> np.ndarray:
    gx = np.zeros(rgb.shape, dtype=np.int32)
    gy = np.zeros(rgb.shape, dtype=np.int32)
    for slot, samples in _slots(rgb, width, height, edge_mode):
        dx, dy = OFFSETS[slot]
        if dx:
            gx += dx * samples.astype(np.int32)
        if dy:
            gy += dy * samples.astype(np.int32)
    gx *= gx
    gy *= gy
    gx += gy
    magnitude = np.sqrt(gx, dtype=np.float64)
    np.floor(magnitude, out=magnitude)
    np.minimum(magnitude, 255, out=magnitude)
    return magnitude.astype(np.uint8)


def _highpass(rgb: np.ndarray, width: int, height: int, edge_mode: EdgeMode) -> np.ndarray:
    """High-pass response ``(8 * centre - neighbours) / 9`` as clamped bytes."""

    weights = tuple(HIGHPASS_CENTER_WEIGHT if slot == CENTER_SLOT else -1 for slot in range(NEIGHBORHOOD_SIZE))
    response = _weighted_sum(rgb, width, height, edge_mode, weights)
    # Negative responses truncate to zero.
    np.maximum(response, 0, out=response)
    return np.minimum(response // HIGHPASS_DIVISOR, 255)


def _sharpen(rgb: np.ndarray, width: int, height: int, edge_mode: EdgeMode) -> np.ndarray:
    highpass = _highpass(rgb, width, height, edge_mode)
    highpass += rgb
    return np.minimum(highpass, 255)


def _gaussian(rgb: np.ndarray, width: int, height: int, edge_mode: EdgeMode) -> np.ndarray:
    return _weighted_sum(rgb, width, height, edge_mode, _GAUSSIAN_WEIGHTS) // GAUSSIAN_DIVISOR


_REDUCERS = {
    FilterKind.SMOOTH: _smooth,
    FilterKind.MEDIAN: _median,
    FilterKind.EDGES: _edges,
    FilterKind.SHARPEN: _sharpen,
    FilterKind.GAUSSIAN: _gaussian,
}


def convolve(
    pixels: np.ndarray,
    width: int,
    height: int,
    kind: FilterKind,
    edge_mode: EdgeMode,
) -> np.ndarray:
    """Return a new RGBA8 array with *kind* applied to *pixels*.

    *pixels* is the flat input buffer and is never modified.  Alpha bytes are
    copied through unchanged.
    """

    count = width * height
    rgba = pixels.reshape((count, 4))
    rgb = np.ascontiguousarray(rgba[:, :3], dtype=np.uint8)

    result = _REDUCERS[kind](rgb, width, height, edge_mode)

    output = rgba.copy()
    output[:, :3] = result.astype(np.uint8)
    return output.reshape(-1)


__all__ = ["convolve"]
