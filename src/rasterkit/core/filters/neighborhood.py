"""The 3x3 sampling pattern shared by every neighbourhood filter.

Offsets are enumerated row-major, ``i = row * 3 + col`` with
``dx = col - 1`` and ``dy = row - 1``, so slot 4 is always the centre pixel.
"""

from __future__ import annotations

import numpy as np

from ..selection import EdgeMode

NEIGHBORHOOD_SIZE = 9
CENTER_SLOT = 4

# (dx, dy) per slot
OFFSETS = tuple((i % 3 - 1, i // 3 - 1) for i in range(NEIGHBORHOOD_SIZE))


def shifted_samples(
    rgb: np.ndarray,
    width: int,
    height: int,
    dx: int,
    dy: int,
    edge_mode: EdgeMode,
) -> np.ndarray:
    """Return the ``(dx, dy)`` neighbour of every pixel as an ``(N, 3)`` array.

    *rgb* is the ``(width * height, 3)`` colour plane.  Samples that fall
    outside the image under *edge_mode* are zero.  The result keeps the dtype
    of *rgb*, so a single slot costs no more than one copy of the plane.
    """

    count = width * height
    if edge_mode is EdgeMode.CLAMP:
        padded = np.pad(rgb.reshape((height, width, 3)), ((1, 1), (1, 1), (0, 0)), mode="edge")
        window = padded[1 + dy : 1 + dy + height, 1 + dx : 1 + dx + width]
        return np.ascontiguousarray(window).reshape((count, 3))

    # Only the flat index is bounds-checked, so horizontal steps past a row's
    # end land on the neighbouring row.
    shift = dx + dy * width
    samples = np.zeros_like(rgb)
    if abs(shift) >= count:
        return samples
    if shift >= 0:
        samples[: count - shift] = rgb[shift:]
    else:
        samples[-shift:] = rgb[: count + shift]
    return samples


def sample_index(x: int, y: int, dx: int, dy: int, width: int, height: int, edge_mode: EdgeMode) -> int | None:
    """Resolve a single neighbourhood sample to a flat pixel index.

    Returns ``None`` when the sample is out of bounds under *edge_mode*.
    """

    if edge_mode is EdgeMode.CLAMP:
        sx = min(max(x + dx, 0), width - 1)
        sy = min(max(y + dy, 0), height - 1)
        return sy * width + sx
    linear = y * width + x + dx + dy * width
    if 0 <= linear < width * height:
        return linear
    return None


__all__ = [
    "CENTER_SLOT",
    "NEIGHBORHOOD_SIZE",
    "OFFSETS",
    "sample_index",
    "shifted_samples",
]
