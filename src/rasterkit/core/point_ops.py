"""Per-channel arithmetic and brightness remapping.

Every operation here depends only on the value of a single byte, so each call
pre-computes a 256 entry lookup table and applies it with one NumPy gather.
That keeps the per-pixel work out of the Python interpreter while remaining
bit-for-bit identical to evaluating the formula byte by byte.
"""

from __future__ import annotations

import logging

import numpy as np

from ..config import BRIGHTNESS_SLIDER_SCALE
from .pixel_buffer import PixelBuffer
from .selection import ArithmeticOp, Channel, parse_channel, parse_operation

_LOGGER = logging.getLogger(__name__)

_BYTE_VALUES = np.arange(256, dtype=np.float32)


def _float_to_uint8(values: np.ndarray) -> np.ndarray:
    """Clamp *values* to ``[0, 255]`` and truncate toward zero.

    NaN maps to 0, matching a saturating float to byte cast.
    """

    cleaned = np.nan_to_num(values, nan=0.0, posinf=255.0, neginf=0.0)
    return np.clip(cleaned, 0.0, 255.0).astype(np.uint8)


def _evaluate(op: ArithmeticOp, values: np.ndarray, operand: np.float32) -> np.ndarray:
    with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
        if op is ArithmeticOp.ADD:
            return values + operand
        if op is ArithmeticOp.SUBTRACT:
            return values - operand
        if op is ArithmeticOp.MULTIPLY:
            return values * operand
        if op is ArithmeticOp.DIVIDE:
            return values / operand
    raise AssertionError(f"Unhandled arithmetic operation: {op!r}")


def build_arithmetic_lut(op: ArithmeticOp, operand: float | np.float32) -> np.ndarray:
    """Pre-compute ``op(byte, operand)`` for every possible byte value."""

    return _float_to_uint8(_evaluate(op, _BYTE_VALUES, np.float32(operand)))


def build_brightness_lut(amount: float) -> np.ndarray:
    """Pre-compute the brightness curve for a slider position *amount*.

    *amount* is the raw slider value in ``[-1, 1]``; the curve is driven by
    half of it.  Negative values scale toward black, positive values move
    each byte the same fraction of the way toward white.
    """

    strength = np.float32(_clamp(amount, -1.0, 1.0) * BRIGHTNESS_SLIDER_SCALE)
    if strength < 0.0:
        # norm * (1 + b), rescaled to bytes
        adjusted = _BYTE_VALUES * (np.float32(1.0) + strength)
    else:
        # norm + b * (1 - norm), rescaled to bytes
        adjusted = _BYTE_VALUES + strength * (np.float32(255.0) - _BYTE_VALUES)
    return _float_to_uint8(adjusted)


def _clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, float(value)))


def apply(
    buffer: PixelBuffer,
    channel: Channel | str,
    operand: float,
    op: ArithmeticOp | str,
) -> None:
    """Apply ``op(byte, operand)`` to every byte of *channel* in place.

    An operand that narrows to ``0.0`` in float32 leaves the buffer untouched
    for every operation, including :attr:`ArithmeticOp.DIVIDE`.  Results are
    clamped to ``[0, 255]`` and truncated, never wrapped.
    """

    channel = parse_channel(channel)
    op = parse_operation(op)
    operand = np.float32(operand)
    if operand == 0.0:
        _LOGGER.debug("Skipping %s on %s: operand is zero", op.value, channel.value)
        return

    _LOGGER.debug(
        "Applying %s %s to %s channel of %dx%d buffer",
        op.value,
        operand,
        channel.value,
        buffer.width,
        buffer.height,
    )
    lut = build_arithmetic_lut(op, operand)
    view = buffer.channel_view(channel)
    view[:] = lut[view]


def change_brightness(buffer: PixelBuffer, amount: float) -> None:
    """Lighten (``amount > 0``) or darken (``amount < 0``) the RGB bytes in place.

    Alpha is never modified.  *amount* is clamped to ``[-1, 1]``.
    """

    amount = float(amount)
    if amount == 0.0:
        return

    _LOGGER.debug("Changing brightness by %s on %dx%d buffer", amount, buffer.width, buffer.height)
    lut = build_brightness_lut(amount)
    rgb = buffer.as_array()[..., :3]
    rgb[...] = lut[rgb]


class PointOperationEngine:
    """Object facade over :func:`apply` and :func:`change_brightness`."""

    def __init__(self, buffer: PixelBuffer) -> None:
        self.buffer = buffer

    def apply(self, channel: Channel | str, operand: float, op: ArithmeticOp | str) -> None:
        apply(self.buffer, channel, operand, op)

    def change_brightness(self, amount: float) -> None:
        change_brightness(self.buffer, amount)


__all__ = [
    "PointOperationEngine",
    "apply",
    "build_arithmetic_lut",
    "build_brightness_lut",
    "change_brightness",
]
