"""Packed RGBA8 raster owned by the editor session."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from ..config import BYTES_PER_PIXEL
from .selection import Channel


def _expected_size(width: int, height: int) -> int:
    return width * height * BYTES_PER_PIXEL


def _validate_dimensions(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")


def _coerce_pixels(pixels: object, width: int, height: int) -> np.ndarray:
    """Return *pixels* as a contiguous 1-D ``uint8`` array of the expected size."""

    if isinstance(pixels, np.ndarray):
        array = pixels.reshape(-1)
        if array.dtype != np.uint8:
            raise ValueError(f"Pixel array must have dtype uint8, got {array.dtype}")
        array = np.ascontiguousarray(array)
        if not array.flags.writeable:
            array = array.copy()
    else:
        array = np.frombuffer(bytes(pixels), dtype=np.uint8).copy()

    expected = _expected_size(width, height)
    if array.size != expected:
        raise ValueError(
            f"Pixel buffer holds {array.size} bytes, expected {expected} for {width}x{height} RGBA8"
        )
    return array


@dataclass(eq=False)
class PixelBuffer:
    """Decoded raster: RGBA8, row-major, no padding between rows.

    ``pixels`` always holds exactly ``width * height * 4`` bytes.  Filters
    either write bytes in place or swap the whole array through
    :meth:`replace_pixels`, so the size invariant can never be broken by a
    partial resize.
    """

    width: int
    height: int
    pixels: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        self.width = int(self.width)
        self.height = int(self.height)
        _validate_dimensions(self.width, self.height)
        self.pixels = _coerce_pixels(self.pixels, self.width, self.height)

    # ── Construction helpers ─────────────────────────────────────────
    @classmethod
    def from_bytes(cls, width: int, height: int, data: bytes | bytearray | memoryview) -> "PixelBuffer":
        """Create a buffer by copying raw RGBA8 *data*."""

        return cls(width, height, np.frombuffer(data, dtype=np.uint8).copy())

    @classmethod
    def filled(cls, width: int, height: int, rgba: Sequence[int]) -> "PixelBuffer":
        """Return a buffer where every pixel equals *rgba*."""

        _validate_dimensions(width, height)
        colour = np.asarray(rgba, dtype=np.int64)
        if colour.shape != (BYTES_PER_PIXEL,) or colour.min() < 0 or colour.max() > 255:
            raise ValueError(f"Expected four byte values, got {tuple(rgba)!r}")
        pixels = np.tile(colour.astype(np.uint8), width * height)
        return cls(width, height, pixels)

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self.width, self.height, self.pixels.copy())

    # ── Geometry ─────────────────────────────────────────────────────
    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def __len__(self) -> int:
        return int(self.pixels.size)

    def as_array(self) -> np.ndarray:
        """Return a writable ``(height, width, 4)`` view over :attr:`pixels`."""

        return self.pixels.reshape((self.height, self.width, BYTES_PER_PIXEL))

    def channel_view(self, channel: Channel) -> np.ndarray:
        """Return a strided 1-D view over every byte of *channel*."""

        return self.pixels[channel.offset :: BYTES_PER_PIXEL]

    def to_bytes(self) -> bytes:
        return self.pixels.tobytes()

    # ── Element access ───────────────────────────────────────────────
    def _linear_index(self, x: int, y: int, channel: Channel) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return (y * self.width + x) * BYTES_PER_PIXEL + channel.offset

    def get_channel(self, x: int, y: int, channel: Channel) -> int:
        return int(self.pixels[self._linear_index(x, y, channel)])

    def set_channel(self, x: int, y: int, channel: Channel, value: int) -> None:
        self.pixels[self._linear_index(x, y, channel)] = _check_byte(value)

    def get_byte(self, index: int) -> int:
        if not 0 <= index < self.pixels.size:
            raise IndexError(f"Byte index {index} outside buffer of {self.pixels.size} bytes")
        return int(self.pixels[index])

    def set_byte(self, index: int, value: int) -> None:
        if not 0 <= index < self.pixels.size:
            raise IndexError(f"Byte index {index} outside buffer of {self.pixels.size} bytes")
        self.pixels[index] = _check_byte(value)

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Return the ``(r, g, b, a)`` tuple at ``(x, y)``."""

        start = self._linear_index(x, y, Channel.RED)
        r, g, b, a = self.pixels[start : start + BYTES_PER_PIXEL]
        return int(r), int(g), int(b), int(a)

    # ── Whole-buffer replacement ─────────────────────────────────────
    def replace_pixels(self, new_pixels: np.ndarray) -> None:
        """Swap in *new_pixels* after checking they keep the same geometry."""

        self.pixels = _coerce_pixels(new_pixels, self.width, self.height)

    def replace_image(self, other: "PixelBuffer") -> None:
        """Adopt the raster and dimensions of *other* in a single step."""

        self.width, self.height, self.pixels = other.width, other.height, other.pixels

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.pixels, other.pixels)
        )


def _check_byte(value: int) -> int:
    value = int(value)
    if not 0 <= value <= 255:
        raise ValueError(f"Byte value must be within [0, 255], got {value}")
    return value


__all__ = ["PixelBuffer"]
