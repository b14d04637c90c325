from __future__ import annotations

import numpy as np
import pytest

from rasterkit.core.pixel_buffer import PixelBuffer
from rasterkit.core.selection import Channel


def test_rejects_mismatched_length() -> None:
    with pytest.raises(ValueError):
        PixelBuffer(2, 2, np.zeros(15, dtype=np.uint8))


@pytest.mark.parametrize("width,height", [(0, 2), (2, 0), (-1, 3)])
def test_rejects_non_positive_dimensions(width: int, height: int) -> None:
    with pytest.raises(ValueError):
        PixelBuffer(width, height, np.zeros(0, dtype=np.uint8))


def test_from_bytes_copies_input() -> None:
    data = bytearray(range(16))
    buffer = PixelBuffer.from_bytes(2, 2, data)
    data[0] = 99

    assert buffer.get_byte(0) == 0
    assert len(buffer) == 16
    assert buffer.to_bytes() == bytes(range(16))


def test_channel_access_by_coordinate(gradient_buffer: PixelBuffer) -> None:
    gradient_buffer.set_channel(3, 2, Channel.BLUE, 201)

    assert gradient_buffer.get_channel(3, 2, Channel.BLUE) == 201
    index = (2 * gradient_buffer.width + 3) * 4 + 2
    assert gradient_buffer.get_byte(index) == 201


def test_pixel_returns_rgba_tuple() -> None:
    buffer = PixelBuffer.filled(3, 2, (1, 2, 3, 4))
    buffer.set_channel(2, 1, Channel.ALPHA, 250)

    assert buffer.pixel(0, 0) == (1, 2, 3, 4)
    assert buffer.pixel(2, 1) == (1, 2, 3, 250)


def test_out_of_range_access_raises(gradient_buffer: PixelBuffer) -> None:
    with pytest.raises(IndexError):
        gradient_buffer.get_channel(gradient_buffer.width, 0, Channel.RED)
    with pytest.raises(IndexError):
        gradient_buffer.pixel(0, -1)
    with pytest.raises(IndexError):
        gradient_buffer.get_byte(len(gradient_buffer))
    with pytest.raises(ValueError):
        gradient_buffer.set_byte(0, 256)


def test_as_array_is_writable_view(gradient_buffer: PixelBuffer) -> None:
    array = gradient_buffer.as_array()
    assert array.shape == (4, 5, 4)

    array[1, 2, 0] = 7
    assert gradient_buffer.get_channel(2, 1, Channel.RED) == 7


def test_replace_pixels_keeps_geometry(gradient_buffer: PixelBuffer) -> None:
    original = gradient_buffer.to_bytes()
    with pytest.raises(ValueError):
        gradient_buffer.replace_pixels(np.zeros(8, dtype=np.uint8))
    assert gradient_buffer.to_bytes() == original

    gradient_buffer.replace_pixels(np.full(len(gradient_buffer), 9, dtype=np.uint8))
    assert set(gradient_buffer.to_bytes()) == {9}
    assert (gradient_buffer.width, gradient_buffer.height) == (5, 4)


def test_replace_image_swaps_dimensions_together(gradient_buffer: PixelBuffer) -> None:
    other = PixelBuffer.filled(2, 3, (5, 6, 7, 8))
    gradient_buffer.replace_image(other)

    assert (gradient_buffer.width, gradient_buffer.height) == (2, 3)
    assert len(gradient_buffer) == 2 * 3 * 4
    assert gradient_buffer.pixel(1, 2) == (5, 6, 7, 8)


def test_read_only_arrays_are_copied() -> None:
    frozen = np.frombuffer(bytes(16), dtype=np.uint8)
    buffer = PixelBuffer(2, 2, frozen)
    buffer.set_byte(0, 1)

    assert buffer.get_byte(0) == 1


def test_copy_and_equality(gradient_buffer: PixelBuffer) -> None:
    clone = gradient_buffer.copy()
    assert clone == gradient_buffer

    clone.set_byte(0, (clone.get_byte(0) + 1) % 256)
    assert clone != gradient_buffer
