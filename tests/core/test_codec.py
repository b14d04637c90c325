from __future__ import annotations

import io

import numpy as np
import pytest
from PIL import Image

from rasterkit.core import codec
from rasterkit.core.pixel_buffer import PixelBuffer
from rasterkit.errors import DecodeError, EncodeError


def _png_bytes(image: Image.Image) -> bytes:
    output = io.BytesIO()
    image.save(output, format="PNG")
    return output.getvalue()


def test_rgb_source_gains_opaque_alpha() -> None:
    buffer = codec.load(_png_bytes(Image.new("RGB", (3, 2), (10, 20, 30))))

    assert (buffer.width, buffer.height) == (3, 2)
    assert len(buffer) == 3 * 2 * 4
    assert buffer.pixel(2, 1) == (10, 20, 30, 255)


def test_grayscale_source_is_channel_duplicated() -> None:
    buffer = codec.load(_png_bytes(Image.new("L", (2, 2), 77)))
    assert buffer.pixel(0, 1) == (77, 77, 77, 255)


def test_palette_source_is_expanded() -> None:
    palette_image = Image.new("RGB", (2, 1), (200, 10, 10)).convert("P", palette=Image.Palette.ADAPTIVE)
    buffer = codec.load(_png_bytes(palette_image))
    assert buffer.pixel(1, 0) == (200, 10, 10, 255)


def test_rgba_source_keeps_alpha() -> None:
    buffer = codec.load(_png_bytes(Image.new("RGBA", (1, 1), (1, 2, 3, 4))))
    assert buffer.pixel(0, 0) == (1, 2, 3, 4)


def test_sixteen_bit_grayscale_is_rescaled() -> None:
    samples = np.array([[0, 32768], [65535, 257]], dtype=np.uint16)
    source = Image.fromarray(samples)
    data = _png_bytes(source)
    with Image.open(io.BytesIO(data)) as reopened:
        assert reopened.mode.startswith("I")

    buffer = codec.load(data)
    assert buffer.pixel(0, 0) == (0, 0, 0, 255)
    assert buffer.pixel(1, 0) == (128, 128, 128, 255)
    assert buffer.pixel(0, 1) == (255, 255, 255, 255)
    assert buffer.pixel(1, 1) == (1, 1, 1, 255)


def test_float_grayscale_is_rescaled_from_unit_range() -> None:
    samples = np.array([[0.0, 0.5], [1.0, 2.0]], dtype=np.float32)
    output = io.BytesIO()
    Image.fromarray(samples).save(output, format="TIFF")

    buffer = codec.load(output.getvalue())
    assert [buffer.pixel(x, y)[0] for y in range(2) for x in range(2)] == [0, 128, 255, 255]


def test_decompression_bomb_raises_decode_error(monkeypatch) -> None:
    data = _png_bytes(Image.new("RGB", (8, 8), (1, 2, 3)))
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10)

    with pytest.raises(DecodeError):
        codec.load(data)


@pytest.mark.parametrize("data", [b"", b"definitely not an image", b"\x89PNG\r\n\x1a\n"])
def test_unrecognised_bytes_raise_decode_error(data: bytes) -> None:
    with pytest.raises(DecodeError):
        codec.load(data)


def test_truncated_stream_raises_decode_error() -> None:
    rng = np.random.default_rng(3)
    noise = Image.fromarray(rng.integers(0, 256, (64, 64, 3), dtype=np.uint8), "RGB")
    data = _png_bytes(noise)

    with pytest.raises(DecodeError):
        codec.load(data[: len(data) // 2])


def test_load_path_reads_file(tmp_path) -> None:
    path = tmp_path / "pixel.png"
    Image.new("RGB", (4, 3), (9, 8, 7)).save(path)

    buffer = codec.load_path(path)
    assert (buffer.width, buffer.height) == (4, 3)


def test_load_path_missing_file(tmp_path) -> None:
    with pytest.raises(DecodeError):
        codec.load_path(tmp_path / "missing.png")


def test_png_round_trip(random_buffer: PixelBuffer) -> None:
    decoded = codec.load(codec.encode(random_buffer, "PNG"))
    assert decoded == random_buffer


def test_jpeg_encoding_drops_alpha(uniform_buffer: PixelBuffer) -> None:
    data = codec.encode(uniform_buffer, "jpg")
    with Image.open(io.BytesIO(data)) as image:
        assert image.format == "JPEG"
        assert image.mode == "RGB"


def test_unknown_format_raises_encode_error(uniform_buffer: PixelBuffer) -> None:
    with pytest.raises(EncodeError):
        codec.encode(uniform_buffer, "NOT-A-FORMAT")


def test_to_pil_image_copies(uniform_buffer: PixelBuffer) -> None:
    image = codec.to_pil_image(uniform_buffer)
    uniform_buffer.set_byte(0, 0)

    assert image.mode == "RGBA"
    assert image.size == (6, 5)
    assert image.getpixel((0, 0)) == (120, 80, 40, 200)
