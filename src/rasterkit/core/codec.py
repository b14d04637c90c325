"""Pillow-backed decode/encode between compressed bytes and :class:`PixelBuffer`."""

from __future__ import annotations

import io
import logging
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..errors import DecodeError, EncodeError
from .pixel_buffer import PixelBuffer

_LOGGER = logging.getLogger(__name__)

# Grayscale modes whose samples do not fit a byte.  ``convert("RGBA")`` clips
# them instead of rescaling, so they are narrowed to ``L`` first.
_WIDE_GRAY_MODES = ("I;16", "I;16L", "I;16B", "I;16N", "I", "F")


def _narrow_to_l(source: Image.Image) -> Image.Image:
    """Rescale a 16-bit integer or float grayscale image to 8-bit ``L``.

    Integer samples are treated as 16-bit and rounded to the nearest byte;
    float samples are treated as normalised to ``[0, 1]``.
    """

    samples = np.asarray(source)
    if source.mode == "F":
        cleaned = np.nan_to_num(samples.astype(np.float64), nan=0.0)
        narrowed = np.rint(np.clip(cleaned, 0.0, 1.0) * 255.0)
    else:
        wide = np.clip(samples.astype(np.int64), 0, 0xFFFF)
        narrowed = (wide + 128) // 257
    return Image.fromarray(narrowed.astype(np.uint8))


def load(data: bytes | bytearray | memoryview) -> PixelBuffer:
    """Decode *data* into an RGBA8 :class:`PixelBuffer`.

    Pillow guesses the container format from the byte stream.  The raster is
    always converted to ``RGBA``: RGB and palette images gain an opaque alpha
    channel while grayscale images are duplicated across R, G and B.  16-bit
    and float grayscale samples are rescaled to bytes rather than clipped.

    Raises
    ------
    DecodeError
        Raised when the stream is empty, not recognised as an image, or is
        truncated/corrupt, or exceeds Pillow's decompression bomb limit.
    """

    if not data:
        raise DecodeError("Cannot decode an empty byte stream")

    try:
        with Image.open(io.BytesIO(bytes(data))) as source:
            source.load()
            source_mode = source.mode
            source_format = source.format
            if source_mode in _WIDE_GRAY_MODES:
                source = _narrow_to_l(source)
            rgba = source.convert("RGBA")
    except UnidentifiedImageError as exc:
        raise DecodeError("Couldn't guess image format") from exc
    except Image.DecompressionBombError as exc:
        raise DecodeError(f"Image is too large to decode: {exc}") from exc
    except (OSError, SyntaxError, ValueError) as exc:
        raise DecodeError(f"Unable to decode image: {exc}") from exc

    width, height = rgba.size
    pixels = np.frombuffer(rgba.tobytes(), dtype=np.uint8).copy()
    _LOGGER.info(
        "Decoded %s image (%s) into %dx%d RGBA8", source_format or "unknown", source_mode, width, height
    )
    return PixelBuffer(width, height, pixels)


def load_path(path: str | Path) -> PixelBuffer:
    """Read *path* from disk and decode it with :func:`load`."""

    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise DecodeError(f"Unable to read image file {path}: {exc}") from exc
    return load(data)


def to_pil_image(buffer: PixelBuffer) -> Image.Image:
    """Return a Pillow ``RGBA`` image holding a copy of *buffer*."""

    return Image.frombuffer(
        "RGBA",
        (buffer.width, buffer.height),
        buffer.to_bytes(),
        "raw",
        "RGBA",
        0,
        1,
    ).copy()


def encode(buffer: PixelBuffer, format: str = "PNG") -> bytes:
    """Encode *buffer* into *format* (any writer Pillow knows, e.g. ``"PNG"``)."""

    image = to_pil_image(buffer)
    fmt = format.upper()
    if fmt in ("JPEG", "JPG"):
        # JPEG has no alpha channel.
        image = image.convert("RGB")
        fmt = "JPEG"
    output = io.BytesIO()
    try:
        image.save(output, format=fmt)
    except (KeyError, ValueError, OSError) as exc:
        raise EncodeError(f"Unable to encode image as {format!r}: {exc}") from exc
    return output.getvalue()


__all__ = ["encode", "load", "load_path", "to_pil_image"]
