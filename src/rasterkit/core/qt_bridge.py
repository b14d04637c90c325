"""Hand :class:`PixelBuffer` rasters to and from Qt's :class:`QImage`.

The renderer on the other side expects tightly packed RGBA8 rows, while a
``QImage`` may pad each scanline up to ``bytesPerLine``.  The helpers here
strip or add that padding so neither side has to care.
"""

from __future__ import annotations

import numpy as np
from PySide6.QtGui import QImage

from ..config import BYTES_PER_PIXEL
from ..errors import DecodeError
from .pixel_buffer import PixelBuffer


def _resolve_pixel_buffer(image: QImage) -> tuple[memoryview, object]:
    """Return a 1-D byte :class:`memoryview` over *image*'s pixels.

    PySide exposes ``bits()`` as a ready-to-use ``memoryview`` whereas PyQt
    hands back a ``sip.voidptr`` that needs ``setsize`` first.  The second
    tuple element is the object owning the memory; callers must keep it alive
    for as long as they use the view.
    """

    bytes_per_line = image.bytesPerLine()
    height = image.height()
    buffer = image.constBits()
    expected_size = bytes_per_line * height

    guard: object = buffer

    if isinstance(buffer, memoryview):
        view = buffer
    else:
        try:
            view = memoryview(buffer)
        except TypeError:
            if hasattr(buffer, "setsize"):
                buffer.setsize(expected_size)
                view = memoryview(buffer)
            else:
                raise RuntimeError("Unsupported QImage.bits() buffer wrapper") from None

    try:
        view = view.cast("B")
    except TypeError:
        # Multi-dimensional views need an explicit shape to be recast.
        view = view.cast("B", (view.nbytes,))

    if len(view) > expected_size:
        view = view[:expected_size]

    return view, guard


def from_qimage(image: QImage) -> PixelBuffer:
    """Copy *image* into a new RGBA8 :class:`PixelBuffer`.

    Any source format is converted to ``Format_RGBA8888`` first.  Null or
    empty images raise :class:`DecodeError`.
    """

    if image.isNull() or image.width() <= 0 or image.height() <= 0:
        raise DecodeError("Cannot convert a null QImage")

    if image.format() != QImage.Format.Format_RGBA8888:
        image = image.convertToFormat(QImage.Format.Format_RGBA8888)

    width = image.width()
    height = image.height()
    bytes_per_line = image.bytesPerLine()

    view, guard = _resolve_pixel_buffer(image)
    _ = guard  # keep the Qt wrapper alive while NumPy copies from the view

    surface = np.frombuffer(view, dtype=np.uint8, count=bytes_per_line * height)
    rows = surface.reshape((height, bytes_per_line))[:, : width * BYTES_PER_PIXEL]
    return PixelBuffer(width, height, rows.copy())


def to_qimage(buffer: PixelBuffer) -> QImage:
    """Return a deep-copied ``Format_RGBA8888`` :class:`QImage` of *buffer*."""

    data = buffer.to_bytes()
    image = QImage(
        data,
        buffer.width,
        buffer.height,
        buffer.width * BYTES_PER_PIXEL,
        QImage.Format.Format_RGBA8888,
    )
    # ``QImage`` borrows ``data``; copy so the image owns its pixels.
    return image.copy()


__all__ = ["from_qimage", "to_qimage"]
