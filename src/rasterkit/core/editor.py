"""Editor session: the thin layer a UI calls into.

The session owns exactly one :class:`PixelBuffer` handle.  Every command is a
single full-buffer pass over that handle; there is no history and nothing is
composed internally.  UI tokens (select values, button names) are validated
here so an unknown selection surfaces as :class:`InvalidSelection` instead of
reaching the engines.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

from ..errors import EditorError, InvalidSelection
from . import codec, color_reducer, point_ops
from .filters import apply_filter
from .filters.facade import resolve_backend, resolve_edge_mode
from .pixel_buffer import PixelBuffer
from .selection import ArithmeticOp, Channel, EdgeMode, FilterKind, parse_channel, parse_filter, parse_operation

_LOGGER = logging.getLogger(__name__)

# Keyword arguments each UI command takes; commands not listed take none.
_COMMAND_ARGUMENTS: dict[str, tuple[str, ...]] = {
    "apply_operation": ("channel", "operation", "operand"),
    "brightness": ("amount",),
}


class ImageEditor:
    """Hold the current raster and dispatch named editing commands onto it."""

    def __init__(
        self,
        buffer: PixelBuffer | None = None,
        *,
        edge_mode: EdgeMode | str | None = None,
        backend: str | None = None,
    ) -> None:
        self._buffer = buffer
        self.edge_mode = resolve_edge_mode(edge_mode)
        self.backend = resolve_backend(backend)
        self._commands: dict[str, Callable[..., None]] = {
            "apply_operation": self.apply_point,
            "brightness": self.change_brightness,
            "grayscale_avg": self.to_grayscale_average,
            "grayscale_avg_weighted": self.to_grayscale_luma,
            "filter_smooth": lambda: self.filter(FilterKind.SMOOTH),
            "filter_median": lambda: self.filter(FilterKind.MEDIAN),
            "filter_edge_detection": lambda: self.filter(FilterKind.EDGES),
            "filter_sharpen": lambda: self.filter(FilterKind.SHARPEN),
            "filter_gaussian_blur": lambda: self.filter(FilterKind.GAUSSIAN),
        }

    # ── Buffer lifecycle ─────────────────────────────────────────────
    @property
    def has_image(self) -> bool:
        return self._buffer is not None

    @property
    def buffer(self) -> PixelBuffer:
        if self._buffer is None:
            raise EditorError("No image loaded")
        return self._buffer

    def set_buffer(self, buffer: PixelBuffer) -> None:
        self._buffer = buffer

    def load(self, data: bytes | bytearray | memoryview) -> PixelBuffer:
        """Decode *data* and make it the current image.

        On :class:`~rasterkit.errors.DecodeError` the previous image is kept so
        the caller can simply prompt for another file.
        """

        decoded = codec.load(data)
        self._adopt(decoded)
        return self.buffer

    def load_path(self, path: str | Path) -> PixelBuffer:
        decoded = codec.load_path(path)
        self._adopt(decoded)
        return self.buffer

    def _adopt(self, decoded: PixelBuffer) -> None:
        if self._buffer is None:
            self._buffer = decoded
        else:
            self._buffer.replace_image(decoded)
        _LOGGER.info("Loaded %dx%d image into editor", decoded.width, decoded.height)

    def to_bytes(self, format: str = "PNG") -> bytes:
        return codec.encode(self.buffer, format)

    # ── Operations ───────────────────────────────────────────────────
    def apply_point(
        self,
        channel: Channel | str,
        operation: ArithmeticOp | str,
        operand: float,
    ) -> None:
        """Apply ``operation`` with *operand* to *channel* of every pixel."""

        channel = parse_channel(channel)
        operation = parse_operation(operation)
        point_ops.apply(self.buffer, channel, operand, operation)

    def change_brightness(self, amount: float) -> None:
        point_ops.change_brightness(self.buffer, amount)

    def to_grayscale_average(self) -> None:
        color_reducer.to_grayscale_average(self.buffer)

    def to_grayscale_luma(self) -> None:
        color_reducer.to_grayscale_luma(self.buffer)

    def filter(self, kind: FilterKind | str) -> None:
        kind = parse_filter(kind)
        apply_filter(self.buffer, kind, edge_mode=self.edge_mode, backend=self.backend)

    def run(self, command: str, **kwargs: Any) -> None:
        """Dispatch a UI command name such as ``"filter_sharpen"``.

        ``apply_operation`` expects ``channel``, ``operation`` and ``operand``
        keyword arguments; ``brightness`` expects ``amount``; the filter and
        grayscale commands take none.  An unexpected keyword raises
        :class:`InvalidSelection` and a missing one raises :class:`EditorError`,
        both before the image is touched.
        """

        key = command.strip().lower() if isinstance(command, str) else command
        handler = self._commands.get(key)
        if handler is None:
            raise InvalidSelection("command", command, tuple(self._commands))

        expected = _COMMAND_ARGUMENTS.get(key, ())
        for name in kwargs:
            if name not in expected:
                raise InvalidSelection(f"{key} argument", name, expected)
        missing = [name for name in expected if name not in kwargs]
        if missing:
            raise EditorError(f"Command {key!r} requires argument(s): {', '.join(missing)}")
        handler(**kwargs)

    @property
    def commands(self) -> tuple[str, ...]:
        return tuple(self._commands)


__all__ = ["ImageEditor"]
