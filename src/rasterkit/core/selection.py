"""Closed selections the UI can make: channels, arithmetic operations and filters.

The UI hands over plain string tokens (``"red"``, ``"divide"``...).  Parsing
them here turns an unknown token into :class:`~rasterkit.errors.InvalidSelection`
before any pixel is touched, instead of failing midway through an operation.
"""

from __future__ import annotations

from enum import Enum
from typing import TypeVar

from ..config import CHANNEL_OFFSETS
from ..errors import InvalidSelection


class Channel(Enum):
    """One component of an RGBA8 pixel."""

    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    ALPHA = "alpha"

    @property
    def offset(self) -> int:
        """Byte offset of the channel within a pixel."""

        return CHANNEL_OFFSETS[self.value]


class ArithmeticOp(Enum):
    """Per-channel arithmetic applied by the point-operation engine."""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"


class FilterKind(Enum):
    """3x3 neighbourhood filters understood by the convolution engine."""

    SMOOTH = "smooth"
    MEDIAN = "median"
    EDGES = "edges"
    SHARPEN = "sharpen"
    GAUSSIAN = "gaussian"


class EdgeMode(Enum):
    """How neighbourhood samples behave at the image border.

    ``CLAMP`` clamps the column and row independently so border pixels reuse
    their nearest neighbours.  ``LINEAR`` only checks the flat pixel index, so
    samples past the right edge wrap onto the next row and samples above the
    first or below the last row are dropped (they count as zero).
    """

    CLAMP = "clamp"
    LINEAR = "linear"


_E = TypeVar("_E", bound=Enum)

# Labels the editor UI buttons use for the filters.
_FILTER_ALIASES = {
    "box": FilterKind.SMOOTH,
    "blur": FilterKind.SMOOTH,
    "edge": FilterKind.EDGES,
    "edge_detection": FilterKind.EDGES,
    "sobel": FilterKind.EDGES,
    "highpass": FilterKind.SHARPEN,
    "gaussian_blur": FilterKind.GAUSSIAN,
}


def _parse(enum_type: type[_E], token: object, kind: str, aliases: dict[str, _E] | None = None) -> _E:
    if isinstance(token, enum_type):
        return token
    if isinstance(token, str):
        key = token.strip().lower().replace("-", "_").replace(" ", "_")
        for member in enum_type:
            if member.value == key:
                return member
        if aliases and key in aliases:
            return aliases[key]
    raise InvalidSelection(kind, token, tuple(member.value for member in enum_type))


def parse_channel(token: Channel | str) -> Channel:
    return _parse(Channel, token, "channel")


def parse_operation(token: ArithmeticOp | str) -> ArithmeticOp:
    return _parse(ArithmeticOp, token, "operation")


def parse_filter(token: FilterKind | str) -> FilterKind:
    return _parse(FilterKind, token, "filter", _FILTER_ALIASES)


def parse_edge_mode(token: EdgeMode | str) -> EdgeMode:
    return _parse(EdgeMode, token, "edge mode")


__all__ = [
    "ArithmeticOp",
    "Channel",
    "EdgeMode",
    "FilterKind",
    "parse_channel",
    "parse_edge_mode",
    "parse_filter",
    "parse_operation",
]
