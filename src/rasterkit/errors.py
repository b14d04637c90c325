"""Exception hierarchy shared across rasterkit."""

from __future__ import annotations


class RasterKitError(Exception):
    """Base class for all rasterkit errors."""


class DecodeError(RasterKitError):
    """Raised when input bytes cannot be recognised or decoded as an image."""


class EncodeError(RasterKitError):
    """Raised when a buffer cannot be encoded into the requested format."""


class InvalidSelection(RasterKitError, ValueError):
    """Raised when a channel, operation, filter or command token is unknown."""

    def __init__(self, kind: str, token: object, choices: tuple[str, ...] = ()) -> None:
        self.kind = kind
        self.token = token
        self.choices = choices
        message = f"Invalid {kind} selection: {token!r}"
        if choices:
            message += f" (expected one of: {', '.join(choices)})"
        super().__init__(message)


class EditorError(RasterKitError):
    """Raised when the editor session is used without a loaded image, or a
    command is dispatched without the arguments it needs.
    """


__all__ = [
    "DecodeError",
    "EditorError",
    "EncodeError",
    "InvalidSelection",
    "RasterKitError",
]
