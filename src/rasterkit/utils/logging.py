"""Logging helpers for rasterkit."""

from __future__ import annotations

import logging
from typing import Optional

from ..config import log_level_from_env

_LOGGER: Optional[logging.Logger] = None


def get_logger() -> logging.Logger:
    """Return the package-level logger configured for rasterkit.

    The handler is attached once; the level is re-read from
    ``RASTERKIT_LOG_LEVEL`` on every call so it can be changed at runtime.
    """

    global _LOGGER
    if _LOGGER is None:
        _LOGGER = logging.getLogger("rasterkit")
        if not _LOGGER.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
            handler.setFormatter(formatter)
            _LOGGER.addHandler(handler)
    level = log_level_from_env()
    _LOGGER.setLevel(getattr(logging, level, logging.INFO))
    return _LOGGER
