"""Constants and environment overrides for the filter engine."""

from __future__ import annotations

import os

from .errors import InvalidSelection

BYTES_PER_PIXEL = 4

# Byte offset of each channel inside an RGBA8 pixel.
CHANNEL_OFFSETS = {
    "red": 0,
    "green": 1,
    "blue": 2,
    "alpha": 3,
}

# ITU-R BT.709 luma weights expressed in units of 1/10000 so grayscale
# conversion stays exact in integer arithmetic (the weights sum to 10000).
LUMA_WEIGHTS = (2126, 7152, 722)
LUMA_SCALE = 10000

# The UI slider spans [-1, 1]; the brightness curve only needs half of it.
BRIGHTNESS_SLIDER_SCALE = 0.5

# Row-major 3x3 kernels.  ``None`` divisors mean "no normalisation".
GAUSSIAN_KERNEL = (
    (1, 2, 1),
    (2, 4, 2),
    (1, 2, 1),
)
GAUSSIAN_DIVISOR = 16
SMOOTH_DIVISOR = 9

# High-pass response is ``(8 * centre - sum(neighbours)) / 9``.
HIGHPASS_CENTER_WEIGHT = 8
HIGHPASS_DIVISOR = 9

EDGE_MODES = ("clamp", "linear")
DEFAULT_EDGE_MODE = "clamp"

BACKENDS = ("auto", "jit", "numpy")
DEFAULT_BACKEND = "auto"

DEFAULT_LOG_LEVEL = "INFO"

ENV_EDGE_MODE = "RASTERKIT_EDGE_MODE"
ENV_BACKEND = "RASTERKIT_BACKEND"
ENV_LOG_LEVEL = "RASTERKIT_LOG_LEVEL"


def _env_choice(name: str, default: str, choices: tuple[str, ...], kind: str) -> str:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    if raw not in choices:
        raise InvalidSelection(kind, raw, choices)
    return raw


def edge_mode_from_env() -> str:
    """Return the neighbourhood boundary policy requested via ``RASTERKIT_EDGE_MODE``."""

    return _env_choice(ENV_EDGE_MODE, DEFAULT_EDGE_MODE, EDGE_MODES, "edge mode")


def backend_from_env() -> str:
    """Return the convolution executor requested via ``RASTERKIT_BACKEND``."""

    return _env_choice(ENV_BACKEND, DEFAULT_BACKEND, BACKENDS, "backend")


def log_level_from_env() -> str:
    return os.environ.get(ENV_LOG_LEVEL, "").strip().upper() or DEFAULT_LOG_LEVEL
