import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Make the package importable without an editable install.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from rasterkit.core.pixel_buffer import PixelBuffer  # noqa: E402


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    """Keep developer shells from leaking overrides into the tests."""

    for name in ("RASTERKIT_EDGE_MODE", "RASTERKIT_BACKEND", "RASTERKIT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def gradient_buffer() -> PixelBuffer:
    """A 5x4 buffer where every byte differs from its neighbours."""

    width, height = 5, 4
    pixels = (np.arange(width * height * 4, dtype=np.int64) * 37 % 256).astype(np.uint8)
    return PixelBuffer(width, height, pixels)


@pytest.fixture
def random_buffer() -> PixelBuffer:
    rng = np.random.default_rng(7)
    width, height = 7, 5
    return PixelBuffer(width, height, rng.integers(0, 256, width * height * 4, dtype=np.uint8))


@pytest.fixture
def uniform_buffer() -> PixelBuffer:
    return PixelBuffer.filled(6, 5, (120, 80, 40, 200))


@pytest.fixture
def make_buffer():
    """Return a factory building a buffer from ``rows[y][x] = (r, g, b, a)``."""

    def _make(rows) -> PixelBuffer:
        height = len(rows)
        width = len(rows[0])
        flat = [value for row in rows for pixel in row for value in pixel]
        return PixelBuffer(width, height, np.array(flat, dtype=np.uint8))

    return _make
