"""Pytest configuration.

Fixtures here write small solid-colour PNGs with pyvips so tests can build
real sprite sheets. Tests that need them skip when libvips is unavailable.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from sass_sprites.sprite_engine.metrics import metrics

RED = (255, 0, 0)
BLUE = (0, 0, 255)


@pytest.fixture(autouse=True)
def _reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def make_png() -> Callable[..., Path]:
    pyvips = pytest.importorskip("pyvips")

    def _make(path: Path, width: int, height: int, color: tuple[int, int, int] = RED) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        img = (pyvips.Image.black(width, height) + list(color)).cast("uchar")
        img = img.copy(interpretation="srgb")
        img.write_to_file(str(path))
        return path

    return _make


@pytest.fixture
def icons_dir(tmp_path: Path, make_png) -> Path:
    """`<tmp>/icons` holding a.png (10x20, red) and b.png (30x5, blue)."""
    icons = tmp_path / "icons"
    make_png(icons / "a.png", 10, 20, RED)
    make_png(icons / "b.png", 30, 5, BLUE)
    return icons
