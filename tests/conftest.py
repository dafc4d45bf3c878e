from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
from PIL import Image

# 2x3 sprite: black, bright red, transparent / bright white, blue, bright magenta
SPRITE_ROWS = [
    [(0, 0, 0, 255), (255, 0, 0, 255), (12, 34, 56, 0)],
    [(255, 255, 255, 255), (0, 0, 215, 255), (255, 0, 255, 255)],
]


@pytest.fixture
def sprite_rgba() -> np.ndarray:
    return np.array(SPRITE_ROWS, dtype=np.uint8)


@pytest.fixture
def write_image(tmp_path: Path):
    """Write an (H, W, 4) array to tmp_path/<name>; format follows the suffix."""

    def _write(name: str, rgba: np.ndarray) -> Path:
        path = tmp_path / name
        im = Image.fromarray(np.asarray(rgba, dtype=np.uint8))
        if path.suffix.lower() in (".bmp", ".jpg", ".jpeg"):
            im = im.convert("RGB")
        im.save(path)
        return path

    return _write


@pytest.fixture
def sprite_png(write_image, sprite_rgba) -> Path:
    return write_image("hero.png", sprite_rgba)
