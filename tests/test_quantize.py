from __future__ import annotations

import numpy as np
import pytest

from zxtex.constants import TRANSPARENT
from zxtex.core_types import TransparencyConfig
from zxtex.palette_data import PALETTE_ITEMS, PALETTE_RGB, palette_name, palette_rgb
from zxtex.quantize import (
    is_transparent,
    nearest_palette_index,
    nearest_palette_indices,
    quantize_rgba,
    transparency_mask,
)


def test_palette_is_sixteen_fixed_entries_with_duplicate_black():
    assert PALETTE_RGB.shape == (16, 3)
    assert len(PALETTE_ITEMS) == 16
    assert palette_rgb(0) == palette_rgb(8) == (0, 0, 0)
    assert palette_rgb(0xB) == (255, 0, 255)
    assert palette_name(0xF) == "Bright White"
    assert not PALETTE_RGB.flags.writeable


def test_palette_index_out_of_range():
    with pytest.raises(IndexError):
        palette_rgb(16)
    with pytest.raises(IndexError):
        palette_rgb(-1)


def test_exact_palette_colours_map_to_their_index():
    for item in PALETTE_ITEMS:
        expected = 0 if item.index == 8 else item.index
        assert nearest_palette_index(item.rgb) == expected


def test_ties_go_to_first_palette_entry():
    # blue 215 and bright blue 255 are both 20 away from 235
    assert nearest_palette_index((0, 0, 235)) == 1
    assert nearest_palette_index((0, 0, 236)) == 9
    assert nearest_palette_index((0, 0, 0, 255)) == 0


def test_grey_levels():
    assert nearest_palette_index((100, 100, 100)) == 0
    assert nearest_palette_index((120, 120, 120)) == 7
    assert nearest_palette_index((240, 240, 240)) == 0xF


def test_alpha_does_not_affect_nearest_index():
    assert nearest_palette_index((200, 10, 10, 0)) == nearest_palette_index(
        (200, 10, 10, 255)
    )


def test_nearest_index_in_range_and_idempotent():
    rng = np.random.default_rng(1234)
    for rgb in rng.integers(0, 256, size=(300, 3)).tolist():
        idx = nearest_palette_index(rgb)
        assert 0 <= idx <= 15
        assert nearest_palette_index(palette_rgb(idx)) == idx


def test_vectorised_search_matches_scalar():
    rng = np.random.default_rng(99)
    pts = rng.integers(0, 256, size=(20, 25, 3)).astype(np.uint8)
    pts[0, :16] = PALETTE_RGB
    pts[1, 0] = (0, 0, 235)
    got = nearest_palette_indices(pts)
    assert got.shape == (20, 25)
    for y in range(pts.shape[0]):
        for x in range(pts.shape[1]):
            assert got[y, x] == nearest_palette_index(pts[y, x])


def test_alpha_zero_is_always_transparent():
    assert is_transparent((255, 255, 255, 0))
    assert is_transparent((0, 0, 0, 0), TransparencyConfig(color=(1, 2, 3)))
    assert not is_transparent((255, 255, 255, 1))
    assert not is_transparent((255, 255, 255))


def test_transparent_colour_override_is_exact():
    cfg = TransparencyConfig(color=(255, 0, 255))
    assert is_transparent((255, 0, 255, 255), cfg)
    assert not is_transparent((255, 0, 254, 255), cfg)
    assert not is_transparent((215, 0, 215, 255), cfg)


def test_transparent_index_override_uses_nearest_match():
    cfg = TransparencyConfig(index=2)
    # not literally palette red, but nearest to index 2
    assert nearest_palette_index((200, 10, 10)) == 2
    assert is_transparent((200, 10, 10, 255), cfg)
    assert not is_transparent((250, 0, 0, 255), cfg)


def test_mask_matches_scalar_predicate():
    rng = np.random.default_rng(7)
    img = rng.integers(0, 256, size=(6, 7, 4)).astype(np.uint8)
    img[0, 0] = (255, 0, 255, 255)
    img[0, 1] = (9, 9, 9, 0)
    cfg = TransparencyConfig(color=(255, 0, 255), index=4)
    mask = transparency_mask(img, cfg)
    for y in range(img.shape[0]):
        for x in range(img.shape[1]):
            assert bool(mask[y, x]) == is_transparent(tuple(img[y, x]), cfg)


def test_quantize_rgba_builds_grid(sprite_rgba):
    grid = quantize_rgba(sprite_rgba)
    assert (grid.width, grid.height) == (3, 2)
    assert grid.cells == (0, 0xA, TRANSPARENT, 0xF, 1, 0xB)
    assert not grid.is_ragged


def test_quantize_rgba_with_overrides(sprite_rgba):
    grid = quantize_rgba(sprite_rgba, TransparencyConfig(color=(255, 0, 255)))
    assert grid.cells[-1] == TRANSPARENT
    assert grid.cells[:5] == (0, 0xA, TRANSPARENT, 0xF, 1)

    grid = quantize_rgba(sprite_rgba, TransparencyConfig(index=0xA))
    assert grid.cells[1] == TRANSPARENT
    assert grid.transparent_count() == 2


def test_quantize_rejects_non_rgba_arrays():
    with pytest.raises(TypeError):
        quantize_rgba(np.zeros((2, 2, 3), dtype=np.uint8))
    with pytest.raises(TypeError):
        quantize_rgba(np.zeros((2, 2, 4), dtype=np.float32))
