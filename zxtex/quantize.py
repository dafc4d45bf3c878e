# zxtex/quantize.py
from __future__ import annotations

"""
Palette quantizer.

Functions:
  nearest_palette_index(pixel) -> int
  nearest_palette_indices(rgb) -> IndexArray
  is_transparent(pixel, config) -> bool
  transparency_mask(rgba, config) -> BoolMask
  quantize_rgba(rgba, config) -> PixelGrid

Distance is squared Euclidean in plain RGB; alpha never takes part. Ties go
to the lowest palette index, so the duplicated black (0 and 8) resolves to 0.
"""

from typing import Optional, Sequence

import numpy as np

from .constants import TRANSPARENT
from .core_types import (
    BoolMask,
    IndexArray,
    PixelGrid,
    TransparencyConfig,
    U8Image,
    assert_u8_image_rgba,
)
from .palette_data import PALETTE_ITEMS, PALETTE_RGB

_NO_OVERRIDES = TransparencyConfig()


def nearest_palette_index(pixel: Sequence[int]) -> int:
    """Index of the palette entry closest to pixel[:3]; first entry wins ties."""
    r, g, b = int(pixel[0]), int(pixel[1]), int(pixel[2])
    best_index = 0
    best_dist = float("inf")
    for item in PALETTE_ITEMS:
        pr, pg, pb = item.rgb
        dist = (r - pr) ** 2 + (g - pg) ** 2 + (b - pb) ** 2
        if dist < best_dist:
            best_dist = dist
            best_index = item.index
    return best_index


def nearest_palette_indices(rgb: np.ndarray) -> IndexArray:
    """
    Vectorised nearest_palette_index for a (..., 3+) array.
    Channels past the third (alpha) are ignored.
    """
    arr = np.asarray(rgb)
    lead_shape = arr.shape[:-1]
    pts = arr[..., :3].reshape(-1, 3).astype(np.int32)
    pal = PALETTE_RGB.astype(np.int32)
    diff = pts[:, None, :] - pal[None, :, :]
    dist2 = np.sum(diff * diff, axis=2)
    # argmin returns the first minimum, matching the scalar tie rule
    return np.argmin(dist2, axis=1).reshape(lead_shape)


def is_transparent(
    pixel: Sequence[int], config: Optional[TransparencyConfig] = None
) -> bool:
    """True if alpha is 0, or the pixel hits the colour or index override."""
    if len(pixel) > 3 and int(pixel[3]) == 0:
        return True
    config = config or _NO_OVERRIDES
    rgb = (int(pixel[0]), int(pixel[1]), int(pixel[2]))
    if config.color is not None and rgb == tuple(config.color):
        return True
    if config.index is not None and nearest_palette_index(pixel) == config.index:
        return True
    return False


def transparency_mask(
    rgba: U8Image,
    config: Optional[TransparencyConfig] = None,
    indices: Optional[IndexArray] = None,
) -> BoolMask:
    """
    Per-pixel transparency for an (H, W, 4) image.

    `indices` may carry precomputed nearest_palette_indices(rgba) to avoid a
    second palette search when the index override is set.
    """
    arr = assert_u8_image_rgba(np.asarray(rgba))
    config = config or _NO_OVERRIDES
    mask = arr[..., 3] == 0
    if config.color is not None:
        target = np.array(config.color, dtype=np.uint8)
        mask |= np.all(arr[..., :3] == target, axis=-1)
    if config.index is not None:
        if indices is None:
            indices = nearest_palette_indices(arr)
        mask |= indices == config.index
    return mask


def quantize_rgba(
    rgba: U8Image, config: Optional[TransparencyConfig] = None
) -> PixelGrid:
    """Quantize an (H, W, 4) uint8 image to a PixelGrid."""
    arr = assert_u8_image_rgba(np.asarray(rgba))
    height, width = int(arr.shape[0]), int(arr.shape[1])
    indices = nearest_palette_indices(arr)
    mask = transparency_mask(arr, config, indices=indices)
    cells = np.where(mask, TRANSPARENT, indices).reshape(-1)
    return PixelGrid(
        width=width, height=height, cells=tuple(int(c) for c in cells.tolist())
    )


__all__ = [
    "nearest_palette_index",
    "nearest_palette_indices",
    "is_transparent",
    "transparency_mask",
    "quantize_rgba",
]
