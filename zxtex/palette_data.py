# zxtex/palette_data.py
from __future__ import annotations

"""
Palette definitions and builders.

Exports:
  ZX_PALETTE: list[tuple[str, str]]  # [(hex, name), ...] indexed 0..F
  PALETTE_ITEMS: tuple[PaletteItem, ...]
  PALETTE_RGB: uint8 [16,3], read-only
  build_palette(hex_name_pairs=ZX_PALETTE) -> (items, pal_rgb)
  palette_rgb(index) -> RGBTuple
  palette_name(index) -> str

Index 8 ("Bright Black") repeats index 0. Nearest-colour search keeps the
first match, so pure black always quantizes to 0.
"""

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from .core_types import RGBTuple, hex_to_rgb


@dataclass(frozen=True)
class PaletteItem:
    """Palette entry: hex digit, RGB and display name."""

    index: int
    rgb: RGBTuple
    name: str

    @property
    def digit(self) -> str:
        return f"{self.index:X}"


ZX_PALETTE: List[Tuple[str, str]] = [
    ("#000000", "Black"),
    ("#0000d7", "Blue"),
    ("#d70000", "Red"),
    ("#d700d7", "Magenta"),
    ("#00d700", "Green"),
    ("#00d7d7", "Cyan"),
    ("#d7d700", "Yellow"),
    ("#d7d7d7", "White"),
    ("#000000", "Bright Black"),
    ("#0000ff", "Bright Blue"),
    ("#ff0000", "Bright Red"),
    ("#ff00ff", "Bright Magenta"),
    ("#00ff00", "Bright Green"),
    ("#00ffff", "Bright Cyan"),
    ("#ffff00", "Bright Yellow"),
    ("#ffffff", "Bright White"),
]


def build_palette(
    hex_name_pairs: List[Tuple[str, str]] = ZX_PALETTE,
) -> Tuple[Tuple[PaletteItem, ...], np.ndarray]:
    """
    Convert a list of (hex, name) into:
      items: tuple[PaletteItem] in palette order
      pal_rgb: uint8 array [P,3], write-protected
    """
    items = tuple(
        PaletteItem(index=i, rgb=hex_to_rgb(hx), name=name)
        for i, (hx, name) in enumerate(hex_name_pairs)
    )
    pal_rgb = np.array([it.rgb for it in items], dtype=np.uint8).reshape(-1, 3)
    pal_rgb.setflags(write=False)
    return items, pal_rgb


PALETTE_ITEMS, PALETTE_RGB = build_palette()


def palette_rgb(index: int) -> RGBTuple:
    """RGB of palette entry `index` (0..15)."""
    return _item(index).rgb


def palette_name(index: int) -> str:
    return _item(index).name


def _item(index: int) -> PaletteItem:
    if not 0 <= index < len(PALETTE_ITEMS):
        raise IndexError(f"palette index out of range: {index}")
    return PALETTE_ITEMS[index]


__all__ = [
    "PaletteItem",
    "ZX_PALETTE",
    "PALETTE_ITEMS",
    "PALETTE_RGB",
    "build_palette",
    "palette_rgb",
    "palette_name",
]
