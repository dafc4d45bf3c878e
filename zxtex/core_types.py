# zxtex/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, and lightweight helpers.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from .constants import TRANSPARENT

# Basic aliases

RGBTuple = Tuple[int, int, int]
HexStr = str

U8Image = NDArray[np.uint8]  # (H, W, 4) RGBA or (H, W, 3) RGB
IndexArray = NDArray[np.intp]  # (...) palette indices 0..15
BoolMask = NDArray[np.bool_]  # (H, W)

Cell = int  # TRANSPARENT or palette index 0..15

# Value objects


@dataclass(frozen=True)
class TransparencyConfig:
    """
    Extra transparency rules on top of alpha == 0.

    color: exact RGB treated as transparent, or None.
    index: palette index treated as transparent, or None.
    """

    color: Optional[RGBTuple] = None
    index: Optional[int] = None


@dataclass(frozen=True)
class PixelGrid:
    """
    Quantized sprite: row-major cells, each TRANSPARENT or a palette index.

    Grids read from text may have a short last row, so the cell count only
    has to fall inside the last row: width*(height-1) < len(cells) <= width*height.
    """

    width: int
    height: int
    cells: Tuple[Cell, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.cells, tuple):
            object.__setattr__(self, "cells", tuple(int(c) for c in self.cells))
        if self.width < 1 or self.height < 1:
            raise ValueError("grid width and height must be >= 1")
        n = len(self.cells)
        if not (self.width * (self.height - 1) < n <= self.width * self.height):
            raise ValueError(
                f"{n} cells do not fit a {self.width}x{self.height} grid"
            )
        for c in self.cells:
            if c != TRANSPARENT and not 0 <= c <= 15:
                raise ValueError(f"cell value out of range: {c}")

    @property
    def is_ragged(self) -> bool:
        """True when the last row is shorter than width."""
        return len(self.cells) != self.width * self.height

    def rows(self) -> List[Tuple[Cell, ...]]:
        w = self.width
        return [self.cells[i : i + w] for i in range(0, len(self.cells), w)]

    def cell(self, x: int, y: int) -> Optional[Cell]:
        """Cell at (x, y); None for positions past the end of a short last row."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"({x}, {y}) outside {self.width}x{self.height} grid")
        i = y * self.width + x
        return self.cells[i] if i < len(self.cells) else None

    def transparent_count(self) -> int:
        return sum(1 for c in self.cells if c == TRANSPARENT)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Cell]]) -> "PixelGrid":
        """Build a grid from equal-length rows (the last one may be shorter)."""
        if not rows or not rows[0]:
            raise ValueError("grid needs at least one non-empty row")
        width = len(rows[0])
        flat: List[Cell] = []
        last = len(rows) - 1
        for y, r in enumerate(rows):
            # only the last row may be short
            fits = len(r) == width or (y == last and 0 < len(r) < width)
            if not fits:
                raise ValueError(f"row {y} has {len(r)} cells, width is {width}")
            flat.extend(int(c) for c in r)
        return cls(width=width, height=len(rows), cells=tuple(flat))


@dataclass(frozen=True)
class ParsedText:
    """Result of reading a text grid: filtered stream, first-line width, header filename."""

    stream: str
    declared_width: int
    filename: Optional[str] = None


# Small helpers


def rgb_to_hex(rgb: RGBTuple) -> HexStr:
    """RGB tuple to lowercase hex string '#rrggbb'."""
    return f"#{rgb[0]:02x}{rgb[1]:02x}{rgb[2]:02x}"


def hex_to_rgb(hex_str: str) -> RGBTuple:
    """Parse '#rgb' or '#rrggbb' (case-insensitive) into an RGB tuple."""
    s = hex_str.strip().lower()
    if not s.startswith("#"):
        raise ValueError("hex must start with '#'")
    if len(s) == 4:
        r, g, b = s[1], s[2], s[3]
        s = f"#{r}{r}{g}{g}{b}{b}"
    if len(s) != 7:
        raise ValueError("hex must be '#rrggbb' or '#rgb'")
    return (int(s[1:3], 16), int(s[3:5], 16), int(s[5:7], 16))


def parse_rgb_text(text: str) -> RGBTuple:
    """
    Parse a colour given on the command line.

    Accepts '#rrggbb', 'rrggbb', '0xrrggbb', '#rgb' and 'r,g,b' (0..255 each).
    Raises ValueError for anything else.
    """
    s = text.strip()
    if "," in s:
        parts = [p.strip() for p in s.split(",")]
        if len(parts) != 3:
            raise ValueError("expected 'r,g,b'")
        rgb = tuple(int(p, 10) for p in parts)
        if any(not 0 <= v <= 255 for v in rgb):
            raise ValueError("rgb components must be 0..255")
        return coerce_to_rgb_tuple(rgb)
    if s[:2].lower() == "0x":
        s = s[2:]
    if not s.startswith("#"):
        s = f"#{s}"
    return hex_to_rgb(s)


def base_name(path_text: str) -> str:
    """Last path component of a POSIX or Windows path string."""
    return path_text.replace("\\", "/").rstrip("/").rsplit("/", 1)[-1]


def coerce_to_rgb_tuple(value: Union[Sequence[int], NDArray[np.generic]]) -> RGBTuple:
    """
    Coerce a 3+ length sequence or array to an (int, int, int) RGB tuple.
    Extra components (alpha) are dropped.
    """
    if len(value) < 3:  # type: ignore[arg-type]
        raise ValueError("sequence too small for RGB")
    v = value  # type: ignore[assignment]
    return (int(v[0]), int(v[1]), int(v[2]))


def assert_u8_image_rgba(image: np.ndarray) -> U8Image:
    """Validate a uint8 (H,W,4) image and return it typed as U8Image."""
    if image.dtype != np.uint8 or image.ndim != 3 or image.shape[-1] != 4:
        raise TypeError("expected uint8 (H,W,4) image")
    if image.shape[0] < 1 or image.shape[1] < 1:
        raise ValueError("image has no pixels")
    return image  # type: ignore[return-value]


__all__ = [
    # aliases / types
    "RGBTuple",
    "HexStr",
    "U8Image",
    "IndexArray",
    "BoolMask",
    "Cell",
    # value objects
    "TransparencyConfig",
    "PixelGrid",
    "ParsedText",
    # helpers
    "rgb_to_hex",
    "hex_to_rgb",
    "parse_rgb_text",
    "base_name",
    "coerce_to_rgb_tuple",
    "assert_u8_image_rgba",
]
