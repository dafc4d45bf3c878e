# zxtex/constants.py
"""
Format constants and tunables used across the project.

- Grid alphabet (HEX_DIGITS, TRANSPARENT_CHAR, GRID_ALPHABET)
- Header keys and generator tag
- File extension groups and default output name
"""
from __future__ import annotations

from typing import FrozenSet, Tuple

# =========================
# Grid alphabet
# =========================
HEX_DIGITS: str = "0123456789ABCDEF"
TRANSPARENT_CHAR: str = "."
GRID_ALPHABET: FrozenSet[str] = frozenset(
    HEX_DIGITS + HEX_DIGITS.lower() + TRANSPARENT_CHAR
)

# Cell value for a transparent pixel; palette cells are 0..15.
TRANSPARENT: int = -1

# =========================
# Row-mode header
# =========================
HEADER_PREFIX: str = "#"
HEADER_KEYS: Tuple[str, ...] = ("file", "width", "height", "generator")
GENERATOR: str = "zxtex"

# =========================
# Files
# =========================
IMAGE_EXTENSIONS: FrozenSet[str] = frozenset(
    {".png", ".gif", ".bmp", ".jpg", ".jpeg"}
)
TEXT_EXTENSIONS: FrozenSet[str] = frozenset({".txt", ".hex"})
DEFAULT_OUTPUT_NAME: str = "out.png"
TEXT_OUTPUT_SUFFIX: str = ".txt"

__all__ = [
    "HEX_DIGITS",
    "TRANSPARENT_CHAR",
    "GRID_ALPHABET",
    "TRANSPARENT",
    "HEADER_PREFIX",
    "HEADER_KEYS",
    "GENERATOR",
    "IMAGE_EXTENSIONS",
    "TEXT_EXTENSIONS",
    "DEFAULT_OUTPUT_NAME",
    "TEXT_OUTPUT_SUFFIX",
]
