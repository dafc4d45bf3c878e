# zxtex/grid_codec.py
from __future__ import annotations

"""
Text grid codec.

Two serialisations of a PixelGrid:

  row mode  '#' header lines (file, width, height, generator), then one line
            per row of hex digits / '.'.
  raw mode  every cell on a single line, one trailing newline.

Reading is lenient: header lines are recognised by prefix, inline '#'
comments and spaces/tabs are dropped, and anything outside the grid alphabet
is filtered out before cells are built. Width comes from the first grid line,
an explicit hint, or is inferred (square if possible, else one row).
"""

import math
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from .constants import (
    GENERATOR,
    GRID_ALPHABET,
    HEADER_KEYS,
    HEADER_PREFIX,
    HEX_DIGITS,
    TRANSPARENT,
    TRANSPARENT_CHAR,
)
from .core_types import Cell, ParsedText, PixelGrid, U8Image, base_name
from .errors import ConfigurationError, EmptyInput, InvalidDigit
from .palette_data import PALETTE_RGB

_CELL_OF_CHAR: Dict[str, Cell] = {TRANSPARENT_CHAR: TRANSPARENT}
for _i, _d in enumerate(HEX_DIGITS):
    _CELL_OF_CHAR[_d] = _i
    _CELL_OF_CHAR[_d.lower()] = _i
del _i, _d


# Encode


def cell_to_char(cell: Cell) -> str:
    return TRANSPARENT_CHAR if cell == TRANSPARENT else HEX_DIGITS[cell]


def _encode_cells(cells: Iterable[Cell]) -> str:
    return "".join(cell_to_char(c) for c in cells)


def header_lines(
    grid: PixelGrid, source_name: Optional[str] = None, generator: str = GENERATOR
) -> List[str]:
    """
    Row-mode header in fixed order: file, width, height, generator.
    The file line is only written when a source name is known.
    """
    values = {
        "file": base_name(source_name) if source_name else None,
        "width": grid.width,
        "height": grid.height,
        "generator": generator,
    }
    return [
        f"{HEADER_PREFIX} {key}: {values[key]}"
        for key in HEADER_KEYS
        if values[key] is not None
    ]


def encode_rows(
    grid: PixelGrid, source_name: Optional[str] = None, generator: str = GENERATOR
) -> str:
    """Header block, then one newline-terminated line per grid row."""
    lines = header_lines(grid, source_name, generator)
    lines.extend(_encode_cells(row) for row in grid.rows())
    return "\n".join(lines) + "\n"


def encode_raw(grid: PixelGrid) -> str:
    """All cells in row-major order on one line, plus a single trailing newline."""
    return _encode_cells(grid.cells) + "\n"


def encode_grid(
    grid: PixelGrid, raw: bool = False, source_name: Optional[str] = None
) -> str:
    return encode_raw(grid) if raw else encode_rows(grid, source_name)


# Decode


def filter_grid_chars(text: str) -> str:
    """Keep only hex digits (either case) and '.'."""
    return "".join(ch for ch in text if ch in GRID_ALPHABET)


def _header_filename(header_line: str) -> Tuple[bool, Optional[str]]:
    """(is_file_line, value) for a stripped line that starts with '#'."""
    body = header_line[len(HEADER_PREFIX) :].lstrip()
    if body[:5].lower() != "file:":
        return False, None
    return True, body[5:].strip() or None


def parse_text(text: str) -> ParsedText:
    """
    Split grid text into (stream, declared_width, filename).

    - '#' lines are headers; only '# file:' is kept (last one wins).
    - Other lines lose inline '#' comments and spaces/tabs; empty ones are skipped.
    - declared_width is the length of the first surviving line, 0 if none.
    - The concatenated lines are filtered to the grid alphabet.
    """
    filename: Optional[str] = None
    pieces: List[str] = []
    declared_width = 0

    for line in text.splitlines():
        stripped = line.lstrip()
        if stripped.startswith(HEADER_PREFIX):
            is_file, value = _header_filename(stripped)
            if is_file:
                filename = value
            continue
        content = line.split(HEADER_PREFIX, 1)[0].replace(" ", "").replace("\t", "")
        if not content:
            continue
        if not pieces:
            # measured before the alphabet filter, so stray characters count
            declared_width = len(content)
        pieces.append(content)

    return ParsedText(
        stream=filter_grid_chars("".join(pieces)),
        declared_width=declared_width,
        filename=filename,
    )


def infer_width(length: int) -> int:
    """Square side when length is a perfect square, else the whole length (one row)."""
    side = math.isqrt(length)
    return side if side * side == length else length


def char_to_cell(ch: str, position: int = 0) -> Cell:
    try:
        return _CELL_OF_CHAR[ch]
    except KeyError:
        raise InvalidDigit(ch, position) from None


def char_stream_to_grid(stream: str, width_hint: int = 0) -> PixelGrid:
    """
    Build a grid from a filtered character stream.

    width_hint 0 means infer. Height is ceil(len / width); when the stream
    does not fill the last row, that row is left short.
    """
    n = len(stream)
    if n == 0:
        raise EmptyInput("no grid data found")
    if width_hint < 0:
        raise ConfigurationError(f"width must be positive, got {width_hint}")
    width = width_hint or infer_width(n)
    height = -(-n // width)
    cells = tuple(char_to_cell(ch, i) for i, ch in enumerate(stream))
    return PixelGrid(width=width, height=height, cells=cells)


def text_to_grid(text: str, width: int = 0) -> Tuple[PixelGrid, Optional[str]]:
    """
    Parse grid text into (grid, recovered_filename).
    An explicit width wins over the width of the first grid line.
    """
    parsed = parse_text(text)
    grid = char_stream_to_grid(parsed.stream, width or parsed.declared_width)
    return grid, parsed.filename


def direct_string_stream(literal: str) -> str:
    """
    Stream for a literal given on the command line: trimmed, one leading
    0x/0X removed, filtered to hex digits and '.'.
    """
    s = literal.strip()
    if s[:2] in ("0x", "0X"):
        s = s[2:]
    return filter_grid_chars(s)


# Render


def grid_to_rgba(grid: PixelGrid) -> U8Image:
    """
    Render a grid as uint8 (H, W, 4).

    Palette cells are opaque palette colours. Transparent cells, and pixels
    past the end of a short last row, are (0, 0, 0, 0).
    """
    out = np.zeros((grid.width * grid.height, 4), dtype=np.uint8)
    cells = np.asarray(grid.cells, dtype=np.int16)
    filled = out[: cells.shape[0]]
    opaque = cells != TRANSPARENT
    filled[opaque, :3] = PALETTE_RGB[cells[opaque]]
    filled[opaque, 3] = 255
    return out.reshape(grid.height, grid.width, 4)


__all__ = [
    "cell_to_char",
    "header_lines",
    "encode_rows",
    "encode_raw",
    "encode_grid",
    "filter_grid_chars",
    "parse_text",
    "infer_width",
    "char_to_cell",
    "char_stream_to_grid",
    "text_to_grid",
    "direct_string_stream",
    "grid_to_rgba",
]
