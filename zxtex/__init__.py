# zxtex/__init__.py
"""
zxtex package.

Purpose:
  Convert raster sprites to text grids over the 16-colour ZX Spectrum palette
  (one hex digit or '.' per pixel) and back. See cli.py / zxtex.py for the CLI.

Public API:
  quantize_rgba        : RGBA array -> PixelGrid (nearest palette index + transparency).
  encode_rows          : PixelGrid -> row-mode text with '#' header.
  encode_raw           : PixelGrid -> single-line text.
  parse_text           : text -> ParsedText(stream, declared_width, filename).
  char_stream_to_grid  : stream + width hint -> PixelGrid.
  grid_to_rgba         : PixelGrid -> RGBA array.
  core_types           : PixelGrid, TransparencyConfig, ParsedText.
  palette_data         : ZX_PALETTE, PALETTE_RGB.
  errors               : ZxtexError and the specific failure kinds.

Quick start:
  from zxtex import quantize_rgba, encode_rows
  from zxtex.image_io import load_image_rgba
  print(encode_rows(quantize_rgba(load_image_rgba(path)), path.name), end="")
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import constants
from . import core_types
from . import errors
from . import palette_data
from . import quantize
from . import grid_codec
from . import image_io

from .core_types import ParsedText, PixelGrid, TransparencyConfig  # noqa: E402
from .palette_data import PALETTE_RGB, ZX_PALETTE  # noqa: E402
from .quantize import (  # noqa: E402
    is_transparent,
    nearest_palette_index,
    quantize_rgba,
)
from .grid_codec import (  # noqa: E402
    char_stream_to_grid,
    encode_raw,
    encode_rows,
    grid_to_rgba,
    parse_text,
)

__all__ = [
    "__version__",
    "constants",
    "core_types",
    "errors",
    "palette_data",
    "quantize",
    "grid_codec",
    "image_io",
    "ParsedText",
    "PixelGrid",
    "TransparencyConfig",
    "PALETTE_RGB",
    "ZX_PALETTE",
    "is_transparent",
    "nearest_palette_index",
    "quantize_rgba",
    "char_stream_to_grid",
    "encode_raw",
    "encode_rows",
    "grid_to_rgba",
    "parse_text",
]
