# zxtex/convert.py
from __future__ import annotations

"""
Conversion pipelines.

  image file   -> quantize -> row/raw text (returned, or written to --output)
  text file    -> parse    -> grid -> PNG (named from --output, header, or default)
  literal hex  -> filter   -> grid -> PNG (width required)
  directory    -> every image file -> <stem>.txt, optionally in parallel

Each conversion is independent: a failure raises a ZxtexError and nothing is
written for that input.
"""

import os
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import List, Literal, Optional, Union

from .config import ConversionOptions
from .constants import (
    DEFAULT_OUTPUT_NAME,
    IMAGE_EXTENSIONS,
    TEXT_EXTENSIONS,
    TEXT_OUTPUT_SUFFIX,
)
from .core_types import PixelGrid, base_name
from .errors import (
    ConfigurationError,
    EmptyInput,
    IOFailure,
    UnsupportedFormat,
    ZxtexError,
)
from .grid_codec import (
    char_stream_to_grid,
    direct_string_stream,
    encode_grid,
    grid_to_rgba,
    text_to_grid,
)
from .image_io import load_image_rgba, read_text, save_png_rgba, write_text
from .quantize import quantize_rgba

InputKind = Literal["image", "text", "directory", "literal"]


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of one conversion; `text` is set for image input."""

    source: str
    grid: PixelGrid
    text: Optional[str] = None
    output: Optional[Path] = None
    seconds: float = 0.0


@dataclass(frozen=True)
class BatchItem:
    path: Path
    result: Optional[ConversionResult] = None
    failure: Optional[ZxtexError] = None


def classify_input(value: Union[str, Path]) -> InputKind:
    """
    Decide how to treat the positional input.
    Existing files are routed by extension; anything that is not an existing
    path is a literal hex string.
    """
    # os.path checks return False on OSError (names longer than NAME_MAX)
    path = Path(value)
    if str(value) and os.path.isdir(path):
        return "directory"
    if str(value) and os.path.isfile(path):
        ext = path.suffix.lower()
        if ext in IMAGE_EXTENSIONS:
            return "image"
        if ext in TEXT_EXTENSIONS:
            return "text"
        raise UnsupportedFormat(f"unsupported file type: {ext or path.name}")
    return "literal"


def resolve_output_path(
    explicit: Optional[Path], recovered_name: Optional[str]
) -> Path:
    """
    PNG output path: explicit path, else the header file name's base name with
    a .png suffix, else the default name.
    """
    if explicit:
        return Path(explicit)
    if recovered_name:
        base = base_name(recovered_name)
        if base not in ("", ".", ".."):
            return Path(base).with_suffix(".png")
    return Path(DEFAULT_OUTPUT_NAME)


def image_to_text(path: Path, options: ConversionOptions) -> ConversionResult:
    """Quantize an image file and encode it; writes options.output when given."""
    t0 = time.perf_counter()
    path = Path(path)
    rgba = load_image_rgba(path)
    grid = quantize_rgba(rgba, options.transparency)
    text = encode_grid(grid, raw=options.raw, source_name=path.name)
    written = write_text(options.output, text) if options.output else None
    return ConversionResult(
        source=str(path),
        grid=grid,
        text=text,
        output=written,
        seconds=time.perf_counter() - t0,
    )


def text_file_to_image(path: Path, options: ConversionOptions) -> ConversionResult:
    """Decode a text grid file and save it as PNG."""
    t0 = time.perf_counter()
    path = Path(path)
    grid, recovered = text_to_grid(read_text(path), options.width)
    out_path = save_png_rgba(
        resolve_output_path(options.output, recovered), grid_to_rgba(grid)
    )
    return ConversionResult(
        source=str(path), grid=grid, output=out_path, seconds=time.perf_counter() - t0
    )


def literal_to_image(literal: str, options: ConversionOptions) -> ConversionResult:
    """Decode a hex string given directly on the command line. Width is required."""
    if not options.width:
        raise ConfigurationError("a width is required when decoding a hex string")
    t0 = time.perf_counter()
    grid = char_stream_to_grid(direct_string_stream(literal), options.width)
    out_path = save_png_rgba(
        resolve_output_path(options.output, None), grid_to_rgba(grid)
    )
    return ConversionResult(
        source="<string>", grid=grid, output=out_path, seconds=time.perf_counter() - t0
    )


def batch_output_path(path: Path, outdir: Optional[Path]) -> Path:
    return (outdir or path.parent) / f"{path.stem}{TEXT_OUTPUT_SUFFIX}"


def _convert_one_for_batch(
    path: Path, options: ConversionOptions, outdir: Optional[Path]
) -> BatchItem:
    file_opts = ConversionOptions(
        raw=options.raw,
        output=batch_output_path(path, outdir),
        transparency=options.transparency,
        debug=options.debug,
    )
    try:
        return BatchItem(path=path, result=image_to_text(path, file_opts))
    except ZxtexError as exc:
        return BatchItem(path=path, failure=exc)


def convert_directory(directory: Path, options: ConversionOptions) -> List[BatchItem]:
    """
    Convert every image file in `directory` to a text grid.

    Files are processed in name order (case-insensitive) and results come back
    in that order whatever options.jobs is. Per-file failures are returned,
    not raised.
    """
    directory = Path(directory)
    files = sorted(
        (
            p
            for p in directory.iterdir()
            if p.is_file() and p.suffix.lower() in IMAGE_EXTENSIONS
        ),
        key=lambda p: p.name.lower(),
    )
    if not files:
        raise EmptyInput(f"no image files in {directory}")

    outdir = options.outdir
    if outdir is not None:
        try:
            Path(outdir).mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise IOFailure(
                f"cannot create {outdir}: {exc.strerror or exc}", outdir
            ) from exc

    if options.jobs == 1:
        return [_convert_one_for_batch(p, options, outdir) for p in files]
    with ThreadPoolExecutor(max_workers=options.jobs) as ex:
        futures = [ex.submit(_convert_one_for_batch, p, options, outdir) for p in files]
        return [f.result() for f in futures]


__all__ = [
    "InputKind",
    "ConversionResult",
    "BatchItem",
    "classify_input",
    "resolve_output_path",
    "image_to_text",
    "text_file_to_image",
    "literal_to_image",
    "batch_output_path",
    "convert_directory",
]
