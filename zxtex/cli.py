# zxtex/cli.py
"""
Command line entry point.

Usage:
  zxtex INPUT [--width N] [--output PATH] [--raw]
              [--transparent-color HEX] [--transparent-index N]
              [--outdir DIR] [--jobs N] [--debug]

INPUT:
  image file (.png .gif .bmp .jpg .jpeg)  -> hex text (stdout, or --output)
  text file (.txt .hex)                   -> PNG (--output, header file name, or out.png)
  directory                               -> every image to <stem>.txt (--outdir)
  anything else                           -> treated as a hex string; --width required

Exit status: 0 on success, 1 on a conversion failure, 2 on bad arguments.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from . import __version__
from .config import ConversionOptions
from .convert import (
    ConversionResult,
    classify_input,
    convert_directory,
    image_to_text,
    literal_to_image,
    text_file_to_image,
)
from .errors import ZxtexError
from .utils import (
    debug_log,
    enable_line_buffered_stdout,
    error,
    format_seconds_compact,
    key_value_pairs_to_string,
    log,
    palette_usage_report,
    print_banner,
    print_config_line,
    warn,
)


def parse_cli_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        input: image/text path, directory, or hex string
        width: grid width for text input (0 = from text / inferred)
        output: optional output path
        outdir: optional output directory for directory input
        raw: single-line output without header
        transparent_color: colour string treated as transparent
        transparent_index: palette index treated as transparent
        jobs: files converted in parallel for directory input
        debug: bool for verbose details
    """
    parser = argparse.ArgumentParser(
        prog="zxtex",
        description="Convert images to ZX Spectrum palette hex sprites and back.",
    )
    parser.add_argument("input", help="Image, text grid, directory, or hex string")
    parser.add_argument(
        "-w",
        "--width",
        type=int,
        default=0,
        help="Width for output image when converting from hex data",
    )
    parser.add_argument(
        "-o", "--output", type=Path, default=None, help="Output filename"
    )
    parser.add_argument(
        "--outdir",
        type=Path,
        default=None,
        help="Output directory for directory input (default: next to each image)",
    )
    parser.add_argument(
        "--raw",
        action="store_true",
        help="Write all pixels on one line, without header",
    )
    parser.add_argument(
        "--transparent-color",
        metavar="COLOUR",
        default=None,
        help="Treat this RGB as transparent (#RRGGBB, RRGGBB, #RGB or r,g,b)",
    )
    parser.add_argument(
        "--transparent-index",
        metavar="N",
        type=int,
        default=None,
        help="Treat pixels whose nearest palette index is N (0-15) as transparent",
    )
    parser.add_argument(
        "--jobs", type=int, default=1, help="Files processed in parallel"
    )
    parser.add_argument("--debug", action="store_true", help="Verbose details")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser.parse_args(argv)


def _debug_report(result: ConversionResult) -> None:
    grid = result.grid
    debug_log(
        key_value_pairs_to_string(
            [
                ("Source", result.source),
                ("Size", f"{grid.width}x{grid.height}"),
                ("Cells", len(grid.cells)),
                ("Short last row", grid.is_ragged),
            ]
        )
    )
    debug_log("palette usage:")
    for digit, name, count in palette_usage_report(grid):
        debug_log(f"  {digit}  {name}: {count:,}")
    debug_log(f"Total {format_seconds_compact(result.seconds)}")


def _run_directory(directory: Path, options: ConversionOptions) -> int:
    items = convert_directory(directory, options)
    failures: List[str] = []
    for item in items:
        if options.debug:
            print_banner(item.path.name)
        if item.failure is not None:
            error(f"{item.path.name}: {item.failure}")
            failures.append(item.path.name)
            continue
        log(f"Hex data written to {item.result.output}")
        if options.debug:
            _debug_report(item.result)
    log(f"Converted {len(items) - len(failures)} of {len(items)} files")
    return 1 if failures else 0


def run(args: argparse.Namespace) -> int:
    """Run one invocation. Returns the exit status."""
    options = ConversionOptions.from_namespace(args)
    if options.debug:
        print_config_line("run", options.summary_pairs())

    kind = classify_input(args.input)
    if kind == "directory":
        if options.output is not None:
            warn("--output is ignored for directory input; use --outdir")
        return _run_directory(Path(args.input), options)

    if kind == "image":
        result = image_to_text(Path(args.input), options)
        if result.output is not None:
            log(f"Hex data written to {result.output}")
        else:
            sys.stdout.write(result.text or "")
            sys.stdout.flush()
    elif kind == "text":
        result = text_file_to_image(Path(args.input), options)
        log(f"Image saved as {result.output}")
    else:
        result = literal_to_image(args.input, options)
        log(f"Image saved as {result.output}")

    if options.debug:
        _debug_report(result)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point."""
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)
    try:
        return run(args)
    except ZxtexError as exc:
        error(str(exc))
        return 1


if __name__ == "__main__":
    sys.exit(main())
