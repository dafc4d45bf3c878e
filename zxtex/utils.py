# zxtex/utils.py
from __future__ import annotations

"""
Shared utilities for zxtex.

Includes time formatting, the palette usage report, and tidy logging.
stdout carries results (encoded text, saved-file lines);
debug, warning and error lines go to stderr.
"""

import sys
from collections import Counter
from typing import Any, Iterable, List, Tuple

from .constants import HEX_DIGITS, TRANSPARENT, TRANSPARENT_CHAR
from .core_types import PixelGrid
from .palette_data import palette_name


# Time formatting


def format_seconds_compact(seconds: float) -> str:
    """Human-friendly seconds: '<ms>ms', '<s>s', or 'Mm Ss'."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f}ms"
    if seconds < 60.0:
        return f"{seconds:.3f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {seconds - 60 * minutes:.1f}s"


# Palette usage


def palette_usage_report(grid: PixelGrid) -> List[Tuple[str, str, int]]:
    """
    Count cells per palette entry.

    Returns a list of (digit, name, count) sorted by count descending, then
    by digit. Transparent cells are reported as ('.', 'Transparent', n).
    """
    counts = Counter(grid.cells)
    report: List[Tuple[str, str, int]] = []
    for cell, count in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])):
        if cell == TRANSPARENT:
            report.append((TRANSPARENT_CHAR, "Transparent", count))
        else:
            report.append((HEX_DIGITS[cell], palette_name(cell), count))
    return report


# Logging
#
# Results (encoded text, "Hex data written to ..." lines) go to stdout so
# they can be piped; everything tagged goes to stderr.


def enable_line_buffered_stdout() -> None:
    """Line-buffer stdout where the stream allows it, so pipes see whole lines."""
    reconfig = getattr(sys.stdout, "reconfigure", None)
    if callable(reconfig):
        try:
            reconfig(line_buffering=True, write_through=True)
        except (ValueError, OSError):
            pass


def format_value(value: Any) -> str:
    """on/off for bools, 1,234 for ints, trimmed 3dp for floats, str() otherwise."""
    if isinstance(value, bool):
        return "on" if value else "off"
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        return f"{value:.3f}".rstrip("0").rstrip(".")
    return str(value)


def key_value_pairs_to_string(
    pairs: Iterable[Tuple[str, Any]], sep: str = "  "
) -> str:
    """'Name: value' blocks joined by sep."""
    return sep.join(f"{name}: {format_value(value)}" for name, value in pairs)


def print_config_line(section: str, pairs: Iterable[Tuple[str, Any]]) -> None:
    """
    One debug line describing a run, e.g.:
      [debug] [run] Mode: rows  Width: 16  Transparent index: 2
    """
    debug_log(f"[{section}] {key_value_pairs_to_string(pairs)}")


def _emit_tagged(tag: str, message: str) -> None:
    print(f"[{tag}] {message}", file=sys.stderr, flush=True)


def print_banner(title: str) -> None:
    print(f"\n=== {title} ===", file=sys.stderr, flush=True)


def log(message: str) -> None:
    """Result line on stdout."""
    print(message, flush=True)


def debug_log(message: str) -> None:
    _emit_tagged("debug", message)


def warn(message: str) -> None:
    _emit_tagged("warn", message)


def error(message: str) -> None:
    _emit_tagged("error", message)


__all__ = [
    "format_seconds_compact",
    "palette_usage_report",
    "enable_line_buffered_stdout",
    "format_value",
    "key_value_pairs_to_string",
    "print_config_line",
    "print_banner",
    "log",
    "debug_log",
    "warn",
    "error",
]
