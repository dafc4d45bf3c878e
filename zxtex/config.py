# zxtex/config.py
"""Run configuration.

One ConversionOptions value is built per invocation (from argparse or by
hand) and passed down unchanged; nothing in the package keeps global state.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .core_types import TransparencyConfig, parse_rgb_text, rgb_to_hex
from .errors import ConfigurationError
from .utils import warn


def transparency_from_options(
    color_text: Optional[str] = None, index: Optional[int] = None
) -> TransparencyConfig:
    """
    Build the transparency overrides.

    A colour string that does not parse is reported and ignored rather than
    failing the run. A negative index means "not in use"; above 15 is an error.
    """
    color = None
    if color_text:
        try:
            color = parse_rgb_text(color_text)
        except ValueError as exc:
            warn(f"ignoring transparent colour {color_text!r}: {exc}")
    if index is not None and index < 0:
        index = None
    if index is not None and index > 15:
        raise ConfigurationError(f"transparent index must be 0..15, got {index}")
    return TransparencyConfig(color=color, index=index)


@dataclass(frozen=True)
class ConversionOptions:
    """Container for conversion options.

    Attributes:
        raw: Single-line output without header instead of row mode.
        width: Grid width for text input; 0 means take it from the text or infer.
        output: Explicit output path; None derives one.
        outdir: Output directory for batch conversion.
        transparency: Extra transparency overrides for image input.
        jobs: Files converted in parallel in batch mode.
        debug: Emit debug lines.
    """

    raw: bool = False
    width: int = 0
    output: Optional[Path] = None
    outdir: Optional[Path] = None
    transparency: TransparencyConfig = field(default_factory=TransparencyConfig)
    jobs: int = 1
    debug: bool = False

    def __post_init__(self) -> None:
        if self.width < 0:
            raise ConfigurationError(f"width must be >= 0, got {self.width}")
        if self.jobs < 1:
            raise ConfigurationError(f"jobs must be >= 1, got {self.jobs}")

    @classmethod
    def from_namespace(cls, args: argparse.Namespace) -> "ConversionOptions":
        return cls(
            raw=bool(args.raw),
            width=int(args.width or 0),
            output=args.output,
            outdir=args.outdir,
            transparency=transparency_from_options(
                args.transparent_color, args.transparent_index
            ),
            jobs=int(args.jobs),
            debug=bool(args.debug),
        )

    def summary_pairs(self):
        """(name, value) pairs for the debug config line."""
        t = self.transparency
        return [
            ("Mode", "raw" if self.raw else "rows"),
            ("Width", self.width or "auto"),
            ("Output", str(self.output) if self.output else "-"),
            ("Transparent colour", rgb_to_hex(t.color) if t.color else "-"),
            ("Transparent index", f"{t.index:X}" if t.index is not None else "-"),
            ("Jobs", self.jobs),
        ]


__all__ = ["ConversionOptions", "transparency_from_options"]
