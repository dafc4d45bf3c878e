# zxtex/errors.py
"""Exception types raised by zxtex conversions.

Every conversion failure is terminal for that conversion. Library code raises
one of these; the CLI reports it and sets the exit status.
"""

from __future__ import annotations

from typing import Optional


class ZxtexError(Exception):
    """Base class for all conversion failures."""


class UnsupportedFormat(ZxtexError):
    """Raised when a file is neither a known raster format nor a text grid."""


class DecodeFailure(ZxtexError):
    """Raised when image bytes cannot be identified or loaded."""


class EmptyInput(ZxtexError):
    """Raised when there is nothing to build a grid from."""


class InvalidDigit(ZxtexError):
    """Raised when a character outside the grid alphabet reaches the grid builder."""

    def __init__(self, char: str, position: int):
        super().__init__(f"invalid grid digit {char!r} at position {position}")
        self.char = char
        self.position = position


class ConfigurationError(ZxtexError):
    """Raised for missing or out-of-range configuration values."""


class IOFailure(ZxtexError):
    """Raised when reading or writing a file system path fails."""

    def __init__(self, message: str, path: Optional[object] = None):
        super().__init__(message)
        self.path = path


__all__ = [
    "ZxtexError",
    "UnsupportedFormat",
    "DecodeFailure",
    "EmptyInput",
    "InvalidDigit",
    "ConfigurationError",
    "IOFailure",
]
