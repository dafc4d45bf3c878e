# zxtex/image_io.py
from __future__ import annotations

"""
Image and file I/O helpers.

Images come in and go out as uint8 (H, W, 4) RGBA arrays. Pillow does the
format work; failures surface as DecodeFailure / IOFailure.
"""

import io
from pathlib import Path

import numpy as np
from PIL import Image

from .core_types import U8Image, assert_u8_image_rgba
from .errors import DecodeFailure, IOFailure

# Pillow integer modes; 16-bit greyscale PNGs open as one of these.
_WIDE_GREY_MODES = frozenset({"I", "I;16", "I;16B", "I;16L", "I;16N"})


def to_u8_channels(arr: np.ndarray) -> U8Image:
    """
    Reduce integer samples to 8 bits.

    uint8 passes through. Wider integer samples are treated as 16-bit and
    keep only their high byte.
    """
    a = np.asarray(arr)
    if a.dtype == np.uint8:
        return a
    if a.dtype.kind not in "iu":
        raise TypeError(f"expected integer samples, got {a.dtype}")
    wide = np.clip(a.astype(np.int64), 0, 0xFFFF)
    return (wide >> 8).astype(np.uint8)


def _to_rgba_array(im: Image.Image) -> U8Image:
    if im.mode in _WIDE_GREY_MODES:
        grey = to_u8_channels(np.array(im))
        out = np.empty(grey.shape + (4,), dtype=np.uint8)
        out[..., :3] = grey[..., None]
        out[..., 3] = 255
        return out
    return np.array(im.convert("RGBA"), dtype=np.uint8)


def decode_image_bytes(data: bytes, name: str = "<bytes>") -> U8Image:
    """
    Decode PNG/GIF/BMP/JPEG bytes into a uint8 (H, W, 4) RGBA array.
    Animated images give their first frame.
    """
    try:
        with Image.open(io.BytesIO(data)) as im:
            # open() is lazy; truncated data only fails on load()
            im.load()
            rgba = _to_rgba_array(im)
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
        raise DecodeFailure(f"cannot decode image {name}: {exc}") from exc
    return assert_u8_image_rgba(rgba)


def encode_png_bytes(rgba: U8Image) -> bytes:
    """Encode a uint8 (H, W, 4) RGBA array as PNG bytes."""
    arr = assert_u8_image_rgba(np.ascontiguousarray(rgba))
    buf = io.BytesIO()
    Image.fromarray(arr).save(buf, format="PNG")
    return buf.getvalue()


def read_bytes(path: Path) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise IOFailure(f"cannot read {path}: {exc.strerror or exc}", path) from exc


def write_bytes(path: Path, data: bytes) -> Path:
    path = Path(path)
    try:
        path.write_bytes(data)
    except OSError as exc:
        raise IOFailure(f"cannot write {path}: {exc.strerror or exc}", path) from exc
    return path


def read_text(path: Path) -> str:
    """Read a text grid. A UTF-8 BOM is dropped; undecodable bytes become U+FFFD."""
    return read_bytes(path).decode("utf-8-sig", errors="replace")


def write_text(path: Path, text: str) -> Path:
    return write_bytes(path, text.encode("utf-8"))


def load_image_rgba(path: Path) -> U8Image:
    """Load an image file as a uint8 (H, W, 4) RGBA array."""
    path = Path(path)
    return decode_image_bytes(read_bytes(path), path.name)


def save_png_rgba(path: Path, rgba: U8Image) -> Path:
    """Save a uint8 (H, W, 4) RGBA array as a PNG file at exactly `path`."""
    return write_bytes(Path(path), encode_png_bytes(rgba))


__all__ = [
    "to_u8_channels",
    "decode_image_bytes",
    "encode_png_bytes",
    "read_bytes",
    "write_bytes",
    "read_text",
    "write_text",
    "load_image_rgba",
    "save_png_rgba",
]
