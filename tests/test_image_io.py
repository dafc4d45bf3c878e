from __future__ import annotations

import io

import numpy as np
import pytest
from PIL import Image

from zxtex.errors import DecodeFailure, IOFailure
from zxtex.image_io import (
    decode_image_bytes,
    encode_png_bytes,
    load_image_rgba,
    read_text,
    save_png_rgba,
    to_u8_channels,
)


def _png_bytes(im: Image.Image) -> bytes:
    buf = io.BytesIO()
    im.save(buf, format="PNG")
    return buf.getvalue()


def test_decode_png_bytes_to_rgba(sprite_rgba):
    rgba = decode_image_bytes(_png_bytes(Image.fromarray(sprite_rgba)))
    assert rgba.dtype == np.uint8
    assert rgba.shape == (2, 3, 4)
    assert np.array_equal(rgba, sprite_rgba)


def test_decode_rgb_image_is_opaque():
    arr = np.full((2, 2, 3), 200, dtype=np.uint8)
    rgba = decode_image_bytes(_png_bytes(Image.fromarray(arr)))
    assert rgba.shape == (2, 2, 4)
    assert (rgba[..., 3] == 255).all()


def test_palette_image_transparency_survives():
    im = Image.new("P", (2, 1))
    im.putpalette([255, 0, 0, 0, 0, 255] + [0] * (256 * 3 - 6))
    im.putpixel((0, 0), 0)
    im.putpixel((1, 0), 1)
    im.info["transparency"] = 1
    rgba = decode_image_bytes(_png_bytes(im))
    assert tuple(rgba[0, 0]) == (255, 0, 0, 255)
    assert rgba[0, 1, 3] == 0


def test_sixteen_bit_samples_keep_high_byte():
    wide = np.array([[0x0000, 0x12FF, 0xFF00, 0xFFFF]], dtype=np.uint16)
    assert to_u8_channels(wide).tolist() == [[0x00, 0x12, 0xFF, 0xFF]]
    assert to_u8_channels(np.array([7], dtype=np.uint8)).tolist() == [7]
    with pytest.raises(TypeError):
        to_u8_channels(np.array([0.5]))


def test_sixteen_bit_grey_png_decodes_by_high_byte():
    wide = np.array([[0x1234, 0xFF00]], dtype=np.uint16)
    rgba = decode_image_bytes(_png_bytes(Image.fromarray(wide)))
    assert tuple(rgba[0, 0]) == (0x12, 0x12, 0x12, 255)
    assert tuple(rgba[0, 1]) == (0xFF, 0xFF, 0xFF, 255)


def test_garbage_bytes_are_decode_failure():
    with pytest.raises(DecodeFailure):
        decode_image_bytes(b"definitely not an image", "junk.png")
    with pytest.raises(DecodeFailure):
        decode_image_bytes(b"")


def test_truncated_png_is_decode_failure():
    rng = np.random.default_rng(3)
    noise = rng.integers(0, 256, size=(32, 32, 4)).astype(np.uint8)
    data = _png_bytes(Image.fromarray(noise))
    with pytest.raises(DecodeFailure):
        decode_image_bytes(data[: len(data) // 2])


def test_png_encode_round_trip(sprite_rgba):
    data = encode_png_bytes(sprite_rgba)
    assert data.startswith(b"\x89PNG\r\n\x1a\n")
    assert np.array_equal(decode_image_bytes(data), sprite_rgba)


def test_file_helpers(tmp_path, sprite_rgba):
    out = save_png_rgba(tmp_path / "no_suffix", sprite_rgba)
    assert out == tmp_path / "no_suffix"
    assert np.array_equal(load_image_rgba(out), sprite_rgba)

    bad = tmp_path / "broken.png"
    bad.write_bytes(b"\x89PNG nope")
    with pytest.raises(DecodeFailure):
        load_image_rgba(bad)

    with pytest.raises(IOFailure):
        load_image_rgba(tmp_path / "missing.png")
    with pytest.raises(IOFailure):
        save_png_rgba(tmp_path / "missing_dir" / "x.png", sprite_rgba)


def test_read_text_drops_bom(tmp_path):
    p = tmp_path / "grid.txt"
    p.write_bytes(b"\xef\xbb\xbf01\n23\n")
    assert read_text(p) == "01\n23\n"
