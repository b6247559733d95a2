"""Tests for header, palette and pixel decoding plus structural validation.

Run: pytest tests/test_format.py -v
"""

from __future__ import annotations

import numpy as np
import pytest

from pixelrect.errors import InvalidHeader, MalformedHeader, PaletteIndexOutOfRange, TruncatedData
from pixelrect.format.header import HEADER_SIZE, Header, bits_per_pixel, decode_header, encode_header
from pixelrect.format.palette import decode_palette, encode_palette
from pixelrect.format.pixels import (
    decode_pixel_indices,
    encode_pixel_indices,
    expected_length,
    pixel_data_size,
)
from pixelrect.format.validation import (
    check_data_length,
    check_header,
    check_pixel_indices,
    validate_data_length,
    validate_header,
)


def make_header(**overrides) -> Header:
    fields = dict(
        width=4, height=3, scale=0, total_pixels=12,
        has_background=False, background_color_index=0, num_colors=4,
    )
    fields.update(overrides)
    return Header(**fields)


# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------


class TestHeader:
    def test_decode_fields(self) -> None:
        h = decode_header(bytes([1, 3, 2, 0, 5, 4, 0b11, 2]))
        assert (h.version, h.width, h.height) == (1, 3, 2)
        assert h.num_colors == 5
        assert h.scale == 4
        assert h.has_background and h.has_alpha
        assert h.background_color_index == 2
        assert h.total_pixels == 6

    def test_num_colors_is_big_endian(self) -> None:
        h = decode_header(bytes([1, 1, 1, 1, 0, 0, 0, 0]))
        assert h.num_colors == 256

    @pytest.mark.parametrize("length", [0, 1, HEADER_SIZE - 1])
    def test_short_stream_is_malformed(self, length: int) -> None:
        with pytest.raises(MalformedHeader):
            decode_header(bytes(length))

    def test_encode_inverts_decode(self) -> None:
        raw = bytes([1, 16, 9, 0, 7, 3, 0b01, 6])
        assert encode_header(decode_header(raw)) == raw

    @pytest.mark.parametrize(
        "colors, bits",
        [(1, 1), (2, 1), (3, 2), (4, 2), (5, 4), (16, 4), (17, 8), (256, 8)],
    )
    def test_bits_per_pixel(self, colors: int, bits: int) -> None:
        assert bits_per_pixel(colors) == bits


# ---------------------------------------------------------------------------
# Palette
# ---------------------------------------------------------------------------


class TestPalette:
    def test_rgb_tokens_are_lowercase_hex(self) -> None:
        h = make_header(num_colors=2)
        data = bytes(HEADER_SIZE) + bytes.fromhex("FF0000" "00AbCd")
        assert decode_palette(data, h) == ("ff0000", "00abcd")

    def test_alpha_tokens(self) -> None:
        h = make_header(num_colors=1, has_alpha=True)
        data = bytes(HEADER_SIZE) + bytes.fromhex("11223344")
        assert decode_palette(data, h) == ("11223344",)

    def test_encode_pads_alpha(self) -> None:
        assert encode_palette(["#102030", "40506070"], has_alpha=True) == bytes.fromhex(
            "102030ff40506070"
        )

    def test_encode_rejects_alpha_in_rgb_palette(self) -> None:
        with pytest.raises(ValueError):
            encode_palette(["40506070"], has_alpha=False)

    def test_encode_rejects_bad_length(self) -> None:
        with pytest.raises(ValueError):
            encode_palette(["abcd"], has_alpha=False)


# ---------------------------------------------------------------------------
# Pixel indices
# ---------------------------------------------------------------------------


class TestPixelIndices:
    def _payload(self, header: Header, pixel_bytes: bytes) -> bytes:
        return bytes(HEADER_SIZE + header.num_colors * 3) + pixel_bytes

    def test_two_bit_unpack_msb_first(self) -> None:
        h = make_header(width=5, height=1, total_pixels=5, num_colors=4)
        data = self._payload(h, bytes([0b00011011, 0b11000000]))
        assert decode_pixel_indices(data, h).tolist() == [0, 1, 2, 3, 3]

    def test_one_bit_unpack(self) -> None:
        h = make_header(width=3, height=3, total_pixels=9, num_colors=2)
        data = self._payload(h, bytes([0b10100101, 0b10000000]))
        assert decode_pixel_indices(data, h).tolist() == [1, 0, 1, 0, 0, 1, 0, 1, 1]

    def test_eight_bit_unpack(self) -> None:
        h = make_header(width=2, height=1, total_pixels=2, num_colors=200)
        data = self._payload(h, bytes([199, 7]))
        assert decode_pixel_indices(data, h).tolist() == [199, 7]

    @pytest.mark.parametrize("num_colors", [2, 4, 16, 256])
    def test_pack_then_unpack(self, num_colors: int) -> None:
        rng = np.random.default_rng(num_colors)
        h = make_header(width=7, height=5, total_pixels=35, num_colors=num_colors)
        indices = rng.integers(0, num_colors, size=35).astype(np.uint8)
        packed = encode_pixel_indices(indices, h.bits_per_pixel)
        assert len(packed) == pixel_data_size(h)
        decoded = decode_pixel_indices(self._payload(h, packed), h)
        np.testing.assert_array_equal(decoded, indices)

    def test_pack_rejects_wide_index(self) -> None:
        with pytest.raises(ValueError):
            encode_pixel_indices(np.array([4]), 2)

    def test_expected_length(self) -> None:
        h = make_header(width=5, height=1, total_pixels=5, num_colors=4)
        # header + 4 * 3 palette bytes + ceil(5 * 2 / 8)
        assert expected_length(h) == HEADER_SIZE + 12 + 2


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestValidation:
    def test_valid_header_passes(self) -> None:
        check_header(make_header())
        assert validate_header(make_header())

    @pytest.mark.parametrize(
        "overrides",
        [
            {"version": 2},
            {"width": 0, "total_pixels": 0},
            {"height": 0, "total_pixels": 0},
            {"width": 256, "total_pixels": 768},
            {"total_pixels": 11},
            {"num_colors": 0},
            {"num_colors": 257},
        ],
    )
    def test_invalid_header(self, overrides: dict) -> None:
        h = make_header(**overrides)
        with pytest.raises(InvalidHeader):
            check_header(h)
        assert not validate_header(h)

    def test_background_index_out_of_range(self) -> None:
        h = make_header(has_background=True, background_color_index=4)
        with pytest.raises(PaletteIndexOutOfRange):
            check_header(h)

    def test_background_index_ignored_without_background(self) -> None:
        check_header(make_header(has_background=False, background_color_index=99))

    def test_truncated_data(self) -> None:
        h = make_header()
        data = bytes(expected_length(h) - 1)
        with pytest.raises(TruncatedData):
            check_data_length(h, data)
        assert not validate_data_length(h, data)

    def test_trailing_bytes_allowed(self) -> None:
        h = make_header()
        assert validate_data_length(h, bytes(expected_length(h) + 3))

    def test_pixel_index_past_palette(self) -> None:
        h = make_header(width=2, height=1, total_pixels=2, num_colors=3)
        with pytest.raises(PaletteIndexOutOfRange, match="x=1, y=0"):
            check_pixel_indices(np.array([2, 3], dtype=np.uint8), h)
