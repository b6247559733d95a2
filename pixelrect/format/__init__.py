"""Binary payload decoding, validation and encoding."""

from pixelrect.format.encoder import encode, encode_image
from pixelrect.format.header import (
    FORMAT_VERSION,
    HEADER_SIZE,
    Header,
    bits_per_pixel,
    decode_header,
    encode_header,
)
from pixelrect.format.palette import Palette, decode_palette, encode_palette
from pixelrect.format.pixels import decode_pixel_indices, encode_pixel_indices, expected_length
from pixelrect.format.validation import (
    check_data_length,
    check_header,
    check_pixel_indices,
    validate_data_length,
    validate_header,
)

__all__ = [
    "FORMAT_VERSION",
    "HEADER_SIZE",
    "Header",
    "Palette",
    "bits_per_pixel",
    "check_data_length",
    "check_header",
    "check_pixel_indices",
    "decode_header",
    "decode_palette",
    "decode_pixel_indices",
    "encode",
    "encode_header",
    "encode_image",
    "encode_palette",
    "encode_pixel_indices",
    "expected_length",
    "validate_data_length",
    "validate_header",
]
