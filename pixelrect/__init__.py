"""pixelrect: compact binary pixel art to exact-pixel SVG.

Decodes a palette-indexed, bit-packed pixel payload and re-encodes it as
SVG by merging horizontal runs of same-colored pixels into rects.

Architecture layers (strict one-way dependency):
    cli -> api -> {render, format} -> {errors, utils}

Key invariants:
    - One rect per maximal row run; runs never wrap rows
    - Pixels matching the background color emit no rect
    - Same payload, same SVG bytes

Usage:
    import pixelrect
    svg = pixelrect.render_document(payload)
"""

from pixelrect.api import decode, is_valid, is_valid_header, render_document, render_fragment
from pixelrect.errors import (
    ConfigError,
    EncodeError,
    FormatError,
    InvalidHeader,
    MalformedHeader,
    PaletteIndexOutOfRange,
    PixelRectError,
    TruncatedData,
)
from pixelrect.format.encoder import encode, encode_image

__version__ = "1.0.0"

__all__ = [
    "ConfigError",
    "EncodeError",
    "FormatError",
    "InvalidHeader",
    "MalformedHeader",
    "PaletteIndexOutOfRange",
    "PixelRectError",
    "TruncatedData",
    "decode",
    "encode",
    "encode_image",
    "is_valid",
    "is_valid_header",
    "render_document",
    "render_fragment",
]
