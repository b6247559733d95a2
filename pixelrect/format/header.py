"""Fixed 8-byte header of a pixelrect payload.

Layout (big-endian)::

    offset  size  field
    0       1     version                 (FORMAT_VERSION)
    1       1     width                   1..255
    2       1     height                  1..255
    3       2     num_colors              1..256
    5       1     scale                   0 = auto
    6       1     flags                   bit 0 background, bit 1 alpha palette
    7       1     background_color_index

``total_pixels`` is not stored; it is derived on decode.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

from pixelrect.errors import MalformedHeader

FORMAT_VERSION = 1
HEADER_SIZE = 8
MAX_DIMENSION = 255
MAX_COLORS = 256

FLAG_BACKGROUND = 0x01
FLAG_ALPHA = 0x02

_HEADER_STRUCT = struct.Struct(">BBBHBBB")


@dataclass(frozen=True, slots=True)
class Header:
    """Structural metadata decoded from the start of a payload.

    Parameters
    ----------
    width, height : int
        Canvas size in pixels.
    scale : int
        Display scale factor; 0 means compute one at render time.
    total_pixels : int
        Must equal ``width * height``.
    has_background : bool
        A full-canvas background rect is painted first.
    background_color_index : int
        Palette index of the background; only meaningful with
        *has_background*.
    num_colors : int
        Palette length.
    has_alpha : bool
        Palette entries carry an alpha byte.
    version : int
        Format version.
    """

    width: int
    height: int
    scale: int
    total_pixels: int
    has_background: bool
    background_color_index: int
    num_colors: int
    has_alpha: bool = False
    version: int = FORMAT_VERSION

    @property
    def bytes_per_color(self) -> int:
        return 4 if self.has_alpha else 3

    @property
    def bits_per_pixel(self) -> int:
        return bits_per_pixel(self.num_colors)

    @property
    def flags(self) -> int:
        flags = 0
        if self.has_background:
            flags |= FLAG_BACKGROUND
        if self.has_alpha:
            flags |= FLAG_ALPHA
        return flags


def bits_per_pixel(num_colors: int) -> int:
    """Smallest of 1, 2, 4, 8 bits able to index *num_colors* entries."""
    for bits in (1, 2, 4):
        if num_colors <= 1 << bits:
            return bits
    return 8


def decode_header(data: bytes) -> Header:
    """Decode the fixed header at the start of *data*.

    Raises
    ------
    MalformedHeader
        If *data* is shorter than HEADER_SIZE.
    """
    if len(data) < HEADER_SIZE:
        raise MalformedHeader(
            f"Payload has {len(data)} bytes, header needs {HEADER_SIZE}"
        )

    version, width, height, num_colors, scale, flags, bg_index = (
        _HEADER_STRUCT.unpack_from(data, 0)
    )
    return Header(
        width=width,
        height=height,
        scale=scale,
        total_pixels=width * height,
        has_background=bool(flags & FLAG_BACKGROUND),
        background_color_index=bg_index,
        num_colors=num_colors,
        has_alpha=bool(flags & FLAG_ALPHA),
        version=version,
    )


def encode_header(header: Header) -> bytes:
    """Pack *header* into its 8-byte wire form.

    ``total_pixels`` is not written; callers are expected to have
    validated the header first.
    """
    return _HEADER_STRUCT.pack(
        header.version,
        header.width,
        header.height,
        header.num_colors,
        header.scale,
        header.flags,
        header.background_color_index if header.has_background else 0,
    )
