"""Palette section: RGB or RGBA entries following the header.

Each entry decodes to a lowercase hex token without ``#`` (``"ff0000"`` or
``"ff000080"``); the renderer writes tokens verbatim into fill attributes.
"""

from __future__ import annotations

from typing import Sequence, Tuple

from pixelrect.format.header import HEADER_SIZE, Header

Palette = Tuple[str, ...]


def palette_size(header: Header) -> int:
    """Byte length of the palette section."""
    return header.num_colors * header.bytes_per_color


def decode_palette(data: bytes, header: Header) -> Palette:
    """Decode ``header.num_colors`` color tokens from *data*.

    The payload length is not checked here; see
    :func:`pixelrect.format.validation.check_data_length`.
    """
    stride = header.bytes_per_color
    start = HEADER_SIZE
    return tuple(
        data[offset:offset + stride].hex()
        for offset in range(start, start + header.num_colors * stride, stride)
    )


def encode_palette(palette: Sequence[str], has_alpha: bool) -> bytes:
    """Pack hex color tokens into the palette section.

    Parameters
    ----------
    palette : Sequence[str]
        Tokens of 6 (rgb) or 8 (rgba) hex digits, optional leading ``#``.
    has_alpha : bool
        Write 4 bytes per entry; 6-digit tokens get alpha ``ff``.

    Raises
    ------
    ValueError
        If a token is not 6 or 8 hex digits, or carries alpha while
        *has_alpha* is False.
    """
    out = bytearray()
    for token in palette:
        raw = bytes.fromhex(token.lstrip("#"))
        if len(raw) not in (3, 4):
            raise ValueError(f"Color token must be 6 or 8 hex digits, got {token!r}")
        if len(raw) == 4 and not has_alpha:
            raise ValueError(f"Color token {token!r} has alpha but palette is RGB")
        if has_alpha and len(raw) == 3:
            raw += b"\xff"
        out += raw
    return bytes(out)
