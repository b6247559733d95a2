"""Structural checks run by the safe entry points before any rendering.

Each rule has a raising form (``check_*``) that reports the violated
invariant through a specific :class:`~pixelrect.errors.FormatError`
subclass, and a boolean form (``validate_*``) for callers that only need
a yes/no answer.
"""

from __future__ import annotations

import logging

import numpy as np

from pixelrect.errors import FormatError, InvalidHeader, PaletteIndexOutOfRange, TruncatedData
from pixelrect.format.header import FORMAT_VERSION, MAX_COLORS, MAX_DIMENSION, Header
from pixelrect.format.pixels import expected_length

logger = logging.getLogger(__name__)


def check_header(header: Header) -> None:
    """Raise if *header* violates the structural bounds of the format.

    Raises
    ------
    InvalidHeader
        Unknown version, width/height outside 1..255, total_pixels not
        equal to width * height, or num_colors outside 1..256.
    PaletteIndexOutOfRange
        Background enabled with an index past the palette.
    """
    if header.version != FORMAT_VERSION:
        raise InvalidHeader(
            f"Unsupported format version {header.version}, expected {FORMAT_VERSION}"
        )
    for name in ("width", "height"):
        value = getattr(header, name)
        if not 1 <= value <= MAX_DIMENSION:
            raise InvalidHeader(f"{name}={value} out of range [1, {MAX_DIMENSION}]")
    if header.total_pixels != header.width * header.height:
        raise InvalidHeader(
            f"total_pixels={header.total_pixels} does not match "
            f"{header.width}x{header.height}={header.width * header.height}"
        )
    if not 1 <= header.num_colors <= MAX_COLORS:
        raise InvalidHeader(f"num_colors={header.num_colors} out of range [1, {MAX_COLORS}]")
    if header.has_background and not 0 <= header.background_color_index < header.num_colors:
        raise PaletteIndexOutOfRange(
            f"background_color_index={header.background_color_index} "
            f"out of range for {header.num_colors} colors"
        )


def check_data_length(header: Header, data: bytes) -> None:
    """Raise TruncatedData if *data* is shorter than *header* implies.

    Trailing bytes beyond the expected length are allowed.
    """
    need = expected_length(header)
    if len(data) < need:
        raise TruncatedData(f"Header implies {need} bytes, payload has {len(data)}")


def check_pixel_indices(indices: np.ndarray, header: Header) -> None:
    """Raise PaletteIndexOutOfRange if any index is past the palette."""
    if indices.size == 0:
        return
    if int(indices.max()) >= header.num_colors:
        position = int(np.argmax(indices >= header.num_colors))
        raise PaletteIndexOutOfRange(
            f"Pixel {position} (x={position % header.width}, y={position // header.width}) "
            f"uses color index {int(indices[position])} "
            f"but palette has {header.num_colors} colors"
        )


def validate_header(header: Header) -> bool:
    """Boolean form of :func:`check_header`."""
    return _passes(check_header, header)


def validate_data_length(header: Header, data: bytes) -> bool:
    """Boolean form of :func:`check_data_length`."""
    return _passes(check_data_length, header, data)


def _passes(check, *args) -> bool:
    try:
        check(*args)
    except FormatError as exc:
        logger.debug("Validation failed: %s", exc)
        return False
    return True
