"""Public entry points: payload bytes in, SVG text out.

Safe and unsafe rendering share one code path, :func:`_prepare`, which
differs only in whether the structural checks run:

``validate=True`` (default)
    Every check runs before any rendering work. The first violation
    raises its specific :class:`~pixelrect.errors.FormatError`; nothing is
    partially rendered.

``validate=False``
    No checks beyond what decoding itself needs. The caller is trusted
    completely: a payload that violates the format yields undefined
    output (wrong SVG or an arbitrary exception), not a guaranteed
    FormatError. Use only for payloads validated elsewhere.
"""

from __future__ import annotations

import logging

from pixelrect.errors import FormatError
from pixelrect.format.header import decode_header
from pixelrect.format.palette import decode_palette
from pixelrect.format.pixels import decode_pixel_indices
from pixelrect.format.validation import (
    check_data_length,
    check_header,
    check_pixel_indices,
)
from pixelrect.render.context import RenderContext
from pixelrect.render.renderer import AUTO_SCALE_TARGET, SVGRenderer

logger = logging.getLogger(__name__)


def decode(data: bytes, validate: bool = True) -> RenderContext:
    """Decode *data* into a ready-to-render context.

    Raises
    ------
    MalformedHeader
        Always, when *data* is shorter than the header.
    InvalidHeader, TruncatedData, PaletteIndexOutOfRange
        Only with ``validate=True``.
    """
    return _prepare(data, validate)


def render_document(
    data: bytes,
    validate: bool = True,
    *,
    auto_scale_target: int = AUTO_SCALE_TARGET,
) -> str:
    """Render *data* as a complete SVG document."""
    ctx = _prepare(data, validate)
    return SVGRenderer(auto_scale_target).render_document(ctx)


def render_fragment(data: bytes, validate: bool = True) -> str:
    """Render *data* as bare ``<rect>`` elements, without ``<svg>`` wrapper."""
    ctx = _prepare(data, validate)
    return SVGRenderer().render_fragment(ctx)


def is_valid(data: bytes) -> bool:
    """True if *data* passes every check the safe entry points run."""
    try:
        _prepare(data, validate=True)
    except FormatError as exc:
        logger.debug("Payload rejected: %s", exc)
        return False
    return True


def is_valid_header(data: bytes) -> bool:
    """True if *data* starts with a decodable, structurally valid header.

    Palette and pixel bytes are not examined.
    """
    try:
        check_header(decode_header(data))
    except FormatError as exc:
        logger.debug("Header rejected: %s", exc)
        return False
    return True


def _prepare(data: bytes, validate: bool) -> RenderContext:
    data = bytes(data)
    header = decode_header(data)
    if validate:
        check_header(header)
        check_data_length(header, data)

    palette = decode_palette(data, header)
    pixels = decode_pixel_indices(data, header)
    if validate:
        check_pixel_indices(pixels, header)

    return RenderContext.create(header, palette, pixels)
