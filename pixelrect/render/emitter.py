"""SVG markup for the document wrapper, background and row rects.

Every element is written with one fixed attribute template::

    <rect fill="#ff0000" x="3" y="0" width="2" height="1"/>

Numbers come from the render's number cache, colors verbatim from the
palette. Nothing here checks index bounds; the context must have been
built from validated data.
"""

from __future__ import annotations

from pixelrect.render.buffer import OutputBuffer
from pixelrect.render.context import RenderContext

SVG_OPEN = b'<svg xmlns="http://www.w3.org/2000/svg" version="1.1"'
SVG_CLOSE = b"</svg>"

_RECT_FILL = b'<rect fill="#'
_RECT_X = b'" x="'
_RECT_Y = b'" y="'
_RECT_WIDTH = b'" width="'
_RECT_ROW_END = b'" height="1"/>'
_RECT_OVERHEAD = len(_RECT_FILL + _RECT_X + _RECT_Y + _RECT_WIDTH + _RECT_ROW_END)


def open_markup(ctx: RenderContext, scale: int) -> bytes:
    """Opening ``<svg>`` tag: unscaled viewBox, scaled display size."""
    header = ctx.header
    w = ctx.numbers[header.width]
    h = ctx.numbers[header.height]
    return b"".join((
        SVG_OPEN,
        b' viewBox="0 0 ', w, b" ", h,
        b'" width="', str(header.width * scale).encode("ascii"),
        b'" height="', str(header.height * scale).encode("ascii"),
        b'" shape-rendering="crispEdges">',
    ))


def background_markup(ctx: RenderContext) -> bytes:
    """Full-canvas background rect, or ``b""`` without a background."""
    header = ctx.header
    if not header.has_background:
        return b""
    return b"".join((
        _RECT_FILL, ctx.palette[header.background_color_index].encode("ascii"),
        b'" x="0" y="0" width="', ctx.numbers[header.width],
        b'" height="', ctx.numbers[header.height], b'"/>',
    ))


def rect_byte_bound(ctx: RenderContext) -> int:
    """Upper bound on the bytes of one row rect for this context."""
    longest_color = max((len(token) for token in ctx.palette), default=0)
    return _RECT_OVERHEAD + longest_color + 3 * len(ctx.numbers[-1])


def emit_rect(buf: OutputBuffer, color: bytes, x: bytes, y: bytes, width: bytes) -> None:
    """Append one height-1 rect; all arguments are pre-encoded ASCII."""
    buf.append(b"".join((
        _RECT_FILL, color, _RECT_X, x, _RECT_Y, y, _RECT_WIDTH, width, _RECT_ROW_END,
    )))


def emit_close(buf: OutputBuffer) -> None:
    buf.append(SVG_CLOSE)
