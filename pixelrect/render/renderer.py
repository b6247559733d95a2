"""SVG renderer -- decoded pixel grid to merged row rects.

Render sequence (linear, once per call)::

    open markup -> background rect (optional) -> scan/merge -> close markup

Fragment renders skip the first and last step. The scan walks pixels in
row-major order; background-colored pixels are skipped one at a time and
every other pixel starts a run that is merged up to the end of its row
and emitted as a single ``height="1"`` rect.

Scale rule:
    A header scale of 0 means auto: ``auto_scale_target // max(w, h) + 1``,
    so the larger side displays at more than *auto_scale_target* units.
    The viewBox is always the unscaled pixel grid.
"""

from __future__ import annotations

import logging

from pixelrect.format.header import Header
from pixelrect.render.buffer import OutputBuffer
from pixelrect.render.context import RenderContext
from pixelrect.render.emitter import (
    SVG_CLOSE,
    background_markup,
    emit_close,
    emit_rect,
    open_markup,
    rect_byte_bound,
)
from pixelrect.render.scanner import iter_runs

logger = logging.getLogger(__name__)

AUTO_SCALE_TARGET = 512


def effective_scale(header: Header, auto_scale_target: int = AUTO_SCALE_TARGET) -> int:
    """Display scale for *header*; computed when the header stores 0.

    >>> effective_scale(Header(10, 20, 0, 200, False, 0, 2))
    26
    """
    if header.scale:
        return header.scale
    return auto_scale_target // max(header.width, header.height) + 1


class SVGRenderer:
    """Render a :class:`RenderContext` as SVG text.

    Parameters
    ----------
    auto_scale_target : int
        Minimum display size of the larger side when the header scale
        is 0.

    Notes
    -----
    Instances hold no per-render state and can be shared.
    """

    def __init__(self, auto_scale_target: int = AUTO_SCALE_TARGET) -> None:
        if auto_scale_target < 1:
            raise ValueError(f"auto_scale_target must be positive, got {auto_scale_target}")
        self._auto_scale_target = auto_scale_target

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render_document(self, ctx: RenderContext) -> str:
        """Complete ``<svg>`` document."""
        return self._render(ctx, document=True)

    def render_fragment(self, ctx: RenderContext) -> str:
        """Background and run rects only, no ``<svg>`` wrapper."""
        return self._render(ctx, document=False)

    def scale_for(self, ctx: RenderContext) -> int:
        return effective_scale(ctx.header, self._auto_scale_target)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _render(self, ctx: RenderContext, document: bool) -> str:
        opening = open_markup(ctx, self.scale_for(ctx)) if document else b""
        background = background_markup(ctx)
        buf = OutputBuffer(self._capacity(ctx, len(opening) + len(background), document))

        buf.append(opening)
        buf.append(background)
        rects = self._scan(ctx, buf)
        if document:
            emit_close(buf)

        logger.debug(
            "Rendered %dx%d %s: %d rects, %d bytes (capacity %d)",
            ctx.header.width, ctx.header.height,
            "document" if document else "fragment",
            rects, len(buf), buf.capacity,
        )
        return buf.getvalue()

    def _scan(self, ctx: RenderContext, buf: OutputBuffer) -> int:
        colors = [token.encode("ascii") for token in ctx.palette]
        numbers = ctx.numbers
        rects = 0
        for run in iter_runs(ctx):
            emit_rect(
                buf,
                colors[run.color_index],
                numbers[run.x],
                numbers[run.y],
                numbers[run.length],
            )
            rects += 1
        return rects

    @staticmethod
    def _capacity(ctx: RenderContext, prefix: int, document: bool) -> int:
        # prefix: bytes of the opening tag and background rect already built
        # worst case is one rect per pixel
        size = prefix + ctx.header.total_pixels * rect_byte_bound(ctx)
        if document:
            size += len(SVG_CLOSE)
        return size
