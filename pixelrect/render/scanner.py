"""Row-bounded run detection and the background skip rule.

A run never continues into the next row, so every rect has height 1.
Pixels matching an already painted background are skipped one at a time
without computing their run length.
"""

from __future__ import annotations

from typing import Iterator, NamedTuple, Sequence

from pixelrect.render.context import RenderContext


class Run(NamedTuple):
    """Horizontal run of one color: ``length`` pixels starting at (x, y)."""

    color_index: int
    x: int
    y: int
    length: int


def run_length(pixels: Sequence[int], width: int, start: int) -> int:
    """Length of the same-color run starting at *start*, clipped to its row.

    >>> run_length([0, 0, 1, 1, 1, 1], width=3, start=2)
    1
    """
    color = pixels[start]
    row_end = start - start % width + width
    end = start + 1
    while end < row_end and pixels[end] == color:
        end += 1
    return end - start


def can_skip(ctx: RenderContext, color_index: int) -> bool:
    """True when *color_index* is the background color already painted."""
    header = ctx.header
    return header.has_background and color_index == header.background_color_index


def iter_runs(ctx: RenderContext) -> Iterator[Run]:
    """Yield the runs a render emits, in row-major order.

    Deterministic: the same context always yields the same runs.
    """
    pixels = ctx.pixels
    width = ctx.header.width
    total = ctx.header.total_pixels

    p = 0
    while p < total:
        color_index = pixels[p]
        if can_skip(ctx, color_index):
            p += 1
            continue
        length = run_length(pixels, width, p)
        yield Run(color_index, p % width, p // width, length)
        p += length
