"""Render core: decoded pixel grid to SVG rects."""

from pixelrect.render.buffer import OutputBuffer
from pixelrect.render.context import RenderContext
from pixelrect.render.numbers import NumberTextCache, build_number_cache
from pixelrect.render.renderer import AUTO_SCALE_TARGET, SVGRenderer, effective_scale
from pixelrect.render.scanner import Run, can_skip, iter_runs, run_length

__all__ = [
    "AUTO_SCALE_TARGET",
    "NumberTextCache",
    "OutputBuffer",
    "RenderContext",
    "Run",
    "SVGRenderer",
    "build_number_cache",
    "can_skip",
    "effective_scale",
    "iter_runs",
    "run_length",
]
