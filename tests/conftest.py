"""Shared fixtures and a reference rasterizer for emitted SVG.

The rasterizer paints every ``<rect>`` of a document or fragment onto a
numpy grid of color tokens so tests can compare the result with the
source pixels cell by cell.
"""

from __future__ import annotations

import re
from typing import List, NamedTuple

import numpy as np
import pytest

from pixelrect.format.encoder import encode
from pixelrect.utils.logging_config import pop_context, setup_logging

RECT_RE = re.compile(
    r'<rect fill="#([0-9a-f]+)" x="(\d+)" y="(\d+)" width="(\d+)" height="(\d+)"/>'
)


class Rect(NamedTuple):
    color: str
    x: int
    y: int
    width: int
    height: int


def parse_rects(svg: str) -> List[Rect]:
    """All rects in document order."""
    return [
        Rect(m.group(1), *(int(v) for v in m.groups()[1:]))
        for m in RECT_RE.finditer(svg)
    ]


def rasterize(svg: str, width: int, height: int, has_background: bool):
    """Paint rects onto a grid.

    Returns
    -------
    grid : np.ndarray
        (height, width) object array of color tokens, None where unpainted.
    explicit : np.ndarray
        (height, width) int array counting explicit (non-background) rects
        covering each cell.
    """
    rects = parse_rects(svg)
    grid = np.full((height, width), None, dtype=object)
    explicit = np.zeros((height, width), dtype=int)

    if has_background:
        bg, rects = rects[0], rects[1:]
        assert (bg.x, bg.y, bg.width, bg.height) == (0, 0, width, height)
        grid[:, :] = bg.color

    for r in rects:
        assert r.height == 1
        assert r.x + r.width <= width, f"rect {r} crosses its row"
        grid[r.y, r.x:r.x + r.width] = r.color
        explicit[r.y, r.x:r.x + r.width] += 1
    return grid, explicit


def expected_run_count(pixels: np.ndarray, background: int | None) -> int:
    """Maximal same-color row runs, excluding runs of the background color."""
    starts = np.ones_like(pixels, dtype=bool)
    starts[:, 1:] = pixels[:, 1:] != pixels[:, :-1]
    if background is not None:
        starts &= pixels != background
    return int(starts.sum())


@pytest.fixture()
def random_image():
    """Factory for seeded random palette images.

    Returns (payload, palette, pixels) where pixels is a (h, w) array.
    Runs are lengthened by repeating columns so merging actually happens.
    """
    def make(width: int, height: int, num_colors: int, *, seed: int = 0,
             background_index: int | None = None, scale: int = 0):
        rng = np.random.default_rng(seed)
        palette = [f"{i * 37 % 256:02x}{i * 91 % 256:02x}{i * 13 % 256:02x}" for i in range(num_colors)]
        cols = rng.integers(0, num_colors, size=(height, width))
        repeat = rng.integers(0, 2, size=(height, width)).astype(bool)
        pixels = cols.copy()
        for x in range(1, width):
            pixels[:, x] = np.where(repeat[:, x], pixels[:, x - 1], cols[:, x])
        payload = encode(width, height, palette, pixels,
                         scale=scale, background_index=background_index)
        return payload, palette, pixels

    return make


@pytest.fixture()
def two_color_payload() -> bytes:
    """2x1 red/green image, both pixels red, no background."""
    return encode(2, 1, ["ff0000", "00ff00"], [0, 0])


@pytest.fixture()
def reset_logging():
    """Remove handlers and context installed by setup_logging()."""
    yield
    setup_logging(to_stderr=False)
    pop_context()
