"""Decoded, ready-to-render image data for one render call."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from pixelrect.format.header import Header
from pixelrect.format.palette import Palette
from pixelrect.render.numbers import NumberTextCache, build_number_cache


@dataclass(frozen=True, slots=True)
class RenderContext:
    """Header, palette, pixel indices and number cache of one image.

    Parameters
    ----------
    header : Header
        Decoded header.
    palette : tuple[str, ...]
        Hex color tokens, indexed by pixel color indices.
    pixels : tuple[int, ...]
        ``header.total_pixels`` palette indices, row-major.
    numbers : tuple[bytes, ...]
        Decimal text for ``0..max(width, height)``.

    Notes
    -----
    Use :meth:`create` rather than the constructor so the number cache
    always matches the header dimensions.
    """

    header: Header
    palette: Palette
    pixels: Tuple[int, ...]
    numbers: NumberTextCache

    @classmethod
    def create(
        cls,
        header: Header,
        palette: Sequence[str],
        pixels: Sequence[int],
    ) -> "RenderContext":
        # numpy scalars are slow to compare in the scan loop
        if hasattr(pixels, "tolist"):
            pixels = pixels.tolist()
        return cls(
            header=header,
            palette=tuple(palette),
            pixels=tuple(pixels),
            numbers=build_number_cache(max(header.width, header.height)),
        )

    def color_at(self, x: int, y: int) -> str:
        """Palette token of pixel (x, y)."""
        return self.palette[self.pixels[y * self.header.width + x]]
