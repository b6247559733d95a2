"""Build payloads from index arrays or Pillow images.

The encoder is the inverse of the decode path and is what produces the
fixtures used across the test suite. ``encode_image`` keeps every exact
color of the source (no quantization); images with more than 256 distinct
colors are rejected.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np
from PIL import Image

from pixelrect.errors import EncodeError, FormatError
from pixelrect.format.header import MAX_COLORS, MAX_DIMENSION, Header, encode_header
from pixelrect.format.palette import encode_palette
from pixelrect.format.pixels import encode_pixel_indices
from pixelrect.format.validation import check_header, check_pixel_indices

logger = logging.getLogger(__name__)


def encode(
    width: int,
    height: int,
    palette: Sequence[str],
    indices: Sequence[int] | np.ndarray,
    *,
    scale: int = 0,
    background_index: Optional[int] = None,
) -> bytes:
    """Encode a palette image into a payload.

    Parameters
    ----------
    width, height : int
        Canvas size in pixels (1..255).
    palette : Sequence[str]
        Hex color tokens, 6 or 8 digits. Any 8-digit token switches the
        whole palette to RGBA.
    indices : array-like of int
        ``width * height`` palette indices, row-major; 2-D input is
        flattened.
    scale : int
        Display scale stored in the header, 0 for auto.
    background_index : int, optional
        Palette index to paint as full-canvas background. Only allowed
        when every palette entry is opaque.

    Returns
    -------
    bytes
        Complete payload.

    Raises
    ------
    EncodeError
        If the inputs do not describe a valid image.
    """
    flat = np.asarray(indices).ravel()
    header = Header(
        width=width,
        height=height,
        scale=scale,
        total_pixels=width * height,
        has_background=background_index is not None,
        background_color_index=background_index if background_index is not None else 0,
        num_colors=len(palette),
        has_alpha=any(len(token.lstrip("#")) == 8 for token in palette),
    )

    if flat.size != header.total_pixels:
        raise EncodeError(
            f"Got {flat.size} indices for a {width}x{height} image "
            f"({header.total_pixels} pixels)"
        )
    if flat.size and not 0 <= int(flat.min()) <= int(flat.max()) < MAX_COLORS:
        raise EncodeError(
            f"Palette indices must lie in [0, {MAX_COLORS}), "
            f"got [{int(flat.min())}, {int(flat.max())}]"
        )
    if not 0 <= scale <= 255:
        raise EncodeError(f"scale={scale} does not fit in one byte")
    # Background pixels are never emitted, so a translucent entry would be
    # painted with the background color instead of its own alpha
    if header.has_background and any(
        len(token.lstrip("#")) == 8 and token.lstrip("#")[6:].lower() != "ff"
        for token in palette
    ):
        raise EncodeError("A background fill requires every palette entry to be opaque")

    try:
        check_header(header)
        flat = flat.astype(np.uint8)
        check_pixel_indices(flat, header)
        palette_bytes = encode_palette(palette, header.has_alpha)
    except (FormatError, ValueError) as exc:
        raise EncodeError(str(exc)) from exc

    payload = (
        encode_header(header)
        + palette_bytes
        + encode_pixel_indices(flat, header.bits_per_pixel)
    )
    logger.debug(
        "Encoded %dx%d image, %d colors, %d bytes",
        width, height, header.num_colors, len(payload),
    )
    return payload


def encode_image(
    image: Image.Image,
    *,
    scale: int = 0,
    background: bool = False,
) -> bytes:
    """Encode a Pillow image, keeping its exact colors.

    Parameters
    ----------
    image : PIL.Image.Image
        Source image in any mode; converted to RGBA.
    scale : int
        Display scale stored in the header, 0 for auto.
    background : bool
        Use the most frequent color as the background fill. Requires a
        fully opaque image.

    Raises
    ------
    EncodeError
        If the image is larger than 255x255, has more than 256 colors, or
        asks for a background while containing non-opaque pixels.
    """
    width, height = image.size
    if width > MAX_DIMENSION or height > MAX_DIMENSION:
        raise EncodeError(
            f"Image is {width}x{height}, maximum is {MAX_DIMENSION}x{MAX_DIMENSION}"
        )

    rgba = np.asarray(image.convert("RGBA"), dtype=np.uint8).reshape(-1, 4)
    colors, inverse, counts = np.unique(
        rgba, axis=0, return_inverse=True, return_counts=True
    )
    if len(colors) > MAX_COLORS:
        raise EncodeError(f"Image has {len(colors)} colors, maximum is {MAX_COLORS}")

    opaque = bool((colors[:, 3] == 255).all())
    palette = [
        bytes(color[:3] if opaque else color).hex() for color in colors
    ]
    background_index = int(np.argmax(counts)) if background else None

    return encode(
        width,
        height,
        palette,
        inverse.ravel(),
        scale=scale,
        background_index=background_index,
    )
