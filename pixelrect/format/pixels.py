"""Bit-packed pixel color indices.

Indices are stored row-major, MSB-first, ``header.bits_per_pixel`` bits
each, with no per-row padding. Unpacking and packing go through numpy.
"""

from __future__ import annotations

import numpy as np

from pixelrect.format.header import HEADER_SIZE, Header
from pixelrect.format.palette import palette_size


def pixel_data_offset(header: Header) -> int:
    """Offset of the first pixel byte in the payload."""
    return HEADER_SIZE + palette_size(header)


def pixel_data_size(header: Header) -> int:
    """Byte length of the packed pixel section."""
    return (header.total_pixels * header.bits_per_pixel + 7) // 8


def expected_length(header: Header) -> int:
    """Minimum payload length implied by *header*."""
    return pixel_data_offset(header) + pixel_data_size(header)


def decode_pixel_indices(data: bytes, header: Header) -> np.ndarray:
    """Unpack ``header.total_pixels`` palette indices from *data*.

    Returns
    -------
    np.ndarray
        1-D uint8 array in row-major order (``index = y * width + x``).
        Shorter than total_pixels if *data* is truncated.
    """
    start = pixel_data_offset(header)
    raw = np.frombuffer(data[start:start + pixel_data_size(header)], dtype=np.uint8)
    bpp = header.bits_per_pixel

    if bpp == 8:
        return raw[:header.total_pixels].copy()

    bits = np.unpackbits(raw)
    usable = (bits.size // bpp) * bpp
    groups = bits[:usable].reshape(-1, bpp)
    weights = (1 << np.arange(bpp - 1, -1, -1)).astype(np.uint8)
    indices = (groups * weights).sum(axis=1).astype(np.uint8)
    return indices[:header.total_pixels]


def encode_pixel_indices(indices: np.ndarray, bits_per_pixel: int) -> bytes:
    """Pack palette indices MSB-first at *bits_per_pixel* bits each.

    Raises
    ------
    ValueError
        If an index does not fit in *bits_per_pixel* bits.
    """
    indices = np.asarray(indices, dtype=np.uint8).ravel()
    if bits_per_pixel == 8:
        return indices.tobytes()

    if indices.size and int(indices.max()) >= 1 << bits_per_pixel:
        raise ValueError(
            f"Index {int(indices.max())} does not fit in {bits_per_pixel} bits"
        )
    shifts = np.arange(bits_per_pixel - 1, -1, -1, dtype=np.uint8)
    bits = (indices[:, None] >> shifts) & 1
    return np.packbits(bits.astype(np.uint8).ravel()).tobytes()
