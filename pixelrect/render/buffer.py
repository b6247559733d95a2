"""Preallocated append-only byte buffer for SVG output."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class OutputBuffer:
    """Append-only ASCII buffer backed by a pre-sized bytearray.

    Parameters
    ----------
    capacity : int
        Bytes to reserve up front. Renderers size this from the worst
        case (one rect per pixel) so appends never reallocate.

    Notes
    -----
    Appends write into the reserved region by slice assignment of equal
    length, which does not resize the bytearray. An append past the
    reserved capacity still succeeds: the buffer doubles and logs a
    warning, since it means the capacity estimate was wrong.
    """

    __slots__ = ("_buf", "_pos")

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {capacity}")
        self._buf = bytearray(capacity)
        self._pos = 0

    def __len__(self) -> int:
        return self._pos

    @property
    def capacity(self) -> int:
        return len(self._buf)

    def append(self, chunk: bytes) -> None:
        end = self._pos + len(chunk)
        if end > len(self._buf):
            self._grow(end)
        self._buf[self._pos:end] = chunk
        self._pos = end

    def _grow(self, needed: int) -> None:
        new_capacity = max(needed, 2 * len(self._buf))
        logger.warning(
            "Output buffer capacity %d exceeded, growing to %d",
            len(self._buf), new_capacity,
        )
        self._buf.extend(bytes(new_capacity - len(self._buf)))

    def getvalue(self) -> str:
        """Return the written bytes as text."""
        return self._buf[:self._pos].decode("ascii")
