"""SHA-256 digests for payload provenance.

Used by ``pixelrect inspect`` and in log lines so a rendered SVG can be
traced back to the exact input payload.

Usage:
    from pixelrect.utils import hashing
    digest = hashing.sha256_bytes(payload)
    digest = hashing.sha256_file("sprites/hero.px")
"""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Union


def sha256_bytes(data: bytes) -> str:
    """Return the SHA-256 hex digest (64 chars) of *data*."""
    return hashlib.sha256(data).hexdigest()


def sha256_file(path: Union[str, Path], chunk_size: int = 1 << 20) -> str:
    """Compute SHA-256 hash of file contents.

    Parameters
    ----------
    path : Union[str, Path]
        File path
    chunk_size : int
        Read chunk size in bytes, default 1 MB

    Returns
    -------
    str
        SHA-256 hex digest (64 characters)

    Raises
    ------
    FileNotFoundError
        If file doesn't exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    sha256 = hashlib.sha256()
    with open(path, "rb") as f:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                break
            sha256.update(chunk)
    return sha256.hexdigest()


def short_digest(digest: str, length: int = 12) -> str:
    """Truncate a hex digest for log lines."""
    return digest[:length]
