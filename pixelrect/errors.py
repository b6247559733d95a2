"""Exception hierarchy for pixelrect.

Every error raised by the package derives from :class:`PixelRectError`.
Stream problems found while decoding or validating a byte payload derive
from :class:`FormatError` so callers can catch the whole family at once::

    try:
        svg = pixelrect.render_document(payload)
    except FormatError as exc:
        ...
"""

from __future__ import annotations


class PixelRectError(Exception):
    """Base class for all pixelrect errors."""

    pass


# ---------------------------------------------------------------------------
# Format errors (decode / validation)
# ---------------------------------------------------------------------------


class FormatError(PixelRectError):
    """Raised when a byte stream cannot be decoded as a valid image."""

    pass


class MalformedHeader(FormatError):
    """Byte stream is too short to contain the fixed header."""

    pass


class InvalidHeader(FormatError):
    """Decoded header violates structural bounds."""

    pass


class TruncatedData(FormatError):
    """Header declares more palette or pixel bytes than are present."""

    pass


class PaletteIndexOutOfRange(FormatError):
    """A pixel or background color index is not a valid palette index."""

    pass


# ---------------------------------------------------------------------------
# Other errors
# ---------------------------------------------------------------------------


class EncodeError(PixelRectError):
    """Raised when an image cannot be represented in the format."""

    pass


class ConfigError(PixelRectError):
    """Raised when configuration validation fails."""

    pass
