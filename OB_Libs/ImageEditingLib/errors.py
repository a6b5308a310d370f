"""
Error types raised by the Open Blend pipeline.

Each error also derives from the builtin exception the equivalent
failure would raise in plain Pillow/numpy code, so callers catching
``IOError`` or ``ValueError`` keep working.
"""


class OpenBlendError(Exception):
    """Base class for all Open Blend errors."""


class ConfigError(OpenBlendError, ValueError):
    """Unusable run configuration (e.g. input directory cannot be opened)."""


class DecodeError(OpenBlendError, IOError):
    """A source image could not be read or decoded."""

    def __init__(self, source, reason: str = ""):
        self.source = str(source)
        self.reason = reason
        message = f"Failed to decode image {self.source}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ResampleError(OpenBlendError, RuntimeError):
    """The interpolation backend failed or produced the wrong geometry."""


class GeometryMismatchError(OpenBlendError, ValueError):
    """An image entering the compositor does not match the target geometry."""


class EncodeError(OpenBlendError, IOError):
    """An image could not be encoded or written to disk."""
