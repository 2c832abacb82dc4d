# ndvision - Errors
"""
Common error types for image processing algorithms.

All errors derive from :class:`ProcessingError`, which itself is a
``ValueError`` so callers validating input generically keep working.
"""

from __future__ import annotations


class ProcessingError(ValueError):
    """Base class for all errors raised by ndvision algorithms."""


class ChannelDimensionMismatch(ProcessingError):
    """An array has an unexpected number of channels.

    Raised when kernel and image channel counts are incompatible or when an
    algorithm that only works on single channel images (Canny, Otsu, HOG)
    receives a multi-channel image.
    """


class InvalidDimensions(ProcessingError):
    """A shape has a zero or otherwise unusable extent.

    Covers rows/columns of images as well as kernel builder constraints such
    as odd or square kernel sizes.
    """


class InvalidParameter(ProcessingError):
    """A numeric or named parameter is outside its valid domain."""


class NumericError(ProcessingError):
    """A required numeric conversion failed.

    For example a kernel constant that cannot be represented in the requested
    element type.
    """


__all__ = [
    'ProcessingError',
    'ChannelDimensionMismatch',
    'InvalidDimensions',
    'InvalidParameter',
    'NumericError',
]
