# ndvision - Core array helpers
"""
Helpers for working with image arrays.

Every algorithm in ndvision works on numpy arrays of shape
``(rows, cols, channels)``. Grayscale images therefore carry a trailing
channel axis of size 1.
"""

from __future__ import annotations

import numpy as np

from .errors import ChannelDimensionMismatch, InvalidDimensions


def as_array3d(data) -> np.ndarray:
    """Return ``data`` as a 3D ``(rows, cols, channels)`` array.

    2D input is promoted to a single channel. No copy is made when the input
    already is a 3D ndarray.

    :param data: Array-like image data.
    :returns: A 3D numpy array.
    :raises InvalidDimensions: If the data is not 2D or 3D.
    """
    array = np.asarray(data)
    if array.ndim == 2:
        return array[:, :, np.newaxis]
    if array.ndim != 3:
        raise InvalidDimensions(
            f"Expected array of shape (rows, cols[, channels]), got shape {array.shape}"
        )
    return array


def require_single_channel(array: np.ndarray) -> None:
    """Raise unless ``array`` has exactly one channel."""
    if array.shape[2] != 1:
        raise ChannelDimensionMismatch(
            f"Expected a single channel image, got {array.shape[2]} channels"
        )


def pixel_bounds(dtype) -> tuple:
    """Get the minimum and maximum value a pixel of ``dtype`` can take.

    Floating point images are normalised to 0.0-1.0, integer images use the
    full range of their type.
    """
    dtype = np.dtype(dtype)
    if dtype == np.bool_:
        return False, True
    if np.issubdtype(dtype, np.floating):
        return 0.0, 1.0
    if np.issubdtype(dtype, np.integer):
        info = np.iinfo(dtype)
        return int(info.min), int(info.max)
    raise TypeError(f"No pixel bounds for dtype {dtype}")


# ITU-R BT.709 luminosity coefficients
_LUMA = np.array([0.2126, 0.7152, 0.0722])


def to_grayscale(image: np.ndarray) -> np.ndarray:
    """Collapse an RGB(A) image to a single float64 luminance channel.

    Alpha is ignored, single channel images are returned unchanged.
    """
    image = as_array3d(image)
    if image.shape[2] == 1:
        return image
    if image.shape[2] < 3:
        raise ChannelDimensionMismatch(f"Cannot convert {image.shape[2]} channels to grayscale")
    luma = image[:, :, :3].astype(np.float64) @ _LUMA
    return luma[:, :, np.newaxis]


__all__ = ['as_array3d', 'require_single_channel', 'pixel_bounds', 'to_grayscale']
