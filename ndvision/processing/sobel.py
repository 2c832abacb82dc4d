# ndvision Processing - Sobel operator
"""
Sobel operator for edge detection.

The horizontal and vertical Sobel kernels are convolved with every channel
of the image. The gradient magnitude saturates at 1.0, the upper pixel bound
of normalised float images. The angle is in radians as returned by
``numpy.arctan2``.

Usage:
    from ndvision.processing.sobel import apply_sobel, full_sobel

    magnitude = apply_sobel(image)
    magnitude, angle = full_sobel(image)
"""

from __future__ import annotations

import numpy as np

from ndvision.core import as_array3d
from .conv import convolve
from .kernels import Orientation, SobelFilter


def _edge_images(image: np.ndarray, dtype) -> tuple[np.ndarray, np.ndarray]:
    """Horizontal and vertical derivative images."""
    channels = image.shape[2]
    h_kernel = np.repeat(SobelFilter.build_with_params(Orientation.HORIZONTAL, dtype), channels, axis=2)
    v_kernel = np.repeat(SobelFilter.build_with_params(Orientation.VERTICAL, dtype), channels, axis=2)

    h_deriv = convolve(image, h_kernel)
    v_deriv = convolve(image, v_kernel)
    return h_deriv, v_deriv


def _gradient_dtype(image: np.ndarray):
    if np.issubdtype(image.dtype, np.floating):
        return image.dtype
    return np.float64


def full_sobel(image: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Magnitude and angle of the Sobel gradient.

    :param image: Image data of shape (rows, cols, channels).
    :returns: Tuple (magnitude, angle), both with the shape of ``image``.
        Magnitude is clamped to at most 1.0, angle is in radians.
    """
    image = as_array3d(image)
    h_deriv, v_deriv = _edge_images(image, _gradient_dtype(image))

    magnitude = np.minimum(np.sqrt(h_deriv ** 2 + v_deriv ** 2), 1.0)
    angle = np.arctan2(v_deriv, h_deriv)
    return magnitude, angle


def apply_sobel(image: np.ndarray) -> np.ndarray:
    """Magnitude of the Sobel gradient, an image of only lines."""
    image = as_array3d(image)
    h_deriv, v_deriv = _edge_images(image, _gradient_dtype(image))
    return np.minimum(np.sqrt(h_deriv ** 2 + v_deriv ** 2), 1.0)


__all__ = ['full_sobel', 'apply_sobel']
