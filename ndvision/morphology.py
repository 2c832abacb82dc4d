# ndvision - Morphology
"""
Morphological operations on binary images.

Images are bool arrays of shape (rows, cols, channels), only channel 0 is
processed by erosion and dilation. The structuring element is a 2D bool
array anchored at its centre (even sizes are centred towards the origin,
as in convolution). Pixels without a complete window are ``False``.

Usage:
    from ndvision.morphology import dilate, erode

    kernel = np.ones((3, 3), dtype=bool)
    grown = dilate(mask, kernel)
    shrunk = erode(mask, kernel)
"""

from __future__ import annotations

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from ndvision.core import as_array3d
from ndvision.errors import InvalidDimensions, InvalidParameter
from ndvision.processing.conv import kernel_centre


def _validate(image: np.ndarray, kernel: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    image = as_array3d(image)
    kernel = np.asarray(kernel)
    if image.dtype != np.bool_:
        raise InvalidParameter(f"Expected bool image, got {image.dtype}")
    if kernel.ndim != 2 or kernel.shape[0] == 0 or kernel.shape[1] == 0:
        raise InvalidDimensions(f"Expected non-empty 2D structuring element, got shape {kernel.shape}")
    return image, kernel.astype(bool)


def _morph(image: np.ndarray, kernel: np.ndarray, erosion: bool) -> np.ndarray:
    image, kernel = _validate(image, kernel)
    k_rows, k_cols = kernel.shape
    row_offset, col_offset = kernel_centre(k_rows, k_cols)

    result = np.zeros(image.shape, dtype=bool)
    if image.shape[0] < k_rows or image.shape[1] < k_cols:
        return result

    windows = sliding_window_view(image[:, :, 0], (k_rows, k_cols))
    hits = windows & kernel
    if erosion:
        values = np.all(hits == kernel, axis=(2, 3))
    else:
        values = np.any(hits, axis=(2, 3))

    out_rows, out_cols = values.shape
    result[row_offset:row_offset + out_rows, col_offset:col_offset + out_cols, 0] = values
    return result


def erode(image: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """Pixels whose neighbourhood covers every true cell of ``kernel``."""
    return _morph(image, kernel, erosion=True)


def dilate(image: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """Pixels whose neighbourhood overlaps any true cell of ``kernel``."""
    return _morph(image, kernel, erosion=False)


def erode_inplace(image: np.ndarray, kernel: np.ndarray) -> None:
    as_array3d(image)[...] = erode(image, kernel)


def dilate_inplace(image: np.ndarray, kernel: np.ndarray) -> None:
    as_array3d(image)[...] = dilate(image, kernel)


def _check_same_shape(image: np.ndarray, other: np.ndarray) -> None:
    if image.shape != other.shape:
        raise InvalidDimensions(f"Shapes differ: {image.shape} vs {other.shape}")


def union(image: np.ndarray, other: np.ndarray) -> np.ndarray:
    image, other = as_array3d(image), as_array3d(other)
    _check_same_shape(image, other)
    return image | other


def union_inplace(image: np.ndarray, other: np.ndarray) -> None:
    target = as_array3d(image)
    other = as_array3d(other)
    _check_same_shape(target, other)
    target |= other


def intersect(image: np.ndarray, other: np.ndarray) -> np.ndarray:
    image, other = as_array3d(image), as_array3d(other)
    _check_same_shape(image, other)
    return image & other


def intersect_inplace(image: np.ndarray, other: np.ndarray) -> None:
    target = as_array3d(image)
    other = as_array3d(other)
    _check_same_shape(target, other)
    target &= other


__all__ = [
    'erode',
    'erode_inplace',
    'dilate',
    'dilate_inplace',
    'union',
    'union_inplace',
    'intersect',
    'intersect_inplace',
]
