# ndvision Processing - Non-convolution filters
"""
Filters that are not linear convolutions.
"""

from __future__ import annotations

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from ndvision.core import as_array3d
from ndvision.errors import InvalidDimensions


def median_filter(image: np.ndarray, region: tuple[int, int] = (3, 3)) -> np.ndarray:
    """Median filter, computed independently for each channel.

    Every pixel whose ``region`` window fits inside the image is replaced by
    the median of that window. The window is anchored at ``region // 2``;
    pixels without a complete window are set to zero.

    :param image: Image data of shape (rows, cols, channels).
    :param region: Window size as (rows, cols).
    :returns: Filtered image with the dtype of the input.
    """
    image = as_array3d(image)
    r_size, c_size = (int(v) for v in region)
    if r_size < 1 or c_size < 1:
        raise InvalidDimensions(f"Median region must be positive, got {region}")

    result = np.zeros_like(image)
    if image.shape[0] < r_size or image.shape[1] < c_size:
        return result

    r_offset, c_offset = r_size // 2, c_size // 2
    windows = sliding_window_view(image, (r_size, c_size), axis=(0, 1))
    medians = np.median(windows, axis=(3, 4))
    if np.issubdtype(image.dtype, np.integer):
        medians = np.trunc(medians)

    out_rows, out_cols = medians.shape[:2]
    result[r_offset:r_offset + out_rows, c_offset:c_offset + out_cols, :] = medians
    return result


__all__ = ['median_filter']
