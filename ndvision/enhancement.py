# ndvision - Enhancement
"""
Contrast enhancement by histogram equalisation.

Each channel is equalised on its own: the channel histogram is turned into a
cumulative distribution and every value is mapped through it, spreading the
intensities across the value range.

Usage:
    from ndvision.enhancement import equalise_hist

    flat = equalise_hist(image)                   # range from the dtype
    flat = equalise_hist(image, value_range=(0, 4095))
"""

from __future__ import annotations

import logging

import numpy as np

from .core import as_array3d, pixel_bounds
from .errors import InvalidDimensions, InvalidParameter

logger = logging.getLogger(__name__)

DEFAULT_NBINS = 256


def _equalise_channel(channel: np.ndarray, nbins: int, low: float, high: float) -> np.ndarray:
    values = channel.astype(np.float64)
    counts, edges = np.histogram(values, bins=nbins, range=(low, high))
    total = counts.sum()
    if total == 0:
        return values
    cdf = np.cumsum(counts) / total
    centres = (edges[:-1] + edges[1:]) / 2.0
    return low + np.interp(values, centres, cdf) * (high - low)


def equalise_hist(image: np.ndarray, nbins: int = DEFAULT_NBINS,
                  value_range: tuple[float, float] | None = None) -> np.ndarray:
    """Histogram equalise every channel of an image.

    :param image: Image data of shape (rows, cols, channels).
    :param nbins: Number of histogram bins.
    :param value_range: (min, max) of the histogram and of the output.
        Defaults to the pixel bounds of the image dtype.
    :returns: Equalised image with the dtype of the input.
    """
    image = as_array3d(image)
    if nbins < 1:
        raise InvalidParameter(f"nbins must be positive, got {nbins}")
    if image.size == 0:
        raise InvalidDimensions(f"Cannot equalise empty image of shape {image.shape}")

    low, high = value_range if value_range is not None else pixel_bounds(image.dtype)
    low, high = float(low), float(high)
    if not high > low:
        raise InvalidParameter(f"Invalid value range ({low}, {high})")

    logger.debug(f"equalise_hist: {image.shape} {image.dtype} bins={nbins} range=({low}, {high})")
    result = np.empty(image.shape, dtype=np.float64)
    for c in range(image.shape[2]):
        result[:, :, c] = _equalise_channel(image[:, :, c], nbins, low, high)

    if np.issubdtype(image.dtype, np.integer):
        result = np.clip(np.rint(result), low, high)
    return result.astype(image.dtype)


def equalise_hist_inplace(image: np.ndarray, nbins: int = DEFAULT_NBINS,
                          value_range: tuple[float, float] | None = None) -> None:
    """In-place variant of :func:`equalise_hist`."""
    as_array3d(image)[...] = equalise_hist(image, nbins, value_range)


__all__ = ['DEFAULT_NBINS', 'equalise_hist', 'equalise_hist_inplace']
