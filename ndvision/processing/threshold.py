# ndvision Processing - Thresholding
"""
Global thresholding of single channel images.

- Otsu: threshold maximising the between-class variance of the histogram
- Mean: the mean intensity of the image

Both return bool masks of the image's shape where ``value >= threshold``.
"""

from __future__ import annotations

import logging

import numpy as np

from ndvision.core import as_array3d, require_single_channel
from ndvision.errors import InvalidParameter

logger = logging.getLogger(__name__)

DEFAULT_OTSU_BINS = 255


def calculate_threshold_otsu(image: np.ndarray, nbins: int = DEFAULT_OTSU_BINS) -> float:
    """Calculate Otsu's threshold.

    Values are scaled so the channel maximum lands on ``nbins`` and truncated
    into integer histogram bins. Works per channel, the threshold of the last
    channel is returned.

    :param image: Image data of shape (rows, cols, channels).
    :param nbins: Number of histogram bins.
    :returns: The threshold in the value range of the image.
    """
    if nbins < 1:
        raise InvalidParameter(f"nbins must be positive, got {nbins}")
    image = as_array3d(image)

    threshold = 0.0
    for channel in np.moveaxis(image, 2, 0):
        values = channel.astype(np.float64).ravel()
        maximum = values.max()
        if maximum <= 0.0:
            threshold = float(maximum)
            continue

        scale_factor = nbins / maximum
        scaled = np.trunc(values * scale_factor)
        counts, _ = np.histogram(scaled, bins=nbins, range=(0, nbins))
        counts = counts.astype(np.float64)
        levels = np.arange(nbins, dtype=np.float64)

        total = counts.sum()
        sum_intensity = (levels * counts).sum()
        weight_b = np.cumsum(counts)
        sum_b = np.cumsum(levels * counts)
        weight_f = total - weight_b

        valid = (weight_b > 0) & (weight_f > 0)
        variance = np.zeros(nbins)
        mean_b = sum_b[valid] / weight_b[valid]
        mean_f = (sum_intensity - sum_b[valid]) / weight_f[valid]
        variance[valid] = weight_b[valid] * weight_f[valid] * (mean_b - mean_f) ** 2

        level = 0.0
        if variance.max() > 0.0:
            # first maximum, strictly greater comparisons keep the lowest index
            level = 1.0 + float(np.argmax(variance))
        threshold = level / scale_factor

    logger.debug(f"otsu threshold: {threshold}")
    return threshold


def calculate_threshold_mean(image: np.ndarray) -> float:
    """Mean of all values in the image."""
    image = as_array3d(image)
    return float(image.astype(np.float64).sum() / image.size)


def apply_threshold(image: np.ndarray, threshold: float) -> np.ndarray:
    """Bool mask of ``image >= threshold``."""
    return as_array3d(image).astype(np.float64) >= threshold


def threshold_otsu(image: np.ndarray) -> np.ndarray:
    """Binarise a single channel image with Otsu's threshold."""
    image = as_array3d(image)
    require_single_channel(image)
    return apply_threshold(image, calculate_threshold_otsu(image))


def threshold_mean(image: np.ndarray) -> np.ndarray:
    """Binarise a single channel image with its mean value."""
    image = as_array3d(image)
    require_single_channel(image)
    return apply_threshold(image, calculate_threshold_mean(image))


__all__ = [
    'DEFAULT_OTSU_BINS',
    'calculate_threshold_otsu',
    'calculate_threshold_mean',
    'apply_threshold',
    'threshold_otsu',
    'threshold_mean',
]
