# ndvision Filters - Thresholding
"""
Global thresholding filters.

- Otsu: Automatic threshold maximising between-class variance
- Mean: Threshold at the mean intensity

Colour images are reduced to luminance first. Results are single channel
0.0/1.0 images and the computed threshold is stored in the context.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from ndvision.core import to_grayscale
from ndvision.processing.threshold import (
    DEFAULT_OTSU_BINS,
    apply_threshold,
    calculate_threshold_mean,
    calculate_threshold_otsu,
)
from .base import Filter, FilterContext, register_filter


@register_filter
@dataclass
class ThresholdOtsu(Filter):
    """Otsu's automatic thresholding.

    Computes the threshold that best separates foreground from background.
    Works well when the histogram is bimodal. The threshold is stored in
    the context under 'otsu_threshold'.

    Parameters:
        nbins: Number of histogram bins (default 255)

    Example:
        'otsu' or 'thresholdotsu(nbins=128)'
    """

    _primary_param: ClassVar[str] = 'nbins'

    nbins: int = DEFAULT_OTSU_BINS

    def apply(self, image: np.ndarray, context: FilterContext | None = None) -> np.ndarray:
        gray = to_grayscale(image)
        thresh = calculate_threshold_otsu(gray, int(self.nbins))

        if context is not None:
            context['otsu_threshold'] = float(thresh)

        return apply_threshold(gray, thresh).astype(np.float64)


@register_filter
@dataclass
class ThresholdMean(Filter):
    """Threshold at the mean intensity.

    The threshold is stored in the context under 'mean_threshold'.

    Example:
        'thresholdmean'
    """

    def apply(self, image: np.ndarray, context: FilterContext | None = None) -> np.ndarray:
        gray = to_grayscale(image)
        thresh = calculate_threshold_mean(gray)

        if context is not None:
            context['mean_threshold'] = float(thresh)

        return apply_threshold(gray, thresh).astype(np.float64)
