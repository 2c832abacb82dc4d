# ndvision Filters - Histogram Operations
"""
Histogram-based filters.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from ndvision.enhancement import DEFAULT_NBINS, equalise_hist
from .base import Filter, FilterContext, register_filter


@register_filter
@dataclass
class EqualizeHist(Filter):
    """Histogram equalization.

    Spreads intensities across the full value range of the image dtype,
    each channel independently.

    Parameters:
        nbins: Number of histogram bins (default 256)

    Example:
        'equalize' or 'equalizehist nbins=64'
    """

    _primary_param: ClassVar[str] = 'nbins'

    nbins: int = DEFAULT_NBINS

    def apply(self, image: np.ndarray, context: FilterContext | None = None) -> np.ndarray:
        return equalise_hist(image, int(self.nbins))
