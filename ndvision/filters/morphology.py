# ndvision Filters - Morphology
"""
Morphological filters on binary images.

Input is interpreted as a mask (non-zero is set) from channel 0; output is a
single channel 0.0/1.0 image. A square structuring element is used.

Example:
    'otsu|erode 3|dilate 3' - opening of a thresholded image
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from ndvision.core import as_array3d
from ndvision.morphology import dilate, erode
from .base import Filter, FilterContext, register_filter


def _mask(image: np.ndarray) -> np.ndarray:
    return as_array3d(image)[:, :, :1] != 0


@register_filter
@dataclass
class Erode(Filter):
    """Morphological erosion - shrinks set regions.

    Parameters:
        kernel_size: Width and height of the square element (default 3)
    """

    _primary_param: ClassVar[str] = 'kernel_size'

    kernel_size: int = 3

    def apply(self, image: np.ndarray, context: FilterContext | None = None) -> np.ndarray:
        kernel = np.ones((int(self.kernel_size), int(self.kernel_size)), dtype=bool)
        return erode(_mask(image), kernel).astype(np.float64)


@register_filter
@dataclass
class Dilate(Filter):
    """Morphological dilation - grows set regions.

    Parameters:
        kernel_size: Width and height of the square element (default 3)
    """

    _primary_param: ClassVar[str] = 'kernel_size'

    kernel_size: int = 3

    def apply(self, image: np.ndarray, context: FilterContext | None = None) -> np.ndarray:
        kernel = np.ones((int(self.kernel_size), int(self.kernel_size)), dtype=bool)
        return dilate(_mask(image), kernel).astype(np.float64)
