# ndvision Filters - Blur
"""
Smoothing filters built on the convolution engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from ndvision.padding import padding_from_name
from ndvision.processing.conv import convolve
from ndvision.processing.filter import median_filter
from ndvision.processing.kernels import BoxLinearFilter, GaussianFilter
from .base import Filter, FilterContext, register_filter


@register_filter
@dataclass
class GaussianBlur(Filter):
    """Gaussian blur filter.

    Parameters:
        size: Kernel width and height in pixels, must be odd (default 5)
        sigma: Standard deviation, 0 derives it from the size (default 0)
        padding: Border handling, 'zero', 'constant' or 'none' (default 'zero')
        padding_value: Fill value for 'constant' padding

    Example:
        'blur 7' or 'gaussianblur size=5 sigma=1.5'
    """

    _primary_param: ClassVar[str] = 'size'

    size: int = 5
    sigma: float = 0.0
    padding: str = 'zero'
    padding_value: float = 0.0

    def kernel(self) -> np.ndarray:
        shape = (int(self.size), int(self.size), 1)
        if self.sigma <= 0:
            return GaussianFilter.build(shape)
        covariance = float(self.sigma) ** 2
        return GaussianFilter.build_with_params(shape, (covariance, covariance))

    def apply(self, image: np.ndarray, context: FilterContext | None = None) -> np.ndarray:
        return convolve(image, self.kernel(), padding_from_name(self.padding, self.padding_value))


@register_filter
@dataclass
class BoxBlur(Filter):
    """Box (average) blur filter.

    Parameters:
        size: Kernel width and height in pixels (default 3)
        normalise: Divide by the kernel area, otherwise sum the window (default true)
        padding: Border handling, 'zero', 'constant' or 'none' (default 'zero')
        padding_value: Fill value for 'constant' padding

    Example:
        'box 3' or 'boxblur size=5 padding=none'
    """

    _primary_param: ClassVar[str] = 'size'

    size: int = 3
    normalise: bool = True
    padding: str = 'zero'
    padding_value: float = 0.0

    def apply(self, image: np.ndarray, context: FilterContext | None = None) -> np.ndarray:
        kernel = BoxLinearFilter.build_with_params((int(self.size), int(self.size), 1), self.normalise)
        return convolve(image, kernel, padding_from_name(self.padding, self.padding_value))


@register_filter
@dataclass
class Median(Filter):
    """Median filter, each channel independently.

    Pixels whose window does not fit inside the image become 0.

    Parameters:
        size: Window width and height in pixels (default 3)

    Example:
        'median 5'
    """

    _primary_param: ClassVar[str] = 'size'

    size: int = 3

    def apply(self, image: np.ndarray, context: FilterContext | None = None) -> np.ndarray:
        return median_filter(image, (int(self.size), int(self.size)))
