# ndvision Filters - Edge Detection
"""
Edge detection filters: Canny, Sobel gradient magnitude and Laplacian.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from ndvision.core import to_grayscale
from ndvision.padding import padding_from_name
from ndvision.processing.canny import CannyBuilder, canny_edge_detector
from ndvision.processing.conv import convolve
from ndvision.processing.kernels import LaplaceFilter, LaplaceType
from ndvision.processing.sobel import full_sobel
from .base import Filter, FilterContext, register_filter


@register_filter
@dataclass
class Canny(Filter):
    """Canny edge detection.

    Detects edges using Gaussian blur, Sobel gradients, non-maxima
    suppression and hysteresis thresholding. Colour images are reduced to
    luminance first. The result is a single channel 0.0/1.0 image, the bool
    edge mask is stored in the context under 'canny_mask'.

    Parameters:
        lower: Lower threshold for hysteresis (default 0.3)
        upper: Upper threshold for hysteresis (default 0.7)
        blur_size: Gaussian blur kernel size, must be odd (default 5)
        blur_covariance: Gaussian blur covariance, sigma squared (default 2.0)

    Example:
        'canny 0.2 0.6' or 'canny(lower=0.1,upper=0.4)'
    """

    _primary_param: ClassVar[str] = 'lower'

    lower: float = 0.3
    upper: float = 0.7
    blur_size: int = 5
    blur_covariance: float = 2.0

    def apply(self, image: np.ndarray, context: FilterContext | None = None) -> np.ndarray:
        covariance = float(self.blur_covariance)
        params = (
            CannyBuilder()
            .lower_threshold(self.lower)
            .upper_threshold(self.upper)
            .blur((int(self.blur_size), int(self.blur_size)), (covariance, covariance))
            .build()
        )
        mask = canny_edge_detector(to_grayscale(image), params)

        if context is not None:
            context['canny_mask'] = mask

        return mask.astype(np.float64)


@register_filter
@dataclass
class Sobel(Filter):
    """Sobel gradient magnitude, clamped to 1.0.

    The gradient angle in radians is stored in the context under
    'sobel_angle'.

    Example:
        'sobel'
    """

    def apply(self, image: np.ndarray, context: FilterContext | None = None) -> np.ndarray:
        magnitude, angle = full_sobel(image)
        if context is not None:
            context['sobel_angle'] = angle
        return magnitude


@register_filter
@dataclass
class Laplacian(Filter):
    """Laplacian (second derivative) filter.

    Parameters:
        diagonal: Include diagonal neighbours in the kernel (default false)
        padding: Border handling, 'zero', 'constant' or 'none' (default 'zero')
        padding_value: Fill value for 'constant' padding

    Example:
        'laplacian' or 'laplacian diagonal=true'
    """

    _primary_param: ClassVar[str] = 'diagonal'

    diagonal: bool = False
    padding: str = 'zero'
    padding_value: float = 0.0

    def apply(self, image: np.ndarray, context: FilterContext | None = None) -> np.ndarray:
        laplace_type = LaplaceType.DIAGONAL if self.diagonal else LaplaceType.STANDARD
        kernel = LaplaceFilter.build_with_params(laplace_type)
        return convolve(image, kernel, padding_from_name(self.padding, self.padding_value))
