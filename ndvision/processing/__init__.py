# ndvision Processing Module
"""
Image processing intrinsics: convolution, kernels, Sobel, Canny,
thresholding and median filtering.
"""

from .conv import kernel_centre, convolve, convolve_inplace
from .kernels import (
    KernelBuilder,
    FixedDimensionKernelBuilder,
    Orientation,
    LaplaceType,
    SobelFilter,
    LaplaceFilter,
    GaussianFilter,
    BoxLinearFilter,
)
from .sobel import full_sobel, apply_sobel
from .canny import (
    CannyParameters,
    CannyBuilder,
    non_maxima_suppression,
    link_edges,
    canny_edge_detector,
)
from .threshold import (
    calculate_threshold_otsu,
    calculate_threshold_mean,
    apply_threshold,
    threshold_otsu,
    threshold_mean,
)
from .filter import median_filter

__all__ = [
    # Convolution
    'kernel_centre',
    'convolve',
    'convolve_inplace',
    # Kernels
    'KernelBuilder',
    'FixedDimensionKernelBuilder',
    'Orientation',
    'LaplaceType',
    'SobelFilter',
    'LaplaceFilter',
    'GaussianFilter',
    'BoxLinearFilter',
    # Edges
    'full_sobel',
    'apply_sobel',
    'CannyParameters',
    'CannyBuilder',
    'non_maxima_suppression',
    'link_edges',
    'canny_edge_detector',
    # Thresholding
    'calculate_threshold_otsu',
    'calculate_threshold_mean',
    'apply_threshold',
    'threshold_otsu',
    'threshold_mean',
    # Filters
    'median_filter',
]
