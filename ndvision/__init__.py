"""
ndvision - Image processing on numpy arrays: convolution, kernels, Sobel and Canny edge detection
"""

from .errors import (
    ProcessingError,
    ChannelDimensionMismatch,
    InvalidDimensions,
    InvalidParameter,
    NumericError,
)
from .core import as_array3d, require_single_channel, pixel_bounds, to_grayscale
from .padding import PaddingStrategy, NoPadding, ConstantPadding, ZeroPadding, pad, padding_from_name
from .processing import (
    kernel_centre,
    convolve,
    convolve_inplace,
    KernelBuilder,
    FixedDimensionKernelBuilder,
    Orientation,
    LaplaceType,
    SobelFilter,
    LaplaceFilter,
    GaussianFilter,
    BoxLinearFilter,
    full_sobel,
    apply_sobel,
    CannyParameters,
    CannyBuilder,
    non_maxima_suppression,
    link_edges,
    canny_edge_detector,
    calculate_threshold_otsu,
    calculate_threshold_mean,
    apply_threshold,
    threshold_otsu,
    threshold_mean,
    median_filter,
)
from .morphology import erode, dilate, union, intersect
from .enhancement import equalise_hist, equalise_hist_inplace
from .features import HogParameters, HistogramOfGradientsBuilder, HistogramOfGradientsExtractor

__all__ = [
    # Errors
    "ProcessingError",
    "ChannelDimensionMismatch",
    "InvalidDimensions",
    "InvalidParameter",
    "NumericError",
    # Array helpers
    "as_array3d",
    "require_single_channel",
    "pixel_bounds",
    "to_grayscale",
    # Padding
    "PaddingStrategy",
    "NoPadding",
    "ConstantPadding",
    "ZeroPadding",
    "pad",
    "padding_from_name",
    # Convolution and kernels
    "kernel_centre",
    "convolve",
    "convolve_inplace",
    "KernelBuilder",
    "FixedDimensionKernelBuilder",
    "Orientation",
    "LaplaceType",
    "SobelFilter",
    "LaplaceFilter",
    "GaussianFilter",
    "BoxLinearFilter",
    # Edges
    "full_sobel",
    "apply_sobel",
    "CannyParameters",
    "CannyBuilder",
    "non_maxima_suppression",
    "link_edges",
    "canny_edge_detector",
    # Thresholding and filters
    "calculate_threshold_otsu",
    "calculate_threshold_mean",
    "apply_threshold",
    "threshold_otsu",
    "threshold_mean",
    "median_filter",
    # Morphology
    "erode",
    "dilate",
    "union",
    "intersect",
    # Enhancement
    "equalise_hist",
    "equalise_hist_inplace",
    # Features
    "HogParameters",
    "HistogramOfGradientsBuilder",
    "HistogramOfGradientsExtractor",
]

__version__ = "0.1.0"
