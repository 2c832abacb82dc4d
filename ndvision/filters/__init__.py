# ndvision Filters Module
"""
Dataclass filters over (rows, cols, channels) arrays.

Every filter serializes to dict, JSON and a compact text form, and filters
chain into pipelines, in code or from strings such as
``'blur 5|canny 0.2 0.6'``.
"""

from .base import Filter, FilterContext, FILTER_REGISTRY, FILTER_ALIASES, register_filter, register_alias
from .pipeline import FilterPipeline
from .blur import GaussianBlur, BoxBlur, Median
from .edge import Canny, Sobel, Laplacian
from .threshold import ThresholdOtsu, ThresholdMean
from .histogram import EqualizeHist
from .morphology import Erode, Dilate

# Short names
register_alias('blur', GaussianBlur)
register_alias('gaussian', GaussianBlur)
register_alias('box', BoxBlur)
register_alias('edges', Canny)
register_alias('otsu', ThresholdOtsu)
register_alias('equalize', EqualizeHist)

# Presets
register_alias('laplacian8', Laplacian, diagonal=True)
register_alias('sum', BoxBlur, normalise=False)

__all__ = [
    'Filter', 'FilterContext', 'FILTER_REGISTRY', 'FILTER_ALIASES',
    'register_filter', 'register_alias',
    'FilterPipeline',
    'GaussianBlur', 'BoxBlur', 'Median',
    'Canny', 'Sobel', 'Laplacian',
    'ThresholdOtsu', 'ThresholdMean',
    'EqualizeHist',
    'Erode', 'Dilate',
]
