# ndvision Processing - Kernels
"""
Common convolution kernels and builders.

Two kinds of builders exist:

- ``KernelBuilder``: kernels whose shape is chosen by the caller
  (``GaussianFilter``, ``BoxLinearFilter``).
- ``FixedDimensionKernelBuilder``: kernels of a fixed 3x3x1 shape
  (``SobelFilter``, ``LaplaceFilter``).

All builders return 3D numpy arrays ``(rows, cols, channels)`` and accept an
optional ``dtype`` (float64 by default).

Usage:
    from ndvision.processing.kernels import GaussianFilter, SobelFilter, Orientation

    blur = GaussianFilter.build_with_params((5, 5, 1), (2.0, 2.0))
    horizontal = SobelFilter.build_with_params(Orientation.HORIZONTAL)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

import numpy as np

from ndvision.errors import InvalidDimensions, InvalidParameter, NumericError


def _to_shape(shape) -> tuple[int, int, int]:
    shape = tuple(int(s) for s in shape)
    if len(shape) != 3:
        raise InvalidDimensions(f"Kernel shape must be (rows, cols, channels), got {shape}")
    return shape


def _integer_kernel(values: list[list[int]], dtype) -> np.ndarray:
    """Build a 3x3x1 kernel from integer constants, checking they fit ``dtype``."""
    dtype = np.dtype(dtype)
    exact = np.array(values, dtype=np.int64)
    if np.issubdtype(dtype, np.integer):
        info = np.iinfo(dtype)
        if exact.min() < info.min or exact.max() > info.max:
            raise NumericError(f"Kernel constants cannot be represented as {dtype}")
    elif not np.issubdtype(dtype, np.floating):
        raise NumericError(f"Kernel constants cannot be represented as {dtype}")
    return exact.astype(dtype)[:, :, np.newaxis]


def _require_float(dtype) -> np.dtype:
    dtype = np.dtype(dtype)
    if not np.issubdtype(dtype, np.floating):
        raise NumericError(f"Fractional kernel weights cannot be represented as {dtype}")
    return dtype


class KernelBuilder(ABC):
    """Builds a kernel of a caller supplied shape."""

    @classmethod
    @abstractmethod
    def build(cls, shape, dtype=np.float64) -> np.ndarray:
        """Build a kernel of ``shape`` with sensible default parameters."""

    @classmethod
    def build_with_params(cls, shape, params: Any, dtype=np.float64) -> np.ndarray:
        """Build a kernel of ``shape`` with explicit parameters."""
        return cls.build(shape, dtype)


class FixedDimensionKernelBuilder(ABC):
    """Builds a kernel whose shape is fixed by its definition."""

    @classmethod
    @abstractmethod
    def build(cls, dtype=np.float64) -> np.ndarray:
        """Build the kernel with its default parameters."""

    @classmethod
    def build_with_params(cls, params: Any, dtype=np.float64) -> np.ndarray:
        return cls.build(dtype)


class Orientation(Enum):
    """Orientation of a Sobel filter."""
    VERTICAL = 'vertical'      # Vertical derivatives
    HORIZONTAL = 'horizontal'  # Horizontal derivatives


class LaplaceType(Enum):
    """Variant of the Laplacian filter."""
    STANDARD = 'standard'  # 4-neighbourhood, centre weight 4
    DIAGONAL = 'diagonal'  # 8-neighbourhood, centre weight 8


class SobelFilter(FixedDimensionKernelBuilder):
    """Horizontal or vertical Sobel kernel for the Sobel operator.

    Vertical::

        [-1, 0, 1]
        [-2, 0, 2]
        [-1, 0, 1]

    Horizontal is its transpose.
    """

    @classmethod
    def build(cls, dtype=np.float64) -> np.ndarray:
        # Arbitrary default
        return cls.build_with_params(Orientation.VERTICAL, dtype)

    @classmethod
    def build_with_params(cls, params: Orientation, dtype=np.float64) -> np.ndarray:
        vertical = _integer_kernel([[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]], dtype)
        if Orientation(params) is Orientation.VERTICAL:
            return vertical
        return np.ascontiguousarray(vertical.transpose(1, 0, 2))


class LaplaceFilter(FixedDimensionKernelBuilder):
    """Laplacian kernel, the second spatial derivative of an image.

    Standard::

        [ 0, -1,  0]
        [-1,  4, -1]
        [ 0, -1,  0]

    Diagonal additionally responds to diagonal lines::

        [-1, -1, -1]
        [-1,  8, -1]
        [-1, -1, -1]
    """

    @classmethod
    def build(cls, dtype=np.float64) -> np.ndarray:
        return cls.build_with_params(LaplaceType.STANDARD, dtype)

    @classmethod
    def build_with_params(cls, params: LaplaceType, dtype=np.float64) -> np.ndarray:
        if LaplaceType(params) is LaplaceType.STANDARD:
            return _integer_kernel([[0, -1, 0], [-1, 4, -1], [0, -1, 0]], dtype)
        return _integer_kernel([[-1, -1, -1], [-1, 8, -1], [-1, -1, -1]], dtype)


class GaussianFilter(KernelBuilder):
    """Gaussian kernel parameterised by horizontal and vertical covariance.

    Params are ``(covar_x, covar_y)``, forming the covariance matrix::

        [covar_x, 0      ]
        [0,       covar_y]

    The 2D kernel is normalised to sum to 1 and repeated for every channel.
    """

    @classmethod
    def default_covariance(cls, rows: int) -> float:
        """Covariance used when none is given (OpenCV 2.4 recommendation)."""
        return 0.3 * ((max(rows, 1) - 1) * 0.5 - 1.0) + 0.8

    @classmethod
    def build(cls, shape, dtype=np.float64) -> np.ndarray:
        shape = _to_shape(shape)
        sig = cls.default_covariance(shape[0])
        return cls.build_with_params(shape, (sig, sig), dtype)

    @classmethod
    def build_with_params(cls, shape, params, dtype=np.float64) -> np.ndarray:
        rows, cols, channels = _to_shape(shape)
        covar_x, covar_y = (float(p) for p in params)

        if rows % 2 == 0 or cols % 2 == 0 or rows != cols or channels == 0:
            raise InvalidDimensions(
                f"Gaussian kernel must be square with odd size and channels > 0, "
                f"got {(rows, cols, channels)}"
            )
        if covar_x <= 0.0 or covar_y <= 0.0:
            raise InvalidParameter(
                f"Gaussian covariance must be positive, got {(covar_x, covar_y)}"
            )
        dtype = _require_float(dtype)

        centre = (rows + 1) // 2 - 1
        r = (np.arange(rows, dtype=np.float64) - centre) ** 2 / (2.0 * covar_y)
        c = (np.arange(cols, dtype=np.float64) - centre) ** 2 / (2.0 * covar_x)
        weights = np.exp(-(r[:, np.newaxis] + c[np.newaxis, :]))
        weights /= weights.sum()

        kernel = np.repeat(weights[:, :, np.newaxis], channels, axis=2)
        return kernel.astype(dtype)


class BoxLinearFilter(KernelBuilder):
    """Box linear kernel, ``1/(rows*cols)`` in every cell of every channel.

    The parameter selects normalisation. Without it the kernel is all ones
    and pixel bounds may be exceeded.
    """

    @classmethod
    def build(cls, shape, dtype=np.float64) -> np.ndarray:
        return cls.build_with_params(shape, True, dtype)

    @classmethod
    def build_with_params(cls, shape, params: bool, dtype=np.float64) -> np.ndarray:
        rows, cols, channels = _to_shape(shape)
        if rows < 1 or cols < 1 or channels < 1:
            raise InvalidDimensions(f"Box kernel dimensions must be positive, got {(rows, cols, channels)}")
        if params:
            dtype = _require_float(dtype)
            return np.full((rows, cols, channels), 1.0 / (rows * cols), dtype=dtype)
        return np.ones((rows, cols, channels), dtype=dtype)


__all__ = [
    'KernelBuilder',
    'FixedDimensionKernelBuilder',
    'Orientation',
    'LaplaceType',
    'SobelFilter',
    'LaplaceFilter',
    'GaussianFilter',
    'BoxLinearFilter',
]
