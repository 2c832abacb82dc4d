# ndvision - Padding strategies
"""
Padding strategies for resolving values outside of an image.

A strategy answers two questions for the convolution engine:

- What value lies at a (possibly out of bounds) coordinate?
- What does the image look like with a symmetric border added?

``NoPadding`` is special: it never produces a border and reports
``will_pad() == False`` so callers fall back to their own edge handling.

Usage:
    from ndvision.padding import ConstantPadding, ZeroPadding, pad

    bordered = pad(image, (1, 1), ConstantPadding(0.5))
    value = ZeroPadding().get_value(image, (-1, 0, 0))  # 0
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from .errors import InvalidParameter, NumericError


def _is_out_of_bounds(shape: tuple[int, ...], index: tuple[int, int, int]) -> bool:
    return (
        index[0] < 0
        or index[1] < 0
        or index[2] < 0
        or index[0] >= shape[0]
        or index[1] >= shape[1]
        or index[2] >= shape[2]
    )


class PaddingStrategy(ABC):
    """Base class for symmetric image padding."""

    @abstractmethod
    def pad(self, image: np.ndarray, padding: tuple[int, int]) -> np.ndarray:
        """Return a new image with ``padding`` rows/cols added on each side.

        :param image: Image data of shape (rows, cols, channels).
        :param padding: Margin as (row_margin, col_margin).
        """

    @abstractmethod
    def get_pixel(self, image: np.ndarray, index: tuple[int, int]) -> np.ndarray | None:
        """Return all channels at (row, col), or None if no value exists."""

    @abstractmethod
    def get_value(self, image: np.ndarray, index: tuple[int, int, int]) -> Any | None:
        """Return the value at (row, col, channel), or None if no value exists.

        Rows and columns may exceed the bounds, the channel must exist.
        """

    def will_pad(self, coord: tuple[int, int] | None = None) -> bool:
        """Whether this strategy produces values outside of the image."""
        return True


@dataclass(frozen=True)
class NoPadding(PaddingStrategy):
    """Leaves the image unaltered regardless of the requested margin."""

    def pad(self, image: np.ndarray, padding: tuple[int, int]) -> np.ndarray:
        return image.copy()

    def get_pixel(self, image: np.ndarray, index: tuple[int, int]) -> np.ndarray | None:
        if _is_out_of_bounds(image.shape, (index[0], index[1], 0)):
            return None
        return image[index[0], index[1], :].copy()

    def get_value(self, image: np.ndarray, index: tuple[int, int, int]) -> Any | None:
        if _is_out_of_bounds(image.shape, index):
            return None
        return image[index]

    def will_pad(self, coord: tuple[int, int] | None = None) -> bool:
        return False


@dataclass(frozen=True)
class ConstantPadding(PaddingStrategy):
    """Pads the image with a constant value."""

    value: Any = 0

    def fill_value(self, dtype) -> Any:
        """The constant as a scalar of ``dtype``.

        :raises NumericError: If ``dtype`` cannot hold the constant, e.g. 0.5 or
            -1 for uint8. Floating types only need to hold it approximately.
        """
        dtype = np.dtype(dtype)
        try:
            fill = dtype.type(self.value)
        except (OverflowError, TypeError, ValueError) as e:
            raise NumericError(f"Padding value {self.value!r} cannot be represented as {dtype}") from e
        if not np.issubdtype(dtype, np.inexact) and fill != self.value:
            raise NumericError(f"Padding value {self.value!r} cannot be represented as {dtype}")
        return fill

    def pad(self, image: np.ndarray, padding: tuple[int, int]) -> np.ndarray:
        row_margin, col_margin = padding
        rows, cols, channels = image.shape
        shape = (rows + 2 * row_margin, cols + 2 * col_margin, channels)

        result = np.full(shape, self.fill_value(image.dtype), dtype=image.dtype)
        result[row_margin:row_margin + rows, col_margin:col_margin + cols, :] = image
        return result

    def get_pixel(self, image: np.ndarray, index: tuple[int, int]) -> np.ndarray | None:
        if _is_out_of_bounds(image.shape, (index[0], index[1], 0)):
            return np.full(image.shape[2], self.fill_value(image.dtype), dtype=image.dtype)
        return image[index[0], index[1], :].copy()

    def get_value(self, image: np.ndarray, index: tuple[int, int, int]) -> Any | None:
        if _is_out_of_bounds(image.shape, index):
            return self.fill_value(image.dtype)
        return image[index]


@dataclass(frozen=True)
class ZeroPadding(ConstantPadding):
    """Pads the image with zeros of the image's element type."""

    value: Any = field(default=0, init=False)


def pad(image: np.ndarray, padding: tuple[int, int], strategy: PaddingStrategy) -> np.ndarray:
    """Pad ``image`` by ``padding`` (row_margin, col_margin) using ``strategy``."""
    return strategy.pad(image, padding)


def padding_from_name(name: str, value: float = 0.0) -> PaddingStrategy:
    """Resolve a padding strategy by name.

    Args:
        name: 'none', 'zero' or 'constant'
        value: Fill value for 'constant'

    Returns:
        The matching PaddingStrategy
    """
    key = name.lower()
    if key == 'none':
        return NoPadding()
    if key == 'zero':
        return ZeroPadding()
    if key == 'constant':
        return ConstantPadding(value)
    raise InvalidParameter(f"Padding must be 'none', 'zero' or 'constant', got {name!r}")


__all__ = [
    'PaddingStrategy',
    'NoPadding',
    'ConstantPadding',
    'ZeroPadding',
    'pad',
    'padding_from_name',
]
