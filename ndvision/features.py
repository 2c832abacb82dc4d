# ndvision - Feature extraction
"""
Histogram of Oriented Gradients (HOG) descriptors.

The image is split into square cells of ``cell_width`` pixels. Each cell
gets a histogram of its gradient angles over [0, 2π) with ``orientations``
equal bins, weighted by gradient magnitude. Blocks of
``block_width x block_width`` neighbouring cells slide over the cell grid
one cell at a time; each block is L2 normalised and all blocks are
concatenated into the descriptor.

Usage:
    from ndvision.features import HistogramOfGradientsExtractor

    hog = HistogramOfGradientsExtractor.create().orientations(8).build()
    descriptor = hog.get_features(gray)
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from .core import as_array3d, require_single_channel
from .errors import InvalidDimensions, InvalidParameter
from .processing.sobel import full_sobel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HogParameters:
    """HOG configuration.

    orientations: Number of histogram bins per cell
    cell_width: Width and height of a cell in pixels
    block_width: Width and height of a normalisation block in cells
    """

    orientations: int = 9
    cell_width: int = 8
    block_width: int = 2

    def __post_init__(self):
        for name in ('orientations', 'cell_width', 'block_width'):
            value = getattr(self, name)
            if int(value) < 1:
                raise InvalidParameter(f"HOG {name} must be at least 1, got {value}")


@dataclass(frozen=True)
class HistogramOfGradientsBuilder:
    """Fluent builder for :class:`HistogramOfGradientsExtractor`."""

    params: HogParameters = field(default_factory=HogParameters)

    def orientations(self, value: int) -> 'HistogramOfGradientsBuilder':
        return HistogramOfGradientsBuilder(dataclasses.replace(self.params, orientations=value))

    def cell_width(self, value: int) -> 'HistogramOfGradientsBuilder':
        return HistogramOfGradientsBuilder(dataclasses.replace(self.params, cell_width=value))

    def block_width(self, value: int) -> 'HistogramOfGradientsBuilder':
        return HistogramOfGradientsBuilder(dataclasses.replace(self.params, block_width=value))

    def build(self) -> 'HistogramOfGradientsExtractor':
        return HistogramOfGradientsExtractor(self.params)


class HistogramOfGradientsExtractor:
    """Computes HOG descriptors for single channel images."""

    def __init__(self, params: HogParameters | None = None):
        self.params = params if params is not None else HogParameters()

    @classmethod
    def create(cls) -> HistogramOfGradientsBuilder:
        """Start configuring an extractor."""
        return HistogramOfGradientsBuilder()

    def cell_dim(self, rows: int, cols: int) -> tuple[int, int]:
        """Number of complete cells vertically and horizontally."""
        width = self.params.cell_width
        return rows // width, cols // width

    def block_dim(self, rows: int, cols: int) -> tuple[int, int]:
        """Number of block positions vertically and horizontally."""
        v_cells, h_cells = self.cell_dim(rows, cols)
        width = self.params.block_width
        return max(0, v_cells - width + 1), max(0, h_cells - width + 1)

    def feature_len(self, rows: int, cols: int) -> int:
        """Length of the descriptor for an image of ``rows`` x ``cols`` pixels."""
        v_blocks, h_blocks = self.block_dim(rows, cols)
        p = self.params
        return v_blocks * h_blocks * p.block_width ** 2 * p.orientations

    def create_histograms(self, magnitude: np.ndarray, angle: np.ndarray) -> np.ndarray:
        """Per cell orientation histograms of shape (v_cells, h_cells, orientations)."""
        p = self.params
        v_cells, h_cells = self.cell_dim(magnitude.shape[0], magnitude.shape[1])
        rows, cols = v_cells * p.cell_width, h_cells * p.cell_width

        mag = magnitude[:rows, :cols, 0]
        ang = angle[:rows, :cols, 0]
        ang = np.where(ang < 0.0, ang + 2.0 * np.pi, ang)
        delta = 2.0 * np.pi / p.orientations
        bins = np.minimum((ang / delta).astype(np.intp), p.orientations - 1)

        cell_rows = np.broadcast_to((np.arange(rows) // p.cell_width)[:, np.newaxis], (rows, cols))
        cell_cols = np.broadcast_to((np.arange(cols) // p.cell_width)[np.newaxis, :], (rows, cols))

        histograms = np.zeros((v_cells, h_cells, p.orientations))
        np.add.at(histograms, (cell_rows, cell_cols, bins), mag)
        return histograms

    def get_features(self, image: np.ndarray) -> np.ndarray:
        """Compute the HOG descriptor of a single channel image.

        :param image: Image of shape (rows, cols, 1) or (rows, cols).
        :returns: 1D float64 descriptor of length :meth:`feature_len`.
        :raises ChannelDimensionMismatch: If the image has more than one channel.
        :raises InvalidDimensions: If the image does not fit a single block.
        """
        image = as_array3d(image)
        require_single_channel(image)
        rows, cols = image.shape[:2]
        v_blocks, h_blocks = self.block_dim(rows, cols)
        if v_blocks < 1 or h_blocks < 1:
            raise InvalidDimensions(
                f"Image of {rows}x{cols} pixels is smaller than one HOG block "
                f"({self.params.block_width}x{self.params.block_width} cells "
                f"of {self.params.cell_width} pixels)"
            )

        magnitude, angle = full_sobel(image)
        histograms = self.create_histograms(magnitude, angle)

        width = self.params.block_width
        windows = sliding_window_view(histograms, (width, width), axis=(0, 1))
        # (v_blocks, h_blocks, orientations, bw, bw) -> cells first, then bins
        blocks = windows.transpose(0, 1, 3, 4, 2).reshape(v_blocks * h_blocks, -1)
        norms = np.linalg.norm(blocks, axis=1, keepdims=True)
        normalised = np.divide(blocks, norms, out=np.zeros_like(blocks), where=norms > 0.0)

        features = normalised.ravel()
        logger.debug(f"hog: {rows}x{cols} image, {v_blocks}x{h_blocks} blocks, {features.size} features")
        return features


__all__ = [
    'HogParameters',
    'HistogramOfGradientsBuilder',
    'HistogramOfGradientsExtractor',
]
