"""
Tests for HOG feature extraction.
"""

import numpy as np
import pytest

from ndvision.errors import ChannelDimensionMismatch, InvalidDimensions, InvalidParameter
from ndvision.features import (
    HistogramOfGradientsExtractor,
    HogParameters,
)


class TestHogBuilder:
    """Test configuring the extractor."""

    def test_defaults(self):
        hog = HistogramOfGradientsExtractor.create().build()
        assert hog.params == HogParameters(orientations=9, cell_width=8, block_width=2)

    def test_fluent_setters(self):
        hog = (
            HistogramOfGradientsExtractor.create()
            .orientations(4)
            .cell_width(4)
            .block_width(1)
            .build()
        )
        assert hog.params == HogParameters(4, 4, 1)

    @pytest.mark.parametrize("field", ["orientations", "cell_width", "block_width"])
    def test_invalid_values(self, field):
        with pytest.raises(InvalidParameter):
            HogParameters(**{field: 0})


class TestFeatureLength:
    """Test descriptor length calculation."""

    @pytest.mark.parametrize("rows,cols,length", [
        (16, 16, 36),
        (64, 128, 7 * 15 * 36),
        (23, 31, 2 * 36),
        (8, 8, 0),
    ])
    def test_default_parameters(self, rows, cols, length):
        assert HistogramOfGradientsExtractor().feature_len(rows, cols) == length


class TestHistograms:
    """Test per cell histograms."""

    def test_binning(self):
        """Angles fold into [0, 2pi) and are weighted by magnitude."""
        hog = HistogramOfGradientsExtractor(HogParameters(orientations=4, cell_width=4, block_width=1))
        magnitude = np.full((8, 8, 1), 0.5)
        angle = np.full((8, 8, 1), 0.25 * np.pi)
        angle[4:, :, 0] = -0.25 * np.pi

        histograms = hog.create_histograms(magnitude, angle)

        assert histograms.shape == (2, 2, 4)
        np.testing.assert_allclose(histograms[0, :, 0], 8.0)
        np.testing.assert_allclose(histograms[1, :, 3], 8.0)
        assert histograms.sum() == pytest.approx(32.0)

    def test_partial_cells_ignored(self):
        hog = HistogramOfGradientsExtractor(HogParameters(orientations=2, cell_width=4, block_width=1))
        magnitude = np.ones((6, 9, 1))
        histograms = hog.create_histograms(magnitude, np.zeros_like(magnitude))
        assert histograms.shape == (1, 2, 2)
        assert histograms.sum() == 32.0


class TestGetFeatures:
    """Test descriptor extraction."""

    def test_length(self):
        rng = np.random.default_rng(0)
        image = rng.random((32, 40, 1))
        hog = HistogramOfGradientsExtractor()
        features = hog.get_features(image)
        assert features.shape == (hog.feature_len(32, 40),)
        assert features.shape == (432,)

    def test_blocks_normalised(self):
        rng = np.random.default_rng(0)
        features = HistogramOfGradientsExtractor().get_features(rng.random((24, 24, 1)))
        norms = np.linalg.norm(features.reshape(-1, 36), axis=1)
        np.testing.assert_allclose(norms, 1.0)

    def test_flat_image(self):
        """Blocks without gradients are all zero rather than NaN."""
        image = np.full((40, 40, 1), 0.5)
        hog = HistogramOfGradientsExtractor(HogParameters(cell_width=8, block_width=1))
        features = hog.get_features(image).reshape(5, 5, 9)
        assert not np.isnan(features).any()
        assert not features[2, 2].any()

    def test_too_small(self):
        with pytest.raises(InvalidDimensions):
            HistogramOfGradientsExtractor().get_features(np.zeros((15, 40, 1)))

    def test_multi_channel_rejected(self, rgb_image):
        with pytest.raises(ChannelDimensionMismatch):
            HistogramOfGradientsExtractor(HogParameters(cell_width=4)).get_features(rgb_image)
