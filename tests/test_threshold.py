"""
Tests for global thresholding.
"""

import numpy as np
import pytest

from ndvision.errors import ChannelDimensionMismatch, InvalidParameter
from ndvision.processing.threshold import (
    apply_threshold,
    calculate_threshold_mean,
    calculate_threshold_otsu,
    threshold_mean,
    threshold_otsu,
)


@pytest.fixture
def small_image() -> np.ndarray:
    return np.array([[2, 4, 0], [7, 5, 8], [1, 6, 0]], dtype=np.float64)[:, :, np.newaxis]


class TestOtsu:
    """Test Otsu's threshold."""

    def test_threshold_value(self, small_image):
        threshold = calculate_threshold_otsu(small_image)
        assert abs(threshold - 2.0) < 0.5

    def test_integer_image(self, small_image):
        """Integer images give the same threshold as their float version."""
        assert calculate_threshold_otsu(small_image.astype(np.uint8)) == pytest.approx(
            calculate_threshold_otsu(small_image)
        )

    def test_mask(self, small_image):
        expected = np.array([
            [False, True, False],
            [True, True, True],
            [False, True, False],
        ])[:, :, np.newaxis]
        np.testing.assert_array_equal(threshold_otsu(small_image), expected)

    def test_last_channel_returned(self, small_image):
        """For multi channel input the last channel's threshold is returned."""
        image = np.concatenate([small_image, small_image * 2], axis=2)
        assert calculate_threshold_otsu(image) == pytest.approx(
            2 * calculate_threshold_otsu(small_image)
        )

    def test_bimodal_separation(self):
        """The threshold separates two well separated clusters."""
        rng = np.random.default_rng(3)
        values = np.concatenate([rng.normal(0.2, 0.02, 200), rng.normal(0.8, 0.02, 200)])
        image = values.reshape(20, 20, 1)
        threshold = calculate_threshold_otsu(image)
        assert values[:200].max() < threshold <= values[200:].min()

    def test_all_zero(self):
        """A black image thresholds at 0 and selects every pixel."""
        image = np.zeros((3, 3, 1))
        assert calculate_threshold_otsu(image) == 0.0
        assert threshold_otsu(image).all()

    def test_invalid_bins(self, small_image):
        with pytest.raises(InvalidParameter):
            calculate_threshold_otsu(small_image, nbins=0)

    def test_multi_channel_rejected(self, rgb_image):
        with pytest.raises(ChannelDimensionMismatch):
            threshold_otsu(rgb_image)

    def test_matches_skimage_segmentation(self):
        """Segmentation agrees with scikit-image's Otsu on bimodal data."""
        filters = pytest.importorskip("skimage.filters")
        rng = np.random.default_rng(11)
        gray = np.concatenate([rng.normal(0.25, 0.03, 300), rng.normal(0.75, 0.03, 300)])
        gray = np.clip(gray, 0.0, 1.0).reshape(20, 30)

        reference = gray > filters.threshold_otsu(gray)
        ours = threshold_otsu(gray)[:, :, 0]
        np.testing.assert_array_equal(ours, reference)


class TestMean:
    """Test mean thresholding."""

    def test_threshold_value(self, small_image):
        assert calculate_threshold_mean(small_image) == pytest.approx(33 / 9)

    def test_mask(self, small_image):
        mask = threshold_mean(small_image)
        assert mask.dtype == np.bool_
        assert mask.sum() == 5

    def test_multi_channel_rejected(self, rgb_image):
        with pytest.raises(ChannelDimensionMismatch):
            threshold_mean(rgb_image)


class TestApplyThreshold:
    """Test applying a threshold."""

    def test_inclusive(self):
        image = np.array([[0.1, 0.5, 0.9]])
        np.testing.assert_array_equal(apply_threshold(image, 0.5)[0, :, 0], [False, True, True])

    def test_multi_channel(self, rgb_image):
        assert apply_threshold(rgb_image, 0.5).shape == rgb_image.shape
