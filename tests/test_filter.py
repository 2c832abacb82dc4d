"""
Tests for the median filter.
"""

import numpy as np
import pytest

from ndvision.errors import InvalidDimensions
from ndvision.processing.filter import median_filter


class TestMedianFilter:
    """Test median filtering."""

    def test_per_channel_median(self):
        """Only the centre of a 3x3 image has a complete window."""
        image = np.arange(27, dtype=np.float64).reshape(3, 3, 3)
        result = median_filter(image)
        np.testing.assert_array_equal(result[1, 1], [12.0, 13.0, 14.0])
        result[1, 1] = 0
        assert not result.any()

    def test_column_region(self):
        """A (3, 1) region filters along rows only."""
        image = np.arange(7, dtype=np.float64).reshape(7, 1, 1)
        result = median_filter(image, (3, 1))
        np.testing.assert_array_equal(result[:, 0, 0], [0, 1, 2, 3, 4, 5, 0])

    def test_removes_salt_noise(self):
        image = np.full((5, 5, 1), 0.5)
        image[2, 2, 0] = 1.0
        result = median_filter(image)
        assert result[2, 2, 0] == 0.5

    def test_dtype_preserved(self):
        image = np.arange(25, dtype=np.uint8).reshape(5, 5, 1)
        result = median_filter(image)
        assert result.dtype == np.uint8
        assert result[2, 2, 0] == 12

    def test_image_smaller_than_region(self):
        result = median_filter(np.ones((2, 2, 1)), (3, 3))
        np.testing.assert_array_equal(result, np.zeros((2, 2, 1)))

    @pytest.mark.parametrize("region", [(0, 3), (3, -1)])
    def test_invalid_region(self, region):
        with pytest.raises(InvalidDimensions):
            median_filter(np.ones((5, 5, 1)), region)
