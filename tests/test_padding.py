"""
Tests for padding strategies.
"""

import numpy as np
import pytest

from ndvision.errors import InvalidParameter, NumericError
from ndvision.padding import (
    ConstantPadding,
    NoPadding,
    ZeroPadding,
    pad,
    padding_from_name,
)


@pytest.fixture
def image() -> np.ndarray:
    return np.arange(12, dtype=np.float64).reshape(2, 3, 2)


class TestNoPadding:
    """Test the strategy that never adds a border."""

    def test_pad_returns_equal_copy(self, image):
        """Padding with NoPadding keeps shape and values but copies."""
        result = pad(image, (2, 2), NoPadding())
        np.testing.assert_array_equal(result, image)
        assert result is not image
        result[0, 0, 0] = 100
        assert image[0, 0, 0] == 0

    def test_out_of_bounds_is_none(self, image):
        """No value exists outside the image."""
        strategy = NoPadding()
        assert strategy.get_value(image, (-1, 0, 0)) is None
        assert strategy.get_value(image, (0, 3, 0)) is None
        assert strategy.get_pixel(image, (2, 0)) is None

    def test_in_bounds_values(self, image):
        """Values inside the image are returned as is."""
        strategy = NoPadding()
        assert strategy.get_value(image, (1, 2, 1)) == image[1, 2, 1]
        np.testing.assert_array_equal(strategy.get_pixel(image, (0, 1)), image[0, 1, :])

    def test_will_not_pad(self):
        assert NoPadding().will_pad() is False
        assert NoPadding().will_pad((0, 0)) is False


class TestConstantPadding:
    """Test constant value padding."""

    def test_pad_shape_and_border(self, image):
        """The border has the constant value, the centre the image."""
        result = ConstantPadding(7.5).pad(image, (1, 2))
        assert result.shape == (4, 7, 2)
        np.testing.assert_array_equal(result[1:3, 2:5, :], image)
        assert np.all(result[0, :, :] == 7.5)
        assert np.all(result[:, :2, :] == 7.5)
        assert np.all(result[:, -2:, :] == 7.5)

    def test_pad_keeps_dtype(self):
        """The padded image has the element type of the input."""
        image = np.ones((2, 2, 1), dtype=np.uint8)
        result = ConstantPadding(3).pad(image, (1, 1))
        assert result.dtype == np.uint8
        assert result[0, 0, 0] == 3

    def test_get_value_outside(self, image):
        strategy = ConstantPadding(4.0)
        assert strategy.get_value(image, (-5, -5, 0)) == 4.0
        assert strategy.get_value(image, (0, 0, 1)) == image[0, 0, 1]

    def test_get_pixel_outside(self, image):
        """An out of bounds pixel has the constant in every channel."""
        pixel = ConstantPadding(2.0).get_pixel(image, (10, 10))
        np.testing.assert_array_equal(pixel, [2.0, 2.0])

    def test_will_pad(self):
        assert ConstantPadding(1).will_pad() is True

    @pytest.mark.parametrize("value", [0.5, -1, 256])
    def test_value_not_representable(self, value):
        """uint8 images cannot be padded with fractions or out of range values."""
        image = np.zeros((2, 2, 1), dtype=np.uint8)
        strategy = ConstantPadding(value)
        with pytest.raises(NumericError):
            strategy.pad(image, (1, 1))
        with pytest.raises(NumericError):
            strategy.get_value(image, (-1, 0, 0))
        with pytest.raises(NumericError):
            strategy.get_pixel(image, (0, 5))

    def test_in_bounds_ignores_fill(self):
        """Only out of bounds reads convert the constant."""
        image = np.full((2, 2, 1), 9, dtype=np.uint8)
        assert ConstantPadding(0.5).get_value(image, (1, 1, 0)) == 9

    def test_float_fill_approximate(self):
        """float32 images take constants that are only approximately representable."""
        image = np.zeros((1, 1, 1), dtype=np.float32)
        result = ConstantPadding(0.1).pad(image, (1, 1))
        assert result.dtype == np.float32
        assert result[0, 0, 0] == np.float32(0.1)

    def test_negative_channel_out_of_bounds(self, image):
        """Channel indices below zero do not wrap around."""
        assert ConstantPadding(4.0).get_value(image, (0, 0, -1)) == 4.0
        assert ZeroPadding().get_value(image, (0, 0, -1)) == 0
        assert NoPadding().get_value(image, (0, 0, -1)) is None


class TestZeroPadding:
    """Test zero padding."""

    def test_border_is_zero(self, image):
        result = ZeroPadding().pad(image + 1, (1, 1))
        assert result.shape == (4, 5, 2)
        assert np.all(result[0, :, :] == 0)
        assert np.all(result[:, -1, :] == 0)

    def test_value_is_fixed(self):
        """The fill value of zero padding cannot be changed."""
        assert ZeroPadding().value == 0
        with pytest.raises(TypeError):
            ZeroPadding(5)

    def test_zero_padding_matches_constant_zero(self, image):
        np.testing.assert_array_equal(
            ZeroPadding().pad(image, (2, 1)),
            ConstantPadding(0).pad(image, (2, 1)),
        )


class TestPaddingFromName:
    """Test resolving strategies by name."""

    def test_known_names(self):
        assert isinstance(padding_from_name('none'), NoPadding)
        assert isinstance(padding_from_name('ZERO'), ZeroPadding)
        strategy = padding_from_name('constant', 0.5)
        assert isinstance(strategy, ConstantPadding)
        assert strategy.value == 0.5

    def test_unknown_name(self):
        with pytest.raises(InvalidParameter):
            padding_from_name('reflect')
