"""
Tests for the Sobel gradient stage.
"""

import numpy as np

from ndvision.processing.sobel import apply_sobel, full_sobel


def _step_image() -> np.ndarray:
    """5x6 image, left half 0 and right half 1."""
    image = np.zeros((5, 6, 1))
    image[:, 3:, 0] = 1.0
    return image


class TestFullSobel:
    """Test magnitude and angle computation."""

    def test_flat_interior_has_no_gradient(self):
        """Constant regions away from the zero padded border give 0."""
        magnitude, _ = full_sobel(np.full((6, 6, 1), 0.5))
        np.testing.assert_array_equal(magnitude[1:-1, 1:-1], 0.0)

    def test_step_edge(self):
        """A vertical step saturates the magnitude next to the step."""
        magnitude, angle = full_sobel(_step_image())
        np.testing.assert_array_equal(magnitude[1:4, 2:4, 0], 1.0)
        np.testing.assert_array_equal(magnitude[1:4, 0, 0], 0.0)
        np.testing.assert_allclose(angle[1:4, 2:4, 0], np.pi / 2)

    def test_magnitude_clamped(self, rgb_image):
        magnitude, _ = full_sobel(rgb_image * 10)
        assert magnitude.max() <= 1.0
        assert magnitude.min() >= 0.0

    def test_shapes(self, rgb_image):
        magnitude, angle = full_sobel(rgb_image)
        assert magnitude.shape == rgb_image.shape
        assert angle.shape == rgb_image.shape

    def test_angle_range(self, rgb_image):
        _, angle = full_sobel(rgb_image)
        assert np.all(angle >= -np.pi)
        assert np.all(angle <= np.pi)

    def test_integer_input_promoted(self):
        image = (_step_image() * 200).astype(np.uint8)
        magnitude, angle = full_sobel(image)
        assert magnitude.dtype == np.float64
        assert angle.dtype == np.float64
        assert magnitude[2, 2, 0] == 1.0

    def test_float32_kept(self):
        magnitude, _ = full_sobel(_step_image().astype(np.float32))
        assert magnitude.dtype == np.float32


class TestApplySobel:
    """Test the magnitude-only variant."""

    def test_matches_full_sobel(self, rgb_image):
        magnitude, _ = full_sobel(rgb_image)
        np.testing.assert_array_equal(apply_sobel(rgb_image), magnitude)

    def test_2d_input(self):
        result = apply_sobel(_step_image()[:, :, 0])
        assert result.shape == (5, 6, 1)
