"""
Pytest fixtures for ndvision tests
"""

import numpy as np
import pytest


@pytest.fixture
def binary_pattern() -> np.ndarray:
    """
    Returns a 5x5 single channel 0/1 pattern.
    :return: float64 array of shape (5, 5, 1)
    """
    pattern = np.array([
        [1, 1, 1, 0, 0],
        [0, 1, 1, 1, 0],
        [0, 0, 1, 1, 1],
        [0, 0, 1, 1, 0],
        [0, 1, 1, 0, 0],
    ], dtype=np.float64)
    return pattern[:, :, np.newaxis]


@pytest.fixture
def square_image() -> np.ndarray:
    """
    Returns a 20x20 black image with a white 10x10 square in the middle.
    :return: float64 array of shape (20, 20, 1)
    """
    image = np.zeros((20, 20, 1))
    image[5:15, 5:15, 0] = 1.0
    return image


@pytest.fixture
def rgb_image() -> np.ndarray:
    """
    Returns a reproducible random RGB image.
    :return: float64 array of shape (16, 12, 3) with values in [0, 1)
    """
    rng = np.random.default_rng(42)
    return rng.random((16, 12, 3))
