# ndvision Processing - Canny edge detector
"""
Canny edge detection.

The detector runs in four stages on a single channel image:

1. Blur with a (by default Gaussian) kernel.
2. Sobel gradient magnitude and angle.
3. Non-maxima suppression along the quantised gradient direction.
4. Hysteresis thresholding: pixels at or above the upper threshold are
   strong edges, weaker pixels above the lower threshold are kept only when
   connected to a strong edge through other kept pixels.

Usage:
    from ndvision.processing.canny import CannyBuilder, canny_edge_detector

    params = CannyBuilder().lower_threshold(0.2).upper_threshold(0.6).build()
    mask = canny_edge_detector(image, params)  # bool (rows, cols, 1)
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass

import numpy as np

from ndvision.core import as_array3d, require_single_channel
from ndvision.errors import InvalidDimensions, InvalidParameter, ProcessingError
from .conv import convolve
from .kernels import GaussianFilter
from .sobel import full_sobel

logger = logging.getLogger(__name__)

DEFAULT_LOWER_THRESHOLD = 0.3
DEFAULT_UPPER_THRESHOLD = 0.7
DEFAULT_BLUR_SHAPE = (5, 5, 1)
DEFAULT_BLUR_COVARIANCE = (2.0, 2.0)

# 8-neighbourhood as (d_row, d_col)
_NEIGHBOURS = ((-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1))


@dataclass(frozen=True, eq=False)
class CannyParameters:
    """Parameters for the Canny edge detector.

    blur: Kernel applied before computing gradients
    lower_threshold: Weak edge threshold for hysteresis edge linking
    upper_threshold: Strong edge threshold
    """

    blur: np.ndarray
    lower_threshold: float
    upper_threshold: float

    def __post_init__(self):
        if np.ndim(self.blur) != 3:
            raise InvalidDimensions(
                f"Blur kernel must be (rows, cols, channels), got shape {np.shape(self.blur)}"
            )
        if self.lower_threshold > self.upper_threshold:
            raise InvalidParameter(
                f"Lower threshold {self.lower_threshold} exceeds "
                f"upper threshold {self.upper_threshold}"
            )


@dataclass(frozen=True, eq=False)
class CannyBuilder:
    """Builder for CannyParameters.

    Every setter returns a new builder. Unset parameters get defaults in
    :meth:`build`: lower threshold 0.3, upper threshold 0.7 and a 5x5 Gaussian
    blur with horizontal and vertical covariance of 2.0.
    """

    lower: float | None = None
    upper: float | None = None
    blur_kernel: np.ndarray | None = None

    def lower_threshold(self, value: float) -> 'CannyBuilder':
        """Set the lower (weak edge) threshold."""
        return dataclasses.replace(self, lower=value)

    def upper_threshold(self, value: float) -> 'CannyBuilder':
        """Set the upper (strong edge) threshold."""
        return dataclasses.replace(self, upper=value)

    def blur(self, shape: tuple[int, int], covariance: tuple[float, float]) -> 'CannyBuilder':
        """Use a Gaussian blur of ``shape`` (rows, cols) and ``covariance``.

        Parameters the Gaussian builder rejects leave the blur unchanged.
        """
        try:
            kernel = GaussianFilter.build_with_params((shape[0], shape[1], 1), covariance)
        except ProcessingError as e:
            logger.warning(f"Ignoring Canny blur {shape} {covariance}: {e}")
            return self
        return dataclasses.replace(self, blur_kernel=kernel)

    def build(self) -> CannyParameters:
        """Create the parameters, swapping thresholds given in reverse order."""
        blur = self.blur_kernel
        if blur is None:
            blur = GaussianFilter.build_with_params(DEFAULT_BLUR_SHAPE, DEFAULT_BLUR_COVARIANCE)
        lower = DEFAULT_LOWER_THRESHOLD if self.lower is None else self.lower
        upper = DEFAULT_UPPER_THRESHOLD if self.upper is None else self.upper
        if upper < lower:
            lower, upper = upper, lower
        return CannyParameters(blur=blur, lower_threshold=lower, upper_threshold=upper)


def non_maxima_suppression(magnitude: np.ndarray, angle: np.ndarray) -> np.ndarray:
    """Zero every pixel that is not a maximum along its gradient direction.

    The angle (radians) is folded into [0, 180) degrees and quantised into
    four directions. Neighbours outside the image count as 0. Only channel 0
    is compared, a suppressed pixel is zeroed in all channels.

    :returns: A new array, the input is not modified.
    """
    magnitude = as_array3d(magnitude)
    angle = as_array3d(angle)
    if magnitude.shape[:2] != angle.shape[:2]:
        raise InvalidDimensions(
            f"Magnitude {magnitude.shape} and angle {angle.shape} differ in shape"
        )

    rows, cols = magnitude.shape[:2]
    centre = magnitude[:, :, 0]
    bordered = np.zeros((rows + 2, cols + 2), dtype=magnitude.dtype)
    bordered[1:-1, 1:-1] = centre

    def neighbour(d_row: int, d_col: int) -> np.ndarray:
        return bordered[1 + d_row:1 + d_row + rows, 1 + d_col:1 + d_col + cols]

    direction = np.degrees(angle[:, :, 0])
    direction = np.where(direction >= 180.0, direction - 180.0,
                         np.where(direction < 0.0, direction + 180.0, direction))

    conditions = [direction < 45.0, direction < 90.0, direction < 135.0]
    first = np.select(conditions, [neighbour(0, -1), neighbour(-1, -1), neighbour(-1, 0)],
                      default=neighbour(-1, 1))
    second = np.select(conditions, [neighbour(0, 1), neighbour(1, 1), neighbour(1, 0)],
                       default=neighbour(1, -1))

    result = magnitude.copy()
    result[(first > centre) | (second > centre)] = 0
    return result


def _candidates(row: int, col: int, rows: int, cols: int, visited: np.ndarray) -> list[tuple[int, int]]:
    """Unvisited in-bounds 8-neighbours of (row, col)."""
    result = []
    for d_row, d_col in _NEIGHBOURS:
        r, c = row + d_row, col + d_col
        if 0 <= r < rows and 0 <= c < cols and not visited[r, c]:
            result.append((r, c))
    return result


def link_edges(magnitude: np.ndarray, lower: float, upper: float) -> np.ndarray:
    """Hysteresis edge linking.

    Magnitudes below ``lower`` are discarded, magnitudes at or above ``upper``
    are strong edges. Starting from every strong edge, neighbours with a
    magnitude above ``lower`` are added to the edge and explored in turn.

    :param magnitude: Suppressed gradient magnitude, channel 0 is used.
    :returns: Bool edge mask of shape (rows, cols, 1).
    """
    magnitude = as_array3d(magnitude)[:, :, 0]
    magnitude = np.where(magnitude >= lower, magnitude, 0)
    result = magnitude >= upper

    rows, cols = result.shape
    visited = np.zeros((rows, cols), dtype=bool)
    seeds = list(zip(*np.nonzero(result)))

    for row, col in seeds:
        row, col = int(row), int(col)
        if visited[row, col]:
            continue
        visited[row, col] = True
        buffer = _candidates(row, col, rows, cols, visited)
        while buffer:
            r, c = buffer.pop()
            if visited[r, c] or not magnitude[r, c] > lower:
                continue
            visited[r, c] = True
            result[r, c] = True
            buffer.extend(_candidates(r, c, rows, cols, visited))

    logger.debug(f"link_edges: {len(seeds)} strong seeds, {int(result.sum())} edge pixels")
    return result[:, :, np.newaxis]


def canny_edge_detector(image: np.ndarray, params: CannyParameters | None = None) -> np.ndarray:
    """Run the Canny edge detector on a single channel image.

    :param image: Image of shape (rows, cols, 1) or (rows, cols).
    :param params: Detector parameters, builder defaults if not given.
    :returns: Bool edge mask of shape (rows, cols, 1).
    :raises ChannelDimensionMismatch: If the image has more than one channel.
    """
    image = as_array3d(image)
    require_single_channel(image)
    if params is None:
        params = CannyBuilder().build()

    logger.debug(
        f"canny: image {image.shape} thresholds "
        f"({params.lower_threshold}, {params.upper_threshold}) blur {params.blur.shape}"
    )
    blurred = convolve(image, params.blur)
    magnitude, angle = full_sobel(blurred)
    magnitude = non_maxima_suppression(magnitude, angle)
    return link_edges(magnitude, params.lower_threshold, params.upper_threshold)


__all__ = [
    'DEFAULT_LOWER_THRESHOLD',
    'DEFAULT_UPPER_THRESHOLD',
    'DEFAULT_BLUR_SHAPE',
    'DEFAULT_BLUR_COVARIANCE',
    'CannyParameters',
    'CannyBuilder',
    'non_maxima_suppression',
    'link_edges',
    'canny_edge_detector',
]
