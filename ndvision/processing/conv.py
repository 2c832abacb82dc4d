# ndvision Processing - Convolution
"""
2D image convolutions.

Kernels are 3D arrays ``(rows, cols, channels)``. A kernel with a single
channel is applied to every channel of the image, otherwise the channel
counts must match.

The output always has the shape of the input. The image is padded by the
kernel centre offset on each side before the kernel window slides over it.
Even sized kernels are centred one cell towards the origin, so their last
output row/column has no complete window and stays zero.

Usage:
    from ndvision.processing.conv import convolve
    from ndvision.padding import NoPadding

    blurred = convolve(image, kernel)
    edges_kept = convolve(image, kernel, NoPadding())
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from ndvision.core import as_array3d
from ndvision.errors import ChannelDimensionMismatch, InvalidDimensions
from ndvision.padding import PaddingStrategy, ZeroPadding

logger = logging.getLogger(__name__)


def kernel_centre(rows: int, cols: int) -> tuple[int, int]:
    """Offset of the kernel centre for a kernel of ``rows`` x ``cols``."""
    row_offset = rows // 2 - (1 if rows % 2 == 0 else 0)
    col_offset = cols // 2 - (1 if cols % 2 == 0 else 0)
    return row_offset, col_offset


def _check_inputs(image: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """Validate shapes and return the kernel broadcast to the image channels."""
    channels = image.shape[2]
    if kernel.shape[2] not in (1, channels):
        raise ChannelDimensionMismatch(
            f"Kernel has {kernel.shape[2]} channels, image has {channels}"
        )
    if image.shape[0] == 0 or image.shape[1] == 0:
        raise InvalidDimensions(f"Cannot convolve an empty image of shape {image.shape}")
    if kernel.shape[0] == 0 or kernel.shape[1] == 0:
        raise InvalidDimensions(f"Cannot convolve with an empty kernel of shape {kernel.shape}")
    if kernel.shape[2] != channels:
        kernel = np.broadcast_to(kernel, (kernel.shape[0], kernel.shape[1], channels))
    return kernel


def _convolve_padded(
    image: np.ndarray,
    kernel: np.ndarray,
    padding: PaddingStrategy,
    dtype: np.dtype,
) -> np.ndarray:
    k_rows, k_cols = kernel.shape[:2]
    # padded in the accumulation type, integer images may take fractional fills
    padded = padding.pad(image.astype(dtype, copy=False), kernel_centre(k_rows, k_cols))

    result = np.zeros(image.shape, dtype=dtype)
    if padded.shape[0] < k_rows or padded.shape[1] < k_cols:
        return result

    # windows: (out_rows, out_cols, channels, k_rows, k_cols)
    windows = sliding_window_view(padded, (k_rows, k_cols), axis=(0, 1))
    sums = np.einsum('ijcrk,rkc->ijc', windows, kernel)
    result[:sums.shape[0], :sums.shape[1], :] = sums
    return result


def _shift_slices(delta: int, size: int) -> tuple[slice, slice]:
    """Destination and source slices for reading ``delta`` cells away."""
    dst = slice(max(-delta, 0), max(size - max(delta, 0), 0))
    src = slice(max(delta, 0), max(size + min(delta, 0), 0))
    return dst, src


def _convolve_unpadded(image: np.ndarray, kernel: np.ndarray, dtype: np.dtype) -> np.ndarray:
    """Convolve reading only in-bounds neighbours.

    A kernel tap that would read outside the image uses the value of the
    pixel under the kernel centre instead.
    """
    k_rows, k_cols = kernel.shape[:2]
    row_offset, col_offset = kernel_centre(k_rows, k_cols)
    rows, cols = image.shape[:2]

    result = np.zeros(image.shape, dtype=dtype)
    for r in range(k_rows):
        dst_r, src_r = _shift_slices(r - row_offset, rows)
        for c in range(k_cols):
            dst_c, src_c = _shift_slices(c - col_offset, cols)
            operand = image.copy()
            operand[dst_r, dst_c, :] = image[src_r, src_c, :]
            result += kernel[r, c, :] * operand
    return result


def convolve(
    image: np.ndarray,
    kernel: np.ndarray,
    padding: PaddingStrategy | None = None,
) -> np.ndarray:
    """Convolve an image with a kernel.

    :param image: Image data of shape (rows, cols, channels). 2D input is
        treated as a single channel.
    :param kernel: Kernel of shape (k_rows, k_cols, 1 | channels).
    :param padding: Strategy for pixels outside the image, zero padding if
        not given.
    :returns: New array with the shape of ``image``, in the promoted type of
        image and kernel.
    :raises ChannelDimensionMismatch: If the kernel channels are neither 1
        nor the image channel count.
    :raises InvalidDimensions: If the image has no rows or columns.
    :raises NumericError: If the accumulation type cannot hold a constant
        padding value.
    """
    image = as_array3d(image)
    kernel = _check_inputs(image, as_array3d(kernel))
    if padding is None:
        padding = ZeroPadding()

    dtype = np.result_type(image.dtype, kernel.dtype)
    logger.debug(
        f"convolve: image {image.shape} kernel {kernel.shape} "
        f"padding {type(padding).__name__}"
    )

    if padding.will_pad():
        return _convolve_padded(image, kernel, padding, dtype)
    return _convolve_unpadded(image, kernel, dtype)


def convolve_inplace(
    image: np.ndarray,
    kernel: np.ndarray,
    padding: PaddingStrategy | None = None,
) -> None:
    """Convolve an image with a kernel, writing the result back into ``image``.

    Values are cast to the image's dtype on assignment. If the convolution
    fails the image is left unmodified.
    """
    if not isinstance(image, np.ndarray):
        raise TypeError(f"Expected numpy array, got {type(image).__name__}")
    target = as_array3d(image)
    result = convolve(target, kernel, padding)
    target[...] = result


__all__ = ['kernel_centre', 'convolve', 'convolve_inplace']
