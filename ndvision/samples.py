# ndvision - scikit-image Sample Images
"""
Access to scikit-image sample images as ndvision arrays.

All images are returned as float64 arrays of shape (rows, cols, channels)
scaled to 0.0-1.0, ready for the processing functions.

Requires: pip install ndvision[skimage]
"""

from __future__ import annotations

import numpy as np

from .core import to_grayscale

_IMAGE_NAMES = ('astronaut', 'camera', 'chelsea', 'coins', 'horse', 'moon', 'page', 'text')
_ALIASES = {'cat': 'chelsea'}


def _check_skimage() -> None:
    """Check that scikit-image is installed.

    Raises ImportError with helpful message if not available.
    """
    try:
        import skimage  # noqa: F401
    except ImportError as e:
        raise ImportError(
            "scikit-image is required for sample images. "
            "Install with: pip install ndvision[skimage]"
        ) from e


class Samples:
    """Access to scikit-image sample images.

    Example:
        from ndvision.samples import Samples

        # Grayscale camera image, shape (512, 512, 1)
        img = Samples.camera()

        # Any image by name, reduced to one channel
        img = Samples.load('astronaut', grayscale=True)

        # List all available images
        print(Samples.list_images())
    """

    @staticmethod
    def _to_array(array) -> np.ndarray:
        """Convert a skimage array to a float64 (rows, cols, channels) array."""
        array = np.asarray(array)
        if array.ndim == 2:
            array = array[:, :, np.newaxis]
        elif array.ndim != 3:
            raise ValueError(f"Unexpected array shape: {array.shape}")

        if array.dtype == np.bool_:
            return array.astype(np.float64)
        if np.issubdtype(array.dtype, np.integer):
            return array.astype(np.float64) / np.iinfo(array.dtype).max
        return array.astype(np.float64)

    @classmethod
    def _load_data(cls, name: str) -> np.ndarray:
        _check_skimage()
        from skimage import data
        return cls._to_array(getattr(data, name)())

    @classmethod
    def astronaut(cls) -> np.ndarray:
        """Astronaut Eileen Collins (512x512, RGB)."""
        return cls._load_data('astronaut')

    @classmethod
    def camera(cls) -> np.ndarray:
        """Cameraman (512x512, grayscale).

        Classic grayscale test image.
        """
        return cls._load_data('camera')

    @classmethod
    def chelsea(cls) -> np.ndarray:
        """Chelsea the cat (300x451, RGB)."""
        return cls._load_data('chelsea')

    @classmethod
    def coins(cls) -> np.ndarray:
        """Greek coins (303x384, grayscale).

        Good for thresholding and edge detection demos.
        """
        return cls._load_data('coins')

    @classmethod
    def horse(cls) -> np.ndarray:
        """Horse silhouette (328x400, binary).

        Good for morphology demos.
        """
        return cls._load_data('horse')

    @classmethod
    def moon(cls) -> np.ndarray:
        """Moon surface (512x512, grayscale).

        Low contrast, good for histogram equalisation demos.
        """
        return cls._load_data('moon')

    @classmethod
    def page(cls) -> np.ndarray:
        """Scanned text page (191x384, grayscale)."""
        return cls._load_data('page')

    @classmethod
    def text(cls) -> np.ndarray:
        """Text sample (172x448, grayscale)."""
        return cls._load_data('text')

    @classmethod
    def list_images(cls) -> list[str]:
        """Names accepted by :meth:`load`, aliases excluded."""
        return list(_IMAGE_NAMES)

    @classmethod
    def load(cls, name: str, grayscale: bool = False) -> np.ndarray:
        """Load a sample image by case insensitive name.

        :param name: One of :meth:`list_images`, or 'cat' for chelsea.
        :param grayscale: Reduce colour images to one luminance channel.
        :returns: float64 array of shape (rows, cols, channels).
        :raises ValueError: For unknown names.
        """
        key = _ALIASES.get(name.lower(), name.lower())
        if key not in _IMAGE_NAMES:
            known = ', '.join(sorted([*_IMAGE_NAMES, *_ALIASES]))
            raise ValueError(f"Unknown image: {name}. Available: {known}")

        image = getattr(cls, key)()
        return to_grayscale(image) if grayscale else image


__all__ = ['Samples']
