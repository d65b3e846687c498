"""Helpers for normalizing raster images.

Exposes the conversion from caller-supplied arrays or Pillow images into the
``(height, width, channels)`` integer layout the matching engine reads.
"""

from __future__ import annotations

__all__ = ("Raster", "raster_size", "to_raster")

import logging
from typing import TYPE_CHECKING, Final, TypeAlias, cast

import cv2 as cv
import numpy as np
import numpy.typing as npt
from PIL import Image

from tplmatch.models import InvalidChannelCountError, MatchSettings

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

Raster: TypeAlias = npt.NDArray[np.integer]
ImageU8: TypeAlias = npt.NDArray[np.uint8]

_GRAY_NDIMS: Final[int] = 2
_COLOR_NDIMS: Final[int] = 3
_PIL_MODES: Final[dict[int, str]] = {1: "L", 3: "RGB"}


def _pil_to_array(image: Image.Image, channel_count: int) -> ImageU8:
    """Convert a PIL image to an OpenCV-compatible array with ``channel_count`` channels."""
    mode = _PIL_MODES.get(channel_count)
    if mode is None:
        raise InvalidChannelCountError(channel_count, len(image.getbands()))
    array = np.array(image.convert(mode), dtype=np.uint8)
    if channel_count == 1:
        return array[..., np.newaxis]
    return cast("ImageU8", cv.cvtColor(array, cv.COLOR_RGB2BGR))


def to_raster(image: npt.ArrayLike | Image.Image, settings: MatchSettings | None = None) -> Raster:
    """Return ``image`` as a ``(height, width, channels)`` integer array.

    Two-dimensional arrays are treated as single-channel rasters. Pillow images are
    converted to BGR (or grayscale when one channel is configured) to match images
    decoded by OpenCV. Arrays are never copied when already in the right layout.

    Args:
        image: NumPy array, nested sequence, or Pillow image.
        settings: Engine settings supplying the expected channel count and intensity range.

    Returns:
        Integer array of shape ``(height, width, channels)``.

    Raises:
        InvalidChannelCountError: If the channel count differs from ``settings.channel_count``.
        ValueError: If the array has the wrong rank, a non-integer dtype, or intensities
            outside ``[0, settings.max_intensity]``.
    """
    settings = settings or MatchSettings()

    if isinstance(image, Image.Image):
        array = _pil_to_array(image, settings.channel_count)
    else:
        array = np.asarray(image)

    if array.ndim == _GRAY_NDIMS:
        array = array[..., np.newaxis]
    if array.ndim != _COLOR_NDIMS:
        msg = f"Raster must be 2- or 3-dimensional (received {array.ndim} dimensions)."
        raise ValueError(msg)
    if array.size and not np.issubdtype(array.dtype, np.integer):
        msg = f"Raster intensities must be integers (received dtype {array.dtype})."
        raise ValueError(msg)

    channels = int(array.shape[2])
    if channels != settings.channel_count:
        raise InvalidChannelCountError(settings.channel_count, channels)

    if array.size:
        low, high = int(array.min()), int(array.max())
        if low < 0 or high > settings.max_intensity:
            msg = f"Raster intensities must lie in [0, {settings.max_intensity}] (received [{low}, {high}])."
            raise ValueError(msg)

    logger.debug("Normalized raster of shape %s and dtype %s.", array.shape, array.dtype)
    return cast("Raster", array)


def raster_size(shape: Sequence[int]) -> tuple[int, int]:
    """Return ``(width, height)`` for a NumPy image shape."""
    return int(shape[1]), int(shape[0])
