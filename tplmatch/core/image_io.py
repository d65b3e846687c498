"""Image loading and result presentation.

Thin OpenCV wrappers around the matching engine: decoding images from disk,
overlaying the matched window on a copy of the haystack, and displaying or
saving that overlay. Images are in OpenCV's BGR channel order.
"""

from __future__ import annotations

__all__ = ("draw_match", "load_image", "save_match", "show_match")

import logging
from typing import TYPE_CHECKING, TypeAlias, cast

import cv2 as cv
import numpy as np
import numpy.typing as npt

from tplmatch.constants import OVERLAY_COLOR, OVERLAY_THICKNESS, RESULT_WINDOW_TITLE
from tplmatch.models import ImageLoadError

from .raster import raster_size

if TYPE_CHECKING:
    from os import PathLike

    from tplmatch.models import MatchResult

    from .raster import Raster

logger = logging.getLogger(__name__)

ImageU8: TypeAlias = npt.NDArray[np.uint8]


def load_image(path: str | PathLike[str]) -> ImageU8:
    """Decode the image at ``path`` as a three-channel BGR array.

    Args:
        path: File to decode.

    Returns:
        ``(height, width, 3)`` ``uint8`` array.

    Raises:
        ImageLoadError: If OpenCV cannot read or decode the file, or it has no pixels.
    """
    image = cast("ImageU8 | None", cv.imread(str(path), cv.IMREAD_COLOR))
    if image is None or image.size == 0:
        raise ImageLoadError(str(path))
    logger.debug("Loaded %s with shape %s.", path, image.shape)
    return image


def draw_match(haystack: Raster, needle: Raster, result: MatchResult) -> ImageU8:
    """Return a copy of ``haystack`` with the matched window outlined.

    When ``result`` is not found the copy is returned untouched.

    Args:
        haystack: Haystack image the result refers to.
        needle: Needle image, used for the window size.
        result: Outcome of :func:`~tplmatch.core.matcher.match`.

    Returns:
        Annotated ``uint8`` copy of the haystack.
    """
    canvas = np.ascontiguousarray(haystack, dtype=np.uint8).copy()
    if not result.found:
        return canvas

    width, height = raster_size(needle.shape)
    top_left = (result.x, result.y)
    bottom_right = (result.x + width, result.y + height)
    cv.rectangle(canvas, top_left, bottom_right, OVERLAY_COLOR, OVERLAY_THICKNESS, cv.LINE_8, 0)
    logger.debug("Drew match rectangle from %s to %s.", top_left, bottom_right)
    return canvas


def show_match(image: ImageU8, title: str = RESULT_WINDOW_TITLE) -> None:
    """Display ``image`` in a window and block until a key is pressed."""
    cv.imshow(title, image)
    cv.waitKey(0)
    cv.destroyAllWindows()


def save_match(image: ImageU8, path: str | PathLike[str]) -> None:
    """Write ``image`` to ``path``.

    Raises:
        OSError: If OpenCV reports the write failed.
    """
    if not cv.imwrite(str(path), image):
        msg = f"Couldn't write image to {str(path)!r}."
        raise OSError(msg)
    logger.debug("Saved annotated image to %s.", path)
