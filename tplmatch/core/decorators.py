"""Validation decorators for haystack/needle raster arguments.

These helpers guard functions that take a haystack and a needle image,
normalizing both and raising domain-specific exceptions early when either is
empty or has the wrong channel layout.
"""

from __future__ import annotations

__all__ = ("check_valid_images",)

import functools
from typing import TYPE_CHECKING, Concatenate, Final, ParamSpec, TypeVar, cast

import numpy as np
from PIL import Image

from tplmatch.models import InvalidImageError, MatchSettings

from .raster import Raster, to_raster

if TYPE_CHECKING:
    from collections.abc import Callable

    import numpy.typing as npt

    ImageInput = npt.ArrayLike | Image.Image

P = ParamSpec("P")
R = TypeVar("R")

_SPATIAL_NDIMS: Final[int] = 2


def _image_shape(image: ImageInput) -> tuple[int, ...]:
    """Return the array shape of ``image`` without converting it to a raster."""
    if isinstance(image, Image.Image):
        width, height = image.size
        return (height, width)
    return tuple(int(n) for n in np.shape(image))


def _validate_image(image: ImageInput, role: str, settings: MatchSettings) -> Raster:
    """Return ``image`` as a non-empty raster or raise ``InvalidImageError``.

    Args:
        image: Caller-supplied image.
        role: Argument name used in the error message.
        settings: Settings supplying the channel count and intensity range.

    Returns:
        Raster: Normalized ``(height, width, channels)`` array.

    Raises:
        InvalidImageError: If the image has zero width or height.
        InvalidChannelCountError: If the channel count does not match ``settings``.
    """
    if image is None:
        raise InvalidImageError(role, (0, 0))
    shape = _image_shape(image)
    # Width or height of zero, including an empty sequence.
    if 0 in shape[:_SPATIAL_NDIMS]:
        raise InvalidImageError(role, shape)
    return to_raster(image, settings)


def check_valid_images(
    func: Callable[Concatenate[Raster, Raster, P], R],
) -> Callable[Concatenate[ImageInput, ImageInput, P], R]:
    """Validate and normalize the leading ``haystack`` and ``needle`` arguments.

    The wrapped callable receives rasters in ``(height, width, channels)`` layout.
    A ``settings`` keyword, when given, decides the expected channel count.

    Args:
        func: Function whose first two positional parameters are the haystack and needle.

    Returns:
        Callable[..., R]: Wrapped callable that validates both images first.
    """

    @functools.wraps(func)
    def wrapper(haystack: ImageInput, needle: ImageInput, *args: P.args, **kwargs: P.kwargs) -> R:
        settings = cast("MatchSettings | None", kwargs.get("settings")) or MatchSettings()
        haystack_raster = _validate_image(haystack, "haystack", settings)
        needle_raster = _validate_image(needle, "needle", settings)
        return func(haystack_raster, needle_raster, *args, **kwargs)

    return cast("Callable[Concatenate[ImageInput, ImageInput, P], R]", wrapper)
