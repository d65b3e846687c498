"""Exception classes used across tplmatch.

These lightweight subclasses communicate invalid input encountered while
validating raster images before a match, or while decoding them from disk.
"""

from __future__ import annotations

__all__ = (
    "ImageLoadError",
    "InvalidChannelCountError",
    "InvalidImageError",
)

from typing import Final

from typing_extensions import Self

_INVALID_IMAGE_MESSAGE: Final[str] = "Invalid {role} image with shape {shape}. Width and height must be non-zero."
_INVALID_CHANNEL_COUNT_MESSAGE: Final[str] = "Expected {expected} channel(s). Instead received {received} channel(s)."
_IMAGE_LOAD_MESSAGE: Final[str] = "Couldn't load image from {path!r}."


class InvalidImageError(Exception):
    """Raised when a raster image has zero area.

    Attributes:
        role: Which input failed validation (``"haystack"`` or ``"needle"``).
        shape: Shape of the offending array.
    """

    def __init__(self: Self, role: str, shape: tuple[int, ...]) -> None:
        """Initialise the error with the offending image role and shape.

        Args:
            role: Name of the argument that failed validation.
            shape: Shape of the rejected array.
        """
        self.role: str = role
        self.shape: tuple[int, ...] = tuple(shape)
        super().__init__(_INVALID_IMAGE_MESSAGE.format(role=role, shape=self.shape))


class InvalidChannelCountError(Exception):
    """Raised when a raster's channel count differs from the configured one.

    Attributes:
        expected: Channel count required by the match settings.
        received: Channel count found on the raster.
    """

    def __init__(self: Self, expected: int, received: int) -> None:
        """Initialise the error with the expected versus received channel counts.

        Args:
            expected: Number of channels the engine was configured for.
            received: Number of channels present on the image.
        """
        self.expected: int = expected
        self.received: int = received
        super().__init__(_INVALID_CHANNEL_COUNT_MESSAGE.format(expected=expected, received=received))


class ImageLoadError(Exception):
    """Raised when an image file cannot be decoded.

    Attributes:
        path: Path that failed to load.
    """

    def __init__(self: Self, path: str) -> None:
        """Initialise the error with the path that could not be decoded."""
        self.path: str = path
        super().__init__(_IMAGE_LOAD_MESSAGE.format(path=path))
