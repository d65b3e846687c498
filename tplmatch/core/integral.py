"""Integral images (summed-area tables) and constant-time window sums.

An :class:`IntegralImage` stores, for every pixel, the sum of all channel
intensities inside the rectangle spanning the image origin and that pixel
(inclusive). Window sums are then four lookups away:

``I(x, y) + I(x + w, y + h) - I(x, y + h) - I(x + w, y)``

where ``I(a, b)`` is the sum over ``[0, a) x [0, b)`` and is zero whenever
``a == 0`` or ``b == 0``.
"""

from __future__ import annotations

__all__ = ("IntegralImage", "build_integral_image")

import logging
from dataclasses import dataclass, field
from typing import TypeAlias, cast

import numpy as np
import numpy.typing as npt
from typing_extensions import Self

from tplmatch.models import InvalidImageError

from .raster import Raster, raster_size

logger = logging.getLogger(__name__)

SumTable: TypeAlias = npt.NDArray[np.int64]


@dataclass(frozen=True, slots=True, eq=False)
class IntegralImage:
    """Immutable summed-area table of a raster image.

    Attributes:
        cells: ``(height, width)`` table; ``cells[y, x]`` is the channel-summed
            intensity of the rectangle ``[0, x] x [0, y]``.
    """

    cells: SumTable
    _padded: SumTable = field(init=False, repr=False, compare=False)

    def __post_init__(self: Self) -> None:
        """Freeze the table and derive the zero-padded lookup table."""
        cells = np.array(self.cells, dtype=np.int64)
        cells.setflags(write=False)
        padded = np.pad(cells, ((1, 0), (1, 0)), mode="constant")
        padded.setflags(write=False)
        object.__setattr__(self, "cells", cells)
        object.__setattr__(self, "_padded", padded)

    @property
    def width(self: Self) -> int:
        """Number of columns."""
        return int(self.cells.shape[1])

    @property
    def height(self: Self) -> int:
        """Number of rows."""
        return int(self.cells.shape[0])

    @property
    def total(self: Self) -> int:
        """Sum of every channel of every pixel (the bottom-right cell)."""
        return int(self.cells[-1, -1])

    def lookup(self: Self, a: int, b: int) -> int:
        """Return ``I(a, b)``, the sum over columns ``[0, a)`` and rows ``[0, b)``.

        Args:
            a: Exclusive column bound in ``[0, width]``.
            b: Exclusive row bound in ``[0, height]``.

        Returns:
            int: The rectangle sum; ``0`` when ``a`` or ``b`` is zero.
        """
        return int(self._padded[b, a])

    def window_sum(self: Self, x: int, y: int, width: int, height: int) -> int:
        """Return the intensity sum of the window ``[x, x + width) x [y, y + height)``.

        Args:
            x: Column of the window's top-left corner.
            y: Row of the window's top-left corner.
            width: Window width.
            height: Window height.

        Returns:
            int: Channel-summed intensity inside the window.

        Raises:
            ValueError: If the window does not lie fully within the image.
        """
        if x < 0 or y < 0 or width <= 0 or height <= 0 or x + width > self.width or y + height > self.height:
            msg = f"Window ({x}, {y}, {width}, {height}) lies outside the {self.width}x{self.height} image."
            raise ValueError(msg)
        return (
            self.lookup(x, y)
            + self.lookup(x + width, y + height)
            - self.lookup(x, y + height)
            - self.lookup(x + width, y)
        )

    def window_sums(self: Self, width: int, height: int) -> SumTable:
        """Return the sums of every ``width`` x ``height`` window that fits in the image.

        Element ``[y, x]`` of the result equals ``window_sum(x, y, width, height)``.
        The result is empty along an axis where the window does not fit.

        Args:
            width: Window width.
            height: Window height.

        Returns:
            Array of shape ``(height - h + 1, width - w + 1)`` (clamped at zero).
        """
        rows = max(self.height - height + 1, 0)
        cols = max(self.width - width + 1, 0)
        table = self._padded
        sums = (
            table[:rows, :cols]
            + table[height : height + rows, width : width + cols]
            - table[height : height + rows, :cols]
            - table[:rows, width : width + cols]
        )
        return cast("SumTable", sums)

    @classmethod
    def from_raster(cls: type[Self], raster: Raster) -> Self:
        """Build the integral image of ``raster``; see :func:`build_integral_image`."""
        return cls(cells=_cumulative_sums(raster))


def _cumulative_sums(raster: Raster) -> SumTable:
    width, height = raster_size(raster.shape)
    if width == 0 or height == 0:
        raise InvalidImageError("source", raster.shape)

    # Channel totals per pixel, then the row-prefix sum, then accumulation down each column.
    pixel_sums = raster.sum(axis=2, dtype=np.int64)
    row_prefix = np.cumsum(pixel_sums, axis=1, dtype=np.int64)
    return cast("SumTable", np.cumsum(row_prefix, axis=0, dtype=np.int64))


def build_integral_image(raster: Raster) -> IntegralImage:
    """Build the summed-area table of a ``(height, width, channels)`` raster.

    Args:
        raster: Non-empty integer raster.

    Returns:
        IntegralImage: Table of the same width and height as ``raster``.

    Raises:
        InvalidImageError: If ``raster`` has zero width or height.
    """
    integral = IntegralImage.from_raster(raster)
    logger.debug("Built %dx%d integral image with total %d.", integral.width, integral.height, integral.total)
    return integral
