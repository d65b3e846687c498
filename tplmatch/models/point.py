"""This module defines the Point class used to report match locations."""

from __future__ import annotations

__all__ = ("Point",)

from typing import NamedTuple


class Point(NamedTuple):
    """A class representing a pixel position in 2D space.

    Args:
    ----
        x: The column of the point.
        y: The row of the point.
    """

    x: int
    y: int
