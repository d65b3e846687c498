"""Candidate window positions produced by the integral-image ranking pass."""

from __future__ import annotations

__all__ = ("Candidate",)

from typing import NamedTuple

from .point import Point


class Candidate(NamedTuple):
    """A haystack window ranked by its intensity-sum difference from the needle.

    Attributes:
        diff: Absolute difference between the window sum and the needle total.
        x: Column of the window's top-left corner.
        y: Row of the window's top-left corner.
        window_sum: Sum of every channel of every pixel inside the window.
    """

    diff: int
    x: int
    y: int
    window_sum: int

    @property
    def location(self) -> Point:
        """Top-left corner of the window."""
        return Point(self.x, self.y)
