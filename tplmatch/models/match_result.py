"""Outcome of a single matching operation."""

from __future__ import annotations

__all__ = ("MatchResult",)

from dataclasses import dataclass

from typing_extensions import Self

from tplmatch.constants import NOT_FOUND

from .point import Point


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Confidence and location of the best needle match.

    A result whose coordinates equal :data:`~tplmatch.constants.NOT_FOUND` means no
    window could be scanned (the needle does not fit inside the haystack). Such a
    result always carries a confidence of ``0.0``; callers must check :attr:`found`
    before interpreting the coordinates.

    Attributes:
        confidence: Similarity in ``[0, 1]``; ``1.0`` is a pixel-exact match.
        x: Column of the matched window, or ``NOT_FOUND``.
        y: Row of the matched window, or ``NOT_FOUND``.
    """

    confidence: float
    x: int = NOT_FOUND
    y: int = NOT_FOUND

    @classmethod
    def not_found(cls: type[Self]) -> Self:
        """Return the negative result reported when no candidate exists."""
        return cls(confidence=0.0, x=NOT_FOUND, y=NOT_FOUND)

    @property
    def found(self: Self) -> bool:
        """Whether the result carries a usable location."""
        return self.x != NOT_FOUND and self.y != NOT_FOUND

    @property
    def location(self: Self) -> Point | None:
        """Top-left corner of the matched window, or ``None`` when not found."""
        if not self.found:
            return None
        return Point(self.x, self.y)
