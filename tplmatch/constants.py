"""Shared constants.

The :mod:`tplmatch.constants` module centralizes the defaults used by the
matching engine (channel layout, candidate capacity, intensity range) and by the
result presenter.
"""

from __future__ import annotations

from typing import Final

__all__ = (
    "CANDIDATE_CAPACITY",
    "CHANNEL_COUNT",
    "MAX_INTENSITY",
    "NOT_FOUND",
    "OVERLAY_COLOR",
    "OVERLAY_THICKNESS",
    "RESULT_WINDOW_TITLE",
)

# Engine defaults
CHANNEL_COUNT: Final[int] = 3
CANDIDATE_CAPACITY: Final[int] = 50
MAX_INTENSITY: Final[int] = 255

# Coordinate reported when no window could be scanned
NOT_FOUND: Final[int] = -1

# Result presenter
OVERLAY_COLOR: Final[tuple[int, int, int]] = (0, 0, 0)
OVERLAY_THICKNESS: Final[int] = 2
RESULT_WINDOW_TITLE: Final[str] = "Result"
