"""Data structures and domain exceptions used by tplmatch.

This package centralises small, shared models (match settings, candidates and
results) and project-specific exception types that are raised throughout the
codebase.
"""

from __future__ import annotations

__all__ = (
    "Candidate",
    "ImageLoadError",
    "InvalidChannelCountError",
    "InvalidImageError",
    "MatchResult",
    "MatchSettings",
    "Point",
)

from .candidate import Candidate
from .exceptions import ImageLoadError, InvalidChannelCountError, InvalidImageError
from .match_result import MatchResult
from .match_settings import MatchSettings
from .point import Point
