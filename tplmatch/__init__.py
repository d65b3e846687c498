"""Needle-in-haystack image matching with integral-image pruning.

The package locates a small reference image inside a larger one and reports a
confidence score in ``[0, 1]`` together with the best-match location. It
re-exports the matching entry point, its settings and result models, and
project metadata.
"""

from __future__ import annotations

from ._about import (
    __author__,
    __copyright__,
    __git_sha1__,
    __issue_tracker__,
    __license__,
    __maintainer__,
    __url__,
    __version__,
)
from .core import match
from .models import InvalidChannelCountError, InvalidImageError, MatchResult, MatchSettings

__all__ = (
    "InvalidChannelCountError",
    "InvalidImageError",
    "MatchResult",
    "MatchSettings",
    "__author__",
    "__copyright__",
    "__git_sha1__",
    "__issue_tracker__",
    "__license__",
    "__maintainer__",
    "__url__",
    "__version__",
    "match",
)
