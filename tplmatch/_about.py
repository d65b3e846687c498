"""Package metadata.

This module stores build- and release-related metadata and is intentionally
dependency-free. Values are re-exported from :mod:`tplmatch` for convenience.
"""

from __future__ import annotations

from typing import Final

__all__ = (
    "__author__",
    "__copyright__",
    "__git_sha1__",
    "__issue_tracker__",
    "__license__",
    "__maintainer__",
    "__url__",
    "__version__",
)

__author__: Final[str] = "devzach"
__maintainer__: Final[str] = "devzach"
__copyright__: Final[str] = "2024-present, devzach"
__issue_tracker__: Final[str] = "https://github.com/tplmatch/issues"
__license__: Final[str] = "MIT"
__url__: Final[str] = "https://github.com/tplmatch"
__version__: Final[str] = "1.0"
__git_sha1__: Final[str] = "HEAD"
