"""Pixel-exact refinement of ranked candidates.

Integral-image differences only compare window totals, so distinct windows can
tie. This module compares each retained candidate with the needle pixel by
pixel (sum of absolute differences, SAD) and turns the best SAD into a
confidence score.
"""

from __future__ import annotations

__all__ = ("max_sad", "refine", "sum_of_absolute_differences")

import itertools
import logging
from typing import TYPE_CHECKING

import numpy as np

from tplmatch.models import MatchResult, MatchSettings

from .raster import raster_size

if TYPE_CHECKING:
    from tplmatch.models import Candidate

    from .ranking import CandidateList
    from .raster import Raster

logger = logging.getLogger(__name__)


def sum_of_absolute_differences(haystack: Raster, needle: Raster, x: int, y: int) -> int:
    """Return the per-channel SAD between ``needle`` and the haystack window at ``(x, y)``.

    Args:
        haystack: ``(height, width, channels)`` haystack raster.
        needle: ``(height, width, channels)`` needle raster.
        x: Column of the window's top-left corner.
        y: Row of the window's top-left corner.

    Returns:
        int: Sum over every pixel and channel of ``|haystack - needle|``.

    Raises:
        ValueError: If the window does not lie fully within the haystack.
    """
    needle_width, needle_height = raster_size(needle.shape)
    haystack_width, haystack_height = raster_size(haystack.shape)
    if x < 0 or y < 0 or x + needle_width > haystack_width or y + needle_height > haystack_height:
        msg = f"Window at ({x}, {y}) does not fit the {haystack_width}x{haystack_height} haystack."
        raise ValueError(msg)

    window = haystack[y : y + needle_height, x : x + needle_width].astype(np.int64)
    return int(np.abs(window - needle.astype(np.int64)).sum())


def max_sad(needle: Raster, settings: MatchSettings | None = None) -> int:
    """Return the largest SAD possible for ``needle``: every channel of every pixel differing maximally."""
    settings = settings or MatchSettings()
    width, height = raster_size(needle.shape)
    return width * height * settings.max_intensity * settings.channel_count


def _confidence(sad: int, worst: int) -> float:
    return min(max(1.0 - sad / worst, 0.0), 1.0)


def _exact_shortcut(
    first: Candidate, haystack: Raster, needle: Raster, settings: MatchSettings
) -> MatchResult | None:
    """Return a perfect result for a zero-``diff`` first candidate, if it really is one."""
    if first.diff != 0:
        return None
    if not settings.trust_zero_diff and sum_of_absolute_differences(haystack, needle, first.x, first.y) != 0:
        logger.debug("Candidate at (%d, %d) has zero diff but is not a pixel match.", first.x, first.y)
        return None
    return MatchResult(confidence=1.0, x=first.x, y=first.y)


def refine(
    candidates: CandidateList,
    haystack: Raster,
    needle: Raster,
    settings: MatchSettings | None = None,
) -> MatchResult:
    """Pick the best candidate by exact SAD and score it.

    A zero-``diff`` first candidate is reported straight away as a perfect match
    (confirmed pixel by pixel unless ``settings.trust_zero_diff``). Otherwise every
    candidate is compared in list order; the earliest minimum wins and the scan
    stops at the first zero SAD.

    Args:
        candidates: Ranked candidates, ascending by ``diff``.
        haystack: Haystack raster.
        needle: Needle raster.
        settings: Engine settings supplying the channel count and intensity range.

    Returns:
        MatchResult: Confidence ``1 - min_sad / max_sad`` at the best location, or
        :meth:`MatchResult.not_found` when ``candidates`` is empty.
    """
    settings = settings or MatchSettings()
    first = candidates.first()
    if first is None:
        return MatchResult.not_found()

    shortcut = _exact_shortcut(first, haystack, needle, settings)
    if shortcut is not None:
        logger.debug("Perfect match at (%d, %d); skipping brute force.", shortcut.x, shortcut.y)
        return shortcut

    best = first
    best_sad = sum_of_absolute_differences(haystack, needle, first.x, first.y)
    for candidate in itertools.islice(candidates, 1, None):
        if best_sad == 0:
            break
        sad = sum_of_absolute_differences(haystack, needle, candidate.x, candidate.y)
        if sad < best_sad:
            best, best_sad = candidate, sad

    worst = max_sad(needle, settings)
    logger.debug("Best SAD %d of %d at (%d, %d).", best_sad, worst, best.x, best.y)
    return MatchResult(confidence=_confidence(best_sad, worst), x=best.x, y=best.y)
