"""Two-stage needle-in-haystack matching.

:func:`match` builds integral images for both rasters, ranks every window by
its intensity-sum difference from the needle, and refines the retained
candidates pixel by pixel. The call is synchronous and keeps no state between
invocations; identical inputs always produce identical results.
"""

from __future__ import annotations

__all__ = ("match",)

import logging
from typing import TYPE_CHECKING

from tplmatch.models import MatchResult, MatchSettings

from .decorators import check_valid_images
from .integral import build_integral_image
from .ranking import rank_candidates
from .refinement import refine

if TYPE_CHECKING:
    from .raster import Raster

logger = logging.getLogger(__name__)


@check_valid_images
def match(haystack: Raster, needle: Raster, *, settings: MatchSettings | None = None) -> MatchResult:
    """Locate ``needle`` inside ``haystack``.

    Args:
        haystack: Image searched within, as a ``(height, width, channels)`` array or Pillow image.
        needle: Image searched for, in the same layout.
        settings: Engine settings; defaults to three 8-bit channels and 50 candidates.

    Returns:
        MatchResult: Confidence in ``[0, 1]`` and the best location, or
        :meth:`MatchResult.not_found` when the needle does not fit inside the haystack.

    Raises:
        InvalidImageError: If either image has zero width or height.
        InvalidChannelCountError: If either image's channel count differs from ``settings``.
        ValueError: If an intensity lies outside ``[0, settings.max_intensity]``.
    """
    settings = settings or MatchSettings()

    logger.debug("Scanning %s haystack for %s needle.", haystack.shape, needle.shape)
    haystack_integral = build_integral_image(haystack)
    needle_integral = build_integral_image(needle)
    candidates = rank_candidates(haystack_integral, needle_integral, settings)

    if not candidates:
        logger.debug("Done: no candidate windows.")
        return MatchResult.not_found()

    logger.debug("Refining %d candidate(s).", len(candidates))
    result = refine(candidates, haystack, needle, settings)
    logger.debug("Done: confidence %.6f at (%d, %d).", result.confidence, result.x, result.y)
    return result
