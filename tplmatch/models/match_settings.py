"""Engine configuration dataclass used throughout tplmatch.

The :class:`~tplmatch.models.match_settings.MatchSettings` model carries the
numeric constants the matching engine depends on so that synthetic inputs with
other channel layouts or bit depths can be matched too.
"""

from __future__ import annotations

__all__ = ("MatchSettings",)

from dataclasses import dataclass

from tplmatch.constants import CANDIDATE_CAPACITY, CHANNEL_COUNT, MAX_INTENSITY


@dataclass(frozen=True, slots=True)
class MatchSettings:
    """Persist the tunable parameters of a matching operation.

    Attributes:
        channel_count: Number of channels every raster must have. Defaults to 3.
        candidate_capacity: Maximum number of candidates kept for refinement. Defaults to 50.
        max_intensity: Largest intensity a single channel may hold. Defaults to 255.
        scan_far_edge: Also scan windows flush with the haystack's right and bottom
            edges. Defaults to ``False``, which skips the last column and row of windows.
        trust_zero_diff: Accept a zero intensity-sum difference as a perfect match without
            confirming it pixel by pixel. Defaults to ``False``.
    """

    channel_count: int = CHANNEL_COUNT
    candidate_capacity: int = CANDIDATE_CAPACITY
    max_intensity: int = MAX_INTENSITY
    scan_far_edge: bool = False
    trust_zero_diff: bool = False

    def __post_init__(self) -> None:
        """Validate the numeric fields.

        Raises:
            ValueError: If any count or the intensity range is not positive.
        """
        if self.channel_count < 1:
            msg = f"channel_count must be positive (received {self.channel_count})."
            raise ValueError(msg)
        if self.candidate_capacity < 1:
            msg = f"candidate_capacity must be positive (received {self.candidate_capacity})."
            raise ValueError(msg)
        if self.max_intensity < 1:
            msg = f"max_intensity must be positive (received {self.max_intensity})."
            raise ValueError(msg)
