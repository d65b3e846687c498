"""Candidate ranking over integral-image window sums.

Every scanned haystack window is scored by how far its channel-summed intensity
lies from the needle's total. The best windows are kept in a
:class:`CandidateList` for pixel-exact refinement.
"""

from __future__ import annotations

__all__ = ("CandidateList", "rank_candidates", "scan_positions")

import bisect
import logging
from typing import TYPE_CHECKING, Final

import numpy as np
from typing_extensions import Self

from tplmatch.models import Candidate, MatchSettings

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from .integral import IntegralImage

logger = logging.getLogger(__name__)

_STABLE_SORT: Final[str] = "stable"


class CandidateList:
    """Fixed-capacity list of candidates kept in ascending ``diff`` order.

    Insertion places a candidate after every entry with an equal or smaller
    ``diff``, so among equal differences the first one inserted stays first.
    When the list grows past its capacity the entry with the largest ``diff``
    (the tail) is evicted.
    """

    __slots__ = ("_capacity", "_diffs", "_items")

    def __init__(self: Self, capacity: int, candidates: Iterable[Candidate] = ()) -> None:
        """Create an empty list and insert ``candidates`` in order.

        Args:
            capacity: Maximum number of candidates retained.
            candidates: Initial candidates, inserted one by one.

        Raises:
            ValueError: If ``capacity`` is not positive.
        """
        if capacity < 1:
            msg = f"capacity must be positive (received {capacity})."
            raise ValueError(msg)
        self._capacity = capacity
        self._items: list[Candidate] = []
        self._diffs: list[int] = []
        for candidate in candidates:
            self.insert(candidate)

    @property
    def capacity(self: Self) -> int:
        """Maximum number of candidates retained."""
        return self._capacity

    def insert(self: Self, candidate: Candidate) -> bool:
        """Insert ``candidate`` keeping ascending ``diff`` order.

        Args:
            candidate: Candidate to insert.

        Returns:
            bool: ``True`` if the candidate is still in the list after eviction.
        """
        index = bisect.bisect_right(self._diffs, candidate.diff)
        if index >= self._capacity:
            return False
        self._diffs.insert(index, candidate.diff)
        self._items.insert(index, candidate)
        if len(self._items) > self._capacity:
            self._diffs.pop()
            self._items.pop()
        return True

    def first(self: Self) -> Candidate | None:
        """Return the lowest-``diff`` candidate, or ``None`` when empty."""
        return self._items[0] if self._items else None

    def __len__(self: Self) -> int:
        return len(self._items)

    def __iter__(self: Self) -> Iterator[Candidate]:
        return iter(self._items)

    def __getitem__(self: Self, index: int) -> Candidate:
        return self._items[index]

    def __bool__(self: Self) -> bool:
        return bool(self._items)

    def __repr__(self: Self) -> str:
        return f"CandidateList(capacity={self._capacity}, candidates={self._items!r})"


def scan_positions(
    haystack_size: tuple[int, int],
    needle_size: tuple[int, int],
    settings: MatchSettings | None = None,
) -> tuple[int, int]:
    """Return how many window columns and rows are scanned.

    By default windows flush with the haystack's right or bottom edge are skipped,
    so the scan covers ``0 <= x < W - w`` and ``0 <= y < H - h``. With
    ``settings.scan_far_edge`` the bounds become inclusive.

    Args:
        haystack_size: Haystack ``(width, height)``.
        needle_size: Needle ``(width, height)``.
        settings: Engine settings.

    Returns:
        ``(columns, rows)``; either is zero when the needle does not fit.
    """
    settings = settings or MatchSettings()
    extra = 1 if settings.scan_far_edge else 0
    columns = max(haystack_size[0] - needle_size[0] + extra, 0)
    rows = max(haystack_size[1] - needle_size[1] + extra, 0)
    return columns, rows


def rank_candidates(
    haystack: IntegralImage,
    needle: IntegralImage,
    settings: MatchSettings | None = None,
) -> CandidateList:
    """Scan every window position and keep the best candidates.

    Positions are visited in row-major order (``y`` outer, ``x`` inner). The
    returned list is identical to inserting every scanned position into a
    :class:`CandidateList` in that order; only the stable top ``capacity``
    positions are actually inserted.

    Args:
        haystack: Integral image of the haystack.
        needle: Integral image of the needle.
        settings: Engine settings supplying the capacity and scan bounds.

    Returns:
        CandidateList: Up to ``settings.candidate_capacity`` candidates, ascending by ``diff``.
    """
    settings = settings or MatchSettings()
    candidates = CandidateList(settings.candidate_capacity)

    columns, rows = scan_positions(
        (haystack.width, haystack.height), (needle.width, needle.height), settings
    )
    if columns == 0 or rows == 0:
        logger.debug(
            "Needle %dx%d does not fit the %dx%d haystack scan range.",
            needle.width,
            needle.height,
            haystack.width,
            haystack.height,
        )
        return candidates

    needle_total = needle.total
    window_sums = haystack.window_sums(needle.width, needle.height)[:rows, :columns]
    diffs = np.abs(window_sums - needle_total).ravel()

    # Flattened indices are in scan order, so a stable sort keeps first-found ties first.
    best = np.argsort(diffs, kind=_STABLE_SORT)[: settings.candidate_capacity]
    flat_sums = window_sums.ravel()
    for index in np.sort(best):
        y, x = divmod(int(index), columns)
        candidates.insert(Candidate(diff=int(diffs[index]), x=x, y=y, window_sum=int(flat_sums[index])))

    logger.debug(
        "Scanned %d window position(s); kept %d candidate(s), best diff %d.",
        diffs.size,
        len(candidates),
        candidates[0].diff,
    )
    return candidates
