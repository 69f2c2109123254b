"""
Aggregation Engine - Weekly Totals, Leaderboard and Matrix
==========================================================

Read-only views over the star store for the Monday-to-Sunday week that
contains a reference instant. Reads tolerate skew: a count may change
between two reads of the same render.
"""

import logging
from dataclasses import dataclass, field, asdict
from datetime import tzinfo
from typing import Dict, List

from .star_store import StarStore
from .calendar import Reference, week_day_keys

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LeaderboardEntry:
    """One ranked user in the weekly leaderboard."""
    user_id: str
    display_label: str
    total: int


@dataclass(frozen=True)
class MatrixRow:
    """A user's star counts, positionally aligned to WeeklyMatrix.day_keys."""
    user_id: str
    display_label: str
    counts: List[int]
    total: int


@dataclass(frozen=True)
class WeeklyMatrix:
    """Every known user's counts for each day of one week."""
    day_keys: List[str]
    rows: List[MatrixRow] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


class WeeklyAggregator:
    """
    Computes weekly views from a StarStore.

    USAGE:
        aggregator = WeeklyAggregator(store, get_timezone("Europe/London"))
        aggregator.weekly_total("U123", now)
        aggregator.weekly_leaderboard(now)
    """

    def __init__(self, store: StarStore, tz: tzinfo):
        self._store = store
        self._tz = tz

    def week_day_keys(self, reference: Reference) -> List[str]:
        return week_day_keys(reference, self._tz)

    def weekly_total(self, user_id: str, reference: Reference) -> int:
        """Sum of the user's stars over the week containing reference. 0 if none."""
        counts = self._store.get_user_day_counts(user_id)
        return _sum_week(counts, self.week_day_keys(reference))

    def weekly_leaderboard(self, reference: Reference) -> List[LeaderboardEntry]:
        """
        Users with at least one star this week, most stars first.

        Ties keep the store's user order (sorted() is stable).
        """
        day_keys = self.week_day_keys(reference)
        names = self._store.get_display_names()

        entries = []
        for user_id in self._store.list_users():
            total = _sum_week(self._store.get_user_day_counts(user_id), day_keys)
            if total > 0:
                entries.append(LeaderboardEntry(user_id, names.get(user_id) or user_id, total))

        return sorted(entries, key=lambda e: e.total, reverse=True)

    def weekly_matrix(self, reference: Reference) -> WeeklyMatrix:
        """One row per known user, including users with an empty week."""
        day_keys = self.week_day_keys(reference)
        names = self._store.get_display_names()

        rows = []
        for user_id in self._store.list_users():
            day_counts = self._store.get_user_day_counts(user_id)
            counts = [day_counts.get(key, 0) for key in day_keys]
            rows.append(MatrixRow(
                user_id=user_id,
                display_label=names.get(user_id) or user_id,
                counts=counts,
                total=sum(counts),
            ))

        logger.debug(f"Weekly matrix for {day_keys[0]}: {len(rows)} users")
        return WeeklyMatrix(day_keys=day_keys, rows=rows)


def _sum_week(counts: Dict[str, int], day_keys: List[str]) -> int:
    return sum(counts.get(key, 0) for key in day_keys)
