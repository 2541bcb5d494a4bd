"""
Practice History Store.

Append-only, time-ordered record of completed daily schedules.

Answers the two questions the scheduler and the shell need:
- Which skills were practiced on which of the last N days
- How many consecutive days have been practiced (the streak)
"""

from __future__ import annotations

import bisect
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from loguru import logger

from .errors import InvalidLookbackError
from .models import Skill


@dataclass(frozen=True)
class HistoryEntry:
    """One completed practice session."""

    timestamp: datetime
    skills: tuple[str, ...]

    @property
    def day(self) -> date:
        return self.timestamp.date()


class HistoryStore:
    """
    In-memory practice history.

    Entries stay sorted by timestamp. Recording never replaces an existing
    entry, even one with an identical timestamp.
    """

    def __init__(self, entries: Iterable[HistoryEntry] | None = None):
        self._entries: list[HistoryEntry] = sorted(entries or [], key=lambda e: e.timestamp)

    def __len__(self) -> int:
        return len(self._entries)

    def entries(self) -> Iterator[HistoryEntry]:
        """Iterate entries oldest first."""
        return iter(self._entries)

    # =========================================================================
    # Mutation
    # =========================================================================

    def record(self, timestamp: datetime, skills: Iterable[Skill | str]) -> HistoryEntry:
        """
        Append a completed schedule.

        Args:
            timestamp: The moment the daily session completed
            skills: Skills (or skill names) practiced in that session

        Returns:
            The stored HistoryEntry
        """
        names = tuple(s.name if isinstance(s, Skill) else s for s in skills)
        entry = HistoryEntry(timestamp=timestamp, skills=names)
        # insort_right keeps earlier entries with the same timestamp first
        bisect.insort_right(self._entries, entry, key=lambda e: e.timestamp)
        logger.info(f"Recorded practice of {len(names)} skills at {timestamp.isoformat()}")
        return entry

    def reset(self) -> None:
        """Clear all entries. Not recoverable."""
        count = len(self._entries)
        self._entries.clear()
        logger.info(f"History reset ({count} entries removed)")

    # =========================================================================
    # Queries
    # =========================================================================

    def lookback(self, n_days: int, as_of: datetime) -> dict[date, set[str]]:
        """
        Skills practiced per calendar day within the trailing window.

        The window is half-open: (as_of - n_days, as_of]. Entries are scanned
        newest first and the scan stops at the first entry at or before the
        lower bound.

        Args:
            n_days: Window length in days
            as_of: End of the window (inclusive)

        Returns:
            Mapping of day -> distinct skill names, ordered oldest day first

        Raises:
            InvalidLookbackError: If the window start cannot be computed
        """
        if n_days < 0:
            raise InvalidLookbackError(n_days)
        try:
            lower_bound = as_of - timedelta(days=n_days)
        except OverflowError as exc:
            raise InvalidLookbackError(n_days) from exc

        newest_first: dict[date, set[str]] = {}
        for entry in reversed(self._entries):
            if entry.timestamp > as_of:
                continue
            if entry.timestamp <= lower_bound:
                break
            newest_first.setdefault(entry.day, set()).update(entry.skills)

        logger.debug(f"Lookback {n_days}d as of {as_of.isoformat()}: {len(newest_first)} days with practice")
        return dict(reversed(newest_first.items()))

    def distinct_days(self) -> int:
        """Count of distinct calendar days with at least one entry."""
        return len({entry.day for entry in self._entries})

    def streak(self, as_of: datetime) -> int:
        """
        Consecutive practiced days ending at as_of's day.

        Today counts when practiced, but a missing entry for today does not
        break the streak since today's session may still be pending.
        """
        today = as_of.date()
        days: list[date] = []
        for entry in reversed(self._entries):
            if entry.day > today:
                continue
            if not days or days[-1] != entry.day:
                days.append(entry.day)

        if not days:
            return 0

        expected = today if days[0] == today else today - timedelta(days=1)
        streak = 0
        for day in days:
            if day != expected:
                break
            streak += 1
            expected -= timedelta(days=1)
        return streak

    def last_practiced(self, skill_name: str) -> datetime | None:
        """Timestamp of the most recent entry containing the skill."""
        for entry in reversed(self._entries):
            if skill_name in entry.skills:
                return entry.timestamp
        return None
