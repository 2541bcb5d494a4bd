"""
Daily Skill Scheduler.

Picks a fixed-size subset of the configured skills for today, biased toward
skills that are overdue for repetition.

Weighting:
- Skills not seen anywhere in the last `repeat_threshold` days get the
  maximum weight (100) and are effectively guaranteed a slot
- Skills seen in the window are weighted by the day-ordinal of the window,
  `int(100 / repeat_threshold) * d`, where d is the 0-based index of the
  day (oldest first) from the moment the skill was seen onward

The final draw is weighted sampling without replacement.
"""

from __future__ import annotations

import heapq
import random
from collections.abc import Hashable, Sequence
from datetime import date, datetime
from typing import TypeVar

from loguru import logger

from .errors import MissingSkillsError
from .history import HistoryStore
from .models import PlannerConfiguration, Skill

T = TypeVar("T", bound=Hashable)

MAX_WEIGHT = 100


def weighted_sample(
    rng: random.Random,
    items: Sequence[T],
    weights: Sequence[float],
    k: int,
) -> list[T]:
    """
    Draw up to k distinct items with probability proportional to weight.

    Uses Efraimidis-Spirakis keys (u ** (1 / w)). Zero-weight items get a
    key of 0 and are only drawn once every positive-weight item is taken.

    Args:
        rng: Random source
        items: Candidates
        weights: Non-negative weight per candidate
        k: Number of items to draw (truncated to len(items))

    Returns:
        Drawn items, highest key first
    """
    if len(items) != len(weights):
        raise ValueError("items and weights must be the same length")

    keyed = []
    for index, (item, weight) in enumerate(zip(items, weights)):
        if weight < 0:
            raise ValueError(f"Negative weight for {item!r}")
        key = rng.random() ** (1.0 / weight) if weight > 0 else 0.0
        # Second random component breaks ties among zero-weight items
        keyed.append((key, rng.random(), index))

    top = heapq.nlargest(min(k, len(items)), keyed)
    return [items[index] for _, _, index in top]


class Scheduler:
    """
    Computes and caches today's schedule.

    The cached schedule holds skill names and is resolved against the
    configuration on read. It is reused for the calendar day it was drawn
    for until forced, cleared, or the day changes.
    """

    def __init__(
        self,
        config: PlannerConfiguration,
        history: HistoryStore,
        rng: random.Random | None = None,
    ):
        """
        Initialize the scheduler.

        Args:
            config: Planner configuration (skills, threshold, count)
            history: Practice history
            rng: Random source (creates an unseeded one if None)
        """
        self.config = config
        self.history = history
        self.rng = rng or random.Random()
        self._todays_schedule: list[str] | None = None
        self._scheduled_for: date | None = None

    @property
    def todays_schedule(self) -> list[str] | None:
        """Cached schedule names, or None when nothing is scheduled."""
        if self._todays_schedule is None:
            return None
        return list(self._todays_schedule)

    @property
    def scheduled_for(self) -> date | None:
        return self._scheduled_for

    def has_schedule_for(self, now: datetime) -> bool:
        return self._todays_schedule is not None and self._scheduled_for == now.date()

    def restore(self, names: Sequence[str], scheduled_for: date) -> None:
        """Reinstate a previously drawn schedule, dropping unknown skills."""
        kept = [name for name in names if self.config.has_skill(name)]
        if len(kept) != len(names):
            logger.warning("Restored schedule referenced removed skills; dropping them")
        if not kept:
            self.clear()
            return
        self._todays_schedule = kept
        self._scheduled_for = scheduled_for

    def clear(self) -> None:
        """Forget the cached schedule so the next request recomputes it."""
        self._todays_schedule = None
        self._scheduled_for = None

    def weights(self, now: datetime) -> dict[str, int]:
        """
        Selection weight per skill name.

        Raises:
            MissingSkillsError: If no skills are configured
            InvalidLookbackError: If the lookback window cannot be computed
        """
        if not self.config.skills:
            raise MissingSkillsError()

        past_history = self.history.lookback(self.config.repeat_threshold, now)
        prob_bandwidth = int(MAX_WEIGHT / self.config.repeat_threshold)

        weights: dict[str, int] = {}
        for skill in self.config.skills:
            seen = False
            for d, day_skills in enumerate(past_history.values()):
                if skill.name in day_skills:
                    seen = True
                if seen:
                    weights[skill.name] = prob_bandwidth * d

            if not seen:
                weights[skill.name] = MAX_WEIGHT

        return weights

    def schedule(self, now: datetime, force: bool = False) -> list[Skill]:
        """
        Get today's schedule, computing it if needed.

        Args:
            now: Current time
            force: Redraw even if a schedule exists for today

        Returns:
            Scheduled skills in practice order
        """
        if self.has_schedule_for(now) and not force:
            return self._resolve(self._todays_schedule or [])

        weights = self.weights(now)
        names = list(weights)
        drawn = weighted_sample(
            self.rng,
            names,
            [weights[name] for name in names],
            self.config.skills_per_day,
        )

        if self.config.skills_per_day > len(names):
            logger.warning(
                f"{self.config.skills_per_day} skills per day requested but only "
                f"{len(names)} configured; scheduling {len(drawn)}"
            )

        self._todays_schedule = drawn
        self._scheduled_for = now.date()
        logger.info(f"Scheduled {len(drawn)} skills for {now.date()}: {', '.join(drawn)}")
        logger.debug(f"Schedule weights: {weights}")
        return self._resolve(drawn)

    def _resolve(self, names: Sequence[str]) -> list[Skill]:
        return [self.config.get_skill(name) for name in names]
