"""
Practice Planner facade.

Owns the configuration, history, scheduler and practice session, and
applies configuration edits with the guards the shell relies on (no shuffle
or skill removal while practicing).
"""

from __future__ import annotations

import dataclasses
import random
from datetime import date, datetime, timedelta

from loguru import logger

from .errors import SessionAlreadyActiveError, SessionStateError
from .history import HistoryStore
from .models import PlannerConfiguration, Skill
from .scheduler import Scheduler
from .session import PracticeSession, SkillCompletedSink
from .storage import PlannerStore


class PracticePlanner:
    """Entry point to the planning core for a shell or test harness."""

    def __init__(
        self,
        config: PlannerConfiguration,
        history: HistoryStore | None = None,
        rng: random.Random | None = None,
        on_skill_complete: SkillCompletedSink | None = None,
    ):
        self.config = config
        self.history = history if history is not None else HistoryStore()
        self.scheduler = Scheduler(self.config, self.history, rng)
        self.session = PracticeSession(self.config, self.history, self.scheduler, on_skill_complete)

    @classmethod
    def from_store(
        cls,
        store: PlannerStore,
        default_config: PlannerConfiguration,
        now: datetime,
        rng: random.Random | None = None,
        on_skill_complete: SkillCompletedSink | None = None,
    ) -> PracticePlanner:
        """
        Load a planner from disk.

        Args:
            store: Persistence adapter
            default_config: Used when no valid configuration is saved
            now: Current time (a saved schedule from another day is dropped)
            rng: Random source for the schedule draw
            on_skill_complete: Optional sink for finished skills
        """
        config = store.load_config(lambda: default_config)
        planner = cls(config, store.load_history(), rng, on_skill_complete)

        today = store.load_today()
        if today is not None and today.scheduled_for == now.date():
            planner.scheduler.restore(today.skills, today.scheduled_for)
        logger.info(
            f"Loaded {len(config.skills)} skills and {len(planner.history)} history entries "
            f"from {store.data_dir}"
        )
        return planner

    def save(self, store: PlannerStore) -> None:
        logger.debug("Saving...")
        store.save_config(self.config)
        store.save_history(self.history)
        store.save_today(self.scheduler)

    @property
    def practicing(self) -> bool:
        return self.session.is_active

    # =========================================================================
    # Schedule
    # =========================================================================

    def todays_schedule(self, now: datetime) -> list[Skill]:
        """Today's schedule, drawn on first request."""
        return self.scheduler.schedule(now)

    def shuffle(self, now: datetime) -> list[Skill]:
        """Redraw today's schedule. Not allowed while practicing."""
        if self.practicing:
            raise SessionStateError("Cannot shuffle today's skills while practicing")
        return self.scheduler.schedule(now, force=True)

    def start_practice(self, now: datetime) -> list[Skill]:
        """Start a session over today's schedule."""
        if self.practicing:
            raise SessionAlreadyActiveError()
        schedule = self.todays_schedule(now)
        self.session.start(schedule, now)
        return schedule

    # =========================================================================
    # History
    # =========================================================================

    def streak(self, now: datetime) -> int:
        return self.history.streak(now)

    def recent_history(self, now: datetime, days: int) -> dict[date, list[str]]:
        """Skills per day for the last `days` days, names sorted."""
        return {day: sorted(names) for day, names in self.history.lookback(days, now).items()}

    def reset_history(self) -> None:
        """Clear history; today's schedule is redrawn on next request."""
        self.history.reset()
        if not self.practicing:
            self.scheduler.clear()

    # =========================================================================
    # Configuration Edits
    # =========================================================================

    def add_skill(self, skill: Skill) -> None:
        self.config.add_skill(skill)
        logger.info(f"Added skill {skill.name} with {len(skill.exercises)} exercises")

    def delete_skill(self, name: str) -> Skill:
        """Remove a skill; today's schedule is dropped if it contained it."""
        if self.practicing:
            raise SessionStateError("Cannot delete a skill while practicing")
        skill = self.config.remove_skill(name)
        if name in (self.scheduler.todays_schedule or []):
            self.scheduler.clear()
        logger.info(f"Deleted skill {name}")
        return skill

    def update_settings(
        self,
        practice_minutes: int | None = None,
        skills_per_day: int | None = None,
        repeat_threshold: int | None = None,
    ) -> None:
        """Change numeric settings. Values are validated before any is applied."""
        candidate = dataclasses.replace(
            self.config,
            practice_duration=(
                timedelta(minutes=practice_minutes)
                if practice_minutes is not None
                else self.config.practice_duration
            ),
            skills_per_day=skills_per_day if skills_per_day is not None else self.config.skills_per_day,
            repeat_threshold=(
                repeat_threshold if repeat_threshold is not None else self.config.repeat_threshold
            ),
            skills=list(self.config.skills),
        )
        reschedule = (
            candidate.skills_per_day != self.config.skills_per_day
            or candidate.repeat_threshold != self.config.repeat_threshold
        )
        self._apply_config(candidate)
        if reschedule and not self.practicing:
            self.scheduler.clear()
        logger.info(
            f"Settings updated: {self.config.practice_duration} per skill, "
            f"{self.config.skills_per_day} skills per day, repeat every {self.config.repeat_threshold} days"
        )

    def reset_settings(self, defaults: PlannerConfiguration) -> None:
        """Restore the default configuration and clear history."""
        if self.practicing:
            raise SessionStateError("Cannot reset settings while practicing")
        self._apply_config(defaults)
        self.history.reset()
        self.scheduler.clear()
        logger.info("Settings reset to defaults")

    def _apply_config(self, source: PlannerConfiguration) -> None:
        # Scheduler and session hold this same object, so update it in place
        self.config.practice_duration = source.practice_duration
        self.config.repeat_threshold = source.repeat_threshold
        self.config.skills_per_day = source.skills_per_day
        self.config.skills = list(source.skills)
