"""
Practice Session State Machine.

Drives a day's schedule through timed skill transitions:

    IDLE --start--> ACTIVE --advance on last skill--> IDLE (recorded)
                      |  \\--stop--> IDLE (not recorded)
                      +-- pause / resume / next & previous exercise

The session never reads the clock itself. An external loop calls
`tick(now)` at a short fixed interval; a paused session ignores ticks.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

from loguru import logger

from .errors import (
    EmptyScheduleError,
    NoActiveSessionError,
    SessionAlreadyActiveError,
    SessionStateError,
)
from .history import HistoryStore
from .models import Exercise, PlannerConfiguration, Skill
from .scheduler import Scheduler

SkillCompletedSink = Callable[[Skill], None]


class SessionStatus(str, Enum):
    """Lifecycle state of the practice session."""

    IDLE = "idle"
    ACTIVE = "active"


class SessionEvent(str, Enum):
    """What a tick or advance did."""

    NONE = "none"
    ADVANCED = "advanced"
    COMPLETED = "completed"


@dataclass
class ActiveSession:
    """State of a running session."""

    schedule: tuple[Skill, ...]
    skill_index: int
    exercise_index: int | None
    start_time: datetime
    skill_start_time: datetime
    accumulated_pause: timedelta
    time_left: timedelta
    paused_at: datetime | None = None

    @property
    def current_skill(self) -> Skill:
        return self.schedule[self.skill_index]

    @property
    def is_last_skill(self) -> bool:
        return self.skill_index == len(self.schedule) - 1


class PracticeSession:
    """
    Tracks the active skill and exercise of a practice session.

    Completing the last skill records the schedule into history and clears
    the scheduler's cached schedule.
    """

    def __init__(
        self,
        config: PlannerConfiguration,
        history: HistoryStore,
        scheduler: Scheduler,
        on_skill_complete: SkillCompletedSink | None = None,
    ):
        """
        Initialize an idle session.

        Args:
            config: Planner configuration (read for the practice duration)
            history: Where completed schedules are recorded
            scheduler: Scheduler whose cached schedule is cleared on completion
            on_skill_complete: Optional sink notified whenever a skill ends
        """
        self.config = config
        self.history = history
        self.scheduler = scheduler
        self.on_skill_complete = on_skill_complete
        self._active: ActiveSession | None = None

    # =========================================================================
    # Views
    # =========================================================================

    @property
    def status(self) -> SessionStatus:
        return SessionStatus.ACTIVE if self._active is not None else SessionStatus.IDLE

    @property
    def is_active(self) -> bool:
        return self._active is not None

    @property
    def is_paused(self) -> bool:
        return self._active is not None and self._active.paused_at is not None

    @property
    def practice_duration(self) -> timedelta:
        return self.config.practice_duration

    @property
    def schedule(self) -> tuple[Skill, ...]:
        return self._require("read the schedule").schedule

    @property
    def skill_index(self) -> int:
        return self._require("read the skill index").skill_index

    @property
    def current_skill(self) -> Skill:
        return self._require("read the current skill").current_skill

    @property
    def current_exercise(self) -> Exercise | None:
        active = self._require("read the current exercise")
        if active.exercise_index is None:
            return None
        return active.current_skill.exercises[active.exercise_index]

    @property
    def exercise_index(self) -> int | None:
        return self._require("read the exercise index").exercise_index

    @property
    def time_left(self) -> timedelta:
        return self._require("read the time left").time_left

    @property
    def start_time(self) -> datetime:
        return self._require("read the start time").start_time

    def progress(self) -> tuple[int, int]:
        """(completed skills, total skills) of the running session."""
        active = self._require("read progress")
        return active.skill_index, len(active.schedule)

    # =========================================================================
    # Transitions
    # =========================================================================

    def start(self, schedule: Sequence[Skill], now: datetime) -> None:
        """
        Begin practicing a schedule.

        Raises:
            SessionAlreadyActiveError: If a session is running
            EmptyScheduleError: If the schedule is empty
        """
        if self._active is not None:
            raise SessionAlreadyActiveError()
        if not schedule:
            raise EmptyScheduleError()

        self._active = ActiveSession(
            schedule=tuple(schedule),
            skill_index=0,
            exercise_index=0,
            start_time=now,
            skill_start_time=now,
            accumulated_pause=timedelta(0),
            time_left=self.practice_duration,
        )
        logger.info(
            f"Practice started with {len(schedule)} skills, "
            f"{self.practice_duration} each; first: {schedule[0].name}"
        )

    def tick(self, now: datetime) -> SessionEvent:
        """
        Update the remaining time and advance when it runs out.

        Safe to call at any rate. Does nothing while paused.
        """
        active = self._require("tick")
        if active.paused_at is not None:
            return SessionEvent.NONE

        elapsed = now - active.skill_start_time - active.accumulated_pause
        remaining = self.practice_duration - elapsed
        if remaining <= timedelta(0):
            return self.advance(now)

        active.time_left = remaining
        return SessionEvent.NONE

    def advance(self, now: datetime) -> SessionEvent:
        """
        Finish the current skill and move to the next one.

        Completing the last skill records the schedule in history, clears
        today's schedule and returns the session to idle.
        """
        active = self._require("advance")
        finished = active.current_skill
        logger.info(f"Finished practicing {finished.name}")
        if self.on_skill_complete is not None:
            self.on_skill_complete(finished)

        if active.is_last_skill:
            self.history.record(now, active.schedule)
            self.scheduler.clear()
            self._active = None
            logger.info("Finished practicing for today!")
            return SessionEvent.COMPLETED

        active.skill_index += 1
        active.skill_start_time = now
        active.accumulated_pause = timedelta(0)
        active.exercise_index = 0
        active.time_left = self.practice_duration
        if active.paused_at is not None:
            # Stay paused; the new skill's pause starts now
            active.paused_at = now
        logger.info(f"Advancing to {active.current_skill.name}")
        return SessionEvent.ADVANCED

    def pause(self, now: datetime) -> None:
        active = self._require("pause")
        if active.paused_at is not None:
            raise SessionStateError("Practice session is already paused")
        active.paused_at = now
        logger.debug(f"Paused at {now.isoformat()}")

    def resume(self, now: datetime) -> None:
        active = self._require("resume")
        if active.paused_at is None:
            raise SessionStateError("Practice session is not paused")
        # Cumulative time spent paused since the current skill started
        active.accumulated_pause += now - active.paused_at
        active.paused_at = None
        logger.debug(f"Resumed; paused {active.accumulated_pause} in total for this skill")

    def toggle_pause(self, now: datetime) -> bool:
        """Pause or resume. Returns True if the session is now paused."""
        if self.is_paused:
            self.resume(now)
            return False
        self.pause(now)
        return True

    def next_exercise(self) -> Exercise:
        active = self._require("move to the next exercise")
        last = len(active.current_skill.exercises) - 1
        if active.exercise_index is None:
            active.exercise_index = 0
        elif active.exercise_index < last:
            active.exercise_index += 1
        return active.current_skill.exercises[active.exercise_index]

    def previous_exercise(self) -> Exercise:
        active = self._require("move to the previous exercise")
        if active.exercise_index is None:
            active.exercise_index = 0
        elif active.exercise_index > 0:
            active.exercise_index -= 1
        return active.current_skill.exercises[active.exercise_index]

    def stop(self, now: datetime) -> None:
        """Abandon the session without recording history."""
        active = self._require("stop practicing")
        self._active = None
        logger.info(
            f"Practice stopped at {now.isoformat()} after "
            f"{active.skill_index} of {len(active.schedule)} skills"
        )

    def _require(self, operation: str) -> ActiveSession:
        if self._active is None:
            raise NoActiveSessionError(operation)
        return self._active
