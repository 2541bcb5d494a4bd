"""
JSON persistence for planner configuration and history.

Files live in the data directory (default ~/.practice_planner/):
- config.json  - practice duration, thresholds and skills
- history.json - completed practice sessions
- today.json   - the schedule drawn for the current day

Missing or corrupt files never reach the planner: loading falls back to
defaults and logs a warning.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, timedelta
from pathlib import Path
from typing import TypeVar

from loguru import logger
from pydantic import AwareDatetime, BaseModel, Field, ValidationError

from .errors import ConfigurationError
from .history import HistoryEntry, HistoryStore
from .models import Exercise, PlannerConfiguration, Skill
from .scheduler import Scheduler

ModelT = TypeVar("ModelT", bound=BaseModel)

CONFIG_FILE = "config.json"
HISTORY_FILE = "history.json"
TODAY_FILE = "today.json"


# =============================================================================
# Documents
# =============================================================================


class ExerciseDocument(BaseModel):
    """Serialized exercise."""

    name: str
    text: str = ""


class SkillDocument(BaseModel):
    """Serialized skill."""

    name: str = Field(min_length=1)
    exercises: list[ExerciseDocument] = Field(min_length=1)


class ConfigDocument(BaseModel):
    """Serialized planner configuration."""

    practice_seconds: int = Field(gt=0)
    repeat_threshold: int = Field(ge=1)
    skills_per_day: int = Field(ge=1)
    skills: list[SkillDocument] = Field(default_factory=list)

    @classmethod
    def from_configuration(cls, config: PlannerConfiguration) -> ConfigDocument:
        return cls(
            practice_seconds=int(config.practice_duration.total_seconds()),
            repeat_threshold=config.repeat_threshold,
            skills_per_day=config.skills_per_day,
            skills=[
                SkillDocument(
                    name=skill.name,
                    exercises=[ExerciseDocument(name=e.name, text=e.text) for e in skill.exercises],
                )
                for skill in config.skills
            ],
        )

    def to_configuration(self) -> PlannerConfiguration:
        return PlannerConfiguration(
            practice_duration=timedelta(seconds=self.practice_seconds),
            repeat_threshold=self.repeat_threshold,
            skills_per_day=self.skills_per_day,
            skills=[
                Skill(
                    name=skill.name,
                    exercises=tuple(Exercise(name=e.name, text=e.text) for e in skill.exercises),
                )
                for skill in self.skills
            ],
        )


class HistoryEntryDocument(BaseModel):
    """Serialized history entry."""

    timestamp: AwareDatetime
    skills: list[str]


class HistoryDocument(BaseModel):
    """Serialized practice history."""

    entries: list[HistoryEntryDocument] = Field(default_factory=list)


class TodayDocument(BaseModel):
    """The cached schedule and the day it was drawn for."""

    scheduled_for: date
    skills: list[str]


# =============================================================================
# Store
# =============================================================================


class PlannerStore:
    """
    Reads and writes planner state as JSON files.

    Loading never raises for bad data; saving raises OSError on write
    failures so the caller can report them.
    """

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir).expanduser()
        self.data_dir.mkdir(parents=True, exist_ok=True)

    @property
    def config_path(self) -> Path:
        return self.data_dir / CONFIG_FILE

    @property
    def history_path(self) -> Path:
        return self.data_dir / HISTORY_FILE

    @property
    def today_path(self) -> Path:
        return self.data_dir / TODAY_FILE

    # =========================================================================
    # Load
    # =========================================================================

    def load_config(self, default: Callable[[], PlannerConfiguration]) -> PlannerConfiguration:
        """Load the configuration, or build the default one."""
        document = self._read(self.config_path, ConfigDocument)
        if document is None:
            return default()
        try:
            return document.to_configuration()
        except ConfigurationError as e:
            logger.warning(f"Invalid configuration in {self.config_path}: {e}; using defaults")
            return default()

    def load_history(self) -> HistoryStore:
        """Load practice history (empty when missing or unreadable)."""
        document = self._read(self.history_path, HistoryDocument)
        if document is None:
            return HistoryStore()
        return HistoryStore(
            HistoryEntry(timestamp=entry.timestamp, skills=tuple(entry.skills))
            for entry in document.entries
        )

    def load_today(self) -> TodayDocument | None:
        """Load the cached schedule, if one was saved."""
        return self._read(self.today_path, TodayDocument)

    def _read(self, path: Path, model: type[ModelT]) -> ModelT | None:
        if not path.exists():
            logger.debug(f"No saved data at {path}")
            return None
        try:
            return model.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            logger.warning(f"Error loading {path.name}, falling back to defaults: {e}")
            return None

    # =========================================================================
    # Save
    # =========================================================================

    def save_config(self, config: PlannerConfiguration) -> None:
        self._write(self.config_path, ConfigDocument.from_configuration(config))

    def save_history(self, history: HistoryStore) -> None:
        document = HistoryDocument(
            entries=[
                HistoryEntryDocument(timestamp=entry.timestamp, skills=list(entry.skills))
                for entry in history.entries()
            ]
        )
        self._write(self.history_path, document)

    def save_today(self, scheduler: Scheduler) -> None:
        """Persist the cached schedule, or remove the file when there is none."""
        names = scheduler.todays_schedule
        if names is None or scheduler.scheduled_for is None:
            self.today_path.unlink(missing_ok=True)
            return
        self._write(self.today_path, TodayDocument(scheduled_for=scheduler.scheduled_for, skills=names))

    def _write(self, path: Path, document: BaseModel) -> None:
        path.write_text(document.model_dump_json(indent=2), encoding="utf-8")
        logger.debug(f"Saved {path}")
