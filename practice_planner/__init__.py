"""
Practice Planner: daily skill practice scheduling.

Plans recurring practice sessions over a set of skills, each made of
ordered exercises, and runs the day's session with timed transitions.

Components:
- HistoryStore: Completed schedules, lookback window and streak
- Scheduler: Staleness-weighted daily skill draw
- PracticeSession: Timed skill/exercise state machine
- PracticePlanner: Facade owning configuration, history and session
- PlannerStore: JSON persistence
"""

from .errors import (
    ConfigurationError,
    DuplicateSkillError,
    EmptyScheduleError,
    InvalidLookbackError,
    MissingSkillsError,
    NoActiveSessionError,
    PlannerError,
    SessionAlreadyActiveError,
    SessionStateError,
    UnknownSkillError,
)
from .history import HistoryEntry, HistoryStore
from .models import Exercise, PlannerConfiguration, Skill
from .planner import PracticePlanner
from .scheduler import Scheduler, weighted_sample
from .session import PracticeSession, SessionEvent, SessionStatus
from .storage import PlannerStore

__version__ = "1.0.0"

__all__ = [
    # Models
    "Exercise",
    "Skill",
    "PlannerConfiguration",
    # History
    "HistoryStore",
    "HistoryEntry",
    # Scheduling
    "Scheduler",
    "weighted_sample",
    # Session
    "PracticeSession",
    "SessionEvent",
    "SessionStatus",
    # Facade & persistence
    "PracticePlanner",
    "PlannerStore",
    # Errors
    "PlannerError",
    "ConfigurationError",
    "MissingSkillsError",
    "InvalidLookbackError",
    "UnknownSkillError",
    "DuplicateSkillError",
    "SessionStateError",
    "NoActiveSessionError",
    "SessionAlreadyActiveError",
    "EmptyScheduleError",
]
