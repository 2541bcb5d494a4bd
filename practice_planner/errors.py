"""
Planner exception hierarchy.

Configuration errors are fatal to the requested operation only; the planner
stays usable. Session state errors flag calls made in the wrong state.
"""

from __future__ import annotations


class PlannerError(Exception):
    """Base class for every error raised by the planning core."""
    pass


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(PlannerError):
    """Raised when the configuration cannot satisfy the request."""
    pass


class MissingSkillsError(ConfigurationError):
    """Raised when a schedule is requested with no skills configured."""

    def __init__(self) -> None:
        super().__init__("You must configure at least one skill to practice")


class InvalidLookbackError(ConfigurationError):
    """Raised when a lookback window cannot be computed from its day count."""

    def __init__(self, n_days: int) -> None:
        super().__init__(f"Invalid historical search term: {n_days} days")
        self.n_days = n_days


class UnknownSkillError(ConfigurationError):
    """Raised when a skill name is not part of the configuration."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No skill named '{name}'")
        self.name = name


class DuplicateSkillError(ConfigurationError):
    """Raised when adding a skill whose name is already configured."""

    def __init__(self, name: str) -> None:
        super().__init__(f"A skill named '{name}' already exists")
        self.name = name


# =============================================================================
# Session State Errors
# =============================================================================


class SessionStateError(PlannerError):
    """Raised when a session operation is invalid in the current state."""
    pass


class NoActiveSessionError(SessionStateError):
    """Raised when a session operation is called while idle."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Cannot {operation}: no practice session is active")
        self.operation = operation


class SessionAlreadyActiveError(SessionStateError):
    """Raised when starting a session while another one is running."""

    def __init__(self) -> None:
        super().__init__("A practice session is already active")


class EmptyScheduleError(SessionStateError):
    """Raised when a session is started with nothing scheduled."""

    def __init__(self) -> None:
        super().__init__("Cannot start practicing an empty schedule")
