"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
Time is always synthetic: fixtures hand out a FixedClock and seeded
random sources so schedules are reproducible.
"""
import random
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from practice_planner.clock import FixedClock
from practice_planner.history import HistoryStore
from practice_planner.models import Exercise, PlannerConfiguration, Skill
from practice_planner.planner import PracticePlanner
from practice_planner.scheduler import Scheduler
from practice_planner.session import PracticeSession


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


# ============================================================================
# Builders
# ============================================================================


def make_skill(name: str, exercise_count: int = 1) -> Skill:
    """Build a skill with numbered exercises."""
    return Skill(
        name=name,
        exercises=tuple(
            Exercise(name=f"{name} {i}", text=f"# {name}\n\nStep {i}") for i in range(1, exercise_count + 1)
        ),
    )


@pytest.fixture
def skill_factory():
    """Expose make_skill to tests."""
    return make_skill


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def now():
    """A fixed evening moment, far from midnight so day math is unambiguous."""
    return datetime(2024, 3, 15, 18, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(now):
    return FixedClock(now)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def skills():
    """Five skills A-E; C has three exercises."""
    return [
        make_skill("A"),
        make_skill("B"),
        make_skill("C", exercise_count=3),
        make_skill("D"),
        make_skill("E"),
    ]


@pytest.fixture
def config(skills):
    return PlannerConfiguration(
        practice_duration=timedelta(minutes=15),
        repeat_threshold=2,
        skills_per_day=4,
        skills=list(skills),
    )


@pytest.fixture
def history():
    return HistoryStore()


@pytest.fixture
def scheduler(config, history, rng):
    return Scheduler(config, history, rng)


@pytest.fixture
def completed_skills():
    """Records every skill passed to the completion sink."""
    return []


@pytest.fixture
def session(config, history, scheduler, completed_skills):
    return PracticeSession(config, history, scheduler, on_skill_complete=completed_skills.append)


@pytest.fixture
def planner(config, history, rng):
    return PracticePlanner(config, history, rng)
