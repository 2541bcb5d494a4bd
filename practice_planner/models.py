"""
Core domain models for skill practice planning.

Skills are compared by name: two skills with the same name are the same
skill regardless of their exercises.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import timedelta

from .errors import ConfigurationError, DuplicateSkillError, UnknownSkillError


@dataclass(frozen=True)
class Exercise:
    """A single instructional unit within a skill."""

    name: str
    text: str = ""


@dataclass(frozen=True, eq=False)
class Skill:
    """A named practice category with an ordered list of exercises."""

    name: str
    exercises: tuple[Exercise, ...]

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ConfigurationError("Skill name must not be empty")
        # Accept any iterable but always store a tuple
        object.__setattr__(self, "exercises", tuple(self.exercises))
        if not self.exercises:
            raise ConfigurationError(f"Skill '{self.name}' needs at least one exercise")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Skill):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return self.name

    @classmethod
    def from_texts(cls, name: str, texts: Iterable[str]) -> Skill:
        """Build a skill whose exercises are named "Exercise 1", "Exercise 2", ..."""
        exercises = tuple(Exercise(name=f"Exercise {i}", text=text) for i, text in enumerate(texts, 1))
        return cls(name=name, exercises=exercises)


@dataclass
class PlannerConfiguration:
    """User-editable planner configuration."""

    # The duration each skill is practiced for.
    practice_duration: timedelta = timedelta(minutes=15)
    # The max number of days allowed to elapse without practicing a skill.
    repeat_threshold: int = 2
    # The number of skills to practice per day.
    skills_per_day: int = 4
    skills: list[Skill] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.validate()
        names = [skill.name for skill in self.skills]
        duplicates = {name for name in names if names.count(name) > 1}
        if duplicates:
            raise DuplicateSkillError(sorted(duplicates)[0])

    def validate(self) -> None:
        """Check the numeric settings."""
        if self.practice_duration <= timedelta(0):
            raise ConfigurationError("Practice duration must be positive")
        if self.repeat_threshold < 1:
            raise ConfigurationError("Repeat threshold must be at least one day")
        if self.skills_per_day < 1:
            raise ConfigurationError("Skills per day must be at least one")

    @property
    def skill_names(self) -> list[str]:
        return [skill.name for skill in self.skills]

    def has_skill(self, name: str) -> bool:
        return any(skill.name == name for skill in self.skills)

    def get_skill(self, name: str) -> Skill:
        """Look up a configured skill by name."""
        for skill in self.skills:
            if skill.name == name:
                return skill
        raise UnknownSkillError(name)

    def add_skill(self, skill: Skill) -> None:
        if self.has_skill(skill.name):
            raise DuplicateSkillError(skill.name)
        self.skills.append(skill)

    def remove_skill(self, name: str) -> Skill:
        skill = self.get_skill(name)
        self.skills.remove(skill)
        return skill
