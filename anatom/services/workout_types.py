"""Value objects shared by the split selector and the health filter."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional

GOALS = ("muscle_gain", "fat_loss", "endurance", "general_fitness", "sport_specific")
EXPERIENCE_LEVELS = ("beginner", "intermediate", "advanced")
SPORTS = ("football", "basketball", "volleyball", "boxing", "swimming")


@dataclass(frozen=True)
class ExerciseTemplate:
    name: str
    target_sets: int
    rep_range: str
    rest_seconds: int
    target_muscles: tuple[str, ...]
    notes: str = ""


@dataclass(frozen=True)
class WorkoutDay:
    day_label: str
    day_of_week: int
    split_tag: str
    focus_muscle_groups: tuple[str, ...]
    exercises: tuple[ExerciseTemplate, ...]


@dataclass(frozen=True)
class HealthModifications:
    was_filtered: bool
    summary: str
    removed_exercises: tuple[str, ...] = ()
    modified_exercises: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()


@dataclass(frozen=True)
class WorkoutPlan:
    name: str
    description: str
    rationale: str
    days: tuple[WorkoutDay, ...]
    health_modifications: Optional[HealthModifications] = None

    @property
    def exercise_count(self) -> int:
        return sum(len(d.exercises) for d in self.days)

    def exercise_names(self) -> list[str]:
        return [ex.name for d in self.days for ex in d.exercises]

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class WorkoutRequest:
    """What a user asked for; validated upstream by WorkoutGenerationRequest."""
    goal: str
    experience_level: str
    days_per_week: int
    sport: Optional[str] = None
