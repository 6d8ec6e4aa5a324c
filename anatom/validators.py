"""Pydantic validation models for every engine entry point.

The engine functions trust their inputs; callers validate here first and
convert with ``to_domain()``.
"""

from __future__ import annotations

from typing import Optional, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError, field_validator

from anatom.services.health_catalog import DEFAULT_CATALOG, HealthProfile
from anatom.services.injury_risk import MuscleUsageLog
from anatom.services.nutrition import ACTIVITY_MULTIPLIERS, GOAL_CALORIE_FACTORS, PhysiologicalInput
from anatom.services.workout_types import EXPERIENCE_LEVELS, GOALS, SPORTS, WorkoutRequest

M = TypeVar("M", bound=BaseModel)


class EngineInputError(ValueError):
    """Caller supplied input the engine cannot work with."""


def parse_request(model: Type[M], **data) -> M:
    """Build ``model`` from keyword data, raising EngineInputError on failure."""
    try:
        return model(**data)
    except ValidationError as exc:
        raise EngineInputError(str(exc)) from exc


class WorkoutGenerationRequest(BaseModel):
    goal: str
    experience_level: str
    days_per_week: int = Field(ge=2, le=6)
    sport: Optional[str] = None

    @field_validator("goal")
    @classmethod
    def valid_goal(cls, v):
        if v not in GOALS:
            raise ValueError(f"goal must be one of {set(GOALS)}")
        return v

    @field_validator("experience_level")
    @classmethod
    def valid_level(cls, v):
        if v not in EXPERIENCE_LEVELS:
            raise ValueError(f"experience_level must be one of {set(EXPERIENCE_LEVELS)}")
        return v

    @field_validator("sport")
    @classmethod
    def valid_sport(cls, v):
        if v is not None and v not in SPORTS:
            raise ValueError(f"sport must be one of {set(SPORTS)}")
        return v

    def to_domain(self) -> WorkoutRequest:
        return WorkoutRequest(
            goal=self.goal,
            experience_level=self.experience_level,
            days_per_week=self.days_per_week,
            sport=self.sport,
        )


class PhysiologicalInputModel(BaseModel):
    age_years: float = Field(gt=0, le=120)
    sex: str
    weight_kg: float = Field(gt=0)
    height_cm: float = Field(gt=0)
    activity_level: str
    fitness_goal: str

    @field_validator("sex")
    @classmethod
    def valid_sex(cls, v):
        allowed = {"male", "female"}
        if v not in allowed:
            raise ValueError(f"sex must be one of {allowed}")
        return v

    @field_validator("activity_level")
    @classmethod
    def valid_activity(cls, v):
        if v not in ACTIVITY_MULTIPLIERS:
            raise ValueError(f"activity_level must be one of {set(ACTIVITY_MULTIPLIERS)}")
        return v

    @field_validator("fitness_goal")
    @classmethod
    def valid_goal(cls, v):
        if v not in GOAL_CALORIE_FACTORS:
            raise ValueError(f"fitness_goal must be one of {set(GOAL_CALORIE_FACTORS)}")
        return v

    def to_domain(self) -> PhysiologicalInput:
        return PhysiologicalInput(
            age_years=self.age_years,
            sex=self.sex,
            weight_kg=self.weight_kg,
            height_cm=self.height_cm,
            activity_level=self.activity_level,
            fitness_goal=self.fitness_goal,
        )


def _unknown(ids: list[str], known) -> list[str]:
    return sorted(set(ids) - set(known))


class HealthProfileInput(BaseModel):
    physical_limitations: list[str] = Field(default_factory=list)
    medical_conditions: list[str] = Field(default_factory=list)
    dietary_preferences: list[str] = Field(default_factory=list)
    food_allergies: list[str] = Field(default_factory=list)

    @field_validator("physical_limitations")
    @classmethod
    def known_limitations(cls, v):
        unknown = _unknown(v, DEFAULT_CATALOG.limitations)
        if unknown:
            raise ValueError(f"unknown physical limitations: {unknown}")
        return v

    @field_validator("medical_conditions")
    @classmethod
    def known_conditions(cls, v):
        unknown = _unknown(v, DEFAULT_CATALOG.conditions)
        if unknown:
            raise ValueError(f"unknown medical conditions: {unknown}")
        return v

    @field_validator("dietary_preferences")
    @classmethod
    def known_preferences(cls, v):
        unknown = _unknown(v, DEFAULT_CATALOG.dietary_preferences)
        if unknown:
            raise ValueError(f"unknown dietary preferences: {unknown}")
        return v

    @field_validator("food_allergies")
    @classmethod
    def known_allergies(cls, v):
        unknown = _unknown(v, DEFAULT_CATALOG.food_allergies)
        if unknown:
            raise ValueError(f"unknown food allergies: {unknown}")
        return v

    def to_domain(self) -> HealthProfile:
        return HealthProfile.of(
            physical_limitations=self.physical_limitations,
            medical_conditions=self.medical_conditions,
            dietary_preferences=self.dietary_preferences,
            food_allergies=self.food_allergies,
        )


class MuscleUsageLogInput(BaseModel):
    muscle_id: str = Field(min_length=1, max_length=80)
    muscle_name: str = Field(min_length=1, max_length=120)
    intensity: int = Field(ge=1, le=10)
    weekly_frequency: Optional[int] = Field(default=None, ge=1)

    def to_domain(self) -> MuscleUsageLog:
        return MuscleUsageLog(
            muscle_id=self.muscle_id,
            muscle_name=self.muscle_name,
            intensity=self.intensity,
            weekly_frequency=self.weekly_frequency,
        )
