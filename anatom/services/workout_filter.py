"""Rewrite a workout plan for a user's physical limitations and medical conditions.

Each exercise is either passed through, kept with safety notes (cautioned),
swapped for a safe alternative (substituted) or dropped (removed). The
function is pure: the input plan is never modified and repeated calls with
the same plan and profile produce equal results.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, replace
from typing import Optional

from anatom.services.health_catalog import (
    DEFAULT_CATALOG,
    ConditionRule,
    HealthProfile,
    HealthRulesCatalog,
    LimitationRule,
    matches_any,
    matches_fragment,
)
from anatom.services.workout_types import ExerciseTemplate, HealthModifications, WorkoutDay, WorkoutPlan

logger = logging.getLogger(__name__)

REMOVED_REASON = "contraindicated"
GENERIC_SAFETY_NOTES = ("Use lighter weight", "Focus on form")


@dataclass(frozen=True)
class RemovedExercise:
    name: str
    reason: str
    day_label: str


@dataclass(frozen=True)
class Substitution:
    original: str
    replacement: str
    reason: str
    day_label: str


@dataclass(frozen=True)
class FilteredPlan:
    plan: WorkoutPlan
    removed_exercises: tuple[RemovedExercise, ...] = ()
    substitutions: tuple[Substitution, ...] = ()
    modified_exercises: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()
    counts_by_kind: dict = field(default_factory=lambda: {"removed": 0, "substituted": 0, "cautioned": 0})

    def to_dict(self) -> dict:
        return asdict(self)


def needs_health_filtering(profile: Optional[HealthProfile]) -> bool:
    return profile is not None and not profile.is_empty_for_training


def health_filter_summary(profile: HealthProfile, catalog: HealthRulesCatalog = DEFAULT_CATALOG) -> str:
    parts = []
    limitation_names = [r.name for r in catalog.limitations_for(profile.physical_limitations)]
    condition_names = [r.name for r in catalog.conditions_for(profile.medical_conditions)]
    if limitation_names:
        parts.append(f"Physical limitations: {', '.join(limitation_names)}")
    if condition_names:
        parts.append(f"Medical conditions: {', '.join(condition_names)}")
    if not parts:
        return "No health-based modifications needed."
    return f"Workout modified for: {'; '.join(parts)}"


def _dedupe(items) -> tuple[str, ...]:
    return tuple(dict.fromkeys(items))


def _find_alternative(
    exercise_name: str,
    limitations: list[LimitationRule],
    contraindicated: tuple[str, ...],
) -> tuple[Optional[str], str]:
    for rule in limitations:
        for fragment, alternatives in rule.safe_alternatives:
            if not matches_fragment(exercise_name, fragment):
                continue
            for alt in alternatives:
                if not matches_any(alt, contraindicated):
                    return alt, rule.name
    return None, ""


def _caution_notes(
    exercise_name: str,
    limitations: list[LimitationRule],
    conditions: list[ConditionRule],
) -> list[str]:
    notes = []
    for rule in limitations:
        for fragment in rule.caution_exercises:
            if matches_fragment(exercise_name, fragment):
                notes.append(f"Modified for {rule.name}: Use lighter weight and controlled movements")
    for rule in conditions:
        for fragment in rule.caution_exercises:
            if matches_fragment(exercise_name, fragment):
                notes.append(f"Caution ({rule.name}): Monitor intensity and symptoms")
        if rule.max_intensity:
            notes.append(f"Max intensity: {rule.max_intensity} (due to {rule.name})")
    return notes


def _annotate(exercise: ExerciseTemplate, notes: list[str], **changes) -> ExerciseTemplate:
    suffix = f"[Modified: {'; '.join(notes)}]"
    text = f"{exercise.notes} {suffix}" if exercise.notes else suffix
    return replace(exercise, notes=text, **changes)


def filter_plan(
    plan: WorkoutPlan,
    profile: HealthProfile,
    catalog: HealthRulesCatalog = DEFAULT_CATALOG,
) -> FilteredPlan:
    if not needs_health_filtering(profile):
        return FilteredPlan(plan=plan)

    limitations = catalog.limitations_for(profile.physical_limitations)
    conditions = catalog.conditions_for(profile.medical_conditions)

    contraindicated = _dedupe(
        [ex for r in limitations for ex in r.contraindicated_exercises]
        + [ex for r in conditions for ex in r.avoid_exercises]
    )
    cautioned = _dedupe(
        [ex for r in limitations for ex in r.caution_exercises]
        + [ex for r in conditions for ex in r.caution_exercises]
    )
    warnings = _dedupe(
        [w for r in limitations for w in r.warnings]
        + [w for r in conditions for w in r.exercise_warnings]
    )
    recommendations = tuple(
        f"Recommended for {r.name}: {', '.join(r.recommended_exercises)}"
        for r in conditions
        if r.recommended_exercises
    )

    removed: list[RemovedExercise] = []
    substitutions: list[Substitution] = []
    modified: list[str] = []
    new_days: list[WorkoutDay] = []

    for day in plan.days:
        kept: list[ExerciseTemplate] = []
        for exercise in day.exercises:
            name = exercise.name
            if matches_any(name, contraindicated):
                alternative, source = _find_alternative(name, limitations, contraindicated)
                if alternative:
                    notes = [f"Replaced {name} due to {source}", *_caution_notes(alternative, limitations, conditions)]
                    kept.append(_annotate(exercise, notes, name=alternative))
                    substitutions.append(Substitution(name, alternative, source, day.day_label))
                else:
                    removed.append(RemovedExercise(name, REMOVED_REASON, day.day_label))
            elif matches_any(name, cautioned):
                kept.append(_annotate(exercise, [*GENERIC_SAFETY_NOTES, *_caution_notes(name, limitations, conditions)]))
                modified.append(name)
            else:
                kept.append(exercise)
        new_days.append(replace(day, exercises=tuple(kept)))

    modifications = HealthModifications(
        was_filtered=True,
        summary=health_filter_summary(profile, catalog),
        removed_exercises=_dedupe(r.name for r in removed),
        modified_exercises=_dedupe(
            [f"{s.original} → {s.replacement}" for s in substitutions]
            + [f"{name} (modified)" for name in modified]
        ),
        warnings=warnings,
        recommendations=recommendations,
    )
    counts = {"removed": len(removed), "substituted": len(substitutions), "cautioned": len(modified)}
    logger.debug(
        "Health filter applied to %s",
        plan.name,
        extra={"ctx_plan": plan.name, "ctx_counts": counts},
    )
    return FilteredPlan(
        plan=replace(plan, days=tuple(new_days), health_modifications=modifications),
        removed_exercises=tuple(removed),
        substitutions=tuple(substitutions),
        modified_exercises=tuple(modified),
        warnings=warnings,
        recommendations=recommendations,
        counts_by_kind=counts,
    )
