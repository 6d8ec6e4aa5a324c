"""Tests for health-based workout filtering."""

from __future__ import annotations

import pytest

from anatom.services.health_catalog import (
    ConditionRule,
    HealthProfile,
    HealthRulesCatalog,
    LimitationRule,
)
from anatom.services.split_selector import select_split
from anatom.services.workout_filter import (
    GENERIC_SAFETY_NOTES,
    REMOVED_REASON,
    filter_plan,
    health_filter_summary,
    needs_health_filtering,
)
from anatom.services.workout_types import ExerciseTemplate, WorkoutDay, WorkoutPlan


def _ex(name, notes=""):
    return ExerciseTemplate(name=name, target_sets=3, rep_range="8-12", rest_seconds=90,
                            target_muscles=("chest",), notes=notes)


def _plan(*names):
    day = WorkoutDay(day_label="Day A", day_of_week=1, split_tag="full_body",
                     focus_muscle_groups=("chest",), exercises=tuple(_ex(n) for n in names))
    return WorkoutPlan(name="Test Plan", description="", rationale="test", days=(day,))


@pytest.fixture
def catalog():
    return HealthRulesCatalog.build(
        limitations=[
            LimitationRule(
                id="bad_chest", name="Bad Chest", description="",
                contraindicated_exercises=("Bench Press",),
                caution_exercises=("Push-Ups",),
                safe_alternatives=(),
                warnings=("Go easy",),
            ),
            LimitationRule(
                id="bad_shoulder", name="Bad Shoulder", description="",
                contraindicated_exercises=("Overhead Press",),
                caution_exercises=(),
                safe_alternatives=(("Overhead Press", ("Bench Press", "Landmine Press")),),
                warnings=("Go easy", "No overhead work"),
            ),
        ],
        conditions=[
            ConditionRule(
                id="cardio", name="Cardio Condition", description="",
                caution_exercises=("Rows",),
                recommended_exercises=("Walking", "Cycling"),
                max_intensity="moderate",
                exercise_warnings=("Watch heart rate",),
            ),
        ],
    )


# --- fast path ---

def test_no_profile_needs_no_filtering():
    assert not needs_health_filtering(None)
    assert not needs_health_filtering(HealthProfile())
    assert not needs_health_filtering(HealthProfile.of(food_allergies=["peanuts"]))
    assert needs_health_filtering(HealthProfile.of(medical_conditions=["copd"]))


def test_empty_profile_returns_same_plan(catalog):
    plan = _plan("Bench Press")
    result = filter_plan(plan, HealthProfile(), catalog)
    assert result.plan is plan
    assert result.counts_by_kind == {"removed": 0, "substituted": 0, "cautioned": 0}


# --- removal and substitution ---

def test_contraindicated_without_alternative_is_removed(catalog):
    plan = _plan("Bench Press", "Squat")
    result = filter_plan(plan, HealthProfile.of(physical_limitations=["bad_chest"]), catalog)
    names = result.plan.exercise_names()
    assert "Bench Press" not in names
    assert "Squat" in names
    assert result.removed_exercises[0].name == "Bench Press"
    assert result.removed_exercises[0].reason == REMOVED_REASON
    assert result.removed_exercises[0].day_label == "Day A"
    assert result.plan.health_modifications.removed_exercises == ("Bench Press",)


def test_fuzzy_match_catches_variants(catalog):
    plan = _plan("Barbell Bench Press", "Incline Bench Press")
    result = filter_plan(plan, HealthProfile.of(physical_limitations=["bad_chest"]), catalog)
    assert result.plan.exercise_names() == []
    assert result.counts_by_kind["removed"] == 2


def test_alternative_that_is_itself_contraindicated_is_skipped(catalog):
    profile = HealthProfile.of(physical_limitations=["bad_chest", "bad_shoulder"])
    result = filter_plan(_plan("Overhead Press"), profile, catalog)
    assert result.substitutions[0].replacement == "Landmine Press"
    assert result.substitutions[0].reason == "Bad Shoulder"
    exercise = result.plan.days[0].exercises[0]
    assert exercise.name == "Landmine Press"
    assert "[Modified: Replaced Overhead Press due to Bad Shoulder]" in exercise.notes
    assert result.plan.health_modifications.modified_exercises == ("Overhead Press → Landmine Press",)


def test_replacement_gets_its_own_caution_notes():
    catalog = HealthRulesCatalog.build(
        limitations=[
            LimitationRule(
                id="bad_elbow", name="Bad Elbow", description="",
                contraindicated_exercises=("Dips",),
                caution_exercises=("Push-Ups",),
                safe_alternatives=(("Dips", ("Close-Grip Push-Ups",)),),
                warnings=(),
            ),
        ],
        conditions=[ConditionRule(id="cardio", name="Cardio Condition", description="", max_intensity="low")],
    )
    profile = HealthProfile.of(physical_limitations=["bad_elbow"], medical_conditions=["cardio"])
    result = filter_plan(_plan("Tricep Dips"), profile, catalog)
    exercise = result.plan.days[0].exercises[0]
    assert exercise.name == "Close-Grip Push-Ups"
    assert exercise.notes == (
        "[Modified: Replaced Tricep Dips due to Bad Elbow; "
        "Modified for Bad Elbow: Use lighter weight and controlled movements; "
        "Max intensity: low (due to Cardio Condition)]"
    )
    assert result.counts_by_kind == {"removed": 0, "substituted": 1, "cautioned": 0}


def test_first_safe_alternative_wins(catalog):
    result = filter_plan(_plan("Overhead Press"), HealthProfile.of(physical_limitations=["bad_shoulder"]), catalog)
    assert result.plan.exercise_names() == ["Bench Press"]


# --- cautions ---

def test_caution_notes(catalog):
    profile = HealthProfile.of(physical_limitations=["bad_chest"], medical_conditions=["cardio"])
    result = filter_plan(_plan("Push-Ups", "Cable Rows"), profile, catalog)
    push_ups, rows = result.plan.days[0].exercises
    for note in GENERIC_SAFETY_NOTES:
        assert note in push_ups.notes
    assert "Modified for Bad Chest: Use lighter weight and controlled movements" in push_ups.notes
    assert "Max intensity: moderate (due to Cardio Condition)" in push_ups.notes
    assert "Caution (Cardio Condition): Monitor intensity and symptoms" in rows.notes
    assert result.modified_exercises == ("Push-Ups", "Cable Rows")
    assert "Push-Ups (modified)" in result.plan.health_modifications.modified_exercises


def test_existing_notes_are_kept(catalog):
    plan = WorkoutPlan(name="p", description="", rationale="r", days=(
        WorkoutDay("Day A", 1, "x", (), (_ex("Push-Ups", "Finisher"),)),
    ))
    result = filter_plan(plan, HealthProfile.of(physical_limitations=["bad_chest"]), catalog)
    assert result.plan.days[0].exercises[0].notes.startswith("Finisher [Modified: ")


def test_warnings_deduplicated_and_recommendations(catalog):
    profile = HealthProfile.of(physical_limitations=["bad_chest", "bad_shoulder"], medical_conditions=["cardio"])
    result = filter_plan(_plan("Squat"), profile, catalog)
    assert result.warnings == ("Go easy", "No overhead work", "Watch heart rate")
    assert result.recommendations == ("Recommended for Cardio Condition: Walking, Cycling",)


def test_input_plan_not_modified_and_repeatable(catalog):
    plan = _plan("Bench Press", "Push-Ups", "Overhead Press")
    before = plan.exercise_names()
    profile = HealthProfile.of(physical_limitations=["bad_chest", "bad_shoulder"])
    first = filter_plan(plan, profile, catalog)
    second = filter_plan(plan, profile, catalog)
    assert plan.exercise_names() == before
    assert plan.health_modifications is None
    assert first == second


def test_unknown_ids_are_ignored(catalog):
    result = filter_plan(_plan("Bench Press"), HealthProfile.of(physical_limitations=["nope"]), catalog)
    assert result.plan.exercise_names() == ["Bench Press"]
    assert result.plan.health_modifications.summary == "No health-based modifications needed."


# --- default catalog ---

def test_shoulder_injury_on_push_pull_legs():
    plan = select_split("muscle_gain", "intermediate", 3)
    result = filter_plan(plan, HealthProfile.of(physical_limitations=["shoulder_injury"]))
    replacements = {s.original: s.replacement for s in result.substitutions}
    assert replacements["Barbell Bench Press"] == "Floor Press"
    assert replacements["Overhead Press"] == "Landmine Press"
    assert replacements["Tricep Dips"] == "Close-Grip Push-Ups"
    assert "Lateral Raises" in {r.name for r in result.removed_exercises}
    assert "Incline Dumbbell Press" in result.modified_exercises


def test_summary_text():
    profile = HealthProfile.of(physical_limitations=["knee_injury"], medical_conditions=["hypertension"])
    assert health_filter_summary(profile) == (
        "Workout modified for: Physical limitations: Knee Injury; "
        "Medical conditions: Hypertension (High Blood Pressure)"
    )
    assert health_filter_summary(HealthProfile()) == "No health-based modifications needed."


def test_to_dict():
    result = filter_plan(select_split("fat_loss", "beginner", 2), HealthProfile.of(physical_limitations=["knee_injury"]))
    data = result.to_dict()
    assert data["plan"]["health_modifications"]["was_filtered"] is True
    assert data["counts_by_kind"]["substituted"] >= 1
