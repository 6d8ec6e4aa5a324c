"""Tests for calorie, macro and health-adjusted nutrition targets."""

from __future__ import annotations

import pytest

from anatom.services.health_catalog import HealthProfile, NutritionRestriction
from anatom.services.nutrition import (
    GOAL_CALORIE_FACTORS,
    MacroDistribution,
    PhysiologicalInput,
    apply_health_overrides,
    calculate,
    calculate_bmr,
    calculate_calories_from_steps,
    calculate_macros,
    calculate_micronutrient_targets,
    calculate_nutrient_percentages,
    calculate_target_calories,
    calculate_tdee,
    diabetes_carb_cap,
    kidney_protein_cap,
    merge_restriction,
    merge_restrictions,
)


def _input(**overrides):
    values = dict(age_years=25, sex="male", weight_kg=75, height_cm=180,
                  activity_level="moderate", fitness_goal="muscle_gain")
    values.update(overrides)
    return PhysiologicalInput(**values)


# --- base formulas ---

def test_reference_male_plan():
    plan = calculate(_input())
    assert plan.bmr == 1755
    assert plan.tdee == 2720
    assert plan.target_calories == 3128
    assert (plan.macros.protein_g, plan.macros.fat_g, plan.macros.carbs_g) == (150, 87, 436)
    assert (plan.macros.protein_pct, plan.macros.carbs_pct, plan.macros.fat_pct) == (19, 56, 25)
    assert plan.health_adjustments is None


def test_female_bmr_offset():
    male = calculate_bmr(_input())
    female = calculate_bmr(_input(sex="female"))
    assert male - female == 166


def test_unknown_activity_defaults_to_sedentary():
    assert calculate_tdee(1000, "couch") == 1200


@pytest.mark.parametrize("goal,factor", sorted(GOAL_CALORIE_FACTORS.items()))
def test_goal_factor(goal, factor):
    assert calculate_target_calories(2000, goal) == round(2000 * factor)


@pytest.mark.parametrize("goal", sorted(GOAL_CALORIE_FACTORS))
@pytest.mark.parametrize("weight", [50, 72.5, 95, 130])
def test_macros_add_up_to_target(goal, weight):
    target = calculate_target_calories(calculate_tdee(1800, "active"), goal)
    macros = calculate_macros(target, weight, goal)
    assert abs(macros.calories - target) <= 2
    assert macros.protein_pct + macros.carbs_pct + macros.fat_pct == 100


def test_endurance_uses_lower_fat_share():
    macros = calculate_macros(3000, 70, "endurance")
    assert macros.protein_g == 112
    assert macros.fat_g == round(3000 * 0.20 / 9)


def test_micronutrients():
    young_woman = calculate_micronutrient_targets(30, "female")
    assert young_woman.iron_mg == 18
    assert young_woman.calcium_mg == 1000
    assert young_woman.vitamin_a_mcg == 700
    older_woman = calculate_micronutrient_targets(55, "female")
    assert older_woman.iron_mg == 8
    assert older_woman.calcium_mg == 1200
    man = calculate_micronutrient_targets(30, "male")
    assert (man.vitamin_a_mcg, man.vitamin_c_mg, man.iron_mg) == (900, 90, 8)
    assert man.sodium_mg == 2300


def test_explanation_keys():
    plan = calculate(_input(fitness_goal="general_fitness", sex="female"))
    assert set(plan.explanation) == {"bmr_formula", "tdee_calculation", "calorie_adjustment", "macro_rationale"}
    assert "- 161" in plan.explanation["bmr_formula"]
    assert plan.explanation["calorie_adjustment"] == "Maintenance calories for stable body composition"


# --- restriction merging ---

def test_lower_limit_wins():
    a = NutritionRestriction("sodium", 2000, "Limit sodium intake")
    b = NutritionRestriction("sodium", 1500, "Strict limit")
    merged = merge_restriction(a, b)
    assert merged.limit == 1500
    assert merged.reason == "Limit sodium intake; Strict limit"


def test_missing_limit_never_replaces_present_one():
    a = NutritionRestriction("sugar", 25, "Cap sugar")
    b = NutritionRestriction("sugar", None, "Avoid sugar")
    assert merge_restriction(a, b).limit == 25
    assert merge_restriction(b, a).limit == 25


def test_identical_reason_not_repeated():
    a = NutritionRestriction("sodium", 1500, "Same")
    assert merge_restriction(a, a).reason == "Same"


def test_merge_restrictions_keeps_one_per_nutrient():
    merged = merge_restrictions([
        NutritionRestriction("sodium", 2300, "a"),
        NutritionRestriction("fat", 70, "b"),
        NutritionRestriction("sodium", 1500, "c"),
    ])
    assert [(r.nutrient, r.limit) for r in merged] == [("sodium", 1500), ("fat", 70)]


# --- health overrides ---

def _base():
    return calculate_macros(3128, 75, "muscle_gain")


def test_diabetes_moves_carbs_to_protein():
    plan = calculate(_input(), HealthProfile.of(medical_conditions=["diabetes_type_2"]))
    assert plan.macros.carbs_g == 313
    assert plan.macros.protein_g == 273
    assert plan.macros.fat_g == 87
    assert plan.macros.carbs_pct == 40
    assert plan.macros.protein_pct + plan.macros.carbs_pct + plan.macros.fat_pct == 100
    adjustments = plan.health_adjustments
    assert "Carbohydrate intake limited to 40% due to diabetes management" in adjustments.warnings
    assert "fiber" in adjustments.focus_nutrients
    assert adjustments.applied_passes == ("diabetes_carb_cap",)


def test_diabetes_preserves_protein_plus_carb_grams():
    base = _base()
    draft = apply_health_overrides(base, 3128, 75, HealthProfile.of(medical_conditions=["diabetes_type_1"]))
    assert draft.macros.carbs_pct == 45
    assert draft.macros.protein_g + draft.macros.carbs_g == base.protein_g + base.carbs_g


def test_type_two_cap_wins_over_type_one():
    profile = HealthProfile.of(medical_conditions=["diabetes_type_1", "diabetes_type_2"])
    draft = apply_health_overrides(_base(), 3128, 75, profile)
    assert draft.macros.carbs_pct == 40


def test_diabetes_below_cap_keeps_macros_but_warns():
    low_carb = MacroDistribution(protein_g=200, carbs_g=100, fat_g=150, protein_pct=30, carbs_pct=15, fat_pct=55)
    draft = apply_health_overrides(low_carb, 2700, 80, HealthProfile.of(medical_conditions=["diabetes_type_2"]))
    assert draft.macros == low_carb
    assert draft.adjustments.warnings


def test_kidney_caps_protein_and_moves_energy_to_fat():
    plan = calculate(_input(), HealthProfile.of(medical_conditions=["kidney_disease"]))
    assert plan.macros.protein_g == 60
    assert plan.macros.fat_g == 87 + 40
    assert plan.macros.carbs_g == 436
    assert "Protein limited to 60g (0.8g/kg) for kidney health" in plan.health_adjustments.warnings


def test_kidney_under_cap_has_no_warning():
    low_protein = MacroDistribution(protein_g=40, carbs_g=300, fat_g=80, protein_pct=8, carbs_pct=57, fat_pct=35)
    draft = apply_health_overrides(low_protein, 2100, 75, HealthProfile.of(medical_conditions=["kidney_disease"]))
    assert draft.macros == low_protein
    assert not any("Protein limited" in w for w in draft.adjustments.warnings)


def test_passes_run_in_order():
    profile = HealthProfile.of(medical_conditions=["diabetes_type_2", "kidney_disease"])
    draft = apply_health_overrides(_base(), 3128, 75, profile)
    assert draft.adjustments.applied_passes == ("diabetes_carb_cap", "kidney_protein_cap")
    assert draft.macros.protein_g == 60
    assert draft.macros.fat_g == 182
    assert draft.macros.carbs_g == 312


def test_keto_overrides_condition_passes():
    profile = HealthProfile.of(medical_conditions=["diabetes_type_2"], dietary_preferences=["keto"])
    plan = calculate(_input(), profile)
    m = plan.macros
    assert (m.protein_pct, m.carbs_pct, m.fat_pct) == (20, 10, 70)
    assert (m.protein_g, m.carbs_g, m.fat_g) == (156, 79, 243)
    assert plan.health_adjustments.applied_passes[-1] == "keto_macros"
    assert plan.explanation["health_modifications"] == "Adjusted for: Type 2 Diabetes. Diet: Keto."


def test_cardio_conditions_merge_sodium():
    plan = calculate(_input(), HealthProfile.of(medical_conditions=["heart_disease", "hypertension"]))
    sodium = [r for r in plan.health_adjustments.restrictions if r.nutrient == "sodium"]
    assert len(sodium) == 1
    assert sodium[0].limit == 1500
    assert "; " in sodium[0].reason
    focus = plan.health_adjustments.focus_nutrients
    assert len(focus) == len(set(focus))
    assert "potassium" in focus
    assert "Sodium intake strictly limited to 1500mg/day" in plan.health_adjustments.warnings


@pytest.mark.parametrize("profile", [
    HealthProfile.of(dietary_preferences=["keto"]),
    HealthProfile.of(medical_conditions=["kidney_disease"]),
    HealthProfile.of(medical_conditions=["diabetes_type_2"]),
    HealthProfile.of(medical_conditions=["diabetes_type_1", "kidney_disease"]),
    HealthProfile.of(medical_conditions=["diabetes_type_2", "kidney_disease"], dietary_preferences=["keto"]),
], ids=["keto", "kidney", "diabetes", "diabetes_kidney", "all"])
@pytest.mark.parametrize("goal", sorted(GOAL_CALORIE_FACTORS))
@pytest.mark.parametrize("weight", [45, 55, 68.5, 90, 117, 139])
def test_overrides_keep_macros_within_two_kcal(profile, goal, weight):
    plan = calculate(_input(weight_kg=weight, fitness_goal=goal), profile)
    assert abs(plan.macros.calories - plan.target_calories) <= 2


def test_osteoporosis_focus():
    plan = calculate(_input(), HealthProfile.of(medical_conditions=["osteoporosis"]))
    assert {"calcium", "vitaminD", "vitaminK"} <= set(plan.health_adjustments.focus_nutrients)
    assert plan.macros == calculate(_input()).macros


def test_allergy_only_profile_skips_overrides():
    plan = calculate(_input(), HealthProfile.of(food_allergies=["peanuts"]))
    assert plan.health_adjustments is None
    assert "health_modifications" not in plan.explanation


def test_single_pass_in_isolation():
    draft = apply_health_overrides(_base(), 3128, 75, HealthProfile.of(medical_conditions=["kidney_disease"]),
                                   passes=[kidney_protein_cap])
    assert draft.adjustments.restrictions == ()
    assert draft.macros.protein_g == 60
    untouched = apply_health_overrides(_base(), 3128, 75, HealthProfile.of(medical_conditions=["kidney_disease"]),
                                       passes=[diabetes_carb_cap])
    assert untouched.macros == _base()


# --- tracking helpers ---

def test_calories_from_steps():
    assert calculate_calories_from_steps(10000, 70) == 350
    assert calculate_calories_from_steps(0, 70) == 0


def test_nutrient_percentages():
    result = calculate_nutrient_percentages({"protein": 75, "sodium": 0}, {"protein": 150, "sodium": 2300, "iron": 0})
    assert result == {"protein": 50, "sodium": 0, "iron": 0}
