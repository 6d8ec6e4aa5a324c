"""Calorie, macro and micronutrient targets.

Base plan: Mifflin-St Jeor BMR, activity multiplier for TDEE, goal factor for
the calorie target, then protein by body weight, fat by share of calories and
carbs from whatever energy remains.

Health overrides run as an ordered list of passes (``OVERRIDE_PASSES``) over
an immutable draft. Each pass returns a new draft, so the order is explicit
and every pass can be tested alone. Diet-preference passes run after
condition passes and win.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, replace
from typing import Callable, Iterable, Mapping, Optional

from anatom.services.health_catalog import (
    DEFAULT_CATALOG,
    HealthProfile,
    HealthRulesCatalog,
    NutritionRestriction,
)

logger = logging.getLogger(__name__)

ACTIVITY_MULTIPLIERS = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very_active": 1.9,
}

GOAL_CALORIE_FACTORS = {
    "muscle_gain": 1.15,
    "fat_loss": 0.80,
    "endurance": 1.05,
    "sport_specific": 1.10,
    "general_fitness": 1.0,
}

# goal -> (protein g/kg, fat % of calories)
GOAL_MACRO_RULES = {
    "muscle_gain": (2.0, 25),
    "fat_loss": (2.3, 25),
    "endurance": (1.6, 20),
    "sport_specific": (1.8, 25),
    "general_fitness": (1.6, 25),
}

CALORIE_ADJUSTMENT_TEXT = {
    "muscle_gain": "+15% calorie surplus to support muscle protein synthesis and recovery",
    "fat_loss": "-20% calorie deficit to create energy deficit while preserving muscle mass",
    "endurance": "+5% surplus to fuel high-volume training demands",
    "sport_specific": "+10% surplus to support performance and recovery",
}

MACRO_RATIONALE_TEXT = {
    "muscle_gain": (
        "High protein (2.0g/kg) for muscle synthesis, moderate fat for hormones, "
        "remaining carbs for training energy"
    ),
    "fat_loss": "Very high protein (2.3g/kg) to preserve muscle in deficit, balanced fat and carbs",
    "endurance": "Moderate protein (1.6g/kg), lower fat (20%), high carbs for sustained energy",
    "sport_specific": "Balanced protein (1.8g/kg) for recovery, adequate carbs and fats for performance",
}

DIABETES_CARB_CAPS = {"diabetes_type_2": 40, "diabetes_type_1": 45}
KIDNEY_PROTEIN_G_PER_KG = 0.8
KETO_SPLIT = {"protein": 20, "carbs": 10, "fat": 70}


@dataclass(frozen=True)
class PhysiologicalInput:
    age_years: float
    sex: str
    weight_kg: float
    height_cm: float
    activity_level: str
    fitness_goal: str


@dataclass(frozen=True)
class MacroDistribution:
    protein_g: int
    carbs_g: int
    fat_g: int
    protein_pct: int
    carbs_pct: int
    fat_pct: int

    @property
    def calories(self) -> int:
        return self.protein_g * 4 + self.carbs_g * 4 + self.fat_g * 9


@dataclass(frozen=True)
class MicronutrientTargets:
    vitamin_a_mcg: int
    vitamin_c_mg: int
    vitamin_d_mcg: int
    calcium_mg: int
    iron_mg: int
    potassium_mg: int
    sodium_mg: int


@dataclass(frozen=True)
class HealthAdjustments:
    restrictions: tuple[NutritionRestriction, ...] = ()
    focus_nutrients: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()
    applied_passes: tuple[str, ...] = ()


@dataclass(frozen=True)
class NutritionPlan:
    bmr: int
    tdee: int
    target_calories: int
    macros: MacroDistribution
    micronutrients: MicronutrientTargets
    weight_kg: float
    health_adjustments: Optional[HealthAdjustments]
    explanation: dict

    def to_dict(self) -> dict:
        return asdict(self)


# ── Base formulas ────────────────────────────────────────────────────────

def calculate_bmr(data: PhysiologicalInput) -> int:
    base = 10 * data.weight_kg + 6.25 * data.height_cm - 5 * data.age_years
    return round(base + 5 if data.sex == "male" else base - 161)


def calculate_tdee(bmr: int, activity_level: str) -> int:
    return round(bmr * ACTIVITY_MULTIPLIERS.get(activity_level, 1.2))


def calculate_target_calories(tdee: int, goal: str) -> int:
    return round(tdee * GOAL_CALORIE_FACTORS.get(goal, 1.0))


def _percentages(protein_g: int, carbs_g: int, target_calories: int) -> tuple[int, int, int]:
    if target_calories <= 0:
        return 0, 0, 0
    protein_pct = round(protein_g * 4 / target_calories * 100)
    carbs_pct = round(carbs_g * 4 / target_calories * 100)
    return protein_pct, carbs_pct, 100 - protein_pct - carbs_pct


def remainder_carbs(target_calories: int, protein_g: int, fat_g: int) -> int:
    """Carb grams that fill the calories left by protein and fat, within 2 kcal of the target."""
    return round((target_calories - protein_g * 4 - fat_g * 9) / 4)


def calculate_macros(target_calories: int, weight_kg: float, goal: str) -> MacroDistribution:
    protein_per_kg, fat_pct = GOAL_MACRO_RULES.get(goal, GOAL_MACRO_RULES["general_fitness"])
    protein = round(weight_kg * protein_per_kg)
    fat = round(target_calories * fat_pct / 100 / 9)
    carbs = remainder_carbs(target_calories, protein, fat)
    protein_pct, carbs_pct, fat_pct_actual = _percentages(protein, carbs, target_calories)
    return MacroDistribution(
        protein_g=protein,
        carbs_g=carbs,
        fat_g=fat,
        protein_pct=protein_pct,
        carbs_pct=carbs_pct,
        fat_pct=fat_pct_actual,
    )


def calculate_micronutrient_targets(age_years: float, sex: str) -> MicronutrientTargets:
    is_male = sex == "male"
    return MicronutrientTargets(
        vitamin_a_mcg=900 if is_male else 700,
        vitamin_c_mg=90 if is_male else 75,
        vitamin_d_mcg=15,
        calcium_mg=1200 if age_years > 50 else 1000,
        iron_mg=8 if is_male or age_years > 50 else 18,
        potassium_mg=3400,
        sodium_mg=2300,
    )


def _explanation(data: PhysiologicalInput) -> dict:
    sex_term = "+ 5" if data.sex == "male" else "- 161"
    return {
        "bmr_formula": f"BMR calculated using Mifflin-St Jeor equation: 10×weight + 6.25×height - 5×age {sex_term}",
        "tdee_calculation": f"TDEE = BMR × activity multiplier ({data.activity_level})",
        "calorie_adjustment": CALORIE_ADJUSTMENT_TEXT.get(
            data.fitness_goal, "Maintenance calories for stable body composition"
        ),
        "macro_rationale": MACRO_RATIONALE_TEXT.get(
            data.fitness_goal, "Balanced macros for general health and fitness maintenance"
        ),
    }


# ── Health override passes ───────────────────────────────────────────────

def merge_restriction(existing: NutritionRestriction, incoming: NutritionRestriction) -> NutritionRestriction:
    """Combine two restrictions on the same nutrient.

    The lower limit wins; a missing limit never replaces a present one.
    Reasons are joined with "; " so both sources stay visible.
    """
    if incoming.limit is None:
        limit = existing.limit
    elif existing.limit is None:
        limit = incoming.limit
    else:
        limit = min(existing.limit, incoming.limit)
    reason = existing.reason if incoming.reason == existing.reason else f"{existing.reason}; {incoming.reason}"
    return NutritionRestriction(nutrient=existing.nutrient, limit=limit, reason=reason)


def merge_restrictions(restrictions: Iterable[NutritionRestriction]) -> tuple[NutritionRestriction, ...]:
    merged: dict[str, NutritionRestriction] = {}
    for r in restrictions:
        merged[r.nutrient] = merge_restriction(merged[r.nutrient], r) if r.nutrient in merged else r
    return tuple(merged.values())


@dataclass(frozen=True)
class NutritionDraft:
    """Work-in-progress macros and adjustments threaded through the override passes."""
    target_calories: int
    weight_kg: float
    conditions: frozenset[str]
    preferences: frozenset[str]
    macros: MacroDistribution
    adjustments: HealthAdjustments

    def with_adjustments(self, **changes) -> "NutritionDraft":
        return replace(self, adjustments=replace(self.adjustments, **changes))

    def note(
        self,
        warnings: Iterable[str] = (),
        focus: Iterable[str] = (),
        recommendations: Iterable[str] = (),
    ) -> "NutritionDraft":
        a = self.adjustments
        return self.with_adjustments(
            warnings=a.warnings + tuple(warnings),
            focus_nutrients=a.focus_nutrients + tuple(focus),
            recommendations=a.recommendations + tuple(recommendations),
        )

    def with_macros(self, pass_name: str, protein_g: int, carbs_g: int, fat_g: int, **pct) -> "NutritionDraft":
        protein_pct, carbs_pct, fat_pct = _percentages(protein_g, carbs_g, self.target_calories)
        macros = MacroDistribution(
            protein_g=protein_g,
            carbs_g=carbs_g,
            fat_g=fat_g,
            protein_pct=pct.get("protein_pct", protein_pct),
            carbs_pct=pct.get("carbs_pct", carbs_pct),
            fat_pct=pct.get("fat_pct", fat_pct),
        )
        if "carbs_pct" in pct and "fat_pct" not in pct:
            macros = replace(macros, fat_pct=100 - macros.protein_pct - macros.carbs_pct)
        return replace(
            self,
            macros=macros,
            adjustments=replace(self.adjustments, applied_passes=self.adjustments.applied_passes + (pass_name,)),
        )


def merge_condition_rules(draft: NutritionDraft, catalog: HealthRulesCatalog) -> NutritionDraft:
    restrictions: list[NutritionRestriction] = list(draft.adjustments.restrictions)
    focus: list[str] = []
    recommendations: list[str] = []
    for rule in catalog.conditions_for(draft.conditions):
        restrictions.extend(rule.nutrition_restrictions)
        focus.extend(rule.focus_nutrients)
        recommendations.extend(rule.nutrition_recommendations)
    for pref in catalog.dietary_preferences_for(draft.preferences):
        recommendations.extend(pref.nutrition_considerations)
    return draft.with_adjustments(restrictions=merge_restrictions(restrictions)).note(
        focus=focus, recommendations=recommendations
    )


def diabetes_carb_cap(draft: NutritionDraft, catalog: HealthRulesCatalog) -> NutritionDraft:
    caps = [cap for cond, cap in DIABETES_CARB_CAPS.items() if cond in draft.conditions]
    if not caps:
        return draft
    # type 2 is listed first and wins when both are present
    cap = caps[0]
    draft = draft.note(
        warnings=[f"Carbohydrate intake limited to {cap}% due to diabetes management"],
        focus=["fiber"],
        recommendations=["Choose low glycemic index foods (GI < 55)", "Increase fiber intake to 30g+ daily"],
    )
    m = draft.macros
    if m.carbs_pct <= cap:
        return draft
    new_carbs = round(draft.target_calories * cap / 100 / 4)
    freed = m.carbs_g - new_carbs
    return draft.with_macros("diabetes_carb_cap", m.protein_g + freed, new_carbs, m.fat_g, carbs_pct=cap)


def kidney_protein_cap(draft: NutritionDraft, catalog: HealthRulesCatalog) -> NutritionDraft:
    if "kidney_disease" not in draft.conditions:
        return draft
    max_protein = round(draft.weight_kg * KIDNEY_PROTEIN_G_PER_KG)
    m = draft.macros
    if m.protein_g <= max_protein:
        return draft
    fat = m.fat_g + round((m.protein_g - max_protein) * 4 / 9)
    draft = draft.note(warnings=[f"Protein limited to {max_protein}g (0.8g/kg) for kidney health"])
    # fat moves in 9 kcal steps, so carbs absorb the rounding
    carbs = remainder_carbs(draft.target_calories, max_protein, fat)
    return draft.with_macros("kidney_protein_cap", max_protein, carbs, fat)


def cardio_sodium_notice(draft: NutritionDraft, catalog: HealthRulesCatalog) -> NutritionDraft:
    if not draft.conditions & {"hypertension", "heart_disease"}:
        return draft
    return draft.note(
        warnings=["Sodium intake strictly limited to 1500mg/day"],
        focus=["potassium", "magnesium"],
        recommendations=["Follow DASH diet principles"],
    )


def osteoporosis_bone_focus(draft: NutritionDraft, catalog: HealthRulesCatalog) -> NutritionDraft:
    if "osteoporosis" not in draft.conditions:
        return draft
    return draft.note(
        focus=["calcium", "vitaminD", "vitaminK"],
        recommendations=["Calcium intake: 1200mg+ daily", "Vitamin D: 800-1000 IU daily"],
    )


def keto_macros(draft: NutritionDraft, catalog: HealthRulesCatalog) -> NutritionDraft:
    if "keto" not in draft.preferences:
        return draft
    target = draft.target_calories
    draft = draft.note(
        warnings=["Keto diet: Very low carb (10%), high fat (70%). May need electrolyte supplementation."]
    )
    protein = round(target * KETO_SPLIT["protein"] / 100 / 4)
    fat = round(target * KETO_SPLIT["fat"] / 100 / 9)
    return draft.with_macros(
        "keto_macros",
        protein_g=protein,
        carbs_g=remainder_carbs(target, protein, fat),
        fat_g=fat,
        protein_pct=KETO_SPLIT["protein"],
        carbs_pct=KETO_SPLIT["carbs"],
        fat_pct=KETO_SPLIT["fat"],
    )


OverridePass = Callable[[NutritionDraft, HealthRulesCatalog], NutritionDraft]

OVERRIDE_PASSES: tuple[OverridePass, ...] = (
    merge_condition_rules,
    diabetes_carb_cap,
    kidney_protein_cap,
    cardio_sodium_notice,
    osteoporosis_bone_focus,
    keto_macros,
)


def apply_health_overrides(
    macros: MacroDistribution,
    target_calories: int,
    weight_kg: float,
    profile: HealthProfile,
    catalog: HealthRulesCatalog = DEFAULT_CATALOG,
    passes: Iterable[OverridePass] = OVERRIDE_PASSES,
) -> NutritionDraft:
    draft = NutritionDraft(
        target_calories=target_calories,
        weight_kg=weight_kg,
        conditions=frozenset(profile.medical_conditions),
        preferences=frozenset(profile.dietary_preferences),
        macros=macros,
        adjustments=HealthAdjustments(),
    )
    for override in passes:
        draft = override(draft, catalog)
    a = draft.adjustments
    return draft.with_adjustments(
        focus_nutrients=tuple(dict.fromkeys(a.focus_nutrients)),
        recommendations=tuple(dict.fromkeys(a.recommendations)),
    )


def _health_modifications_text(profile: HealthProfile, catalog: HealthRulesCatalog) -> str:
    conditions = [r.name for r in catalog.conditions_for(profile.medical_conditions)]
    preferences = [r.name for r in catalog.dietary_preferences_for(profile.dietary_preferences)]
    text = ""
    if conditions:
        text += f"Adjusted for: {', '.join(conditions)}. "
    if preferences:
        text += f"Diet: {', '.join(preferences)}."
    return text.strip()


def calculate(
    data: PhysiologicalInput,
    profile: Optional[HealthProfile] = None,
    catalog: HealthRulesCatalog = DEFAULT_CATALOG,
) -> NutritionPlan:
    bmr = calculate_bmr(data)
    tdee = calculate_tdee(bmr, data.activity_level)
    target = calculate_target_calories(tdee, data.fitness_goal)
    macros = calculate_macros(target, data.weight_kg, data.fitness_goal)
    explanation = _explanation(data)
    adjustments = None

    if profile is not None and not profile.is_empty_for_nutrition:
        draft = apply_health_overrides(macros, target, data.weight_kg, profile, catalog)
        macros = draft.macros
        adjustments = draft.adjustments
        explanation["health_modifications"] = _health_modifications_text(profile, catalog)
        logger.debug(
            "Nutrition overrides applied",
            extra={"ctx_passes": list(adjustments.applied_passes), "ctx_target_calories": target},
        )

    return NutritionPlan(
        bmr=bmr,
        tdee=tdee,
        target_calories=target,
        macros=macros,
        micronutrients=calculate_micronutrient_targets(data.age_years, data.sex),
        weight_kg=data.weight_kg,
        health_adjustments=adjustments,
        explanation=explanation,
    )


# ── Daily tracking helpers ───────────────────────────────────────────────

def calculate_calories_from_steps(steps: int, weight_kg: float) -> int:
    return round(steps * weight_kg * 0.0005)


def calculate_nutrient_percentages(consumed: Mapping[str, float], targets: Mapping[str, float]) -> dict[str, int]:
    """Percent of each target reached; nutrients missing from ``consumed`` count as zero."""
    percentages = {}
    for nutrient, target in targets.items():
        amount = consumed.get(nutrient) or 0
        percentages[nutrient] = round(amount / target * 100) if target else 0
    return percentages
