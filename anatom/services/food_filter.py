"""Food exclusion by allergy and diet, and ranking against the day's remaining macros."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass(frozen=True)
class Food:
    name: str
    calories: float
    protein: float
    carbs: float
    fat: float
    category: Optional[str] = None
    allergens: tuple[str, ...] = ()
    is_vegan: bool = False
    is_gluten_free: bool = False


@dataclass(frozen=True)
class ExcludedFood:
    food: Food
    reason: str


@dataclass(frozen=True)
class MacroRemaining:
    calories: float
    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class ScoredFood:
    food: Food
    score: int
    reason: str


def _contains_any(text: Optional[str], words: Iterable[str]) -> bool:
    text = (text or "").lower()
    return any(w in text for w in words)


def _preference_violation(food: Food, preference: str) -> Optional[str]:
    if preference == "vegetarian":
        if _contains_any(food.category, ("meat", "poultry", "fish")):
            return "Not vegetarian"
    elif preference == "vegan":
        if not food.is_vegan and _contains_any(food.category, ("meat", "dairy", "egg", "fish")):
            return "Not vegan"
    elif preference == "halal":
        if _contains_any(food.category, ("pork",)) or _contains_any(food.name, ("pork", "bacon", "ham")):
            return "Not halal"
    elif preference == "kosher":
        if _contains_any(food.category, ("pork", "shellfish")):
            return "Not kosher"
    elif preference == "gluten":
        if not food.is_gluten_free and _contains_any(food.name, ("bread", "pasta", "wheat")):
            return "Contains gluten"
    elif preference == "keto":
        # rough per-serving cut-off
        if food.carbs > 15:
            return "Too high in carbs for keto"
    return None


def exclusion_reason(food: Food, allergies: Iterable[str], preferences: Iterable[str]) -> Optional[str]:
    allergens = [a.lower() for a in food.allergens]
    for allergy in allergies:
        if any(allergy.lower() in a for a in allergens):
            return f"Contains allergen: {allergy}"
    for preference in preferences:
        reason = _preference_violation(food, preference)
        if reason:
            return reason
    return None


def filter_foods_for_user(
    foods: Iterable[Food],
    allergies: Iterable[str],
    preferences: Iterable[str],
) -> tuple[list[Food], list[ExcludedFood]]:
    allergies = list(allergies)
    preferences = list(preferences)
    allowed: list[Food] = []
    excluded: list[ExcludedFood] = []
    for food in foods:
        reason = exclusion_reason(food, allergies, preferences)
        if reason:
            excluded.append(ExcludedFood(food, reason))
        else:
            allowed.append(food)
    return allowed, excluded


def score_food_fit(food: Food, remaining: MacroRemaining) -> tuple[int, str]:
    """Higher is better. Protein fit carries triple weight."""
    score = 0.0
    reasons: list[str] = []

    if remaining.protein > 0 and food.protein > 0:
        score += min(food.protein / remaining.protein, 1) * 3 * 100
        if food.protein >= 15:
            reasons.append("High protein")

    if remaining.carbs > 0 and food.carbs > 0:
        score += min(food.carbs / remaining.carbs, 1) * 50

    if remaining.fat > 0 and food.fat > 0:
        score += min(food.fat / remaining.fat, 1) * 30
    elif remaining.fat <= 0 and food.fat > 10:
        score -= 20
        reasons.append("Low fat option preferred")

    if remaining.calories > 0:
        score += (1 if food.calories <= remaining.calories else 0.5) * 0.5 * 40
        if food.calories <= remaining.calories * 0.3:
            reasons.append("Light option")

    total_grams = food.protein + food.carbs + food.fat
    if total_grams > 0 and food.protein / total_grams >= 0.4:
        score += 20
        if "High protein" not in reasons:
            reasons.append("Protein-rich")

    if not reasons:
        reasons.append("Good macro balance" if score > 100 else "Fits your goals")
    return round(score), ", ".join(reasons)


def suggest_foods(foods: Iterable[Food], remaining: MacroRemaining, limit: int = 10) -> list[ScoredFood]:
    scored = [ScoredFood(food, *score_food_fit(food, remaining)) for food in foods]
    scored.sort(key=lambda s: s.score, reverse=True)
    return scored[:limit]
