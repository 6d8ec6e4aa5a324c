"""Tests for food exclusion and suggestion ranking."""

from __future__ import annotations

import pytest

from anatom.services.food_filter import (
    Food,
    MacroRemaining,
    exclusion_reason,
    filter_foods_for_user,
    score_food_fit,
    suggest_foods,
)

CHICKEN = Food("Chicken Breast", 165, 31, 0, 3.6, category="poultry")
PEANUT_BUTTER = Food("Peanut Butter", 190, 7, 7, 16, category="nuts", allergens=("Peanuts",), is_vegan=True)
BACON = Food("Bacon", 200, 12, 0, 16, category="meat")
PORK_CHOP = Food("Grilled Chop", 230, 26, 0, 14, category="pork")
SHRIMP = Food("Shrimp", 99, 24, 0, 0.3, category="shellfish")
BREAD = Food("Whole Wheat Bread", 80, 4, 14, 1, category="grains")
GF_BREAD = Food("Gluten Free Bread", 80, 2, 15, 1, category="grains", is_gluten_free=True)
RICE = Food("White Rice", 205, 4, 45, 0.4, category="grains", is_vegan=True)
MILK = Food("Milk", 100, 8, 12, 2.5, category="dairy")
TOFU = Food("Tofu", 94, 10, 2, 6, category="legumes", is_vegan=True)


# --- exclusions ---

@pytest.mark.parametrize("food,allergies,preferences,reason", [
    (PEANUT_BUTTER, ["peanut"], [], "Contains allergen: peanut"),
    (CHICKEN, [], ["vegetarian"], "Not vegetarian"),
    (MILK, [], ["vegan"], "Not vegan"),
    (BACON, [], ["halal"], "Not halal"),
    (PORK_CHOP, [], ["halal"], "Not halal"),
    (SHRIMP, [], ["kosher"], "Not kosher"),
    (BREAD, [], ["gluten"], "Contains gluten"),
    (RICE, [], ["keto"], "Too high in carbs for keto"),
])
def test_exclusion_reason(food, allergies, preferences, reason):
    assert exclusion_reason(food, allergies, preferences) == reason


@pytest.mark.parametrize("food,preferences", [
    (MILK, ["vegetarian"]),
    (TOFU, ["vegan"]),
    (GF_BREAD, ["gluten"]),
    (CHICKEN, ["keto", "halal"]),
])
def test_food_allowed(food, preferences):
    assert exclusion_reason(food, [], preferences) is None


def test_allergy_checked_before_preferences():
    assert exclusion_reason(PEANUT_BUTTER, ["PEANUT"], ["keto"]) == "Contains allergen: PEANUT"


def test_filter_foods_for_user_splits_allowed_and_excluded():
    allowed, excluded = filter_foods_for_user([BACON, TOFU, MILK], [], ["vegan"])
    assert allowed == [TOFU]
    assert [(e.food.name, e.reason) for e in excluded] == [("Bacon", "Not vegan"), ("Milk", "Not vegan")]


# --- scoring ---

def test_high_protein_food_scores_high():
    remaining = MacroRemaining(calories=800, protein=60, carbs=100, fat=30)
    score, reason = score_food_fit(CHICKEN, remaining)
    assert score > score_food_fit(RICE, remaining)[0]
    assert reason.startswith("High protein")


def test_fatty_food_penalised_when_fat_is_used_up():
    remaining = MacroRemaining(calories=800, protein=60, carbs=100, fat=0)
    _, reason = score_food_fit(BACON, remaining)
    assert "Low fat option preferred" in reason


def test_fallback_reason():
    remaining = MacroRemaining(calories=0, protein=0, carbs=0, fat=0)
    assert score_food_fit(RICE, remaining) == (0, "Fits your goals")


def test_suggest_foods_sorted_and_limited():
    remaining = MacroRemaining(calories=800, protein=60, carbs=100, fat=30)
    foods = [RICE, CHICKEN, TOFU, MILK, SHRIMP]
    suggestions = suggest_foods(foods, remaining, limit=3)
    assert len(suggestions) == 3
    scores = [s.score for s in suggestions]
    assert scores == sorted(scores, reverse=True)
    assert suggestions[0].food in (CHICKEN, SHRIMP)
