"""
Meal scoring tests.

Scores are the mean of per-ingredient contributions: pantry staples count
fully, inventory matches count decayed confidence times match score (weak
matches capped), and missing or unlikely items count nothing.
"""

import pytest

from services.ingredient_matcher import IngredientMatch
from services.meal_scorer import (
    WEAK_MATCH_CAP,
    match_contribution,
    score_ingredient,
    score_meal_by_inventory,
)
from test_fixtures import DINNER_NOW, make_ingredient, make_inventory_item, make_meal


# =============================================================================
# SCORING RULES
# =============================================================================


def test_three_staples_and_one_missing_scores_three_quarters():
    """
    Test the no-partial-credit rule for missing ingredients.

    Verifies:
    - Staples contribute 1.0 without inventory
    - A missing non-staple contributes 0
    """
    meal = make_meal("pasta-marinara")
    rows = [
        make_ingredient(meal, "pasta", True),
        make_ingredient(meal, "marinara sauce", True),
        make_ingredient(meal, "olive oil", True),
        make_ingredient(meal, "fresh basil", False),
    ]

    assert score_meal_by_inventory(meal, rows, [], DINNER_NOW) == pytest.approx(0.75)


def test_meal_without_ingredients_scores_zero():
    meal = make_meal("mystery-dish")

    assert score_meal_by_inventory(meal, [], [make_inventory_item("eggs")], DINNER_NOW) == 0.0


def test_matched_ingredient_contributes_decayed_confidence():
    meal = make_meal("scrambled-eggs-toast")
    rows = [make_ingredient(meal, "butter", True), make_ingredient(meal, "eggs")]
    inventory = [make_inventory_item("eggs", confidence=0.8)]

    assert score_meal_by_inventory(meal, rows, inventory, DINNER_NOW) == pytest.approx(0.9)


def test_matching_ignores_case_and_whitespace():
    meal = make_meal("spaghetti-aglio-olio")
    rows = [make_ingredient(meal, "garlic")]
    inventory = [make_inventory_item("  Garlic ", confidence=1.0)]

    assert score_meal_by_inventory(meal, rows, inventory, DINNER_NOW) == pytest.approx(1.0)


def test_rows_for_other_meals_are_ignored():
    meal = make_meal("quick-grilled-cheese")
    other = make_meal("egg-fried-rice")
    rows = [make_ingredient(meal, "butter", True), make_ingredient(other, "eggs")]

    assert score_meal_by_inventory(meal, rows, [], DINNER_NOW) == pytest.approx(1.0)



def test_realistic_inventory_names_earn_credit():
    """
    Test matching receipt-style names to recipe ingredients.

    Verifies:
    - "Egg" covers "eggs" as a strong prefix match (1.0 x 0.8)
    - "Sourdough Bread (loaf)" covers "bread" fully
    """
    meal = make_meal("scrambled-eggs-toast")
    rows = [make_ingredient(meal, "eggs"), make_ingredient(meal, "bread")]
    inventory = [
        make_inventory_item("Egg", confidence=1.0),
        make_inventory_item("Sourdough Bread (loaf)", confidence=1.0),
    ]

    score = score_meal_by_inventory(meal, rows, inventory, DINNER_NOW)

    assert score > 0
    assert score == pytest.approx(0.9)


def test_eggplant_does_not_cover_egg():
    meal = make_meal("veggie-omelette")
    rows = [make_ingredient(meal, "egg")]
    inventory = [make_inventory_item("eggplant", confidence=1.0)]

    assert score_meal_by_inventory(meal, rows, inventory, DINNER_NOW) == 0.0


# =============================================================================
# MATCH QUALITY AND AVAILABILITY
# =============================================================================


def test_weak_match_is_capped():
    """
    Test the weak-match safeguard.

    Verifies:
    - A 2-of-3 token match (score ~0.67) at full confidence contributes
      WEAK_MATCH_CAP, not 0.67
    """
    meal = make_meal("chicken-stir-fry")
    rows = [make_ingredient(meal, "chicken breast rice")]
    inventory = [make_inventory_item("chicken breast", confidence=1.0)]

    assert score_meal_by_inventory(meal, rows, inventory, DINNER_NOW) == pytest.approx(
        WEAK_MATCH_CAP
    )


def test_strong_prefix_match_is_weighted_not_capped():
    meal = make_meal("pasta-marinara")
    rows = [make_ingredient(meal, "tomatoes")]
    inventory = [make_inventory_item("tomato", confidence=0.9)]

    assert score_ingredient("tomatoes", inventory, DINNER_NOW) == pytest.approx(0.72)
    assert score_meal_by_inventory(meal, rows, inventory, DINNER_NOW) == pytest.approx(0.72)


def test_match_below_confidence_threshold_counts_as_missing():
    inventory = [make_inventory_item("eggs", confidence=0.5)]

    assert score_ingredient("eggs", inventory, DINNER_NOW) == 0.0
    assert score_ingredient(
        "eggs", inventory, DINNER_NOW, confidence_threshold=0.4
    ) == pytest.approx(0.5)


def test_stale_observation_decays_below_threshold():
    inventory = [
        make_inventory_item("eggs", confidence=0.9, last_seen_at="2026-01-04T18:05:00-06:00")
    ]

    # 15 days at 3%/day leaves 0.9 x 0.55 = 0.495
    assert score_ingredient("eggs", inventory, DINNER_NOW) == 0.0


def test_used_up_quantity_counts_as_missing():
    inventory = [
        make_inventory_item("eggs", confidence=1.0, qty_estimated=6, qty_used_estimated=6)
    ]

    assert score_ingredient("eggs", inventory, DINNER_NOW) == 0.0


def test_duplicate_rows_use_the_freshest_observation():
    inventory = [
        make_inventory_item("eggs", confidence=0.4),
        make_inventory_item("EGGS", confidence=0.9),
    ]

    assert score_ingredient("eggs", inventory, DINNER_NOW) == pytest.approx(0.9)


def test_match_contribution_combines_confidence_and_score():
    item = make_inventory_item("tomato", confidence=0.8)

    assert match_contribution(IngredientMatch(item, 1.0), DINNER_NOW) == pytest.approx(0.8)
    assert match_contribution(IngredientMatch(item, 0.8), DINNER_NOW) == pytest.approx(0.64)
    assert match_contribution(IngredientMatch(item, 0.7), DINNER_NOW) == pytest.approx(0.5)
