"""
Meal scorer - how well the household's inventory covers a meal.
"""

import logging
from datetime import datetime
from typing import List, Sequence, Union

from domain.schemas.arbiter_schemas import (
    InventoryItemRow,
    MealIngredientRow,
    MealRow,
)
from services.ingredient_matcher import (
    SCORE_TOLERANCE,
    IngredientMatch,
    rank_inventory_matches,
)
from services.inventory_decay import (
    INVENTORY_CONFIDENCE_THRESHOLD,
    decay_confidence,
    is_likely_available,
)

logger = logging.getLogger("mealarbiter.scorer")

PANTRY_STAPLE_SCORE = 1.0
MISSING_INGREDIENT_SCORE = 0.0

# Matches below this score are partial and capped at WEAK_MATCH_CAP
STRONG_MATCH_THRESHOLD = 0.80
WEAK_MATCH_CAP = 0.50


def match_contribution(
    match: IngredientMatch,
    now: Union[str, datetime],
    confidence_threshold: float = INVENTORY_CONFIDENCE_THRESHOLD,
) -> float:
    """Contribution of one matched inventory row.

    Rows that are not likely available (decayed confidence under the
    threshold, or a known quantity used up) count as missing. Otherwise the
    decayed confidence is weighted by the match score, and weak matches are
    capped so a near miss never scores like the real ingredient.
    """
    if not is_likely_available(match.item, now, confidence_threshold):
        return MISSING_INGREDIENT_SCORE

    contribution = decay_confidence(match.item, now) * match.score
    if match.score < STRONG_MATCH_THRESHOLD:
        contribution = min(contribution, WEAK_MATCH_CAP)
    return contribution


def score_ingredient(
    ingredient_name: str,
    inventory: Sequence[InventoryItemRow],
    now: Union[str, datetime],
    confidence_threshold: float = INVENTORY_CONFIDENCE_THRESHOLD,
) -> float:
    """Contribution of a non-staple ingredient, 0 when nothing matches.

    Among rows tied for the best match score the one contributing most wins,
    so a stale duplicate never hides a fresh observation.
    """
    matches = rank_inventory_matches(ingredient_name, inventory)
    if not matches:
        return MISSING_INGREDIENT_SCORE

    best_score = matches[0].score
    return max(
        match_contribution(m, now, confidence_threshold)
        for m in matches
        if best_score - m.score <= SCORE_TOLERANCE
    )


def score_meal_by_inventory(
    meal: MealRow,
    ingredient_rows: List[MealIngredientRow],
    inventory: List[InventoryItemRow],
    now: Union[str, datetime],
    confidence_threshold: float = INVENTORY_CONFIDENCE_THRESHOLD,
) -> float:
    """Score a meal against current inventory.

    Scoring rules:
    - Pantry staples: 1.0, inventory is not consulted
    - Other ingredients: decayed confidence x match score of the best
      token match, capped for weak matches
    - No match, or a match that is not likely available: 0

    Args:
        meal: Meal to score
        ingredient_rows: Ingredient join rows (any meal; filtered by meal.id)
        inventory: Household inventory
        now: Current time used for decay
        confidence_threshold: Decayed confidence below which a match counts 0

    Returns:
        Mean contribution in [0, 1]; 0 for a meal without ingredients
    """
    contributions = []
    for row in ingredient_rows:
        if row.meal_id != meal.id:
            continue
        if row.is_pantry_staple:
            contributions.append(PANTRY_STAPLE_SCORE)
            continue
        contributions.append(
            score_ingredient(row.ingredient_name, inventory, now, confidence_threshold)
        )

    if not contributions:
        logger.debug(f"Meal {meal.canonical_key} has no ingredient rows; scoring 0")
        return 0.0

    return sum(contributions) / len(contributions)
