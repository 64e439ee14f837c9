"""
Candidate selector - picks exactly one meal (or none) from the active catalog.
"""

import logging
from collections import defaultdict
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel

from app.config import RotationResetStrategy
from core.utils.helpers import as_utc
from domain.schemas.arbiter_schemas import (
    DecisionEventRecord,
    InventoryItemRow,
    MealIngredientRow,
    MealRow,
)
from services.drm_evaluator import events_in_window
from services.inventory_decay import INVENTORY_CONFIDENCE_THRESHOLD
from services.meal_scorer import score_meal_by_inventory

logger = logging.getLogger("mealarbiter.selector")

# Pantry-friendly meals used to bootstrap households with no inventory yet.
# Every key must exist in the seeded catalog.
SAFE_CORE_MEAL_KEYS: Tuple[str, ...] = (
    "spaghetti-aglio-olio",
    "egg-fried-rice",
    "quick-grilled-cheese",
    "scrambled-eggs-toast",
    "pasta-marinara",
    "quesadilla-cheese",
    "bean-and-cheese-burrito",
    "instant-ramen-upgrade",
    "tuna-salad-crackers",
    "pb-banana-sandwich",
)

DEFAULT_ROTATION_WINDOW_DAYS = 7


class MealSelection(BaseModel):
    """Result of candidate selection; ``meal`` is None only for an empty catalog"""

    meal: Optional[MealRow] = None
    inventory_score: float = 0.0
    candidate_count: int = 0
    rotation_reset: bool = False


def resolve_safe_core_meals(meals: Iterable[MealRow]) -> List[MealRow]:
    """Safe core meals present in the catalog, in catalog order."""
    keys = set(SAFE_CORE_MEAL_KEYS)
    return [m for m in meals if m.canonical_key in keys]


def recent_meal_ids(
    events: Iterable[DecisionEventRecord],
    now: Union[str, datetime],
    window_days: int,
) -> List[str]:
    """Distinct meal ids decided in the trailing window, most recent first."""
    if window_days <= 0:
        return []
    windowed = sorted(
        events_in_window(events, now, window_days),
        key=lambda e: as_utc(e.decided_at),
        reverse=True,
    )
    seen = []
    for event in windowed:
        if event.meal_id is not None and event.meal_id not in seen:
            seen.append(event.meal_id)
    return seen


def apply_rotation(
    candidates: Sequence[MealRow],
    recent_ids: Sequence[str],
    strategy: RotationResetStrategy = RotationResetStrategy.IGNORE_ALL,
) -> Tuple[List[MealRow], bool]:
    """Drop recently decided meals unless that would leave nothing.

    Rotation is best-effort: when every candidate was decided recently the
    exclusion resets, either entirely (IGNORE_ALL) or by forgetting history
    oldest-first until something survives (DROP_OLDEST).

    Returns:
        (remaining candidates, whether the exclusion was reset)
    """
    excluded = set(recent_ids)
    remaining = [m for m in candidates if m.id not in excluded]
    if remaining or not candidates:
        return remaining, False

    if strategy == RotationResetStrategy.DROP_OLDEST:
        kept = list(recent_ids)
        while kept:
            kept.pop()
            excluded = set(kept)
            remaining = [m for m in candidates if m.id not in excluded]
            if remaining:
                return remaining, True

    return list(candidates), True


def select_meal(
    active_meals: Sequence[MealRow],
    ingredients: Sequence[MealIngredientRow],
    inventory: Sequence[InventoryItemRow],
    recent_events: Iterable[DecisionEventRecord],
    now: Union[str, datetime],
    rotation_window_days: int = DEFAULT_ROTATION_WINDOW_DAYS,
    reset_strategy: RotationResetStrategy = RotationResetStrategy.IGNORE_ALL,
    safe_core_bootstrap: bool = True,
    confidence_threshold: float = INVENTORY_CONFIDENCE_THRESHOLD,
) -> MealSelection:
    """Select a single meal. NEVER returns more than one.

    Steps:
    1. Keep active meals (catalog order is the tie-break precedence)
    2. With an empty inventory, prefer the safe core meals
    3. Exclude meals decided in the rotation window, resetting if exhausted
    4. Score by inventory; highest wins, first-defined wins ties

    Args:
        active_meals: Catalog rows in catalog order
        ingredients: Ingredient join rows for the catalog
        inventory: Household inventory
        recent_events: Household decision history
        now: Request timestamp
        rotation_window_days: Trailing days used for rotation avoidance
        reset_strategy: How to reset an exhausted rotation
        safe_core_bootstrap: Whether to restrict empty-inventory households
            to the safe core meals
        confidence_threshold: Decayed confidence below which an inventory
            match counts as missing

    Returns:
        MealSelection; ``meal`` is None only when no active meal exists
    """
    candidates = [m for m in active_meals if m.is_active]
    if not candidates:
        logger.info("No active meals in catalog")
        return MealSelection()

    if safe_core_bootstrap and not inventory:
        safe_core = resolve_safe_core_meals(candidates)
        if safe_core:
            candidates = safe_core
        else:
            logger.warning("Inventory empty and no safe core meals in catalog")

    recent_ids = recent_meal_ids(recent_events, now, rotation_window_days)
    candidates, reset = apply_rotation(candidates, recent_ids, reset_strategy)
    if reset:
        logger.info(
            f"Rotation exhausted {len(candidates)} candidates; exclusion reset "
            f"({reset_strategy.value})"
        )

    rows_by_meal: Dict[str, List[MealIngredientRow]] = defaultdict(list)
    for row in ingredients:
        rows_by_meal[row.meal_id].append(row)

    best: Optional[MealRow] = None
    best_score = -1.0
    for meal in candidates:
        score = score_meal_by_inventory(
            meal,
            rows_by_meal.get(meal.id, []),
            inventory,
            now,
            confidence_threshold=confidence_threshold,
        )
        if score > best_score:
            best, best_score = meal, score

    logger.info(
        f"Selected {best.canonical_key} (score={best_score:.3f}) "
        f"from {len(candidates)} candidates"
    )
    return MealSelection(
        meal=best,
        inventory_score=best_score,
        candidate_count=len(candidates),
        rotation_reset=reset,
    )
