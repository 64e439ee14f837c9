"""
Decision arbiter - returns EXACTLY ONE action, or a rescue recommendation.

Invariants:
- Never returns arrays or multiple options
- Inventory is advisory only; missing data never blocks a decision
- A decision event is written for every concrete decision and never for DRM
"""

import logging
import uuid
from datetime import timedelta
from typing import Callable, List

from app.config import Settings, settings as default_settings
from app.exceptions import DecisionPersistenceError
from core.utils.helpers import as_utc, parse_iso_datetime
from domain.enums import DecisionType, UserAction
from domain.schemas.arbiter_schemas import (
    DecisionEventRecord,
    InventoryItemRow,
    MealIngredientRow,
    MealRow,
)
from domain.schemas.decision_schemas import (
    CookDecision,
    DecisionRequest,
    DecisionResponse,
    ZeroCookDecision,
)
from repositories.decision_store import DecisionStore
from services.candidate_selector import select_meal
from services.context_hash import compute_context_hash
from services.drm_evaluator import evaluate_drm_trigger
from services.inventory_decay import is_likely_available
from services.invariant_guard import validate_decision, validate_decision_response

logger = logging.getLogger("mealarbiter.arbiter")

IdGenerator = Callable[[], str]
EventPersister = Callable[[DecisionEventRecord], None]

ZERO_COOK_TITLE = "Quick Assembly Meal"
ZERO_COOK_STEPS = (
    "Grab crackers, cheese, and deli meat from the fridge. Arrange on a plate. "
    "Add pickles or olives if available."
)
ZERO_COOK_MINUTES = 5


def default_id_generator() -> str:
    return str(uuid.uuid4())


def create_zero_cook_decision(
    decision_event_id: str, context_hash: str
) -> ZeroCookDecision:
    """Built-in fallback used when the catalog has no active meals"""
    return ZeroCookDecision(
        decision_event_id=decision_event_id,
        title=ZERO_COOK_TITLE,
        steps_short=ZERO_COOK_STEPS,
        est_minutes=ZERO_COOK_MINUTES,
        context_hash=context_hash,
    )


def build_cook_decision(
    meal: MealRow, decision_event_id: str, context_hash: str
) -> CookDecision:
    return CookDecision(
        decision_event_id=decision_event_id,
        meal_id=meal.id,
        title=meal.name,
        steps_short=meal.instructions_short,
        est_minutes=meal.est_minutes,
        context_hash=context_hash,
    )


def _guarded(response: DecisionResponse) -> DecisionResponse:
    validate_decision_response(response.to_payload())
    return response


def make_decision(
    request: DecisionRequest,
    active_meals: List[MealRow],
    ingredients: List[MealIngredientRow],
    inventory: List[InventoryItemRow],
    recent_decisions: List[DecisionEventRecord],
    id_generator: IdGenerator,
    event_persister: EventPersister,
    settings: Settings = None,
) -> DecisionResponse:
    """Make one decision for one household.

    Stages: DRM evaluation -> candidate selection -> persistence. The
    response guard runs on every outcome before it is returned.

    Args:
        request: Household, local timestamp and signal
        active_meals: Catalog rows, catalog order
        ingredients: Ingredient join rows for the catalog
        inventory: Household inventory
        recent_decisions: Household decision history
        id_generator: Produces the new decision event id
        event_persister: Durably records the decision event
        settings: Arbiter settings; defaults to the application settings

    Returns:
        DecisionResponse with a single decision or a DRM reason

    Raises:
        DecisionPersistenceError: If the decision event could not be written
        InvariantViolation: If the response breaks the single-decision contract
    """
    settings = settings or default_settings

    drm = evaluate_drm_trigger(request, recent_decisions, settings)
    if drm.should_trigger:
        logger.info(
            f"DRM recommended for household {request.household_key}: {drm.reason.value}"
        )
        return _guarded(DecisionResponse.for_drm(drm.reason))

    likely_available = sum(
        1
        for item in inventory
        if is_likely_available(
            item, request.now_iso, settings.inventory_confidence_threshold
        )
    )
    logger.info(
        f"Deciding for household {request.household_key}: "
        f"{len(active_meals)} meals, {len(inventory)} inventory items "
        f"({likely_available} likely available), {len(recent_decisions)} recent events"
    )

    selection = select_meal(
        active_meals,
        ingredients,
        inventory,
        recent_decisions,
        request.now_iso,
        rotation_window_days=settings.rotation_window_days,
        reset_strategy=settings.rotation_reset_strategy,
        safe_core_bootstrap=settings.safe_core_bootstrap,
        confidence_threshold=settings.inventory_confidence_threshold,
    )
    meal = selection.meal

    decision_event_id = id_generator()
    context_hash = compute_context_hash(
        request.now_iso,
        request.signal,
        [item.item_name for item in inventory],
        meal.canonical_key if meal is not None else None,
    )

    if meal is not None:
        decision = build_cook_decision(meal, decision_event_id, context_hash)
    else:
        logger.warning(
            f"No meal selectable for household {request.household_key}; using zero-cook"
        )
        decision = create_zero_cook_decision(decision_event_id, context_hash)

    decision_payload = decision.model_dump(by_alias=True, mode="json")
    validate_decision(decision_payload, path="decision_payload")

    event = DecisionEventRecord(
        id=decision_event_id,
        household_key=request.household_key,
        decided_at=parse_iso_datetime(request.now_iso),
        decision_type=DecisionType(decision.decision_type),
        meal_id=meal.id if meal is not None else None,
        context_hash=context_hash,
        decision_payload=decision_payload,
        user_action=UserAction.PENDING,
    )

    try:
        event_persister(event)
    except DecisionPersistenceError:
        raise
    except Exception as e:
        logger.error(f"Failed to persist decision event {decision_event_id}: {e}", exc_info=True)
        raise DecisionPersistenceError(
            f"Decision event {decision_event_id} could not be recorded",
            details={"household_key": request.household_key},
        ) from e

    logger.info(
        f"Decision {decision_event_id} recorded: {decision.decision_type} "
        f"(context_hash={context_hash}, inventory_score={selection.inventory_score:.3f}, "
        f"candidates={selection.candidate_count}, rotation_reset={selection.rotation_reset})"
    )
    return _guarded(DecisionResponse.for_decision(decision))


class DecisionService:
    """Reads arbiter inputs from a DecisionStore and runs make_decision()."""

    @staticmethod
    def decide(
        store: DecisionStore,
        request: DecisionRequest,
        settings: Settings = None,
        id_generator: IdGenerator = default_id_generator,
    ) -> DecisionResponse:
        settings = settings or default_settings

        history_days = max(settings.history_window_days, settings.rotation_window_days)
        since = as_utc(request.now_iso) - timedelta(days=history_days)

        active_meals = store.list_active_meals()
        ingredients = store.list_meal_ingredients([m.id for m in active_meals])
        inventory = store.list_inventory(request.household_key)
        recent_decisions = store.list_recent_decisions(request.household_key, since)

        return make_decision(
            request,
            active_meals,
            ingredients,
            inventory,
            recent_decisions,
            id_generator=id_generator,
            event_persister=store.insert_decision_event,
            settings=settings,
        )
