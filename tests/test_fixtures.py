"""
Shared test fixtures and utilities for the Meal Arbiter test suite.

This module contains factories for arbiter inputs, an in-memory decision
store, an isolated SQLite session and the test client, reused across test
files to keep inputs consistent.
"""

import itertools
import uuid
from datetime import datetime
from typing import Generator, List, Optional, Sequence

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from api.dependencies import get_decision_store
from app.exceptions import DecisionPersistenceError
from core.utils.helpers import as_utc
from domain.enums import DecisionType, EnergyLevel, TimeWindow, UserAction
from domain.models import init_database
from domain.schemas import (
    DecisionEventRecord,
    DecisionRequest,
    DecisionSignal,
    InventoryItemRow,
    MealIngredientRow,
    MealRow,
)
from main import app
from repositories.decision_store import DecisionStore

# TestClient used without a context manager, so startup DB init never runs
client = TestClient(app)

# Monday evening in Chicago, inside the dinner window
DINNER_NOW = "2026-01-19T18:05:00-06:00"
HOUSEHOLD = "household-001"


# =============================================================================
# FACTORIES
# =============================================================================


def make_meal(
    canonical_key: str,
    name: Optional[str] = None,
    est_minutes: int = 15,
    meal_id: Optional[str] = None,
    is_active: bool = True,
    instructions_short: Optional[str] = None,
) -> MealRow:
    """
    Create a catalog meal row.

    Example:
        >>> meal = make_meal("egg-fried-rice")
        >>> meal.name
        'Egg Fried Rice'
    """
    return MealRow(
        id=meal_id or f"meal-{canonical_key}",
        canonical_key=canonical_key,
        name=name or canonical_key.replace("-", " ").title(),
        instructions_short=instructions_short or f"Make {canonical_key}.",
        est_minutes=est_minutes,
        is_active=is_active,
    )


def make_ingredient(
    meal: MealRow, ingredient_name: str, is_pantry_staple: bool = False
) -> MealIngredientRow:
    return MealIngredientRow(
        meal_id=meal.id,
        ingredient_name=ingredient_name,
        is_pantry_staple=is_pantry_staple,
    )


def make_inventory_item(
    item_name: str,
    confidence: float = 0.9,
    last_seen_at: str = DINNER_NOW,
    qty_estimated: Optional[float] = None,
    qty_used_estimated: Optional[float] = None,
    decay_rate_per_day: Optional[float] = None,
    household_key: str = HOUSEHOLD,
) -> InventoryItemRow:
    return InventoryItemRow(
        id=str(uuid.uuid4()),
        household_key=household_key,
        item_name=item_name,
        confidence=confidence,
        last_seen_at=last_seen_at,
        qty_estimated=qty_estimated,
        qty_used_estimated=qty_used_estimated,
        decay_rate_per_day=decay_rate_per_day,
    )


def make_decision_event(
    decided_at: str,
    meal_id: Optional[str] = None,
    user_action: UserAction = UserAction.PENDING,
    decision_type: DecisionType = DecisionType.COOK,
    household_key: str = HOUSEHOLD,
    event_id: Optional[str] = None,
) -> DecisionEventRecord:
    return DecisionEventRecord(
        id=event_id or str(uuid.uuid4()),
        household_key=household_key,
        decided_at=decided_at,
        decision_type=decision_type,
        meal_id=meal_id,
        context_hash="0" * 16,
        decision_payload={},
        user_action=user_action,
    )


def make_request(
    now_iso: str = DINNER_NOW,
    energy: EnergyLevel = EnergyLevel.OK,
    calendar_conflict: bool = False,
    household_key: str = HOUSEHOLD,
) -> DecisionRequest:
    return DecisionRequest(
        household_key=household_key,
        now_iso=now_iso,
        signal=DecisionSignal(
            time_window=TimeWindow.DINNER,
            energy=energy,
            calendar_conflict=calendar_conflict,
        ),
    )


def make_id_generator(prefix: str = "evt"):
    """Deterministic decision event ids: evt-1, evt-2, ..."""
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


def request_body(
    now_iso: str = DINNER_NOW,
    energy: str = "ok",
    calendar_conflict: bool = False,
    household_key: str = HOUSEHOLD,
) -> dict:
    """camelCase request body as a client sends it"""
    return {
        "householdKey": household_key,
        "nowIso": now_iso,
        "signal": {
            "timeWindow": "dinner",
            "energy": energy,
            "calendarConflict": calendar_conflict,
        },
    }


# =============================================================================
# IN-MEMORY DECISION STORE
# =============================================================================


class InMemoryDecisionStore(DecisionStore):
    """
    DecisionStore double holding rows in lists.

    Set ``fail_inserts`` to make insert_decision_event raise
    DecisionPersistenceError, as the SQL store does on a failed write.
    """

    def __init__(
        self,
        meals: Sequence[MealRow] = (),
        ingredients: Sequence[MealIngredientRow] = (),
        inventory: Sequence[InventoryItemRow] = (),
        events: Sequence[DecisionEventRecord] = (),
        fail_inserts: bool = False,
    ):
        self.meals = list(meals)
        self.ingredients = list(ingredients)
        self.inventory = list(inventory)
        self.events: List[DecisionEventRecord] = list(events)
        self.fail_inserts = fail_inserts
        self.inserted: List[DecisionEventRecord] = []

    def list_active_meals(self) -> List[MealRow]:
        return [m for m in self.meals if m.is_active]

    def list_meal_ingredients(self, meal_ids: Sequence[str]) -> List[MealIngredientRow]:
        wanted = set(meal_ids)
        return [row for row in self.ingredients if row.meal_id in wanted]

    def list_inventory(self, household_key: str) -> List[InventoryItemRow]:
        return [i for i in self.inventory if i.household_key == household_key]

    def list_recent_decisions(
        self, household_key: str, since: datetime
    ) -> List[DecisionEventRecord]:
        cutoff = as_utc(since)
        return [
            e
            for e in self.events
            if e.household_key == household_key and as_utc(e.decided_at) >= cutoff
        ]

    def insert_decision_event(self, event: DecisionEventRecord) -> None:
        if self.fail_inserts:
            raise DecisionPersistenceError(f"Decision event {event.id} could not be recorded")
        self.events.append(event)
        self.inserted.append(event)


# =============================================================================
# PYTEST FIXTURES
# =============================================================================


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """
    Create a database session for integration tests.

    Each test gets a private in-memory SQLite database with the arbiter
    schema, discarded when the test completes.

    Yields:
        Session: SQLAlchemy database session
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_database(bind=engine)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        engine.dispose()


@pytest.fixture
def override_store():
    """
    Route the decision endpoint to an in-memory store.

    Yields a function that installs a given store; overrides are cleared
    after the test.
    """

    def _install(store: DecisionStore) -> DecisionStore:
        app.dependency_overrides[get_decision_store] = lambda: store
        return store

    try:
        yield _install
    finally:
        app.dependency_overrides.clear()
