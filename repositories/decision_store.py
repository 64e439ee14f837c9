"""
Decision store - the narrow persistence contract the arbiter depends on.

The arbiter only reads the catalog, inventory and recent history, and
appends one decision event. SQLDecisionStore implements the contract over
the SQLAlchemy repositories.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.exceptions import DecisionPersistenceError
from core.utils.helpers import as_utc
from domain.schemas.arbiter_schemas import (
    DecisionEventRecord,
    InventoryItemRow,
    MealIngredientRow,
    MealRow,
)
from repositories.decision_event_repository import DecisionEventRepository
from repositories.inventory_repository import InventoryRepository
from repositories.meal_repository import MealRepository

logger = logging.getLogger("mealarbiter.decision_store")


class DecisionStore(ABC):
    """Read catalog / read inventory / read recent events / insert event"""

    @abstractmethod
    def list_active_meals(self) -> List[MealRow]:
        """Active catalog meals in catalog order"""

    @abstractmethod
    def list_meal_ingredients(self, meal_ids: Sequence[str]) -> List[MealIngredientRow]:
        """Ingredient join rows for the given meals"""

    @abstractmethod
    def list_inventory(self, household_key: str) -> List[InventoryItemRow]:
        """Household inventory"""

    @abstractmethod
    def list_recent_decisions(
        self, household_key: str, since: datetime
    ) -> List[DecisionEventRecord]:
        """Household decision events decided at or after ``since``"""

    @abstractmethod
    def insert_decision_event(self, event: DecisionEventRecord) -> None:
        """Durably append one decision event"""


class SQLDecisionStore(DecisionStore):
    """DecisionStore backed by a SQLAlchemy session"""

    def __init__(self, db: Session):
        self.db = db
        self.meals = MealRepository(db)
        self.inventory = InventoryRepository(db)
        self.events = DecisionEventRepository(db)

    def list_active_meals(self) -> List[MealRow]:
        return [MealRow.model_validate(m) for m in self.meals.get_active()]

    def list_meal_ingredients(self, meal_ids: Sequence[str]) -> List[MealIngredientRow]:
        return [
            MealIngredientRow.model_validate(row)
            for row in self.meals.get_ingredients(meal_ids)
        ]

    def list_inventory(self, household_key: str) -> List[InventoryItemRow]:
        return [
            InventoryItemRow.model_validate(item)
            for item in self.inventory.get_by_household(household_key)
        ]

    def list_recent_decisions(
        self, household_key: str, since: datetime
    ) -> List[DecisionEventRecord]:
        return [
            DecisionEventRecord.model_validate(event)
            for event in self.events.get_recent(household_key, as_utc(since))
        ]

    def insert_decision_event(self, event: DecisionEventRecord) -> None:
        try:
            self.events.create_event(
                event_id=event.id,
                household_key=event.household_key,
                decided_at=as_utc(event.decided_at),
                decision_type=event.decision_type.value,
                meal_id=event.meal_id,
                context_hash=event.context_hash,
                decision_payload=event.decision_payload,
                user_action=event.user_action.value,
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Could not insert decision event {event.id}: {e}")
            raise DecisionPersistenceError(
                f"Decision event {event.id} could not be recorded"
            ) from e
