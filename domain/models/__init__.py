"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
    get_db_session,
)
from domain.models.meal import Meal, MealIngredient
from domain.models.inventory import InventoryItem
from domain.models.decision_event import DecisionEvent

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    "get_db_session",
    # Catalog models
    "Meal",
    "MealIngredient",
    # Inventory models
    "InventoryItem",
    # Decision models
    "DecisionEvent",
]
