"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.meal_repository import MealRepository
from repositories.inventory_repository import InventoryRepository
from repositories.decision_event_repository import DecisionEventRepository
from repositories.decision_store import DecisionStore, SQLDecisionStore

__all__ = [
    "BaseRepository",
    "MealRepository",
    "InventoryRepository",
    "DecisionEventRepository",
    "DecisionStore",
    "SQLDecisionStore",
]
