"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.arbiter_schemas import (
    MealRow,
    MealIngredientRow,
    InventoryItemRow,
    DecisionEventRecord,
)
from domain.schemas.decision_schemas import (
    DecisionSignal,
    DecisionRequest,
    CookDecision,
    ZeroCookDecision,
    Decision,
    DecisionResponse,
)

__all__ = [
    # Arbiter read models
    "MealRow",
    "MealIngredientRow",
    "InventoryItemRow",
    "DecisionEventRecord",
    # Decision schemas
    "DecisionSignal",
    "DecisionRequest",
    "CookDecision",
    "ZeroCookDecision",
    "Decision",
    "DecisionResponse",
]
