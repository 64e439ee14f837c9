"""Read models the arbiter works on (catalog, inventory, decision history)"""

from pydantic import BaseModel, Field
from typing import Any, Dict, Optional
from datetime import datetime

from domain.enums import DecisionType, UserAction


class MealRow(BaseModel):
    """Catalog meal definition"""

    id: str
    canonical_key: str
    name: str
    instructions_short: str = ""
    est_minutes: int = Field(default=0, ge=0)
    is_active: bool = True

    model_config = {"from_attributes": True}


class MealIngredientRow(BaseModel):
    """Required ingredient of a meal"""

    meal_id: str
    ingredient_name: str
    is_pantry_staple: bool = False

    model_config = {"from_attributes": True}


class InventoryItemRow(BaseModel):
    """Observed household ingredient"""

    id: Optional[str] = None
    household_key: Optional[str] = None
    item_name: str
    qty_estimated: Optional[float] = Field(
        None, description="Observed quantity; None means unknown, not zero"
    )
    qty_used_estimated: Optional[float] = None
    unit: Optional[str] = None
    confidence: float = Field(..., ge=0, le=1)
    last_seen_at: datetime
    last_used_at: Optional[datetime] = None
    decay_rate_per_day: Optional[float] = Field(None, ge=0)

    model_config = {"from_attributes": True}


class DecisionEventRecord(BaseModel):
    """Audit row for one concrete decision"""

    id: str
    household_key: str
    decided_at: datetime
    decision_type: DecisionType
    meal_id: Optional[str] = None
    external_vendor_key: Optional[str] = None
    context_hash: str
    decision_payload: Dict[str, Any] = Field(default_factory=dict)
    user_action: UserAction = UserAction.PENDING

    model_config = {"from_attributes": True}
