"""
Household inventory models.
"""

from sqlalchemy import (
    Column,
    Text,
    Float,
    TIMESTAMP,
    CheckConstraint,
    UniqueConstraint,
)
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base


class InventoryItem(Base):
    """Observed household ingredient with decay inputs"""

    __tablename__ = "inventory_items"

    id = Column(Text, primary_key=True, default=lambda: str(uuid.uuid4()))
    household_key = Column(Text, nullable=False, index=True)
    item_name = Column(Text, nullable=False)
    qty_estimated = Column(Float)
    qty_used_estimated = Column(Float)
    unit = Column(Text)
    confidence = Column(Float, nullable=False, default=0.5)
    source = Column(Text)
    last_seen_at = Column(TIMESTAMP(timezone=True), nullable=False)
    last_used_at = Column(TIMESTAMP(timezone=True))
    decay_rate_per_day = Column(Float)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    __table_args__ = (
        UniqueConstraint(
            "household_key", "item_name", name="uq_inventory_household_item"
        ),
        CheckConstraint(
            "confidence >= 0 AND confidence <= 1", name="ck_inventory_confidence_range"
        ),
    )
