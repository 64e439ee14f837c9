"""
Meal catalog models.
"""

from sqlalchemy import (
    Column,
    Text,
    Integer,
    Boolean,
    TIMESTAMP,
    ForeignKey,
    UniqueConstraint,
    CheckConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base


class Meal(Base):
    """Catalog meal definition (maintained outside the arbiter)"""

    __tablename__ = "meals"

    id = Column(Text, primary_key=True, default=lambda: str(uuid.uuid4()))
    canonical_key = Column(Text, nullable=False, unique=True, index=True)
    name = Column(Text, nullable=False)
    instructions_short = Column(Text, nullable=False, default="")
    est_minutes = Column(Integer, nullable=False, default=0)
    est_cost_band = Column(Text)
    is_active = Column(Boolean, nullable=False, default=True)
    # Insertion order doubles as catalog precedence for tie-breaks
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    ingredients = relationship(
        "MealIngredient", back_populates="meal", cascade="all, delete-orphan"
    )

    __table_args__ = (
        CheckConstraint("est_minutes >= 0", name="ck_meals_est_minutes_nonneg"),
    )

    def __repr__(self):
        return f"<Meal(id={self.id}, canonical_key='{self.canonical_key}')>"


class MealIngredient(Base):
    """Required ingredient of a catalog meal"""

    __tablename__ = "meal_ingredients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    meal_id = Column(
        Text, ForeignKey("meals.id", ondelete="CASCADE"), nullable=False, index=True
    )
    ingredient_name = Column(Text, nullable=False)
    qty_text = Column(Text)
    is_pantry_staple = Column(Boolean, nullable=False, default=False)

    meal = relationship("Meal", back_populates="ingredients")

    __table_args__ = (
        UniqueConstraint(
            "meal_id", "ingredient_name", name="uq_meal_ingredients_meal_name"
        ),
    )
