"""Repository for the meal catalog"""

from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from domain.models import Meal, MealIngredient
from repositories.base import BaseRepository


class MealRepository(BaseRepository[Meal]):
    """Repository for catalog meals and their ingredient rows"""

    def __init__(self, db: Session):
        super().__init__(db, Meal)

    def get_by_canonical_key(self, canonical_key: str) -> Optional[Meal]:
        """Get a meal by its stable key"""
        return self.db.query(Meal).filter(Meal.canonical_key == canonical_key).first()

    def get_active(self) -> List[Meal]:
        """Active meals in catalog order"""
        return (
            self.db.query(Meal)
            .filter(Meal.is_active.is_(True))
            .order_by(Meal.sort_order, Meal.canonical_key)
            .all()
        )

    def get_ingredients(self, meal_ids: Sequence[str]) -> List[MealIngredient]:
        """Ingredient rows for the given meals"""
        if not meal_ids:
            return []
        return (
            self.db.query(MealIngredient)
            .filter(MealIngredient.meal_id.in_(list(meal_ids)))
            .order_by(MealIngredient.meal_id, MealIngredient.id)
            .all()
        )
