"""Repository for household inventory"""

from typing import List

from sqlalchemy.orm import Session

from domain.models import InventoryItem
from repositories.base import BaseRepository


class InventoryRepository(BaseRepository[InventoryItem]):
    """Repository for inventory item data access"""

    def __init__(self, db: Session):
        super().__init__(db, InventoryItem)

    def get_by_household(self, household_key: str) -> List[InventoryItem]:
        """Get all inventory items for a household"""
        return (
            self.db.query(InventoryItem)
            .filter(InventoryItem.household_key == household_key)
            .order_by(InventoryItem.item_name)
            .all()
        )
