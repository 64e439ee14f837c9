"""Repository for decision events"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from domain.models import DecisionEvent
from repositories.base import BaseRepository


class DecisionEventRepository(BaseRepository[DecisionEvent]):
    """Repository for the decision audit log"""

    def __init__(self, db: Session):
        super().__init__(db, DecisionEvent)

    def create_event(
        self,
        event_id: str,
        household_key: str,
        decided_at: datetime,
        decision_type: str,
        meal_id: Optional[str],
        context_hash: str,
        decision_payload: Dict[str, Any],
        user_action: str = "pending",
    ) -> DecisionEvent:
        """
        Append a decision event.

        Args:
            event_id: Decision event id (generated by the arbiter)
            household_key: Household the decision belongs to
            decided_at: Decision timestamp (stored in UTC)
            decision_type: cook / zero_cook / order
            meal_id: Selected catalog meal, if any
            context_hash: Fingerprint of the decision inputs
            decision_payload: The decision object as sent to the client
            user_action: Initial action, always "pending" from the arbiter

        Returns:
            Created DecisionEvent instance
        """
        event = DecisionEvent(
            id=event_id,
            household_key=household_key,
            decided_at=decided_at,
            decision_type=decision_type,
            meal_id=meal_id,
            context_hash=context_hash,
            decision_payload=decision_payload,
            user_action=user_action,
        )
        return self.create(event)

    def get_recent(self, household_key: str, since: datetime) -> List[DecisionEvent]:
        """Events for a household decided at or after ``since``, newest first"""
        return (
            self.db.query(DecisionEvent)
            .filter(
                DecisionEvent.household_key == household_key,
                DecisionEvent.decided_at >= since,
            )
            .order_by(DecisionEvent.decided_at.desc())
            .all()
        )

    def get_by_household(self, household_key: str) -> List[DecisionEvent]:
        """All events for a household, newest first"""
        return (
            self.db.query(DecisionEvent)
            .filter(DecisionEvent.household_key == household_key)
            .order_by(DecisionEvent.decided_at.desc())
            .all()
        )
