"""
Decision audit log.
"""

from sqlalchemy import Column, Text, TIMESTAMP, JSON, ForeignKey, CheckConstraint, Index
from sqlalchemy.sql import func

from domain.models.database import Base


class DecisionEvent(Base):
    """One row per concrete decision. Append-only from the arbiter's side."""

    __tablename__ = "decision_events"

    id = Column(Text, primary_key=True)
    household_key = Column(Text, nullable=False)
    decided_at = Column(TIMESTAMP(timezone=True), nullable=False)
    decision_type = Column(Text, nullable=False)
    meal_id = Column(Text, ForeignKey("meals.id"), nullable=True)
    external_vendor_key = Column(Text)
    context_hash = Column(Text, nullable=False)
    decision_payload = Column(JSON, nullable=False, default=dict)
    user_action = Column(Text, nullable=False, default="pending")
    actioned_at = Column(TIMESTAMP(timezone=True))
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint(
            "decision_type IN ('cook', 'zero_cook', 'order')",
            name="ck_decision_events_type",
        ),
        CheckConstraint(
            "user_action IN ('pending', 'approved', 'rejected', 'drm_triggered', 'expired')",
            name="ck_decision_events_user_action",
        ),
        Index("ix_decision_events_household_decided", "household_key", "decided_at"),
    )
