"""
Inventory decay model.

Inventory is probabilistic and advisory: these estimates feed scoring and
never block a decision. Decay is linear in days since the item was last seen.
"""

from datetime import datetime
from typing import Optional, Union

from core.utils.helpers import clamp, days_between
from domain.schemas.arbiter_schemas import InventoryItemRow

# 5% of the quantity per day unless the item carries its own rate
DEFAULT_DECAY_RATE_PER_DAY = 0.05

# Confidence decays slower than quantity, and never below 20% of the observation
CONFIDENCE_DECAY_RATE_PER_DAY = 0.03
MIN_CONFIDENCE_FLOOR = 0.2

INVENTORY_CONFIDENCE_THRESHOLD = 0.60

Timestamp = Union[str, datetime]


def estimate_remaining_qty(item: InventoryItemRow, now: Timestamp) -> Optional[float]:
    """Estimated quantity still on hand, or None when the quantity was never known.

    remaining = max(0, (qty_estimated - qty_used) * max(0, 1 - days * rate))
    """
    if item.qty_estimated is None:
        return None

    base = item.qty_estimated - (item.qty_used_estimated or 0)
    days = days_between(item.last_seen_at, now)
    rate = (
        item.decay_rate_per_day
        if item.decay_rate_per_day is not None
        else DEFAULT_DECAY_RATE_PER_DAY
    )
    multiplier = max(0.0, 1 - days * rate)
    return max(0.0, base * multiplier)


def decay_confidence(item: InventoryItemRow, now: Timestamp) -> float:
    """Observation confidence after time decay, in [0, 1]."""
    days = days_between(item.last_seen_at, now)
    multiplier = max(MIN_CONFIDENCE_FLOOR, 1 - days * CONFIDENCE_DECAY_RATE_PER_DAY)
    return clamp(item.confidence * multiplier, 0.0, 1.0)


def is_likely_available(
    item: InventoryItemRow,
    now: Timestamp,
    threshold: float = INVENTORY_CONFIDENCE_THRESHOLD,
) -> bool:
    if decay_confidence(item, now) < threshold:
        return False
    remaining = estimate_remaining_qty(item, now)
    if remaining is not None and remaining <= 0:
        return False
    return True
