"""
Domain enums for the meal arbiter.
Contains all enumeration types used across the domain models.
"""

import enum


class TimeWindow(str, enum.Enum):
    """Meal window the request was made for"""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


class EnergyLevel(str, enum.Enum):
    """Household energy reported with the request"""

    UNKNOWN = "unknown"
    LOW = "low"
    OK = "ok"
    HIGH = "high"


class DecisionType(str, enum.Enum):
    """Kind of concrete decision"""

    COOK = "cook"
    ZERO_COOK = "zero_cook"
    ORDER = "order"


class UserAction(str, enum.Enum):
    """Household response to a decision event"""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    DRM_TRIGGERED = "drm_triggered"
    EXPIRED = "expired"


class DrmReason(str, enum.Enum):
    """Why a request was routed to the rescue flow"""

    LOW_ENERGY = "low_energy"
    CALENDAR_CONFLICT = "calendar_conflict"
    LATE_NO_ACTION = "late_no_action"
    TWO_REJECTIONS = "two_rejections"
