"""Services package - Business logic layer"""

from services.arbiter_service import DecisionService, make_decision

# Note: the decay, scoring, hashing, DRM and guard modules contain pure functions, not classes

__all__ = [
    "DecisionService",
    "make_decision",
]
