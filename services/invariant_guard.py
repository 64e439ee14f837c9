"""
Response invariant guard.

The product contract is one decision, never a list of options. Every
response and every persisted decision payload passes through here before it
leaves the arbiter. Violations are raised, never corrected.
"""

import logging
from typing import Any, Mapping, Optional

from pydantic import BaseModel

from app.exceptions import InvariantViolation

logger = logging.getLogger("mealarbiter.invariants")

ARRAY_TYPES = (list, tuple, set, frozenset)

DECISION_RESPONSE_FIELDS = frozenset({"decision", "drmRecommended", "reason"})

# Multi-option vocabulary that must never appear on a decision
FORBIDDEN_DECISION_FIELDS = (
    "options",
    "alternatives",
    "suggestions",
    "otherMeals",
    "recommendations",
    "choices",
    "list",
    "items",
)


def find_first_array(obj: Any, path: str = "") -> Optional[str]:
    """Depth-first search for a list-like value; returns its path or None.

    Top-level arrays are reported as ``root``; nested ones as dotted paths
    such as ``decision.alternativeMeals``.
    """
    if isinstance(obj, BaseModel):
        obj = obj.model_dump(by_alias=True)

    if isinstance(obj, ARRAY_TYPES):
        return path or "root"

    if isinstance(obj, Mapping):
        for key, value in obj.items():
            child = f"{path}.{key}" if path else str(key)
            found = find_first_array(value, child)
            if found is not None:
                return found

    return None


def assert_no_arrays(obj: Any, context: str = "response", prefix: str = "") -> None:
    """Raise InvariantViolation if any array exists at any depth."""
    path = find_first_array(obj, prefix)
    if path is not None:
        logger.error(f"Array found in {context} at {path}")
        raise InvariantViolation(
            f"INVARIANT VIOLATION: array found in {context} at {path}", path=path
        )


def _violation(message: str, path: str) -> InvariantViolation:
    logger.error(f"{message} (path={path})")
    return InvariantViolation(f"INVARIANT VIOLATION: {message}", path=path)


def validate_decision(decision: Any, path: str = "decision") -> None:
    """A decision is one object with a type, an event id and no option lists."""
    assert_no_arrays(decision, context=path, prefix=path)

    if isinstance(decision, BaseModel):
        decision = decision.model_dump(by_alias=True)
    if not isinstance(decision, Mapping):
        raise _violation("decision must be a single object", path)

    if decision.get("decisionType") not in ("cook", "zero_cook", "order"):
        raise _violation(
            "decisionType must be cook, zero_cook or order", f"{path}.decisionType"
        )
    if not isinstance(decision.get("decisionEventId"), str):
        raise _violation(
            "decisionEventId must be a string", f"{path}.decisionEventId"
        )
    for field in FORBIDDEN_DECISION_FIELDS:
        if field in decision:
            raise _violation(f"decision must not contain '{field}'", f"{path}.{field}")


def validate_decision_response(payload: Any) -> None:
    """Check a wire-format decision response.

    - no arrays anywhere
    - only decision / drmRecommended / reason at the top level
    - drmRecommended is a boolean
    - decision is null exactly when drmRecommended is true
    - reason is present exactly when drmRecommended is true

    Raises:
        InvariantViolation: naming the first offending path
    """
    assert_no_arrays(payload, context="response payload")

    if not isinstance(payload, Mapping):
        raise _violation("response must be an object", "root")

    for key in payload:
        if key not in DECISION_RESPONSE_FIELDS:
            raise _violation(f"unknown field '{key}' in decision response", str(key))

    drm = payload.get("drmRecommended")
    if not isinstance(drm, bool):
        raise _violation("drmRecommended must be a boolean", "drmRecommended")

    if "decision" not in payload:
        raise _violation("decision must be present (object or null)", "decision")

    decision = payload["decision"]
    if drm:
        if decision is not None:
            raise _violation("decision must be null when DRM is recommended", "decision")
        if not isinstance(payload.get("reason"), str):
            raise _violation("reason is required when DRM is recommended", "reason")
    else:
        if "reason" in payload:
            raise _violation("reason is only allowed when DRM is recommended", "reason")
        if decision is None:
            raise _violation("decision is required unless DRM is recommended", "decision")
        validate_decision(decision)
