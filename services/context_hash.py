"""
Context hash - deterministic fingerprint of a decision's inputs.

Used for audit trails and replay detection, not for security.
"""

import hashlib
import json
from typing import Iterable, Optional

from domain.schemas.decision_schemas import DecisionSignal

CONTEXT_HASH_LENGTH = 16


def _enum_value(value):
    return getattr(value, "value", value)


def compute_context_hash(
    now_iso: str,
    signal: DecisionSignal,
    inventory_item_names: Iterable[str],
    selected_meal_key: Optional[str],
) -> str:
    """Hash the decision context.

    Inventory names are sorted first so observation order does not matter;
    every other field goes in verbatim. The caller's sequence is not mutated.
    """
    canonical = {
        "t": now_iso,
        "s": {
            "tw": _enum_value(signal.time_window),
            "e": _enum_value(signal.energy),
            "cc": bool(signal.calendar_conflict),
        },
        "i": sorted(inventory_item_names),
        "m": selected_meal_key,
    }
    encoded = json.dumps(canonical, sort_keys=True, separators=(",", ":"))
    digest = hashlib.sha256(encoded.encode("utf-8")).hexdigest()
    return digest[:CONTEXT_HASH_LENGTH]
