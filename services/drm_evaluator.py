"""
DRM (rescue routing) trigger evaluation.

Runs before any meal selection. A triggered evaluation means no decision is
shown and no decision event is written.
"""

import logging
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Union

from pydantic import BaseModel

from app.config import Settings, settings as default_settings
from core.utils.helpers import as_utc, parse_iso_datetime
from domain.enums import DrmReason, EnergyLevel, UserAction
from domain.schemas.arbiter_schemas import DecisionEventRecord
from domain.schemas.decision_schemas import DecisionRequest

logger = logging.getLogger("mealarbiter.drm")

DRM_REJECTION_THRESHOLD = 2


class DrmEvaluation(BaseModel):
    """Outcome of trigger evaluation"""

    should_trigger: bool
    reason: Optional[DrmReason] = None

    model_config = {"frozen": True}


NO_TRIGGER = DrmEvaluation(should_trigger=False)


def parse_local_hour(now_iso: str) -> int:
    """Hour in the offset carried by the timestamp.

    "2026-01-19T20:30:00-06:00" -> 20
    """
    return parse_iso_datetime(now_iso).hour


def events_in_window(
    events: Iterable[DecisionEventRecord],
    now: Union[str, datetime],
    days: int,
) -> List[DecisionEventRecord]:
    """Events decided within the trailing ``days`` up to ``now``."""
    end = as_utc(now)
    start = end - timedelta(days=days)
    return [e for e in events if start <= as_utc(e.decided_at) <= end]


def has_consecutive_rejections(
    events: Iterable[DecisionEventRecord],
    threshold: int = DRM_REJECTION_THRESHOLD,
) -> bool:
    """True when the ``threshold`` most recent events were all rejected."""
    ordered = sorted(events, key=lambda e: as_utc(e.decided_at), reverse=True)
    latest = ordered[:threshold]
    if len(latest) < threshold:
        return False
    return all(e.user_action == UserAction.REJECTED for e in latest)


def evaluate_drm_trigger(
    request: DecisionRequest,
    recent_events: Iterable[DecisionEventRecord],
    settings: Settings = None,
) -> DrmEvaluation:
    """Decide whether to route the household to the rescue flow.

    Conditions, first match wins:
    1. low energy
    2. calendar conflict
    3. local hour at or past the late threshold
    4. the most recent events in the history window were all rejected

    Args:
        request: Decision request (signal + local timestamp)
        recent_events: Household decision events, any order
        settings: Arbiter settings; defaults to the application settings

    Returns:
        DrmEvaluation with the matching reason, or no trigger
    """
    settings = settings or default_settings
    signal = request.signal

    if signal.energy == EnergyLevel.LOW:
        return DrmEvaluation(should_trigger=True, reason=DrmReason.LOW_ENERGY)

    if signal.calendar_conflict:
        return DrmEvaluation(should_trigger=True, reason=DrmReason.CALENDAR_CONFLICT)

    hour = parse_local_hour(request.now_iso)
    if hour >= settings.late_threshold_hour:
        return DrmEvaluation(should_trigger=True, reason=DrmReason.LATE_NO_ACTION)

    windowed = events_in_window(
        recent_events, request.now_iso, settings.history_window_days
    )
    if has_consecutive_rejections(windowed, settings.drm_rejection_threshold):
        return DrmEvaluation(should_trigger=True, reason=DrmReason.TWO_REJECTIONS)

    logger.debug(
        f"No DRM trigger for household {request.household_key} "
        f"(hour={hour}, events={len(windowed)})"
    )
    return NO_TRIGGER
