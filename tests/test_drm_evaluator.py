"""
DRM (rescue routing) trigger tests.

Covers each trigger, the precedence between them, local-hour parsing from
the request offset and the rejection history window.
"""

import pytest

from app.config import Settings
from domain.enums import DrmReason, EnergyLevel, UserAction
from services.drm_evaluator import (
    evaluate_drm_trigger,
    events_in_window,
    has_consecutive_rejections,
    parse_local_hour,
)
from test_fixtures import DINNER_NOW, make_decision_event, make_request

LATE_NOW = "2026-01-19T20:30:00-06:00"


# =============================================================================
# INDIVIDUAL TRIGGERS
# =============================================================================


def test_no_trigger_for_ordinary_dinner_request():
    result = evaluate_drm_trigger(make_request(), [])

    assert result.should_trigger is False
    assert result.reason is None


def test_low_energy_triggers():
    result = evaluate_drm_trigger(make_request(energy=EnergyLevel.LOW), [])

    assert result.should_trigger is True
    assert result.reason == DrmReason.LOW_ENERGY


@pytest.mark.parametrize("energy", [EnergyLevel.UNKNOWN, EnergyLevel.OK, EnergyLevel.HIGH])
def test_other_energy_levels_do_not_trigger(energy):
    assert evaluate_drm_trigger(make_request(energy=energy), []).should_trigger is False


def test_calendar_conflict_triggers():
    result = evaluate_drm_trigger(make_request(calendar_conflict=True), [])

    assert result.reason == DrmReason.CALENDAR_CONFLICT


def test_late_hour_uses_request_offset():
    """
    Test that the hour comes from the offset carried in the timestamp.

    Verifies:
    - 20:30 at -06:00 is late even though it is 02:30 UTC
    - 19:59 local is not late
    """
    late = evaluate_drm_trigger(make_request(now_iso=LATE_NOW), [])
    early = evaluate_drm_trigger(make_request(now_iso="2026-01-19T19:59:00-06:00"), [])

    assert late.reason == DrmReason.LATE_NO_ACTION
    assert early.should_trigger is False


def test_utc_evening_is_not_late_for_eastern_offsets():
    """21:00 UTC is 15:00 at -06:00; the local hour decides"""
    result = evaluate_drm_trigger(make_request(now_iso="2026-01-19T15:00:00-06:00"), [])

    assert result.should_trigger is False


def test_two_most_recent_rejections_trigger():
    events = [
        make_decision_event("2026-01-18T18:00:00-06:00", "m1", UserAction.REJECTED),
        make_decision_event("2026-01-17T18:00:00-06:00", "m2", UserAction.REJECTED),
        make_decision_event("2026-01-16T18:00:00-06:00", "m3", UserAction.APPROVED),
    ]

    result = evaluate_drm_trigger(make_request(), events)

    assert result.reason == DrmReason.TWO_REJECTIONS


def test_rejection_streak_broken_by_latest_approval():
    events = [
        make_decision_event("2026-01-18T18:00:00-06:00", "m1", UserAction.APPROVED),
        make_decision_event("2026-01-17T18:00:00-06:00", "m2", UserAction.REJECTED),
        make_decision_event("2026-01-16T18:00:00-06:00", "m3", UserAction.REJECTED),
    ]

    assert evaluate_drm_trigger(make_request(), events).should_trigger is False


def test_single_rejection_does_not_trigger():
    events = [make_decision_event("2026-01-18T18:00:00-06:00", "m1", UserAction.REJECTED)]

    assert evaluate_drm_trigger(make_request(), events).should_trigger is False


def test_rejections_outside_history_window_are_ignored():
    events = [
        make_decision_event("2026-01-10T18:00:00-06:00", "m1", UserAction.REJECTED),
        make_decision_event("2026-01-09T18:00:00-06:00", "m2", UserAction.REJECTED),
    ]

    assert evaluate_drm_trigger(make_request(), events).should_trigger is False


def test_rejection_threshold_is_configurable():
    events = [
        make_decision_event("2026-01-18T18:00:00-06:00", "m1", UserAction.REJECTED),
        make_decision_event("2026-01-17T18:00:00-06:00", "m2", UserAction.REJECTED),
    ]

    result = evaluate_drm_trigger(
        make_request(), events, Settings(drm_rejection_threshold=3)
    )

    assert result.should_trigger is False


# =============================================================================
# PRECEDENCE
# =============================================================================


@pytest.mark.parametrize(
    "kwargs,expected",
    [
        (
            {"energy": EnergyLevel.LOW, "calendar_conflict": True, "now_iso": LATE_NOW},
            DrmReason.LOW_ENERGY,
        ),
        ({"calendar_conflict": True, "now_iso": LATE_NOW}, DrmReason.CALENDAR_CONFLICT),
        ({"now_iso": LATE_NOW}, DrmReason.LATE_NO_ACTION),
    ],
)
def test_first_matching_condition_wins(kwargs, expected):
    rejections = [
        make_decision_event("2026-01-19T12:00:00-06:00", "m1", UserAction.REJECTED),
        make_decision_event("2026-01-18T18:00:00-06:00", "m2", UserAction.REJECTED),
    ]

    assert evaluate_drm_trigger(make_request(**kwargs), rejections).reason == expected


# =============================================================================
# HELPERS
# =============================================================================


@pytest.mark.parametrize(
    "now_iso,hour",
    [
        ("2026-01-19T20:30:00-06:00", 20),
        ("2026-01-19T07:15:00+09:00", 7),
        ("2026-01-19T23:59:59Z", 23),
    ],
)
def test_parse_local_hour(now_iso, hour):
    assert parse_local_hour(now_iso) == hour


def test_events_in_window_bounds():
    inside = make_decision_event("2026-01-13T01:00:00Z")
    outside = make_decision_event("2026-01-12T23:00:00Z")
    future = make_decision_event("2026-01-21T00:00:00Z")

    windowed = events_in_window([inside, outside, future], DINNER_NOW, 7)

    assert windowed == [inside]


def test_consecutive_rejections_orders_by_time_not_input():
    older = make_decision_event("2026-01-15T18:00:00Z", "m1", UserAction.APPROVED)
    newer = make_decision_event("2026-01-18T18:00:00Z", "m2", UserAction.REJECTED)
    newest = make_decision_event("2026-01-19T18:00:00Z", "m3", UserAction.REJECTED)

    assert has_consecutive_rejections([older, newest, newer]) is True
    assert has_consecutive_rejections([older, newest], threshold=2) is False
