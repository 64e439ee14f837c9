"""Schemas for the decision endpoint (request, single decision, response)"""

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing import Annotated, Literal, Optional, Union

from core.utils.helpers import parse_iso_datetime
from domain.enums import DrmReason, EnergyLevel, TimeWindow

CAMEL_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "frozen": True,
}


class DecisionSignal(BaseModel):
    """Per-call context signal"""

    time_window: TimeWindow = Field(
        default=TimeWindow.DINNER, description="Meal window being decided"
    )
    energy: EnergyLevel = Field(..., description="Household energy level")
    calendar_conflict: bool = Field(
        default=False, description="Whether the calendar blocks cooking tonight"
    )

    model_config = CAMEL_CONFIG


class DecisionRequest(BaseModel):
    """Decision request for one household at one moment"""

    household_key: str = Field(..., min_length=1)
    now_iso: str = Field(
        ..., description="ISO 8601 timestamp with the household's local offset"
    )
    signal: DecisionSignal

    model_config = CAMEL_CONFIG

    @field_validator("now_iso")
    @classmethod
    def validate_now_iso(cls, v: str) -> str:
        # Kept verbatim: the context hash covers the exact string
        parse_iso_datetime(v)
        return v


class CookDecision(BaseModel):
    """Cook a catalog meal"""

    decision_type: Literal["cook"] = "cook"
    decision_event_id: str
    meal_id: str
    title: str
    steps_short: str
    est_minutes: int
    context_hash: str

    model_config = CAMEL_CONFIG


class ZeroCookDecision(BaseModel):
    """Built-in assembly meal that needs no catalog entry"""

    decision_type: Literal["zero_cook"] = "zero_cook"
    decision_event_id: str
    title: str
    steps_short: str
    est_minutes: int
    context_hash: str

    model_config = CAMEL_CONFIG


Decision = Annotated[
    Union[CookDecision, ZeroCookDecision], Field(discriminator="decision_type")
]


class DecisionResponse(BaseModel):
    """Exactly one decision, or a rescue recommendation with a reason"""

    decision: Optional[Decision] = None
    drm_recommended: bool
    reason: Optional[DrmReason] = None

    model_config = CAMEL_CONFIG

    @model_validator(mode="after")
    def validate_shape(self):
        if self.drm_recommended:
            if self.decision is not None or self.reason is None:
                raise ValueError(
                    "DRM responses carry a reason and no decision"
                )
        elif self.decision is None or self.reason is not None:
            raise ValueError("Decision responses carry a decision and no reason")
        return self

    @classmethod
    def for_decision(cls, decision) -> "DecisionResponse":
        return cls(decision=decision, drm_recommended=False)

    @classmethod
    def for_drm(cls, reason: DrmReason) -> "DecisionResponse":
        return cls(decision=None, drm_recommended=True, reason=reason)

    def to_payload(self) -> dict:
        """Wire representation: camelCase, ``reason`` only when DRM is recommended"""
        payload = {
            "decision": (
                self.decision.model_dump(by_alias=True, mode="json")
                if self.decision is not None
                else None
            ),
            "drmRecommended": self.drm_recommended,
        }
        if self.drm_recommended:
            payload["reason"] = self.reason.value
        return payload
