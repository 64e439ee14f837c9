"""
Decision routes - one dinner decision per call.

The body is either a single decision object or a rescue (DRM)
recommendation; never a list of options.
"""

from fastapi import APIRouter, Depends
import logging

from api.dependencies import get_decision_store
from domain.schemas.decision_schemas import DecisionRequest
from repositories.decision_store import DecisionStore
from services.arbiter_service import DecisionService

router = APIRouter(prefix="/decision-os", tags=["Decisions"])
logger = logging.getLogger("mealarbiter.api.decisions")


@router.post("/decision")
def make_decision(
    request: DecisionRequest, store: DecisionStore = Depends(get_decision_store)
):
    """
    Decide dinner for a household.

    Flow:
    - DRM triggers (low energy, calendar conflict, late hour, repeated
      rejections) short-circuit to ``{"decision": null, "drmRecommended": true}``
    - Otherwise exactly one meal is selected and its decision event recorded

    Returns:
        camelCase decision response
    """
    logger.info(f"Decision requested for household {request.household_key}")
    response = DecisionService.decide(store, request)
    return response.to_payload()
