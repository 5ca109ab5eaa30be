"""
Current availability per kind, for the dashboard. Reads straight from the booking API;
the poll snapshot is not touched.
"""
import logging

from fastapi import APIRouter, Depends

from templewatch.api.deps import CallerToken, caller_token, get_orchestrator
from templewatch.core.errors import error_response
from templewatch.models.slot import ResourceKind
from templewatch.orchestrator.orchestrator import PollOrchestrator

router = APIRouter()
logger = logging.getLogger(__name__)


def _available(kind: ResourceKind, orchestrator: PollOrchestrator, token: CallerToken):
    try:
        slots = orchestrator.available_slots(kind, token.explicit, token.cookie)
    except Exception as e:
        logger.warning("GET /%s failed: %s", kind.value, e, exc_info=True)
        return error_response(e, f"Failed to get available {kind.value} slots")
    return {"availableSlots": [s.model_dump(by_alias=True, mode="json") for s in slots]}


@router.get("/darshan")
def darshan_slots(
    orchestrator: PollOrchestrator = Depends(get_orchestrator),
    token: CallerToken = Depends(caller_token),
):
    """Dates with open darshan slots. 401 when the token is missing or expired."""
    return _available(ResourceKind.DARSHAN, orchestrator, token)


@router.get("/aarti")
def aarti_slots(
    orchestrator: PollOrchestrator = Depends(get_orchestrator),
    token: CallerToken = Depends(caller_token),
):
    """Dates with open aarti slots. 401 when the token is missing or expired."""
    return _available(ResourceKind.AARTI, orchestrator, token)
