"""
Poll trigger for an external scheduler (cron, uptime pinger). One request = one tick.
"""
import logging

from fastapi import APIRouter, Depends, Query

from templewatch.api.deps import CallerToken, caller_token, get_orchestrator
from templewatch.core.errors import error_response
from templewatch.orchestrator.orchestrator import PollOrchestrator

router = APIRouter()
logger = logging.getLogger(__name__)

_FALSEY = ("0", "false", "no", "off")


def _is_test_mode(test_mode: str | None) -> bool:
    """Present (even empty, as in ?test_mode) means on, unless it spells false."""
    if test_mode is None:
        return False
    return test_mode.strip().lower() not in _FALSEY


@router.get("/poll")
@router.get("/slots-monitor", include_in_schema=False)
def poll(
    test_mode: str | None = Query(None),
    orchestrator: PollOrchestrator = Depends(get_orchestrator),
    token: CallerToken = Depends(caller_token),
):
    """
    Fetch darshan + aarti availability, notify the webhook about anything that opened since the
    previous tick, and return counts. With test_mode a health message is sent regardless.
    """
    try:
        result = orchestrator.run_poll_tick(_is_test_mode(test_mode), token.explicit, token.cookie)
    except Exception as e:
        return error_response(e, "Failed to check slot availability", success=False)
    return result.to_response()
