"""Runs every POLL_INTERVAL_SECONDS when enabled: one poll tick with the stored or fallback token."""
import logging

from templewatch.core.errors import Unauthorized
from templewatch.orchestrator.orchestrator import PollOrchestrator

logger = logging.getLogger(__name__)


def run_poll_job(orchestrator: PollOrchestrator) -> None:
    try:
        orchestrator.run_poll_tick(test_mode=False)
    except Unauthorized as e:
        logger.warning("Scheduled poll skipped: %s. Log in via /auth/validate-otp or set API_TOKEN.", e)
    except Exception as e:
        logger.exception("Scheduled poll failed: %s", e)
