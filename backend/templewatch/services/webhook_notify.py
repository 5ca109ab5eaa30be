"""
Send availability notifications to a Slack-style incoming webhook: one POST with {"text": message}.
Set SLACK_WEBHOOK_URL in .env. If it is not set, notify() no-ops (log and return False).
Delivery failures are logged and reported as False; they never abort a poll tick.
"""
import logging
from collections.abc import Mapping

import httpx

from templewatch.config import settings
from templewatch.core.errors import DeliveryFailed
from templewatch.models.poll import ChangeReport
from templewatch.models.slot import ResourceKind

logger = logging.getLogger(__name__)

WEBHOOK_TIMEOUT_SECONDS = 10.0


def render_change_report(report: ChangeReport, app_url: str | None = None) -> str:
    """Human-readable summary: header for the kind, one block per changed date, dashboard link."""
    lines = [f"🔔 *New {report.kind.value} availability detected!*", ""]
    for change in report.changes:
        plural = "s" if change.open_slot_count != 1 else ""
        lines.append(f"📅 *{change.formatted_date}*")
        lines.append(f"   - {change.open_slot_count} slot{plural} available")
        for slot in change.preview:
            lines.append(f"   - {slot.name}: {slot.begin_time} - {slot.end_time}")
        if change.remaining > 0:
            lines.append(f"   - ... and {change.remaining} more slots")
        lines.append("")
    lines.append(f"Check the dashboard for more details: {app_url if app_url is not None else settings.app_url}")
    return "\n".join(lines)


def render_test_message(counts: Mapping[ResourceKind, int], timestamp: str, app_url: str | None = None) -> str:
    """Fixed-format health message sent on test-mode ticks whether or not anything changed."""
    lines = ["🧪 *Slot monitor test notification*", "", f"Checked at {timestamp}"]
    for kind in ResourceKind:
        n = counts.get(kind, 0)
        lines.append(f"   - {kind.value.capitalize()}: {n} date{'s' if n != 1 else ''} with open slots")
    lines.append("")
    lines.append(f"Dashboard: {app_url if app_url is not None else settings.app_url}")
    return "\n".join(lines)


class WebhookNotifier:
    """Delivers rendered messages to one webhook URL."""

    def __init__(
        self,
        webhook_url: str | None = None,
        *,
        timeout: float = WEBHOOK_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.webhook_url = (settings.slack_webhook_url if webhook_url is None else webhook_url).strip()
        self._timeout = timeout
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self.webhook_url)

    def _post(self, message: str) -> None:
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                resp = client.post(self.webhook_url, json={"text": message})
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise DeliveryFailed(f"Webhook request failed: {e}") from e
        if not resp.is_success:
            raise DeliveryFailed(f"Webhook returned {resp.status_code}: {resp.text[:200]}")

    def notify(self, message: str) -> bool:
        """Returns True if delivered, False if skipped or failed. Never raises."""
        if not self.enabled:
            logger.info("SLACK_WEBHOOK_URL not set; skipping notification")
            return False
        try:
            self._post(message)
        except DeliveryFailed as e:
            logger.warning("Notification not delivered: %s", e)
            return False
        logger.info("Notification delivered (%s chars)", len(message))
        return True
