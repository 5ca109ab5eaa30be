"""
Poll orchestrator: one tick = aggregate both kinds, diff against the snapshot, notify, store.

Network I/O (aggregation) runs first with no lock held. Diff, message rendering and the snapshot
overwrite then happen together under the store lock, so a tick that fails before that point leaves
the snapshot untouched and two concurrent ticks can't both report the same opening. Webhook delivery
happens last; its outcome never affects the stored state.
"""
import logging
from collections.abc import Callable
from datetime import datetime, timezone

from templewatch.config import settings
from templewatch.core.errors import InternalError, Unauthorized
from templewatch.models.poll import TickNotifications, TickResult
from templewatch.models.slot import AvailableSlot, ResourceKind
from templewatch.services.aggregation import get_available_slots
from templewatch.services.aggregation.dates import DatePolicy
from templewatch.services.auth.token_store import TokenStore
from templewatch.services.discovery import SnapshotStore, detect_changes
from templewatch.services.srjbt.client import SrjbtClient
from templewatch.services.webhook_notify import WebhookNotifier, render_change_report, render_test_message

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], SrjbtClient]


class PollOrchestrator:
    def __init__(
        self,
        *,
        tokens: TokenStore,
        snapshots: SnapshotStore | None = None,
        notifier: WebhookNotifier | None = None,
        client_factory: ClientFactory = SrjbtClient,
        date_policy: DatePolicy | None = None,
        max_workers: int | None = None,
        app_url: str | None = None,
    ) -> None:
        self.tokens = tokens
        self.snapshots = snapshots or SnapshotStore()
        self.notifier = notifier or WebhookNotifier()
        self._client_factory = client_factory
        self._date_policy = date_policy or settings.date_policy
        self._max_workers = max_workers or settings.upstream_max_workers
        self._app_url = app_url

    def client(self, token: str | None = None, cookie_token: str | None = None) -> SrjbtClient:
        """Client bound to the active token. Raises Unauthorized if none resolves."""
        return self._client_factory(self.tokens.resolve(token, cookie_token))

    def available_slots(self, kind: ResourceKind, token: str | None = None, cookie_token: str | None = None) -> list[AvailableSlot]:
        """Current availability for one kind (GET /darshan, GET /aarti). Does not touch the snapshot."""
        return get_available_slots(
            self.client(token, cookie_token), kind, policy=self._date_policy, max_workers=self._max_workers
        )

    def run_poll_tick(self, test_mode: bool = False, token: str | None = None, cookie_token: str | None = None) -> TickResult:
        """
        One poll tick. Raises Unauthorized when no token resolves or the booking API rejects it;
        any other failure before the snapshot write is logged and raised as InternalError.
        """
        client = self.client(token, cookie_token)
        now = datetime.now(timezone.utc)
        timestamp = now.isoformat().replace("+00:00", "Z")

        try:
            current = {
                kind: get_available_slots(client, kind, policy=self._date_policy, max_workers=self._max_workers)
                for kind in ResourceKind
            }
            messages: dict[ResourceKind, str] = {}
            with self.snapshots.lock:
                for kind in ResourceKind:
                    report = detect_changes(kind, current[kind], self.snapshots.get(kind))
                    if report is not None:
                        messages[kind] = render_change_report(report, self._app_url)
                test_message = None
                if test_mode:
                    counts = {kind: len(slots) for kind, slots in current.items()}
                    test_message = render_test_message(counts, timestamp, self._app_url)
                self.snapshots.put_many(current)
        except Unauthorized:
            logger.warning("Poll tick rejected: booking API token expired or invalid")
            raise
        except Exception as e:
            logger.exception("Poll tick failed: %s", e)
            raise InternalError("Failed to check slot availability") from e

        sent = {kind: self.notifier.notify(msg) for kind, msg in messages.items()}
        notifications = TickNotifications(
            darshan=sent.get(ResourceKind.DARSHAN, False),
            aarti=sent.get(ResourceKind.AARTI, False),
        )
        if test_message is not None:
            notifications.test = self.notifier.notify(test_message)

        result = TickResult(
            timestamp=timestamp,
            notifications=notifications,
            test_mode=test_mode,
            darshan_slot_count=len(current[ResourceKind.DARSHAN]),
            aarti_slot_count=len(current[ResourceKind.AARTI]),
        )
        logger.info(
            "Poll tick done: darshan=%s dates (notified=%s), aarti=%s dates (notified=%s), test_mode=%s",
            result.darshan_slot_count,
            notifications.darshan,
            result.aarti_slot_count,
            notifications.aarti,
            test_mode,
        )
        return result
