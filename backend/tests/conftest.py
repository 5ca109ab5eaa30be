"""Shared fixtures: an in-memory stand-in for the booking API and helpers to build its responses."""
import os
import sys
from pathlib import Path
from typing import Any

import pytest

# Keep a developer's backend/.env out of test runs
os.environ.setdefault("API_TOKEN", "")
os.environ.setdefault("SLACK_WEBHOOK_URL", "")

backend_dir = Path(__file__).resolve().parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

from templewatch.models.slot import ResourceKind  # noqa: E402
from templewatch.orchestrator.orchestrator import PollOrchestrator  # noqa: E402
from templewatch.services.auth.token_store import TokenStore  # noqa: E402
from templewatch.services.discovery import SnapshotStore  # noqa: E402
from templewatch.services.webhook_notify import WebhookNotifier  # noqa: E402


def darshan_slot(name: str, tickets: int, *, date_label: str = "01-Jan-2024", begin: str = "07:00", end: str = "09:00", slot_id: int = 1) -> dict[str, Any]:
    return {
        "darshanDate": date_label,
        "slotId": slot_id,
        "slotName": name,
        "noOfTicketsAvailable": tickets,
        "slotBeginTime": begin,
        "slotEndTime": end,
        "reportingTime": "06:30",
    }


def aarti_slot(name: str, tickets: int, *, date_label: str = "01-Jan-2024", begin: str = "06:00", end: str = "06:30", slot_id: int = 1) -> dict[str, Any]:
    return {
        "aartiDate": date_label,
        "slotId": slot_id,
        "slotName": name,
        "noOfTicketsAvailable": tickets,
        "slotBeginTime": begin,
        "slotEndTime": end,
        "reportingStartTime": "05:00",
        "reportingEndTime": "05:30",
    }


def darshan_detail(*slots: dict[str, Any], price: float | None = None) -> dict[str, Any]:
    return {"darshanSlots": list(slots), "minPersons": 1, "maxPersons": 6, "darshanPrice": price, "flag": "Y"}


def aarti_detail(*slots: dict[str, Any], price: float | None = None) -> dict[str, Any]:
    return {"aartiSlots": list(slots), "minPersons": 1, "maxPersons": 4, "aartiPrice": price, "flag": "Y"}


def summary(*dates: str) -> dict[str, Any]:
    return {"availableDatesList": list(dates), "startAndEndDates": [], "blockedDates": [], "bookedDates": []}


class FakeSrjbtClient:
    """
    Same read interface as SrjbtClient, answering from dicts. A value that is an exception
    instance is raised instead of returned.
    """

    def __init__(self) -> None:
        self.summaries: dict[ResourceKind, Any] = {ResourceKind.DARSHAN: summary(), ResourceKind.AARTI: summary()}
        self.details: dict[tuple[ResourceKind, str], Any] = {}
        self.calls: list[tuple[str, ResourceKind, str | None]] = []
        self.tokens_seen: list[str] = []

    def __call__(self, token: str) -> "FakeSrjbtClient":
        # Used as PollOrchestrator.client_factory
        self.tokens_seen.append(token)
        return self

    def fetch_summary(self, kind: ResourceKind):
        self.calls.append(("summary", kind, None))
        value = self.summaries.get(kind)
        if isinstance(value, Exception):
            raise value
        return value

    def fetch_detail(self, kind: ResourceKind, date_key: str):
        self.calls.append(("detail", kind, date_key))
        value = self.details.get((kind, date_key))
        if isinstance(value, Exception):
            raise value
        return value


class RecordingNotifier(WebhookNotifier):
    """Notifier that records messages instead of posting them."""

    def __init__(self, *, deliver: bool = True) -> None:
        super().__init__(webhook_url="https://hooks.example.test/T000/B000")
        self.deliver = deliver
        self.messages: list[str] = []

    def notify(self, message: str) -> bool:
        self.messages.append(message)
        return self.deliver


@pytest.fixture
def fake_upstream():
    return FakeSrjbtClient()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def orchestrator(fake_upstream, notifier):
    return PollOrchestrator(
        tokens=TokenStore(fallback="fallback-token"),
        snapshots=SnapshotStore(),
        notifier=notifier,
        client_factory=fake_upstream,
        date_policy="explicit",
        max_workers=1,
        app_url="https://dashboard.example.test",
    )
