"""
Build the list of dates that have at least one open slot for one resource kind.

Summary -> candidate dates -> one detail call per date -> keep slots with tickets > 0.
Upstream trouble degrades to "no availability" (empty list for a failed summary, date dropped
for a failed detail). Only Unauthorized propagates, so callers can ask for a new token.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from pydantic import ValidationError

from templewatch.core.errors import UpstreamUnavailable
from templewatch.models.slot import SLOT_CLASSES, AvailableSlot, ResourceKind
from templewatch.services.aggregation.dates import DatePolicy, find_available_dates
from templewatch.services.srjbt.client import SrjbtClient
from templewatch.services.srjbt.types import PRICE_KEY, SLOTS_KEY

logger = logging.getLogger(__name__)


def build_available_slot(kind: ResourceKind, date_key: str, detail: dict[str, Any] | None) -> AvailableSlot | None:
    """
    One AvailableSlot from a detail response, or None when no slot has tickets left.
    Raises ValidationError / KeyError / TypeError on malformed slot records.
    """
    if not isinstance(detail, dict):
        return None
    records = detail.get(SLOTS_KEY[kind.value]) or []
    slot_cls = SLOT_CLASSES[kind]
    open_slots = tuple(
        slot_cls.from_upstream(r)
        for r in records
        if isinstance(r, dict) and int(r.get("noOfTicketsAvailable") or 0) > 0
    )
    if not open_slots:
        return None
    return AvailableSlot(
        date=date_key,
        formatted_date=open_slots[0].date_label or date_key,
        slots=open_slots,
        min_persons=detail.get("minPersons"),
        max_persons=detail.get("maxPersons"),
        price=detail.get(PRICE_KEY[kind.value]),
    )


def _load_date(client: SrjbtClient, kind: ResourceKind, date_key: str) -> AvailableSlot | None:
    try:
        detail = client.fetch_detail(kind, date_key)
        return build_available_slot(kind, date_key, detail)
    except UpstreamUnavailable as e:
        logger.warning("%s detail for %s unavailable: %s", kind.value, date_key, e)
    except (ValidationError, KeyError, TypeError, ValueError) as e:
        logger.warning("%s detail for %s malformed, skipping: %s", kind.value, date_key, e)
    return None


def get_available_slots(
    client: SrjbtClient,
    kind: ResourceKind,
    *,
    policy: DatePolicy = "explicit",
    max_workers: int = 1,
) -> list[AvailableSlot]:
    """
    Chronological list of dates with open slots for kind. Same upstream data gives the same list.
    With max_workers > 1 detail calls run on a thread pool; output order is still the candidate order.
    """
    try:
        summary = client.fetch_summary(kind)
    except UpstreamUnavailable as e:
        logger.warning("%s summary unavailable, treating as no availability: %s", kind.value, e)
        return []
    dates = find_available_dates(summary, policy)
    if not dates:
        logger.info("%s summary lists no candidate dates", kind.value)
        return []

    if max_workers > 1 and len(dates) > 1:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(dates)), thread_name_prefix=f"{kind.value}_detail") as pool:
            results = list(pool.map(lambda d: _load_date(client, kind, d), dates))
    else:
        results = [_load_date(client, kind, d) for d in dates]

    available = [r for r in results if r is not None]
    logger.info("%s: %s of %s candidate dates have open slots", kind.value, len(available), len(dates))
    return available
