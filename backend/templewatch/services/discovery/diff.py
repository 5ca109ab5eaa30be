"""
Diff one kind's fresh availability against the previous tick.

Reported: dates absent from previous (newly opened) and dates whose open-slot count went up.
Never reported: dates that disappeared, counts that fell or stayed equal (slot identity is ignored).
No previous snapshot (first tick after start) means nothing is reported.
"""
import logging

from templewatch.core.constants import NOTIFY_PREVIEW_SLOTS
from templewatch.models.poll import ChangedDate, ChangeReport
from templewatch.models.slot import AvailableSlot, ResourceKind

logger = logging.getLogger(__name__)


def detect_changes(
    kind: ResourceKind,
    current: list[AvailableSlot],
    previous: list[AvailableSlot] | None,
    *,
    preview_size: int = NOTIFY_PREVIEW_SLOTS,
) -> ChangeReport | None:
    """ChangeReport in current's (chronological) order, or None when nothing opened up."""
    if previous is None:
        logger.debug("%s: no previous snapshot, skipping diff", kind.value)
        return None

    prev_counts = {entry.date: entry.open_slot_count for entry in previous}
    changes: list[ChangedDate] = []
    seen: set[str] = set()
    for entry in current:
        if entry.date in seen:
            continue
        seen.add(entry.date)
        prev_count = prev_counts.get(entry.date)
        if prev_count is None:
            changes.append(ChangedDate.from_available(entry, preview_size=preview_size, is_new_date=True))
        elif entry.open_slot_count > prev_count:
            changes.append(ChangedDate.from_available(entry, preview_size=preview_size, is_new_date=False))

    if not changes:
        return None
    logger.info("%s: %s date(s) opened or gained slots: %s", kind.value, len(changes), [c.date for c in changes])
    return ChangeReport(kind=kind, changes=tuple(changes))
