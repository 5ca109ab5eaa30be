"""
In-memory previous-state store: last observed availability per resource kind.

Owned by the poll orchestrator (one per app, held on app.state) so tests get a fresh one.
Empty at process start; nothing is written to disk. Callers doing read-diff-write hold `lock`
for the whole sequence so concurrent ticks can't interleave.
"""
import threading

from templewatch.models.slot import AvailableSlot, ResourceKind


class SnapshotStore:
    """At most one snapshot per kind; always a whole aggregation result, never merged."""

    def __init__(self) -> None:
        self._snapshots: dict[ResourceKind, tuple[AvailableSlot, ...]] = {}
        self.lock = threading.RLock()

    def get(self, kind: ResourceKind) -> list[AvailableSlot] | None:
        """Last snapshot for kind, or None if no tick has completed since start."""
        with self.lock:
            snap = self._snapshots.get(kind)
            return list(snap) if snap is not None else None

    def put(self, kind: ResourceKind, slots: list[AvailableSlot]) -> None:
        with self.lock:
            self._snapshots[kind] = tuple(slots)

    def put_many(self, results: dict[ResourceKind, list[AvailableSlot]]) -> None:
        """Overwrite several kinds at once."""
        with self.lock:
            for kind, slots in results.items():
                self._snapshots[kind] = tuple(slots)

    def clear(self) -> None:
        with self.lock:
            self._snapshots.clear()

    def __contains__(self, kind: object) -> bool:
        return kind in self._snapshots
