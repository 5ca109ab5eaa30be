"""
Discovery: what opened since the last poll.

- snapshot: in-memory previous availability per kind (reset on restart).
- diff: new dates + dates whose open-slot count increased; decreases are never reported.
"""
from templewatch.services.discovery.diff import detect_changes
from templewatch.services.discovery.snapshot import SnapshotStore

__all__ = ["SnapshotStore", "detect_changes"]
