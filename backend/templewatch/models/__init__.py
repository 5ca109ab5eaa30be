from templewatch.models.poll import ChangedDate, ChangeReport, TickNotifications, TickResult
from templewatch.models.slot import AartiSlot, AvailableSlot, BaseSlot, DarshanSlot, ResourceKind, Slot

__all__ = [
    "AartiSlot",
    "AvailableSlot",
    "BaseSlot",
    "ChangedDate",
    "ChangeReport",
    "DarshanSlot",
    "ResourceKind",
    "Slot",
    "TickNotifications",
    "TickResult",
]
