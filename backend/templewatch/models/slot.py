"""
Normalized slot shapes. Darshan and aarti details arrive with different field names;
both are mapped onto BaseSlot so the aggregator, diff and notifier never branch on kind.
"""
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ResourceKind(str, Enum):
    DARSHAN = "darshan"
    AARTI = "aarti"


class _Frozen(BaseModel):
    # camelCase on the wire (same keys the dashboard already reads); snake_case in Python
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class BaseSlot(_Frozen):
    """One bookable time window on one date. Point-in-time snapshot, never mutated."""

    slot_id: int | None = None
    name: str
    date_label: str = ""  # upstream's human date, e.g. "18-Oct-2026"
    begin_time: str
    end_time: str
    tickets_available: int = Field(ge=0)


class DarshanSlot(BaseSlot):
    kind: Literal["darshan"] = "darshan"
    reporting_time: str | None = None

    @classmethod
    def from_upstream(cls, raw: dict[str, Any]) -> "DarshanSlot":
        return cls(
            slot_id=raw.get("slotId"),
            name=raw.get("slotName") or "",
            date_label=raw.get("darshanDate") or "",
            begin_time=raw["slotBeginTime"],
            end_time=raw["slotEndTime"],
            tickets_available=int(raw["noOfTicketsAvailable"]),
            reporting_time=raw.get("reportingTime"),
        )


class AartiSlot(BaseSlot):
    kind: Literal["aarti"] = "aarti"
    reporting_start_time: str | None = None
    reporting_end_time: str | None = None

    @classmethod
    def from_upstream(cls, raw: dict[str, Any]) -> "AartiSlot":
        return cls(
            slot_id=raw.get("slotId"),
            name=raw.get("slotName") or "",
            date_label=raw.get("aartiDate") or "",
            begin_time=raw["slotBeginTime"],
            end_time=raw["slotEndTime"],
            tickets_available=int(raw["noOfTicketsAvailable"]),
            reporting_start_time=raw.get("reportingStartTime"),
            reporting_end_time=raw.get("reportingEndTime"),
        )


Slot = Annotated[Union[DarshanSlot, AartiSlot], Field(discriminator="kind")]

SLOT_CLASSES: dict[ResourceKind, type[BaseSlot]] = {
    ResourceKind.DARSHAN: DarshanSlot,
    ResourceKind.AARTI: AartiSlot,
}


class AvailableSlot(_Frozen):
    """One calendar date with at least one open slot. Rebuilt on every aggregation."""

    date: str  # upstream date key, e.g. "2026-10-18" or "2026-10-8" (not normalized)
    formatted_date: str
    slots: tuple[Slot, ...]
    min_persons: int | None = None
    max_persons: int | None = None
    price: float | None = None  # None = free or undisclosed

    @property
    def open_slot_count(self) -> int:
        return len(self.slots)
