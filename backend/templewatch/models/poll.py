"""Change reports produced by the diff step and the result returned by one poll tick."""
from pydantic import BaseModel, ConfigDict, Field

from templewatch.models.slot import AvailableSlot, ResourceKind, Slot


class ChangedDate(BaseModel):
    """One date that opened or gained slots since the last tick. preview is capped; remaining counts the rest."""

    model_config = ConfigDict(frozen=True)

    date: str
    formatted_date: str
    open_slot_count: int
    preview: tuple[Slot, ...]
    remaining: int = 0
    is_new_date: bool = True

    @classmethod
    def from_available(cls, entry: AvailableSlot, *, preview_size: int, is_new_date: bool) -> "ChangedDate":
        return cls(
            date=entry.date,
            formatted_date=entry.formatted_date,
            open_slot_count=entry.open_slot_count,
            preview=entry.slots[:preview_size],
            remaining=max(0, entry.open_slot_count - preview_size),
            is_new_date=is_new_date,
        )


class ChangeReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: ResourceKind
    changes: tuple[ChangedDate, ...] = Field(min_length=1)

    @property
    def dates(self) -> list[str]:
        return [c.date for c in self.changes]


class TickNotifications(BaseModel):
    darshan: bool = False
    aarti: bool = False
    test: bool | None = None


class TickResult(BaseModel):
    """Response body of GET /poll. Field names match what the cron caller and dashboard read."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    timestamp: str
    notifications: TickNotifications
    test_mode: bool = False
    darshan_slot_count: int = Field(0, alias="darshanSlotCount")
    aarti_slot_count: int = Field(0, alias="aartiSlotCount")

    def to_response(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
