"""Tests for get_available_slots against an in-memory booking API."""
import pytest

from templewatch.core.errors import Unauthorized, UpstreamUnavailable
from templewatch.models.slot import AartiSlot, DarshanSlot, ResourceKind
from templewatch.services.aggregation import get_available_slots

from conftest import aarti_detail, aarti_slot, darshan_detail, darshan_slot, summary

D = ResourceKind.DARSHAN
A = ResourceKind.AARTI


def test_only_slots_with_tickets_are_kept(fake_upstream):
    fake_upstream.summaries[D] = summary("2024-1-1")
    fake_upstream.details[(D, "2024-1-1")] = darshan_detail(
        darshan_slot("Morning", 0),
        darshan_slot("Noon", 5, slot_id=2),
        darshan_slot("Evening", -1, slot_id=3),
    )
    result = get_available_slots(fake_upstream, D)
    assert len(result) == 1
    assert [s.name for s in result[0].slots] == ["Noon"]
    assert all(s.tickets_available > 0 for s in result[0].slots)


def test_fully_booked_and_failed_dates_are_omitted(fake_upstream):
    fake_upstream.summaries[D] = summary("2024-1-1", "2024-1-2", "2024-1-3", "2024-1-4")
    fake_upstream.details[(D, "2024-1-1")] = darshan_detail(darshan_slot("Morning", 0))
    fake_upstream.details[(D, "2024-1-2")] = UpstreamUnavailable("boom", status_code=502)
    fake_upstream.details[(D, "2024-1-3")] = darshan_detail(darshan_slot("Morning", 2, date_label="03-Jan-2024"))
    fake_upstream.details[(D, "2024-1-4")] = {"darshanSlots": None}
    result = get_available_slots(fake_upstream, D)
    assert [r.date for r in result] == ["2024-1-3"]
    assert result[0].formatted_date == "03-Jan-2024"


def test_malformed_slot_record_skips_only_that_date(fake_upstream):
    fake_upstream.summaries[D] = summary("2024-1-1", "2024-1-2")
    fake_upstream.details[(D, "2024-1-1")] = darshan_detail({"slotName": "Broken", "noOfTicketsAvailable": 3})
    fake_upstream.details[(D, "2024-1-2")] = darshan_detail(darshan_slot("Morning", 1))
    assert [r.date for r in get_available_slots(fake_upstream, D)] == ["2024-1-2"]


def test_summary_failure_gives_empty_list(fake_upstream):
    fake_upstream.summaries[D] = UpstreamUnavailable("down")
    assert get_available_slots(fake_upstream, D) == []
    assert [c for c in fake_upstream.calls if c[0] == "detail"] == []


def test_empty_summary_gives_empty_list(fake_upstream):
    fake_upstream.summaries[D] = None
    assert get_available_slots(fake_upstream, D) == []


def test_unauthorized_propagates(fake_upstream):
    fake_upstream.summaries[D] = Unauthorized()
    with pytest.raises(Unauthorized):
        get_available_slots(fake_upstream, D)

    fake_upstream.summaries[D] = summary("2024-1-1")
    fake_upstream.details[(D, "2024-1-1")] = Unauthorized()
    with pytest.raises(Unauthorized):
        get_available_slots(fake_upstream, D, max_workers=4)


def test_detail_fields_are_carried_over(fake_upstream):
    fake_upstream.summaries[A] = summary("2024-1-1")
    fake_upstream.details[(A, "2024-1-1")] = aarti_detail(aarti_slot("Mangla", 4), price=100.0)
    (entry,) = get_available_slots(fake_upstream, A)
    assert entry.min_persons == 1
    assert entry.max_persons == 4
    assert entry.price == 100.0
    slot = entry.slots[0]
    assert isinstance(slot, AartiSlot)
    assert slot.reporting_start_time == "05:00"
    assert slot.reporting_end_time == "05:30"


def test_output_is_chronological_with_parallel_fetches(fake_upstream):
    dates = [f"2024-1-{d}" for d in (9, 2, 10, 5, 1)]
    fake_upstream.summaries[D] = summary(*dates)
    for d in dates:
        fake_upstream.details[(D, d)] = darshan_detail(darshan_slot("Morning", 1, date_label=d))
    result = get_available_slots(fake_upstream, D, max_workers=4)
    assert [r.date for r in result] == ["2024-1-1", "2024-1-2", "2024-1-5", "2024-1-9", "2024-1-10"]
    assert all(isinstance(s, DarshanSlot) for r in result for s in r.slots)


def test_same_upstream_data_gives_identical_output(fake_upstream):
    fake_upstream.summaries[D] = summary("2024-1-2", "2024-1-1")
    fake_upstream.details[(D, "2024-1-1")] = darshan_detail(darshan_slot("Morning", 1), darshan_slot("Evening", 2, slot_id=2))
    fake_upstream.details[(D, "2024-1-2")] = darshan_detail(darshan_slot("Morning", 3))
    first = get_available_slots(fake_upstream, D)
    second = get_available_slots(fake_upstream, D)
    assert first == second
    assert [r.model_dump_json() for r in first] == [r.model_dump_json() for r in second]


def test_range_policy_fetches_every_unbooked_day(fake_upstream):
    fake_upstream.summaries[D] = {
        "availableDatesList": [],
        "startAndEndDates": ["01-Jan-2024", "03-Jan-2024"],
        "bookedDates": ["2024-1-2"],
        "blockedDates": [],
    }
    fake_upstream.details[(D, "2024-1-1")] = darshan_detail(darshan_slot("Morning", 1))
    fake_upstream.details[(D, "2024-1-3")] = darshan_detail(darshan_slot("Morning", 1))
    result = get_available_slots(fake_upstream, D, policy="range")
    assert [r.date for r in result] == ["2024-1-1", "2024-1-3"]
    assert ("detail", D, "2024-1-2") not in fake_upstream.calls
