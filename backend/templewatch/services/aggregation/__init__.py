"""
Aggregate upstream summary + per-date detail into AvailableSlot lists.
- find_available_dates picks candidate dates from a summary (explicit list or date range policy).
- get_available_slots fetches details and keeps only dates with tickets left.
"""
from templewatch.services.aggregation.aggregate import build_available_slot, get_available_slots
from templewatch.services.aggregation.dates import find_available_dates, parse_date_key

__all__ = ["build_available_slot", "find_available_dates", "get_available_slots", "parse_date_key"]
