"""
Candidate dates from a summary response.

Two policies (DATE_POLICY):
- explicit: summary.availableDatesList as given, deduplicated and sorted ascending; keys that are not
  YYYY-M-D follow the sorted ones in their original order.
- range: every day from startAndEndDates[0] to [1] inclusive, minus bookedDates and blockedDates.
Keys are returned in the API's own format (YYYY-M-D, no zero padding) because detail URLs take them as-is.
"""
import logging
import re
from datetime import date, datetime, timedelta
from typing import Any, Literal

logger = logging.getLogger(__name__)

DatePolicy = Literal["explicit", "range"]

_KEY_RE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
# startAndEndDates use DD-Mon-YYYY, e.g. 18-Oct-2026
_RANGE_FORMAT = "%d-%b-%Y"


def parse_date_key(key: Any) -> date | None:
    """Parse an upstream date key (2026-10-8 or 2026-10-08). None if it isn't one."""
    if not isinstance(key, str):
        return None
    m = _KEY_RE.match(key.strip())
    if not m:
        return None
    try:
        return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    except ValueError:
        return None


def format_date_key(d: date) -> str:
    return f"{d.year}-{d.month}-{d.day}"


def _parse_range_bound(value: Any) -> date | None:
    if not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value.strip(), _RANGE_FORMAT).date()
    except ValueError:
        return None


def _explicit_dates(summary: dict[str, Any]) -> list[str]:
    raw = summary.get("availableDatesList") or []
    seen: dict[date, str] = {}
    unparsed: list[str] = []
    for key in raw:
        if not isinstance(key, str) or not key.strip():
            continue
        parsed = parse_date_key(key)
        if parsed is None:
            # Still fetched; the detail endpoint decides whether the key is valid
            logger.warning("Unrecognized date key in summary, passing through: %r", key)
            if key.strip() not in unparsed:
                unparsed.append(key.strip())
            continue
        # First spelling wins when the same day appears twice (2026-10-8 vs 2026-10-08)
        seen.setdefault(parsed, key.strip())
    return [seen[d] for d in sorted(seen)] + unparsed


def _range_dates(summary: dict[str, Any]) -> list[str]:
    bounds = summary.get("startAndEndDates") or []
    if len(bounds) < 2:
        return []
    start, end = _parse_range_bound(bounds[0]), _parse_range_bound(bounds[1])
    if start is None or end is None:
        logger.warning("Summary has unparseable startAndEndDates: %r", bounds)
        return []
    excluded: set[date] = set()
    for key in (summary.get("bookedDates") or []) + (summary.get("blockedDates") or []):
        parsed = parse_date_key(key)
        if parsed is not None:
            excluded.add(parsed)
    out: list[str] = []
    day = start
    while day <= end:
        if day not in excluded:
            out.append(format_date_key(day))
        day += timedelta(days=1)
    return out


def find_available_dates(summary: dict[str, Any] | None, policy: DatePolicy = "explicit") -> list[str]:
    """Ascending, duplicate-free date keys to fetch details for. Empty when the summary has nothing usable."""
    if not isinstance(summary, dict):
        return []
    if policy == "range":
        return _range_dates(summary)
    return _explicit_dates(summary)
