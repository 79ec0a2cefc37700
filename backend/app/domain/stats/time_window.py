"""Calendar time-window selection over entry dates."""

from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from ..entrystore.models import Entry

__all__ = [
    "TimeWindow",
    "filter_entries",
    "window_label",
    "window_range",
]


class TimeWindow(str, Enum):
    ALL = "all"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"

    @classmethod
    def parse(cls, value: "TimeWindow | str | None") -> "TimeWindow":
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.ALL
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            allowed = ", ".join(window.value for window in cls)
            raise ValueError(
                f"Unknown time window '{value}'; expected one of {allowed}"
            ) from exc


WINDOW_LABELS = {
    TimeWindow.ALL: "All time",
    TimeWindow.DAY: "Today",
    TimeWindow.WEEK: "This week",
    TimeWindow.MONTH: "This month",
}


def window_label(window: TimeWindow) -> str:
    return WINDOW_LABELS[window]


def filter_entries(
    entries: Iterable[Entry],
    window: TimeWindow,
    reference: datetime,
) -> List[Entry]:
    """Return the entries whose date falls in ``window`` around ``reference``.

    Comparisons use calendar fields in the reference's timezone. Entries with a
    missing or invalid date only survive the ``ALL`` window. The input is never
    modified and relative order is preserved.
    """

    bounds = window_range(window, reference)
    if bounds is None:
        return list(entries)
    start, end = bounds
    tz = reference.tzinfo
    selected: List[Entry] = []
    for entry in entries:
        day = _calendar_day(entry.date, tz)
        if day is not None and start <= day <= end:
            selected.append(entry)
    return selected


def window_range(
    window: TimeWindow, reference: datetime
) -> Optional[Tuple[date, date]]:
    """Inclusive first/last calendar day covered by ``window``; ``None`` for ALL."""

    today = reference.date()
    if window is TimeWindow.ALL:
        return None
    if window is TimeWindow.DAY:
        return today, today
    if window is TimeWindow.WEEK:
        monday = today - timedelta(days=today.weekday())
        return monday, monday + timedelta(days=6)
    first = today.replace(day=1)
    next_month = (first + timedelta(days=32)).replace(day=1)
    return first, next_month - timedelta(days=1)


def _calendar_day(value: object, tz: Optional[tzinfo]) -> Optional[date]:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.date()
        if tz is None:
            # Naive reference means system local time.
            return value.astimezone().date()
        return value.astimezone(tz).date()
    if isinstance(value, date):
        return value
    return None
