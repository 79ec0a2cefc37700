"""Tests for calendar time-window filtering."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from backend.app.domain.catalog import Category
from backend.app.domain.entrystore import Entry
from backend.app.domain.stats import (
    TimeWindow,
    filter_entries,
    window_label,
    window_range,
)

pytestmark = [pytest.mark.stats]

# Wednesday.
REFERENCE = datetime(2026, 10, 21, 12, 0, tzinfo=timezone.utc)


def _entry(entry_id: str, when) -> Entry:
    return Entry(
        entry_id=entry_id,
        date=when,
        title="Title",
        description="Description",
        owner="Ana",
        category=Category.EVENT,
        created_at=REFERENCE,
    )


def _ids(entries):
    return [entry.entry_id for entry in entries]


def test_all_window_is_identity_and_returns_new_list():
    entries = [_entry("a", None), _entry("b", REFERENCE), _entry("c", "garbage")]

    result = filter_entries(entries, TimeWindow.ALL, REFERENCE)

    assert result == entries
    assert result is not entries


def test_day_window_uses_calendar_day_not_rolling_hours():
    entries = [
        _entry("early", datetime(2026, 10, 21, 0, 5, tzinfo=timezone.utc)),
        _entry("late", datetime(2026, 10, 21, 23, 55, tzinfo=timezone.utc)),
        _entry("yesterday", REFERENCE - timedelta(hours=13)),
        _entry("tomorrow", REFERENCE + timedelta(hours=13)),
    ]

    assert _ids(filter_entries(entries, TimeWindow.DAY, REFERENCE)) == ["early", "late"]


def test_week_window_starts_on_monday():
    entries = [
        _entry("sunday-before", datetime(2026, 10, 18, 20, 0, tzinfo=timezone.utc)),
        _entry("monday", datetime(2026, 10, 19, 0, 0, tzinfo=timezone.utc)),
        _entry("sunday", datetime(2026, 10, 25, 23, 0, tzinfo=timezone.utc)),
        _entry("next-monday", datetime(2026, 10, 26, 1, 0, tzinfo=timezone.utc)),
    ]

    assert _ids(filter_entries(entries, TimeWindow.WEEK, REFERENCE)) == [
        "monday",
        "sunday",
    ]


def test_month_window_matches_month_and_year():
    entries = [
        _entry("first", datetime(2026, 10, 1, tzinfo=timezone.utc)),
        _entry("last", datetime(2026, 10, 31, 22, 0, tzinfo=timezone.utc)),
        _entry("last-year", datetime(2025, 10, 15, tzinfo=timezone.utc)),
        _entry("next-month", datetime(2026, 11, 1, tzinfo=timezone.utc)),
    ]

    assert _ids(filter_entries(entries, TimeWindow.MONTH, REFERENCE)) == [
        "first",
        "last",
    ]


@pytest.mark.parametrize("window", [TimeWindow.DAY, TimeWindow.WEEK, TimeWindow.MONTH])
def test_missing_or_invalid_dates_are_excluded(window):
    entries = [_entry("none", None), _entry("text", "2026-10-21"), _entry("ok", REFERENCE)]

    assert _ids(filter_entries(entries, window, REFERENCE)) == ["ok"]


def test_same_day_entry_is_in_day_week_and_month():
    entry = _entry("today", REFERENCE.replace(hour=8))

    for window in (TimeWindow.DAY, TimeWindow.WEEK, TimeWindow.MONTH):
        assert filter_entries([entry], window, REFERENCE) == [entry]


def test_entry_dates_are_compared_in_reference_timezone():
    bogota = ZoneInfo("America/Bogota")
    reference = datetime(2026, 10, 21, 20, 0, tzinfo=bogota)
    # 02:00 UTC on the 22nd is still the evening of the 21st in Bogotá.
    entry = _entry("evening", datetime(2026, 10, 22, 2, 0, tzinfo=timezone.utc))

    assert filter_entries([entry], TimeWindow.DAY, reference) == [entry]
    assert filter_entries([entry], TimeWindow.DAY, REFERENCE.replace(day=22)) == [entry]


def test_plain_dates_and_naive_datetimes_are_supported():
    entries = [
        _entry("plain", date(2026, 10, 21)),
        _entry("naive", datetime(2026, 10, 21, 7, 30)),
    ]

    assert _ids(filter_entries(entries, TimeWindow.DAY, REFERENCE)) == ["plain", "naive"]


def test_filter_does_not_mutate_input():
    entries = [_entry("old", datetime(2020, 1, 1, tzinfo=timezone.utc))]
    snapshot = list(entries)

    filter_entries(entries, TimeWindow.DAY, REFERENCE)

    assert entries == snapshot


def test_window_range_and_labels():
    assert window_range(TimeWindow.ALL, REFERENCE) is None
    assert window_range(TimeWindow.DAY, REFERENCE) == (date(2026, 10, 21), date(2026, 10, 21))
    assert window_range(TimeWindow.WEEK, REFERENCE) == (date(2026, 10, 19), date(2026, 10, 25))
    assert window_range(TimeWindow.MONTH, REFERENCE) == (date(2026, 10, 1), date(2026, 10, 31))
    december = REFERENCE.replace(month=12, day=5)
    assert window_range(TimeWindow.MONTH, december) == (date(2026, 12, 1), date(2026, 12, 31))
    assert window_label(TimeWindow.WEEK) == "This week"


def test_parse_window():
    assert TimeWindow.parse(" Month ") is TimeWindow.MONTH
    assert TimeWindow.parse(None) is TimeWindow.ALL
    assert TimeWindow.parse(TimeWindow.DAY) is TimeWindow.DAY
    with pytest.raises(ValueError):
        TimeWindow.parse("year")
