"""Tests for the statistics summary service."""

from __future__ import annotations

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from backend.app.domain.catalog import Category
from backend.app.domain.entrystore import Entry
from backend.app.domain.stats import StatsSummaryService, TimeWindow
from backend.app.infra.metrics import InMemoryMetricsClient

pytestmark = [pytest.mark.stats]

NOW = datetime(2026, 10, 21, 15, 0, tzinfo=timezone.utc)


def _entry(entry_id, owner, when, *, completed=False, category=Category.MAIL):
    return Entry(
        entry_id=entry_id,
        date=when,
        title="Title",
        description="Description",
        owner=owner,
        category=category,
        created_at=NOW,
        completed=completed,
    )


@pytest.fixture()
def entries():
    return [
        _entry("1", "Isabella", NOW, completed=True, category=Category.MEETING),
        _entry("2", "Isabella", datetime(2026, 10, 19, tzinfo=timezone.utc)),
        _entry("3", "Marcos", datetime(2026, 10, 2, tzinfo=timezone.utc), completed=True),
        _entry("4", "Natalia", datetime(2026, 9, 30, tzinfo=timezone.utc)),
    ]


def _service(metrics=None, tz=timezone.utc):
    return StatsSummaryService(
        tz=tz,
        clock=lambda zone: NOW.astimezone(zone),
        metrics=metrics or InMemoryMetricsClient(),
    )


def test_build_summary_for_all_time(entries):
    metrics = InMemoryMetricsClient()
    summary = _service(metrics).build_summary(entries)

    assert summary["window"] == {"key": "all", "label": "All time", "start": None, "end": None}
    assert summary["totals"] == {
        "entries": 4,
        "completed": 2,
        "pending": 2,
        "completion_percent": 50,
    }
    assert [row["owner"] for row in summary["owners"]] == ["Isabella", "Marcos", "Natalia"]
    assert summary["categories"][0] == {"category": "mail", "label": "Mail", "count": 3}
    assert summary["meta"]["generated_at"] == NOW
    assert summary["meta"]["timezone"] == "UTC"
    assert metrics.counters["stats_summary_requests_total"] == 1
    assert "stats_summary_last_duration_ms" in metrics.gauges


def test_build_summary_applies_window(entries):
    summary = _service().build_summary(entries, window="week")

    assert summary["window"]["start"] == date(2026, 10, 19)
    assert summary["window"]["end"] == date(2026, 10, 25)
    assert summary["totals"]["entries"] == 2
    assert summary["owners"] == [
        {
            "owner": "Isabella",
            "total": 2,
            "completed": 1,
            "pending": 1,
            "completion_percent": 50,
        }
    ]


def test_build_summary_with_explicit_reference(entries):
    reference = datetime(2026, 9, 30, 9, 0, tzinfo=timezone.utc)

    summary = _service().build_summary(entries, window=TimeWindow.DAY, reference=reference)

    assert [row["owner"] for row in summary["owners"]] == ["Natalia"]
    assert summary["meta"]["reference"] == reference


def test_build_summary_uses_configured_timezone():
    bogota = ZoneInfo("America/Bogota")
    late_evening = _entry("x", "Ana", datetime(2026, 10, 21, 3, 0, tzinfo=timezone.utc))

    summary = _service(tz=bogota).build_summary([late_evening], window=TimeWindow.DAY)

    # 03:00 UTC on the 21st is the 20th in Bogotá, while "now" is the 21st there.
    assert summary["totals"]["entries"] == 0
    assert summary["meta"]["timezone"] == "America/Bogota"


def test_build_summary_on_empty_store():
    summary = _service().build_summary([], window=TimeWindow.MONTH)

    assert summary["owners"] == []
    assert summary["categories"] == []
    assert summary["totals"]["completion_percent"] == 0


def test_build_summary_rejects_unknown_window(entries):
    with pytest.raises(ValueError):
        _service().build_summary(entries, window="fortnight")
