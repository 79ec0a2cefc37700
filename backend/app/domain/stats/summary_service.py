"""Aggregation helpers for `/api/stats/summary`."""

from __future__ import annotations

import time
from datetime import datetime, timezone, tzinfo
from typing import Any, Callable, Iterable, Optional

from ...infra.logging import get_logger
from ...infra.metrics import MetricsClient, get_metrics_client
from ..entrystore.models import Entry
from .aggregation import completion_percent, summarize_by_category, summarize_by_owner
from .time_window import TimeWindow, filter_entries, window_label, window_range

logger = get_logger(__name__)


class StatsSummaryService:
    """Builds the statistics screen payload from an entry snapshot."""

    def __init__(
        self,
        *,
        tz: tzinfo | None = None,
        clock: Optional[Callable[[tzinfo], datetime]] = None,
        metrics: MetricsClient | None = None,
    ) -> None:
        self._tz = tz or timezone.utc
        self._clock = clock or (lambda zone: datetime.now(zone))
        self._metrics = metrics or get_metrics_client()

    @property
    def timezone(self) -> tzinfo:
        return self._tz

    def now(self) -> datetime:
        return self._clock(self._tz)

    def build_summary(
        self,
        entries: Iterable[Entry],
        *,
        window: TimeWindow | str = TimeWindow.ALL,
        reference: datetime | None = None,
    ) -> dict[str, Any]:
        resolved_window = TimeWindow.parse(window)
        generated_at = self.now()
        reference = reference or generated_at
        self._metrics.increment("stats_summary_requests_total")
        start = time.perf_counter()

        filtered = filter_entries(entries, resolved_window, reference)
        owners = summarize_by_owner(filtered)
        categories = summarize_by_category(filtered)
        completed = sum(1 for entry in filtered if entry.completed)
        bounds = window_range(resolved_window, reference)

        duration_ms = int((time.perf_counter() - start) * 1000)
        self._metrics.gauge("stats_summary_last_duration_ms", duration_ms)
        logger.info(
            "stats_summary_generated",
            extra={
                "duration_ms": duration_ms,
                "window": resolved_window.value,
                "entries": len(filtered),
            },
        )
        return {
            "window": {
                "key": resolved_window.value,
                "label": window_label(resolved_window),
                "start": bounds[0] if bounds else None,
                "end": bounds[1] if bounds else None,
            },
            "totals": {
                "entries": len(filtered),
                "completed": completed,
                "pending": len(filtered) - completed,
                "completion_percent": completion_percent(completed, len(filtered)),
            },
            "owners": [row.to_dict() for row in owners],
            "categories": [row.to_dict() for row in categories],
            "meta": {
                "generated_at": generated_at,
                "reference": reference,
                "timezone": str(self._tz),
            },
        }
