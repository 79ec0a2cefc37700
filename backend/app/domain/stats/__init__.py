"""Time-window filtering and aggregation over bitácora entries."""

from .aggregation import (
    CategoryCount,
    OwnerSummary,
    completion_percent,
    summarize_by_category,
    summarize_by_owner,
)
from .summary_service import StatsSummaryService
from .time_window import TimeWindow, filter_entries, window_label, window_range

__all__ = [
    "CategoryCount",
    "OwnerSummary",
    "StatsSummaryService",
    "TimeWindow",
    "completion_percent",
    "filter_entries",
    "summarize_by_category",
    "summarize_by_owner",
    "window_label",
    "window_range",
]
