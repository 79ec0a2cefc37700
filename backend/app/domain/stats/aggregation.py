"""Per-owner and per-category grouping of entries."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List

from ..catalog import Category, category_label
from ..entrystore.models import Entry

__all__ = [
    "CategoryCount",
    "OwnerSummary",
    "completion_percent",
    "summarize_by_category",
    "summarize_by_owner",
]


def completion_percent(completed: int, total: int) -> int:
    """Whole percentage of completed work, rounding halves up."""

    if total <= 0:
        return 0
    return int(math.floor(completed * 100 / total + 0.5))


@dataclass(frozen=True)
class OwnerSummary:
    owner: str
    total: int
    completed: int

    @property
    def pending(self) -> int:
        return self.total - self.completed

    @property
    def completion_percent(self) -> int:
        return completion_percent(self.completed, self.total)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "owner": self.owner,
            "total": self.total,
            "completed": self.completed,
            "pending": self.pending,
            "completion_percent": self.completion_percent,
        }


@dataclass(frozen=True)
class CategoryCount:
    category: Category
    count: int

    @property
    def label(self) -> str:
        return category_label(self.category)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category.value,
            "label": self.label,
            "count": self.count,
        }


def summarize_by_owner(entries: Iterable[Entry]) -> List[OwnerSummary]:
    """Count total and completed entries per owner, busiest owner first.

    Owners with equal totals keep the order in which they first appear.
    """

    totals: Dict[str, int] = {}
    completed: Dict[str, int] = {}
    for entry in entries:
        totals[entry.owner] = totals.get(entry.owner, 0) + 1
        completed[entry.owner] = completed.get(entry.owner, 0) + int(entry.completed)
    rows = [
        OwnerSummary(owner=owner, total=total, completed=completed[owner])
        for owner, total in totals.items()
    ]
    return sorted(rows, key=lambda row: -row.total)


def summarize_by_category(entries: Iterable[Entry]) -> List[CategoryCount]:
    counts: Dict[Category, int] = {}
    for entry in entries:
        counts[entry.category] = counts.get(entry.category, 0) + 1
    rows = [CategoryCount(category=category, count=n) for category, n in counts.items()]
    return sorted(rows, key=lambda row: -row.count)
