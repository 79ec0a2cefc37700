"""Bitácora entry data models."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date as date_type, datetime, timezone
from typing import Any, Optional, Union
from uuid import uuid4

from ..catalog import Category

__all__ = [
    "Entry",
    "EntryDraft",
    "new_entry_id",
    "utcnow",
]

DateLike = Union[datetime, date_type]


def utcnow() -> datetime:
    """Return timezone-aware UTC timestamp."""

    return datetime.now(timezone.utc)


def new_entry_id() -> str:
    return str(uuid4())


@dataclass(frozen=True)
class EntryDraft:
    """Caller-supplied fields for a new entry, prior to validation."""

    date: Optional[DateLike]
    title: str
    description: str
    owner: str
    category: Union[Category, str, None]


@dataclass(frozen=True)
class Entry:
    """One logged activity held by the entry store."""

    entry_id: str
    date: Optional[DateLike]
    title: str
    description: str
    owner: str
    category: Category
    created_at: datetime
    completed: bool = False

    @classmethod
    def new(
        cls,
        *,
        date: DateLike,
        title: str,
        description: str,
        owner: str,
        category: Category,
        entry_id: Optional[str] = None,
        timestamp: Optional[datetime] = None,
    ) -> "Entry":
        """Factory that assigns the id and creation timestamp."""

        return cls(
            entry_id=entry_id or new_entry_id(),
            date=date,
            title=title,
            description=description,
            owner=owner,
            category=category,
            created_at=timestamp or utcnow(),
            completed=False,
        )

    def with_completion_toggled(self) -> "Entry":
        return replace(self, completed=not self.completed)

    def to_dict(self) -> dict[str, Any]:
        return {
            "entry_id": self.entry_id,
            "date": self.date,
            "title": self.title,
            "description": self.description,
            "owner": self.owner,
            "category": self.category.value,
            "created_at": self.created_at,
            "completed": self.completed,
        }
