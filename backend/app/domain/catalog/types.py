"""Category enumeration and owner suggestions for bitácora entries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence


class Category(str, Enum):
    """Closed set of activity categories."""

    MAIL = "mail"
    CULTURAL_GROUPS = "cultural-groups"
    EVENT = "event"
    REPORT = "report"
    MEETING = "meeting"


CATEGORY_LABELS: Mapping[Category, str] = {
    Category.MAIL: "Mail",
    Category.CULTURAL_GROUPS: "Cultural groups",
    Category.EVENT: "Event",
    Category.REPORT: "Report",
    Category.MEETING: "Meeting",
}

# Keys written by the first (browser-only) version of the log.
LEGACY_CATEGORY_KEYS: Mapping[str, Category] = {
    "correo": Category.MAIL,
    "grupos_culturales": Category.CULTURAL_GROUPS,
    "evento": Category.EVENT,
    "informe": Category.REPORT,
    "reunion": Category.MEETING,
}

DEFAULT_OWNERS: tuple[str, ...] = (
    "Alejandro",
    "Isabella",
    "Juan Pablo",
    "Kerelin",
    "Marcos",
    "Naced",
    "Natalia",
)

_LOOKUP: Dict[str, Category] = {
    **{category.value: category for category in Category},
    **{label.lower(): category for category, label in CATEGORY_LABELS.items()},
    **LEGACY_CATEGORY_KEYS,
}


def parse_category(value: Any) -> Optional[Category]:
    """Resolve a category from an enum member, key, label or legacy key."""

    if isinstance(value, Category):
        return value
    if not isinstance(value, str):
        return None
    key = value.strip().lower()
    if not key:
        return None
    return _LOOKUP.get(key) or _LOOKUP.get(key.replace("_", "-"))


def category_label(category: Category) -> str:
    return CATEGORY_LABELS[category]


@dataclass(frozen=True)
class Catalog:
    """Read-only lookup presented to the entry form.

    Owners are suggestions only; entries accept any non-empty owner string.
    """

    owners: tuple[str, ...] = DEFAULT_OWNERS
    categories: tuple[Category, ...] = tuple(Category)

    @classmethod
    def from_owners(cls, owners: Optional[Iterable[str]] = None) -> "Catalog":
        cleaned = tuple(owner.strip() for owner in owners or () if owner.strip())
        return cls(owners=cleaned or DEFAULT_OWNERS)

    def is_suggested_owner(self, owner: str) -> bool:
        return owner.strip() in self.owners

    def category_options(self) -> Sequence[Dict[str, str]]:
        return [
            {"key": category.value, "label": category_label(category)}
            for category in self.categories
        ]
