"""Category/owner catalog package."""

from .types import (
    CATEGORY_LABELS,
    DEFAULT_OWNERS,
    LEGACY_CATEGORY_KEYS,
    Catalog,
    Category,
    category_label,
    parse_category,
)

__all__ = [
    "CATEGORY_LABELS",
    "DEFAULT_OWNERS",
    "LEGACY_CATEGORY_KEYS",
    "Catalog",
    "Category",
    "category_label",
    "parse_category",
]
