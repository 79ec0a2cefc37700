"""Shared API dependencies."""

from __future__ import annotations

from functools import lru_cache

from fastapi import Request

from ..config import Settings, load_settings
from ..domain.catalog import Catalog
from ..domain.entrystore import EntryStore
from ..domain.stats import StatsSummaryService

__all__ = [
    "get_catalog",
    "get_entry_store",
    "get_settings",
    "get_stats_service",
]


@lru_cache()
def _settings_singleton() -> Settings:
    return load_settings()


def get_settings() -> Settings:
    """Return the process-wide settings."""

    return _settings_singleton()


def get_entry_store(request: Request) -> EntryStore:
    """Return the store opened by the application lifespan."""

    store = getattr(request.app.state, "entry_store", None)
    if store is None:
        raise RuntimeError("Entry store has not been opened")
    return store


@lru_cache()
def _stats_service_singleton() -> StatsSummaryService:
    return StatsSummaryService(tz=get_settings().stats.tzinfo)


def get_stats_service() -> StatsSummaryService:
    return _stats_service_singleton()


@lru_cache()
def _catalog_singleton() -> Catalog:
    return Catalog.from_owners(get_settings().catalog.owners)


def get_catalog() -> Catalog:
    """Return the catalog with configured owner suggestions."""

    return _catalog_singleton()
