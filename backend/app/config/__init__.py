"""Config package exporting loader helpers."""

from .loader import (
    CatalogConfig,
    PersistenceConfig,
    Settings,
    StatsConfig,
    load_settings,
)

__all__ = [
    "CatalogConfig",
    "PersistenceConfig",
    "Settings",
    "StatsConfig",
    "load_settings",
]
