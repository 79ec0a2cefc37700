"""Router exports for FastAPI composition."""

from . import catalog, entries, health, stats

__all__ = ["catalog", "entries", "health", "stats"]
