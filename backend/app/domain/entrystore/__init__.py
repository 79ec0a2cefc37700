"""Entry store domain package."""

from .errors import BitacoraError, InvalidDraftError, NotFoundError, PersistenceError
from .models import Entry, EntryDraft
from .persistence import (
    InMemoryPersistenceAdapter,
    JsonFilePersistenceAdapter,
    PersistenceAdapter,
    SqlPersistenceAdapter,
    build_persistence_adapter,
)
from .store import EntryStore

__all__ = [
    "BitacoraError",
    "Entry",
    "EntryDraft",
    "EntryStore",
    "InMemoryPersistenceAdapter",
    "InvalidDraftError",
    "JsonFilePersistenceAdapter",
    "NotFoundError",
    "PersistenceAdapter",
    "PersistenceError",
    "SqlPersistenceAdapter",
    "build_persistence_adapter",
]
