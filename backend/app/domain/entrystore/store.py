"""Entry store owning the canonical, insertion-ordered bitácora entry list."""

from __future__ import annotations

from datetime import date, datetime
from threading import RLock
from typing import Callable, Dict, Iterable, List, Optional

from ...infra.logging import get_logger
from ...infra.metrics import MetricsClient, get_metrics_client
from ..catalog import parse_category
from .errors import InvalidDraftError, NotFoundError
from .models import Entry, EntryDraft, new_entry_id, utcnow
from .persistence import PersistenceAdapter

__all__ = ["EntryStore", "MIN_DESCRIPTION_LENGTH", "MIN_TITLE_LENGTH"]

logger = get_logger(__name__)

MIN_TITLE_LENGTH = 2
MIN_DESCRIPTION_LENGTH = 5


class EntryStore:
    """Create/toggle mutations over an append-only entry list.

    Every successful mutation is followed by ``adapter.save``. Save failures are
    logged and counted but never undo the in-memory mutation.
    """

    def __init__(
        self,
        adapter: PersistenceAdapter,
        *,
        entries: Optional[Iterable[Entry]] = None,
        clock: Callable[[], datetime] = utcnow,
        id_factory: Callable[[], str] = new_entry_id,
        metrics: MetricsClient | None = None,
    ) -> None:
        self._adapter = adapter
        self._clock = clock
        self._id_factory = id_factory
        self._metrics = metrics or get_metrics_client()
        self._lock = RLock()
        self._entries: List[Entry] = []
        self._positions: Dict[str, int] = {}
        for entry in entries or ():
            if entry.entry_id in self._positions:
                logger.warning(
                    "entry_store_duplicate_id_dropped",
                    extra={"entry_id": entry.entry_id},
                )
                continue
            self._positions[entry.entry_id] = len(self._entries)
            self._entries.append(entry)

    @classmethod
    def open(cls, adapter: PersistenceAdapter, **kwargs) -> "EntryStore":
        """Build a store from the adapter's persisted entries."""

        loaded = adapter.load() or []
        store = cls(adapter, entries=loaded, **kwargs)
        logger.info(
            "entry_store_opened",
            extra={"adapter": adapter.name, "count": len(store)},
        )
        return store

    def close(self) -> None:
        """Flush the current list one last time."""

        with self._lock:
            self._persist("close")
        logger.info("entry_store_closed", extra={"count": len(self)})

    @property
    def adapter(self) -> PersistenceAdapter:
        return self._adapter

    def __len__(self) -> int:
        return len(self._entries)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def list(self) -> tuple[Entry, ...]:
        with self._lock:
            return tuple(self._entries)

    def get(self, entry_id: str) -> Entry:
        with self._lock:
            position = self._positions.get(entry_id)
            if position is None:
                raise NotFoundError(entry_id)
            return self._entries[position]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def create(self, draft: EntryDraft) -> Entry:
        title = (draft.title or "").strip()
        description = (draft.description or "").strip()
        owner = (draft.owner or "").strip()
        category = parse_category(draft.category)

        errors: Dict[str, str] = {}
        if not isinstance(draft.date, (datetime, date)):
            errors["date"] = "date is required"
        if len(title) < MIN_TITLE_LENGTH:
            errors["title"] = f"title must be at least {MIN_TITLE_LENGTH} characters"
        if len(description) < MIN_DESCRIPTION_LENGTH:
            errors["description"] = (
                f"description must be at least {MIN_DESCRIPTION_LENGTH} characters"
            )
        if not owner:
            errors["owner"] = "owner is required"
        if category is None:
            errors["category"] = (
                "category is required"
                if draft.category in (None, "")
                else f"unknown category '{draft.category}'"
            )
        if errors:
            self._metrics.increment("entry_drafts_rejected_total")
            raise InvalidDraftError(
                "Entry draft is invalid", details={"fields": errors}
            )

        with self._lock:
            entry = Entry.new(
                date=draft.date,  # type: ignore[arg-type]
                title=title,
                description=description,
                owner=owner,
                category=category,  # type: ignore[arg-type]
                entry_id=self._fresh_id(),
                timestamp=self._clock(),
            )
            self._positions[entry.entry_id] = len(self._entries)
            self._entries.append(entry)
            self._persist("create")
        self._metrics.increment("entries_created_total")
        logger.info(
            "entry_created",
            extra={
                "entry_id": entry.entry_id,
                "owner": entry.owner,
                "category": entry.category.value,
            },
        )
        return entry

    def toggle_complete(self, entry_id: str) -> Entry:
        with self._lock:
            position = self._positions.get(entry_id)
            if position is None:
                raise NotFoundError(entry_id)
            updated = self._entries[position].with_completion_toggled()
            self._entries[position] = updated
            self._persist("toggle_complete")
        self._metrics.increment("entry_completion_toggles_total")
        logger.info(
            "entry_completion_toggled",
            extra={"entry_id": entry_id, "completed": updated.completed},
        )
        return updated

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _fresh_id(self) -> str:
        entry_id = self._id_factory()
        while entry_id in self._positions:
            logger.warning("entry_id_collision", extra={"entry_id": entry_id})
            entry_id = self._id_factory()
        return entry_id

    def _persist(self, operation: str) -> None:
        try:
            self._adapter.save(tuple(self._entries))
        except Exception:
            self._metrics.increment("entry_store_save_failures_total")
            logger.exception(
                "entry_store_save_failed",
                extra={
                    "operation": operation,
                    "adapter": self._adapter.name,
                    "count": len(self._entries),
                },
            )
