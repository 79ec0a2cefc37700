"""Persistence adapters backing the entry store."""

from __future__ import annotations

import json
import os
import tempfile
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Protocol, Sequence

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    bindparam,
    insert,
    select,
    update,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import NoSuchTableError, SQLAlchemyError

from ...config import Settings
from ...infra.db import get_engine
from ...infra.logging import get_logger
from ..catalog import parse_category
from .errors import PersistenceError
from .models import Entry, new_entry_id, utcnow

__all__ = [
    "ENTRIES_TABLE_NAME",
    "InMemoryPersistenceAdapter",
    "JsonFilePersistenceAdapter",
    "PersistenceAdapter",
    "SqlPersistenceAdapter",
    "build_entries_table",
    "build_persistence_adapter",
    "entry_from_record",
    "entry_to_record",
]

logger = get_logger(__name__)

ENTRIES_TABLE_NAME = "bitacora_entries"

# Field names used by the browser-only version of the log.
LEGACY_FIELD_ALIASES: Mapping[str, str] = {
    "id": "entry_id",
    "fecha": "date",
    "titulo": "title",
    "descripcion": "description",
    "responsable": "owner",
    "categoria": "category",
    "fechaCreacion": "created_at",
    "completada": "completed",
}


class PersistenceAdapter(Protocol):  # pragma: no cover - interface only
    """Load-at-startup / save-on-change contract consumed by the entry store."""

    name: str

    def load(self) -> List[Entry]: ...

    def save(self, entries: Sequence[Entry]) -> None: ...


class InMemoryPersistenceAdapter(PersistenceAdapter):
    """Keeps the last saved snapshot in process memory."""

    name = "memory"

    def __init__(self, entries: Optional[Iterable[Entry]] = None) -> None:
        self._snapshot: List[Entry] = list(entries or [])
        self.save_count = 0

    def load(self) -> List[Entry]:
        return list(self._snapshot)

    def save(self, entries: Sequence[Entry]) -> None:
        self._snapshot = list(entries)
        self.save_count += 1


def build_entries_table(metadata: MetaData) -> Table:
    """Declare the entries table on the given metadata."""

    return Table(
        ENTRIES_TABLE_NAME,
        metadata,
        Column("entry_id", String(length=36), primary_key=True),
        Column("position", Integer, nullable=False),
        # ISO-8601 text keeps the caller's offset; SQLite drops it from DATETIME.
        Column("entry_date", String(length=40), nullable=True),
        Column("title", Text, nullable=False),
        Column("description", Text, nullable=False),
        Column("owner", String(length=128), nullable=False),
        Column("category", String(length=32), nullable=False),
        Column("created_at", DateTime(timezone=True), nullable=False),
        Column("completed", Boolean, nullable=False, default=False),
    )


class SqlPersistenceAdapter(PersistenceAdapter):
    """SQLAlchemy-backed adapter; PostgreSQL in production, SQLite locally."""

    name = "sql"

    def __init__(
        self,
        engine: Optional[Engine] = None,
        *,
        table: Optional[Table] = None,
        ensure_schema: bool = False,
    ) -> None:
        self._engine = engine or get_engine()
        if table is not None:
            self._entries = table
        elif ensure_schema:
            self._entries = build_entries_table(MetaData())
            self._entries.metadata.create_all(self._engine, checkfirst=True)
        else:
            try:
                self._entries = Table(
                    ENTRIES_TABLE_NAME, MetaData(), autoload_with=self._engine
                )
            except NoSuchTableError as exc:
                raise PersistenceError(
                    f"Required table '{ENTRIES_TABLE_NAME}' not found",
                    details={"table": ENTRIES_TABLE_NAME},
                ) from exc
            except SQLAlchemyError as exc:
                raise PersistenceError(
                    "Entry database unavailable", details={"reason": str(exc)}
                ) from exc

    def load(self) -> List[Entry]:
        stmt = select(self._entries).order_by(
            self._entries.c.position.asc(), self._entries.c.created_at.asc()
        )
        try:
            with self._engine.begin() as conn:
                rows = conn.execute(stmt).mappings().all()
        except SQLAlchemyError as exc:
            logger.error("sql_entries_load_failed", exc_info=True)
            raise PersistenceError(
                "Failed to load entries", details={"reason": str(exc)}
            ) from exc
        entries: List[Entry] = []
        for row in rows:
            entry = _row_to_entry(row)
            if entry is not None:
                entries.append(entry)
        logger.info("sql_entries_loaded", extra={"count": len(entries)})
        return entries

    def save(self, entries: Sequence[Entry]) -> None:
        table = self._entries
        try:
            with self._engine.begin() as conn:
                known_ids = set(conn.execute(select(table.c.entry_id)).scalars())
                new_rows = [
                    _entry_to_row(entry, position)
                    for position, entry in enumerate(entries)
                    if entry.entry_id not in known_ids
                ]
                existing = [
                    {"b_entry_id": entry.entry_id, "b_completed": entry.completed}
                    for entry in entries
                    if entry.entry_id in known_ids
                ]
                if new_rows:
                    conn.execute(insert(table), new_rows)
                if existing:
                    conn.execute(
                        update(table)
                        .where(table.c.entry_id == bindparam("b_entry_id"))
                        .values(completed=bindparam("b_completed")),
                        existing,
                    )
        except SQLAlchemyError as exc:
            logger.error(
                "sql_entries_save_failed",
                exc_info=True,
                extra={"count": len(entries)},
            )
            raise PersistenceError(
                "Failed to save entries", details={"reason": str(exc)}
            ) from exc


class JsonFilePersistenceAdapter(PersistenceAdapter):
    """Stores the entry list as one JSON array, replaced atomically on save."""

    name = "json"

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> List[Entry]:
        if not self._path.exists():
            return []
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceError(
                f"Failed to read entries from {self._path}",
                details={"path": str(self._path), "reason": str(exc)},
            ) from exc
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise PersistenceError(
                f"Entry file {self._path} must contain a JSON array",
                details={"path": str(self._path)},
            )
        entries: List[Entry] = []
        for record in payload:
            if not isinstance(record, dict):
                logger.warning(
                    "json_entry_skipped",
                    extra={"path": str(self._path), "reason": "not_an_object"},
                )
                continue
            entry = entry_from_record(record)
            if entry is not None:
                entries.append(entry)
        logger.info(
            "json_entries_loaded",
            extra={"path": str(self._path), "count": len(entries)},
        )
        return entries

    def save(self, entries: Sequence[Entry]) -> None:
        records = [entry_to_record(entry) for entry in entries]
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", dir=str(self._path.parent)
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(records, handle, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            logger.error(
                "json_entries_save_failed",
                exc_info=True,
                extra={"path": str(self._path)},
            )
            raise PersistenceError(
                f"Failed to write entries to {self._path}",
                details={"path": str(self._path), "reason": str(exc)},
            ) from exc


def build_persistence_adapter(settings: Settings) -> PersistenceAdapter:
    """Factory that returns the configured persistence adapter."""

    backend = settings.persistence.backend
    if backend == "memory":
        return InMemoryPersistenceAdapter()
    if backend == "json":
        return JsonFilePersistenceAdapter(settings.persistence.json_path)
    return SqlPersistenceAdapter(
        get_engine(settings.database_url),
        ensure_schema=settings.persistence.ensure_schema,
    )


# ----------------------------------------------------------------------
# Record conversion helpers
# ----------------------------------------------------------------------
def entry_to_record(entry: Entry) -> dict[str, Any]:
    """Serialize an entry into a JSON-compatible mapping."""

    record = entry.to_dict()
    record["date"] = _format_date(entry.date)
    record["created_at"] = entry.created_at.isoformat()
    return record


def entry_from_record(record: Mapping[str, Any]) -> Optional[Entry]:
    """Rebuild an entry from a stored mapping (current or legacy field names).

    Returns ``None`` for records whose category cannot be resolved. Missing or
    unparseable activity dates load as ``None``.
    """

    data = {LEGACY_FIELD_ALIASES.get(key, key): value for key, value in record.items()}
    category = parse_category(data.get("category"))
    if category is None:
        logger.warning(
            "entry_record_skipped",
            extra={
                "entry_id": data.get("entry_id"),
                "reason": "unknown_category",
                "category": data.get("category"),
            },
        )
        return None
    created_at = _parse_datetime(data.get("created_at")) or utcnow()
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return Entry(
        entry_id=str(data.get("entry_id") or "") or new_entry_id(),
        date=_parse_datetime(data.get("date")),
        title=str(data.get("title") or ""),
        description=str(data.get("description") or ""),
        owner=str(data.get("owner") or "").strip(),
        category=category,
        created_at=created_at,
        completed=_parse_bool(data.get("completed")),
    )


def _entry_to_row(entry: Entry, position: int) -> dict[str, Any]:
    created_at = entry.created_at
    if created_at.tzinfo is not None:
        created_at = created_at.astimezone(timezone.utc)
    return {
        "entry_id": entry.entry_id,
        "position": position,
        "entry_date": _format_date(entry.date),
        "title": entry.title,
        "description": entry.description,
        "owner": entry.owner,
        "category": entry.category.value,
        "created_at": created_at,
        "completed": entry.completed,
    }


def _row_to_entry(row: Mapping[str, Any]) -> Optional[Entry]:
    return entry_from_record(
        {
            "entry_id": row["entry_id"],
            "date": row.get("entry_date"),
            "title": row["title"],
            "description": row["description"],
            "owner": row["owner"],
            "category": row["category"],
            "created_at": row["created_at"],
            "completed": row.get("completed"),
        }
    )


def _format_date(value: Any) -> Optional[str]:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return None


def _parse_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = f"{text[:-1]}+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1", "yes", "y"}
    return False
