"""Entry endpoints: list, detail, create and completion toggle."""

from __future__ import annotations

import datetime as dt
from typing import Annotated, List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from pydantic import BaseModel, Field

from ...api.dependencies import get_entry_store, get_stats_service
from ...domain.catalog import category_label
from ...domain.entrystore import (
    BitacoraError,
    Entry,
    EntryDraft,
    EntryStore,
    InvalidDraftError,
    NotFoundError,
)
from ...domain.stats import StatsSummaryService, TimeWindow, filter_entries
from ...infra.logging import get_logger
from ...infra.metrics import get_metrics_client

router = APIRouter(prefix="/api/entries", tags=["entries"])
logger = get_logger(__name__)
metrics = get_metrics_client()

EntryId = Annotated[str, Path(..., min_length=1, max_length=64)]


class EntryCreateRequest(BaseModel):
    date: Optional[dt.datetime] = Field(
        default=None, description="When the activity happened."
    )
    title: str = ""
    description: str = ""
    owner: str = ""
    category: Optional[str] = Field(
        default=None, description="Category key, e.g. `mail` or `cultural-groups`."
    )


class EntryResponse(BaseModel):
    entry_id: str
    date: Optional[Union[dt.datetime, dt.date]] = None
    title: str
    description: str
    owner: str
    category: str
    category_label: str
    created_at: dt.datetime
    completed: bool


class EntryListResponse(BaseModel):
    items: List[EntryResponse] = Field(default_factory=list)
    window: TimeWindow
    total_items: int


@router.get("", response_model=EntryListResponse, summary="List entries")
def list_entries(
    window: TimeWindow = Query(TimeWindow.ALL, description="Time window filter."),
    store: EntryStore = Depends(get_entry_store),
    stats_service: StatsSummaryService = Depends(get_stats_service),
) -> EntryListResponse:
    entries = filter_entries(store.list(), window, stats_service.now())
    return EntryListResponse(
        items=[_serialize_entry(entry) for entry in entries],
        window=window,
        total_items=len(entries),
    )


@router.post(
    "",
    response_model=EntryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a new entry",
)
def create_entry(
    payload: EntryCreateRequest,
    store: EntryStore = Depends(get_entry_store),
) -> EntryResponse:
    draft = EntryDraft(
        date=payload.date,
        title=payload.title,
        description=payload.description,
        owner=payload.owner,
        category=payload.category,
    )
    try:
        entry = store.create(draft)
    except InvalidDraftError as exc:
        metrics.increment("entries_http_invalid_total")
        logger.info("entry_create_rejected", extra={"fields": exc.fields})
        raise _http_error(exc) from exc
    return _serialize_entry(entry)


@router.get("/{entry_id}", response_model=EntryResponse, summary="Retrieve entry")
def get_entry(
    entry_id: EntryId,
    store: EntryStore = Depends(get_entry_store),
) -> EntryResponse:
    try:
        entry = store.get(entry_id)
    except NotFoundError as exc:
        raise _http_error(exc) from exc
    return _serialize_entry(entry)


@router.post(
    "/{entry_id}/toggle-complete",
    response_model=EntryResponse,
    summary="Flip the completed flag of an entry",
)
def toggle_entry_completion(
    entry_id: EntryId,
    store: EntryStore = Depends(get_entry_store),
) -> EntryResponse:
    try:
        entry = store.toggle_complete(entry_id)
    except NotFoundError as exc:
        logger.warning("entry_toggle_unknown_id", extra={"entry_id": entry_id})
        raise _http_error(exc) from exc
    return _serialize_entry(entry)


def _serialize_entry(entry: Entry) -> EntryResponse:
    return EntryResponse(
        entry_id=entry.entry_id,
        date=entry.date,
        title=entry.title,
        description=entry.description,
        owner=entry.owner,
        category=entry.category.value,
        category_label=category_label(entry.category),
        created_at=entry.created_at,
        completed=entry.completed,
    )


def _http_error(exc: BitacoraError) -> HTTPException:
    return HTTPException(status_code=int(exc.status_code), detail=exc.to_payload())
