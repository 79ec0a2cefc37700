"""Statistics summary endpoint."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from ...api.dependencies import get_entry_store, get_stats_service
from ...domain.entrystore import EntryStore
from ...domain.stats import StatsSummaryService, TimeWindow
from ...infra.logging import get_logger
from ...infra.metrics import get_metrics_client

router = APIRouter(prefix="/api/stats", tags=["stats"])
logger = get_logger(__name__)
metrics = get_metrics_client()


class WindowSection(BaseModel):
    key: TimeWindow
    label: str
    start: Optional[date] = None
    end: Optional[date] = None


class TotalsSection(BaseModel):
    entries: int
    completed: int
    pending: int
    completion_percent: int


class OwnerRow(BaseModel):
    owner: str
    total: int
    completed: int
    pending: int
    completion_percent: int


class CategoryRow(BaseModel):
    category: str
    label: str
    count: int


class StatsMeta(BaseModel):
    generated_at: datetime
    reference: datetime
    timezone: str


class StatsSummaryResponse(BaseModel):
    window: WindowSection
    totals: TotalsSection
    owners: list[OwnerRow] = Field(default_factory=list)
    categories: list[CategoryRow] = Field(default_factory=list)
    meta: StatsMeta


@router.get(
    "/summary",
    response_model=StatsSummaryResponse,
    summary="Per-owner and per-category statistics for a time window",
)
def get_stats_summary(
    window: TimeWindow = Query(TimeWindow.ALL, description="Time window filter."),
    store: EntryStore = Depends(get_entry_store),
    stats_service: StatsSummaryService = Depends(get_stats_service),
) -> StatsSummaryResponse:
    """Return the statistics payload."""

    metrics.increment("stats_summary_http_total")
    payload = stats_service.build_summary(store.list(), window=window)
    logger.debug("stats_summary_payload", extra={"window": window.value})
    return StatsSummaryResponse.model_validate(payload)
