"""System health endpoints for frontend polling."""

from typing import Any

from fastapi import APIRouter, Depends

from ...api.dependencies import get_entry_store, get_settings
from ...config import Settings
from ...domain.entrystore import EntryStore
from ...infra.metrics import get_metrics_client

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/healthz")
def healthcheck(
    settings: Settings = Depends(get_settings),
    store: EntryStore = Depends(get_entry_store),
) -> dict[str, Any]:
    """Return coarse-grained backend readiness information."""

    return {
        "status": "ok",
        "environment": settings.environment,
        "persistence": store.adapter.name,
        "entries": len(store),
        "metrics": get_metrics_client().snapshot(),
    }
