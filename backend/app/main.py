"""FastAPI entrypoint for the bitácora backend."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.dependencies import get_settings
from .api.routers import catalog, entries, health, stats
from .domain.entrystore import EntryStore, build_persistence_adapter
from .infra.logging import configure_logging, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI):
    """Open the entry store at startup and flush it at shutdown."""

    settings = get_settings()
    store = EntryStore.open(build_persistence_adapter(settings))
    application.state.entry_store = store
    logger.info(
        "bitacora_started",
        extra={"environment": settings.environment, "entries": len(store)},
    )
    try:
        yield
    finally:
        store.close()
        application.state.entry_store = None


def create_app() -> FastAPI:
    """Instantiate the FastAPI app and register routers."""

    configure_logging(get_settings().logging)
    application = FastAPI(title="Bitácora API", version="0.1.0", lifespan=lifespan)
    allowed_origins = {
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    }
    application.add_middleware(
        CORSMiddleware,
        allow_origins=list(allowed_origins),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    for router in (
        health.router,
        entries.router,
        stats.router,
        catalog.router,
    ):
        application.include_router(router)
    return application


app = create_app()
