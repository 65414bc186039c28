"""docstore API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery), health before documents
    - Global error handlers map DocStoreError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Settings and document store live on app.state, built once per app

Design Decisions:
    - create_app(settings) factory: tests build isolated apps over tmp dirs;
      the module-level app serves `uvicorn docstore.main:app`
    - Store built in create_app, not in lifespan: ASGI test transports do not
      run lifespan, the store must exist regardless
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from docstore.api.error_handlers import register_error_handlers
from docstore.api.middleware import register_middleware
from docstore.api.routes import documents, health
from docstore.config import Settings, get_settings
from docstore.infrastructure.observability import setup_logging
from docstore.services.document_store import build_document_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    logger.info(f"docstore API listening on :{settings.port}")
    logger.info(f"DATA_ROOT = {app.state.store.root}")
    if settings.storage_key:
        logger.info("STORAGE_KEY enabled (require X-Storage-Key)")
    yield
    logger.info("docstore API shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API around one settings object and one document store."""
    settings = settings or get_settings()

    # No docs routes: /openapi.json would shadow a document of that name
    app = FastAPI(
        title="docstore API", version="1.0.0", lifespan=lifespan,
        docs_url=None, redoc_url=None, openapi_url=None,
    )
    app.state.settings = settings
    app.state.store = build_document_store(settings)

    register_middleware(app, settings)
    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(documents.router)
    return app


app = create_app()
