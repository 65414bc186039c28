"""Error Handlers — global exception handlers for the docstore API.

Invariants:
    - DocStoreError → structured JSON with error code, message, severity
    - Error responses are never cached downstream (Cache-Control: no-store)
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Two-layer handler: domain (DocStoreError) and catch-all (Exception).
      Routes take only string parameters and raw bodies, so FastAPI request
      validation has nothing to reject
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from docstore.core.domain_types import NO_STORE
from docstore.core.errors import DocStoreError, ErrorSeverity

logger = logging.getLogger(__name__)

_NO_STORE_HEADERS = {"Cache-Control": NO_STORE}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_docstore_error_handler(app)
    _register_generic_error_handler(app)


def _register_docstore_error_handler(app: FastAPI) -> None:
    """Register domain/storage error handler."""

    @app.exception_handler(DocStoreError)
    async def docstore_error_handler(request: Request, exc: DocStoreError):
        """Handle all docstore domain and storage errors."""
        log = logger.error if exc.http_status >= 500 else logger.info
        log(
            f"DocStoreError: {exc.message}",
            extra={
                "error_code": exc.code,
                "document_path": exc.context.document_path,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
            headers=_NO_STORE_HEADERS,
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )
