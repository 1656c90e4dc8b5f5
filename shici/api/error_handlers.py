"""Error Handlers — global exception handlers for the page route.

Invariants:
    - ShiciError → logged with its code, answered with its http_status and an empty body
    - Exception (catch-all) → logged with traceback, answered with an empty 500
    - No internal detail ever reaches the response body
"""

import logging

from fastapi import FastAPI, Request, Response, status

from shici.core.errors import ShiciError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_shici_error_handler(app)
    _register_generic_error_handler(app)


def _register_shici_error_handler(app: FastAPI) -> None:

    @app.exception_handler(ShiciError)
    async def shici_error_handler(request: Request, exc: ShiciError):
        """Handle all domain/infrastructure errors raised while rendering."""
        logger.error(
            f"ShiciError: {exc.message}",
            extra={
                **exc.to_log_extra(),
                "path": request.url.path,
                "status_code": exc.http_status,
            },
        )
        return Response(status_code=exc.http_status)


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
