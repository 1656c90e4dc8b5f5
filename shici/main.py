"""shici-canvas — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Token, font and template are loaded once in the lifespan, before serving
    - A startup failure (token, font, template) propagates and aborts the process
    - Global error handlers map ShiciError → empty-bodied responses

Design Decisions:
    - Lifespan over @app.on_event: startup state built and torn down in one place
    - TLS handled by uvicorn when certificate and key are configured; the app
      itself is transport-agnostic
"""

import logging
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI

from shici import __version__
from shici.api.error_handlers import register_error_handlers
from shici.api.routes import health, poem_page
from shici.config import Settings, get_settings
from shici.core.page_composer import PageComposer
from shici.infrastructure.font_loader import load_font_face
from shici.infrastructure.jinrishici_client import PoemClient
from shici.infrastructure.observability import redact_secret, setup_logging
from shici.infrastructure.token_store import TokenProvisioner
from shici.services.app_context import AppContext

logger = logging.getLogger(__name__)


async def build_context(settings: Settings, http: httpx.AsyncClient) -> AppContext:
    """Provision token, load font and template; any failure is fatal."""
    token = await TokenProvisioner(
        settings.token_path, settings.token_url, http,
    ).provision()
    font = load_font_face(settings.font_path)
    composer = PageComposer.from_package()
    poem_client = PoemClient(
        http,
        settings.sentence_url,
        timeout_seconds=settings.fetch_timeout_seconds,
        token_header=settings.token_header,
    )
    return AppContext.build(
        settings,
        token=token,
        font=font,
        composer=composer,
        poem_client=poem_client,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    async with httpx.AsyncClient(
        timeout=settings.fetch_timeout_seconds,
    ) as http:
        app.state.context = await build_context(settings, http)
        redact_secret(app.state.context.token)
        logger.info("shici-canvas started")
        yield
        logger.info("shici-canvas shutting down")
        app.state.context = None


def create_app() -> FastAPI:
    app = FastAPI(
        title="shici-canvas", version=__version__, lifespan=lifespan,
        docs_url=None, redoc_url=None,
    )
    app.state.context = None
    app.include_router(health.router)
    app.include_router(poem_page.router)
    register_error_handlers(app)
    return app


app = create_app()


def serve() -> None:
    """Console entry point: run uvicorn, with TLS when configured."""
    settings = get_settings()
    ssl_options = {}
    if settings.tls_enabled:
        ssl_options = {
            "ssl_certfile": str(settings.ssl_certfile),
            "ssl_keyfile": str(settings.ssl_keyfile),
        }
    uvicorn.run(
        "shici.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
        **ssl_options,
    )


if __name__ == "__main__":
    serve()
