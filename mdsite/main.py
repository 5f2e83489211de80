"""FastAPI application entry point."""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.trustedhost import TrustedHostMiddleware

from mdsite.api.assets import router as assets_router
from mdsite.api.control import create_control_router
from mdsite.api.documents import router as documents_router
from mdsite.api.health import router as health_router
from mdsite.api.index import router as index_router
from mdsite.config import Settings
from mdsite.exceptions import (
    DocumentNotFoundError,
    DocumentReadError,
    InvalidFilenameError,
    RenderError,
)
from mdsite.filesystem.content_manager import ContentManager

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    from starlette.responses import Response

logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    """Configure application logging."""
    level = logging.DEBUG if debug else logging.INFO
    fmt = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
    logging.basicConfig(
        level=level,
        format=fmt,
        stream=sys.stdout,
        force=True,
    )
    # Quiet noisy libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("MARKDOWN").setLevel(logging.WARNING)


def check_content_roots(settings: Settings) -> None:
    """Validate the configured content directories without creating anything.

    Missing directories are allowed (they list as empty and every lookup is a
    404) but are reported, since they are usually a misconfiguration.
    """
    for name, path in (
        ("pages", settings.pages_root),
        ("posts", settings.posts_root),
        ("static", settings.static_root),
    ):
        if path.exists() and not path.is_dir():
            msg = f"{name} path exists but is not a directory: {path}"
            raise NotADirectoryError(msg)
        if not path.exists():
            logger.warning("%s directory %s does not exist; serving it as empty", name, path)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan: startup and shutdown."""
    settings = Settings()
    configure_logging(settings.debug)
    logger.info("Starting mdsite on %s:%d (debug=%s)", settings.host, settings.port, settings.debug)

    try:
        check_content_roots(settings)
    except Exception as exc:
        logger.critical("Invalid content layout under %s: %s.", settings.site_dir, exc)
        raise

    yield

    logger.info("mdsite stopped")


def _not_found() -> PlainTextResponse:
    return PlainTextResponse("Not Found", status_code=404)


def create_app(
    settings: Settings | None = None,
    shutdown: Callable[[], None] | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings; read from the environment when omitted.
        shutdown: Capability that stops the listener. ``/stop`` is registered
            only when this is given and a shutdown token is configured.
    """
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="mdsite",
        description="Serves flat Markdown pages and posts rendered to HTML",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.debug else None,
    )
    app.state.settings = settings
    app.state.content_manager = ContentManager.from_settings(settings)

    app.add_middleware(GZipMiddleware, minimum_size=500)

    if settings.trusted_hosts:
        app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.trusted_hosts)

    @app.middleware("http")
    async def security_headers(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        response = await call_next(request)
        if settings.security_headers_enabled:
            response.headers.setdefault("X-Content-Type-Options", "nosniff")
            response.headers.setdefault("X-Frame-Options", "DENY")
            response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
        return response

    app.include_router(index_router)
    app.include_router(documents_router)
    app.include_router(assets_router)
    app.include_router(health_router)
    if shutdown is not None and settings.shutdown_enabled:
        app.include_router(create_control_router(shutdown))

    # Global exception handlers: every failure ends at this boundary as a status code

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> PlainTextResponse:
        if exc.status_code in (404, 405):
            logger.info("No route for %s %s", request.method, request.url.path)
            return _not_found()
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code)

    @app.exception_handler(InvalidFilenameError)
    async def invalid_filename_handler(
        request: Request, exc: InvalidFilenameError
    ) -> PlainTextResponse:
        logger.warning(
            "InvalidFilenameError in %s %s: %s", request.method, request.url.path, exc
        )
        return _not_found()

    @app.exception_handler(DocumentNotFoundError)
    async def not_found_handler(request: Request, exc: DocumentNotFoundError) -> PlainTextResponse:
        logger.info("DocumentNotFoundError in %s %s: %s", request.method, request.url.path, exc)
        return _not_found()

    @app.exception_handler(DocumentReadError)
    async def read_error_handler(request: Request, exc: DocumentReadError) -> PlainTextResponse:
        logger.error(
            "DocumentReadError in %s %s: %s", request.method, request.url.path, exc, exc_info=exc
        )
        return PlainTextResponse("Internal Server Error", status_code=500)

    @app.exception_handler(RenderError)
    async def render_error_handler(request: Request, exc: RenderError) -> PlainTextResponse:
        logger.error(
            "RenderError in %s %s: %s", request.method, request.url.path, exc, exc_info=exc
        )
        return PlainTextResponse("Internal Server Error", status_code=500)

    @app.exception_handler(OSError)
    async def os_error_handler(request: Request, exc: OSError) -> PlainTextResponse:
        logger.error("OSError in %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
        return PlainTextResponse("Internal Server Error", status_code=500)

    return app


# Module-level app for `uvicorn mdsite.main:app`; cli_entry builds its own.
app = create_app()


def cli_entry() -> None:
    """CLI entry point for running the server."""
    from mdsite.server import ServerHandle

    settings = Settings()
    handle = ServerHandle(host=settings.host, port=settings.port)
    handle.serve(create_app(settings, shutdown=handle.shutdown))
