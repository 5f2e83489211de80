"""Listener lifecycle handle.

Owns the ``uvicorn.Server`` that serves the application and exposes a
``shutdown()`` capability. The application receives that capability when
its routes are registered instead of reaching for a global server object.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import uvicorn

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = logging.getLogger(__name__)

_GRACEFUL_SHUTDOWN_TIMEOUT = 10


class ServerHandle:
    """Runs an ASGI app on a uvicorn listener and stops it on request.

    Args:
        host: Bind address.
        port: TCP port.
    """

    def __init__(self, host: str, port: int) -> None:
        if not (1 <= port <= 65535):
            msg = f"port must be between 1 and 65535, got {port}"
            raise ValueError(msg)
        self._host = host
        self._port = port
        self._server: uvicorn.Server | None = None
        self._stop_requested = False

    @property
    def address(self) -> str:
        return f"{self._host}:{self._port}"

    def shutdown(self) -> None:
        """Stop accepting connections and exit once in-flight requests finish.

        Idempotent. Calling it before :meth:`serve` makes ``serve`` return
        immediately after startup.
        """
        if self._stop_requested:
            return
        self._stop_requested = True
        logger.info("Shutdown requested for listener on %s", self.address)
        if self._server is not None:
            self._server.should_exit = True

    def serve(self, app: FastAPI) -> None:
        """Block serving *app* until :meth:`shutdown` is called or a signal arrives."""
        config = uvicorn.Config(
            app,
            host=self._host,
            port=self._port,
            log_config=None,
            timeout_graceful_shutdown=_GRACEFUL_SHUTDOWN_TIMEOUT,
        )
        self._server = uvicorn.Server(config)
        self._server.should_exit = self._stop_requested
        logger.info("Starting to listen on %s", self.address)
        self._server.run()
        logger.info("Listener on %s stopped", self.address)
