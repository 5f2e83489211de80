"""Server control endpoint.

``/stop`` is only registered when the app is given a shutdown callable and a
shutdown token is configured. Requests must come from a loopback address and
carry the token; anything else looks like an unknown route.
"""

from __future__ import annotations

import ipaddress
import logging
import secrets
from typing import TYPE_CHECKING, Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request, status
from fastapi.responses import PlainTextResponse

from mdsite.api.deps import get_settings
from mdsite.config import Settings

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

SHUTDOWN_TOKEN_HEADER = "X-Shutdown-Token"


def _is_loopback(host: str | None) -> bool:
    if host is None:
        return False
    try:
        return ipaddress.ip_address(host).is_loopback
    except ValueError:
        return host == "localhost"


def create_control_router(shutdown: Callable[[], None]) -> APIRouter:
    """Build the control router bound to a specific shutdown capability."""
    router = APIRouter(tags=["control"], include_in_schema=False)

    @router.get("/stop", response_class=PlainTextResponse)
    async def stop(
        request: Request,
        background_tasks: BackgroundTasks,
        settings: Annotated[Settings, Depends(get_settings)],
    ) -> PlainTextResponse:
        client_host = request.client.host if request.client is not None else None
        token = request.headers.get(SHUTDOWN_TOKEN_HEADER, "")
        if (
            not settings.shutdown_enabled
            or not _is_loopback(client_host)
            or not secrets.compare_digest(token.encode(), settings.shutdown_token.encode())
        ):
            logger.warning("Rejected shutdown request from %s", client_host)
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")

        logger.info("Shutdown requested by %s", client_host)
        background_tasks.add_task(shutdown)
        return PlainTextResponse("Shutting down\n", status_code=status.HTTP_202_ACCEPTED)

    return router
