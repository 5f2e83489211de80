"""Health check endpoint."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from mdsite.api.deps import get_content_manager
from mdsite.filesystem.content_manager import ContentManager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    version: str
    roots: dict[str, bool]


@router.get("/health", response_model=HealthResponse)
async def health_check(
    content_manager: Annotated[ContentManager, Depends(get_content_manager)],
) -> HealthResponse:
    """Health check endpoint for monitoring and load balancers."""
    roots = {root.name: root.exists() for root in content_manager.document_roots}
    if not all(roots.values()):
        logger.warning("Health check found missing content roots: %s", roots)

    return HealthResponse(
        status="ok" if all(roots.values()) else "degraded",
        version="0.1.0",
        roots=roots,
    )
