"""Favicon and static file endpoints."""

from __future__ import annotations

import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from mdsite.api.deps import get_content_manager
from mdsite.filesystem.content_manager import ContentManager
from mdsite.filesystem.paths import match_filename

router = APIRouter(tags=["assets"])


@router.get("/favicon.ico")
async def favicon(
    content_manager: Annotated[ContentManager, Depends(get_content_manager)],
) -> Response:
    """Serve the site favicon."""
    asset = await asyncio.to_thread(content_manager.favicon)
    return Response(content=asset.data, media_type=asset.content_type)


@router.get("/static/{filename}")
async def static_file(
    filename: str,
    content_manager: Annotated[ContentManager, Depends(get_content_manager)],
) -> Response:
    """Serve a file from the static directory byte-for-byte."""
    safe_filename = match_filename(filename)
    asset = await asyncio.to_thread(content_manager.static, safe_filename)
    return Response(content=asset.data, media_type=asset.content_type)
