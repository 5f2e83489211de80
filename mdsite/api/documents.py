"""Page and post endpoints: Markdown documents rendered to HTML per request."""

from __future__ import annotations

import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from mdsite.api.deps import get_content_manager
from mdsite.filesystem.content_manager import PAGES, POSTS, ContentManager
from mdsite.filesystem.paths import match_filename

router = APIRouter(tags=["documents"])


async def _render(content_manager: ContentManager, root_name: str, filename: str) -> HTMLResponse:
    safe_filename = match_filename(filename)
    html = await asyncio.to_thread(content_manager.render, root_name, safe_filename)
    return HTMLResponse(content=html)


@router.get("/pages/{filename}", response_class=HTMLResponse)
async def get_page(
    filename: str,
    content_manager: Annotated[ContentManager, Depends(get_content_manager)],
) -> HTMLResponse:
    """Render a file from the pages directory."""
    return await _render(content_manager, PAGES, filename)


@router.get("/posts/{filename}", response_class=HTMLResponse)
async def get_post(
    filename: str,
    content_manager: Annotated[ContentManager, Depends(get_content_manager)],
) -> HTMLResponse:
    """Render a file from the posts directory."""
    return await _render(content_manager, POSTS, filename)
