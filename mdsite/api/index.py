"""Site index endpoint."""

from __future__ import annotations

import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from mdsite.api.deps import get_content_manager
from mdsite.filesystem.content_manager import ContentManager

router = APIRouter(tags=["index"])


@router.get("/", response_class=HTMLResponse)
async def index(
    content_manager: Annotated[ContentManager, Depends(get_content_manager)],
) -> HTMLResponse:
    """List every page followed by every post."""
    html = await asyncio.to_thread(content_manager.index_html)
    return HTMLResponse(content=html)
