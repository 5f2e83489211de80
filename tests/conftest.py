"""Shared test fixtures for mdsite."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient

from mdsite.config import Settings
from mdsite.main import check_content_roots, create_app

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Callable
    from pathlib import Path

# Smallest valid PNG (1x1)
PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01"
    b"\x00\x00\x00\x01\x08\x02\x00\x00\x00\x90wS\xde\x00"
    b"\x00\x00\x0cIDATx\x9cc\xf8\x0f\x00\x00\x01\x01\x00"
    b"\x05\x18\xd8N\x00\x00\x00\x00IEND\xaeB`\x82"
)
ICO_BYTES = b"\x00\x00\x01\x00\x01\x00\x10\x10\x00\x00\x01\x00\x20\x00" + b"\x00" * 32


@asynccontextmanager
async def create_test_client(
    settings: Settings,
    shutdown: Callable[[], None] | None = None,
) -> AsyncGenerator[AsyncClient]:
    """Create an HTTP test client for a fully configured app.

    Runs the startup checks by hand because ASGITransport does not trigger
    the application lifespan.
    """
    app = create_app(settings, shutdown=shutdown)
    check_content_roots(settings)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def tmp_site_dir(tmp_path: Path) -> Path:
    """Create a temporary site directory with the default layout."""
    site = tmp_path / "site"
    site.mkdir()
    (site / "pages").mkdir()
    (site / "posts").mkdir()
    (site / "static").mkdir()

    (site / "pages" / "about.md").write_text("# About\n\nAbout page.\n")
    (site / "posts" / "hello.md").write_text(
        "# Hello World\n\nFirst post.\n\n```python\nprint('hi')\n```\n"
    )
    return site


@pytest.fixture
def test_settings(tmp_site_dir: Path) -> Settings:
    """Create test settings rooted at the temporary site directory."""
    return Settings(_env_file=None, site_dir=tmp_site_dir, debug=True)


@pytest.fixture
async def client(test_settings: Settings) -> AsyncGenerator[AsyncClient]:
    """Create test HTTP client."""
    async with create_test_client(test_settings) as ac:
        yield ac
