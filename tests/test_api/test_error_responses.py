"""Tests for error-to-status mapping at the HTTP boundary."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest

from mdsite.exceptions import DocumentReadError, RenderError

if TYPE_CHECKING:
    from pathlib import Path

    from httpx import AsyncClient


class TestUnmatchedRoutes:
    @pytest.mark.asyncio
    async def test_unknown_path_is_404(self, client: AsyncClient) -> None:
        resp = await client.get("/nowhere")
        assert resp.status_code == 404
        assert resp.text == "Not Found"

    @pytest.mark.asyncio
    async def test_nested_path_is_404(self, client: AsyncClient) -> None:
        resp = await client.get("/pages/sub/about.md")
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_wrong_method_is_404(self, client: AsyncClient) -> None:
        resp = await client.post("/pages/about.md")
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_stop_is_not_exposed_by_default(self, client: AsyncClient) -> None:
        resp = await client.get("/stop")
        assert resp.status_code == 404


class TestDocumentFailures:
    @pytest.mark.asyncio
    async def test_invalid_name_is_404(self, client: AsyncClient) -> None:
        resp = await client.get("/pages/bad%20name.md")
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_null_byte_is_404(self, client: AsyncClient) -> None:
        resp = await client.get("/pages/about.md%00")
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_render_failure_is_500(self, client: AsyncClient, tmp_site_dir: Path) -> None:
        (tmp_site_dir / "posts" / "deep.md").write_text("> " * 40 + "deep\n")
        resp = await client.get("/posts/deep.md")
        assert resp.status_code == 500
        assert "deep" not in resp.text

    @pytest.mark.asyncio
    async def test_read_failure_is_500(self, client: AsyncClient) -> None:
        with patch(
            "mdsite.filesystem.content_manager.render_document",
            side_effect=DocumentReadError("I/O error while reading"),
        ):
            resp = await client.get("/pages/about.md")
        assert resp.status_code == 500
        assert "I/O" not in resp.text

    @pytest.mark.asyncio
    async def test_engine_failure_is_500(self, client: AsyncClient) -> None:
        with patch(
            "mdsite.filesystem.content_manager.render_document",
            side_effect=RenderError("boom"),
        ):
            resp = await client.get("/posts/hello.md")
        assert resp.status_code == 500

    @pytest.mark.asyncio
    async def test_unexpected_os_error_is_500(self, client: AsyncClient) -> None:
        with patch(
            "mdsite.filesystem.content_manager.render_index",
            side_effect=OSError("disk unplugged"),
        ):
            resp = await client.get("/")
        assert resp.status_code == 500
        assert "disk" not in resp.text

    @pytest.mark.asyncio
    async def test_failure_does_not_affect_next_request(
        self, client: AsyncClient, tmp_site_dir: Path
    ) -> None:
        (tmp_site_dir / "posts" / "deep.md").write_text("> " * 40 + "deep\n")
        bad = await client.get("/posts/deep.md")
        good = await client.get("/posts/hello.md")
        assert bad.status_code == 500
        assert good.status_code == 200


class TestStaticFailures:
    @pytest.mark.asyncio
    async def test_static_read_failure_is_500(
        self, client: AsyncClient, tmp_site_dir: Path
    ) -> None:
        (tmp_site_dir / "static" / "app.js").write_text("1")
        with patch(
            "mdsite.filesystem.assets.read_asset_bytes",
            side_effect=DocumentReadError("denied"),
        ):
            resp = await client.get("/static/app.js")
        assert resp.status_code == 500

    @pytest.mark.asyncio
    async def test_static_subdirectory_is_404(
        self, client: AsyncClient, tmp_site_dir: Path
    ) -> None:
        (tmp_site_dir / "static" / "img").mkdir()
        resp = await client.get("/static/img")
        assert resp.status_code == 404
