"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from mdsite.rendering.options import RenderOptions


class Settings(BaseSettings):
    """mdsite application settings."""

    model_config = SettingsConfigDict(
        env_prefix="MDSITE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    debug: bool = False

    # Paths
    site_dir: Path = Path(".")
    pages_dir: Path | None = None
    posts_dir: Path | None = None
    static_dir: Path | None = None
    favicon_path: Path | None = None

    # Server
    host: str = "0.0.0.0"
    port: int = Field(default=1993, ge=1, le=65535)

    # Rendering
    render_toc: bool = False
    toc_depth: int = Field(default=6, ge=1, le=6)
    max_nesting: int = Field(default=16, ge=1)
    read_chunk_size: int = Field(default=1024, ge=1)

    # Assets
    favicon_content_type: str | None = None
    static_content_types: dict[str, str] = Field(default_factory=dict)

    # Control
    shutdown_token: str = ""

    # Response hardening
    security_headers_enabled: bool = True
    trusted_hosts: list[str] = Field(default_factory=list)

    @property
    def pages_root(self) -> Path:
        return self.pages_dir if self.pages_dir is not None else self.site_dir / "pages"

    @property
    def posts_root(self) -> Path:
        return self.posts_dir if self.posts_dir is not None else self.site_dir / "posts"

    @property
    def static_root(self) -> Path:
        return self.static_dir if self.static_dir is not None else self.site_dir / "static"

    @property
    def favicon_file(self) -> Path:
        return self.favicon_path if self.favicon_path is not None else self.site_dir / "favicon.ico"

    @property
    def shutdown_enabled(self) -> bool:
        """Whether the ``/stop`` control route accepts requests at all."""
        return bool(self.shutdown_token)

    def render_options(self) -> RenderOptions:
        """Resolve the process-wide Markdown rendering options."""
        return RenderOptions.from_flags(
            toc=self.render_toc,
            toc_depth=self.toc_depth,
            max_nesting=self.max_nesting,
            read_chunk_size=self.read_chunk_size,
        )
