"""Markdown rendering configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from markdown.extensions.fenced_code import FencedCodeExtension
from markdown.extensions.toc import TocExtension

DEFAULT_READ_CHUNK_SIZE = 1024
DEFAULT_MAX_NESTING = 16
DEFAULT_TOC_DEPTH = 6


@dataclass(frozen=True)
class HtmlMode:
    """Render the document body only."""


@dataclass(frozen=True)
class HtmlTocMode:
    """Render a table of contents followed by the document body.

    Headings deeper than ``toc_depth`` are left out of the table of contents.
    """

    toc_depth: int = DEFAULT_TOC_DEPTH

    def __post_init__(self) -> None:
        if not 1 <= self.toc_depth <= 6:
            msg = f"toc_depth must be between 1 and 6, got {self.toc_depth}"
            raise ValueError(msg)


RendererMode = HtmlMode | HtmlTocMode


@dataclass(frozen=True)
class RenderOptions:
    """Fixed Markdown conversion settings shared by every request."""

    mode: RendererMode = field(default_factory=HtmlMode)
    extensions: tuple[str, ...] = ("fenced_code",)
    max_nesting: int = DEFAULT_MAX_NESTING
    read_chunk_size: int = DEFAULT_READ_CHUNK_SIZE

    def __post_init__(self) -> None:
        if self.max_nesting < 1:
            msg = f"max_nesting must be >= 1, got {self.max_nesting}"
            raise ValueError(msg)
        if self.read_chunk_size < 1:
            msg = f"read_chunk_size must be >= 1, got {self.read_chunk_size}"
            raise ValueError(msg)

    @classmethod
    def from_flags(
        cls,
        *,
        toc: bool = False,
        toc_depth: int = DEFAULT_TOC_DEPTH,
        max_nesting: int = DEFAULT_MAX_NESTING,
        read_chunk_size: int = DEFAULT_READ_CHUNK_SIZE,
    ) -> RenderOptions:
        mode: RendererMode = HtmlTocMode(toc_depth=toc_depth) if toc else HtmlMode()
        return cls(mode=mode, max_nesting=max_nesting, read_chunk_size=read_chunk_size)

    @property
    def with_toc(self) -> bool:
        return isinstance(self.mode, HtmlTocMode)

    def markdown_extensions(self) -> list[Any]:
        """Build fresh extension instances for one ``markdown.Markdown`` run."""
        extensions: list[Any] = []
        for name in self.extensions:
            if name == "fenced_code":
                extensions.append(FencedCodeExtension())
            else:
                extensions.append(name)
        if isinstance(self.mode, HtmlTocMode):
            extensions.append(TocExtension(toc_depth=self.mode.toc_depth))
        return extensions
