"""Content roots, assets and rendering options bound together for the app."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from mdsite.exceptions import DocumentNotFoundError
from mdsite.filesystem.assets import AssetResolver
from mdsite.filesystem.listing import render_index
from mdsite.filesystem.paths import ContentRoot
from mdsite.rendering.renderer import render_document

if TYPE_CHECKING:
    from mdsite.config import Settings
    from mdsite.filesystem.assets import StaticAsset
    from mdsite.rendering.options import RenderOptions

PAGES = "pages"
POSTS = "posts"


@dataclass(frozen=True)
class ContentManager:
    """Read-only view of the site's files.

    Holds no cached content: every call goes back to the filesystem.
    """

    pages: ContentRoot
    posts: ContentRoot
    assets: AssetResolver
    render_options: RenderOptions

    @classmethod
    def from_settings(cls, settings: Settings) -> ContentManager:
        return cls(
            pages=ContentRoot(name=PAGES, directory=settings.pages_root, url_prefix="/pages"),
            posts=ContentRoot(name=POSTS, directory=settings.posts_root, url_prefix="/posts"),
            assets=AssetResolver(
                static_root=ContentRoot(
                    name="static", directory=settings.static_root, url_prefix="/static"
                ),
                favicon_path=settings.favicon_file,
                favicon_content_type=settings.favicon_content_type,
                content_types=dict(settings.static_content_types),
            ),
            render_options=settings.render_options(),
        )

    @property
    def document_roots(self) -> list[ContentRoot]:
        """Document roots in listing order: pages before posts."""
        return [self.pages, self.posts]

    def root(self, name: str) -> ContentRoot:
        for root in self.document_roots:
            if root.name == name:
                return root
        raise DocumentNotFoundError(f"Unknown content root: {name}")

    def render(self, root_name: str, safe_filename: str) -> str:
        """Render a document from the named root to HTML."""
        return render_document(self.root(root_name), safe_filename, self.render_options)

    def index_html(self) -> str:
        """Listing of every page and post."""
        return render_index(self.document_roots)

    def favicon(self) -> StaticAsset:
        return self.assets.favicon()

    def static(self, safe_filename: str) -> StaticAsset:
        return self.assets.static(safe_filename)
