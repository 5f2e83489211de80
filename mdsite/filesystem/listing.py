"""Directory listing for content roots."""

from __future__ import annotations

import html
import logging
from typing import TYPE_CHECKING
from urllib.parse import quote

if TYPE_CHECKING:
    from mdsite.filesystem.paths import ContentRoot

logger = logging.getLogger(__name__)


def list_entries(root: ContentRoot) -> list[str]:
    """Return the names of non-directory entries directly inside a content root.

    Subdirectories are skipped without recursing. A missing or unreadable
    directory yields an empty list. Names are sorted so the listing is stable
    across calls and platforms.
    """
    try:
        entries = list(root.directory.iterdir())
    except FileNotFoundError:
        return []
    except OSError as exc:
        logger.warning("Cannot list %s directory %s: %s", root.name, root.directory, exc)
        return []

    names: list[str] = []
    for entry in entries:
        try:
            if entry.is_dir():
                continue
        except OSError:
            logger.warning("Skipping unreadable entry %s", entry)
            continue
        names.append(entry.name)
    return sorted(names)


def render_listing(root: ContentRoot) -> str:
    """Render an HTML fragment with a header and a link per file in *root*."""
    parts = [f"<h4>{html.escape(root.name)}</h4><ul>"]
    for name in list_entries(root):
        href = f"{root.url_prefix}/{quote(name, safe='')}"
        parts.append(
            f"<li><a href='{html.escape(href, quote=True)}'>{html.escape(name)}</a></li>"
        )
    parts.append("</ul>\n")
    return "".join(parts)


def render_index(roots: list[ContentRoot]) -> str:
    """Concatenate the listings of several roots in the given order."""
    return "".join(render_listing(root) for root in roots)
