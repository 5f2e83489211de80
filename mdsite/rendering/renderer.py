"""Markdown to HTML rendering for content documents."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

import markdown

from mdsite.exceptions import DocumentNotFoundError, DocumentReadError, RenderError

if TYPE_CHECKING:
    from pathlib import Path

    from mdsite.filesystem.paths import ContentRoot
    from mdsite.rendering.options import RenderOptions

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^\s{0,3}(`{3,}|~{3,})")
_QUOTE_PREFIX_RE = re.compile(r"^\s{0,3}((?:>\s?)+)")
_LIST_ITEM_RE = re.compile(r"^(\s*)(?:[*+-]|\d+[.)])\s")
_TAB_LENGTH = 4


def nesting_depth(text: str) -> int:
    """Estimate the deepest block nesting (blockquotes plus lists) in *text*.

    Lines inside fenced code blocks are ignored.
    """
    deepest = 0
    fence: str | None = None
    for line in text.splitlines():
        fence_match = _FENCE_RE.match(line)
        if fence_match:
            marker = fence_match.group(1)
            if fence is None:
                fence = marker[0] * len(marker)
            elif marker.startswith(fence):
                fence = None
            continue
        if fence is not None:
            continue

        depth = 0
        quote_match = _QUOTE_PREFIX_RE.match(line)
        if quote_match:
            depth = quote_match.group(1).count(">")
            line = line[quote_match.end() :]
        list_match = _LIST_ITEM_RE.match(line)
        if list_match:
            indent = len(list_match.group(1).expandtabs(_TAB_LENGTH))
            depth += indent // _TAB_LENGTH + 1
        deepest = max(deepest, depth)
    return deepest


def render_markdown(text: str, options: RenderOptions) -> str:
    """Convert Markdown text to HTML with the given options.

    The conversion is pure: identical text and options produce identical
    output.

    Raises:
        RenderError: If the text nests deeper than ``options.max_nesting``
            or the Markdown engine fails.
    """
    depth = nesting_depth(text)
    if depth > options.max_nesting:
        raise RenderError(
            f"Document nesting depth {depth} exceeds the limit of {options.max_nesting}"
        )

    md = markdown.Markdown(extensions=options.markdown_extensions(), output_format="html")
    try:
        body = md.convert(text)
    except RecursionError:
        raise RenderError("Markdown conversion exceeded the recursion limit") from None
    except (ValueError, TypeError, AttributeError, IndexError, KeyError) as exc:
        raise RenderError(f"Markdown conversion failed: {exc}") from exc

    if options.with_toc:
        toc = getattr(md, "toc", "")
        return f"{toc}\n{body}" if toc else body
    return body


def read_document(path: Path, chunk_size: int) -> str:
    """Read a whole document from disk in ``chunk_size`` pieces.

    Raises:
        DocumentNotFoundError: If the file is missing or is not a regular file.
        DocumentReadError: If the file cannot be opened or read in full.
    """
    try:
        handle = path.open("rb")
    except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
        raise DocumentNotFoundError(f"Document not found: {path}") from None
    except OSError as exc:
        logger.warning("Unable to open input file %s: %s", path, exc)
        raise DocumentReadError(f"Unable to open {path}: {exc}") from exc

    chunks: list[bytes] = []
    try:
        with handle:
            while chunk := handle.read(chunk_size):
                chunks.append(chunk)
    except OSError as exc:
        logger.error("I/O error while reading %s: %s", path, exc)
        raise DocumentReadError(f"I/O error while reading {path}: {exc}") from exc

    return b"".join(chunks).decode("utf-8", errors="replace")


def render_document(root: ContentRoot, safe_filename: str, options: RenderOptions) -> str:
    """Read ``root/safe_filename`` fresh from disk and render it to HTML."""
    path = root.path_for(safe_filename)
    logger.debug("Rendering %s", path)
    text = read_document(path, options.read_chunk_size)
    return render_markdown(text, options)
