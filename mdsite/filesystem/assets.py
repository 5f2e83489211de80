"""Static asset and favicon resolution."""

from __future__ import annotations

import logging
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path

from mdsite.exceptions import DocumentNotFoundError, DocumentReadError
from mdsite.filesystem.paths import ContentRoot

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"
DEFAULT_FAVICON_CONTENT_TYPE = "image/x-icon"

_IMAGE_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\x00\x00\x01\x00", "image/x-icon"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"\xff\xd8\xff", "image/jpeg"),
)


@dataclass(frozen=True)
class StaticAsset:
    """Raw file bytes plus the content type they are served with."""

    data: bytes
    content_type: str


def sniff_image_type(data: bytes) -> str | None:
    """Guess an image content type from the leading bytes of a file."""
    for signature, content_type in _IMAGE_SIGNATURES:
        if data.startswith(signature):
            return content_type
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    head = data[:256].lstrip().lower()
    if head.startswith(b"<svg") or (head.startswith(b"<?xml") and b"<svg" in head):
        return "image/svg+xml"
    return None


def _normalize_extension(ext: str) -> str:
    ext = ext.lower()
    return ext if ext.startswith(".") else f".{ext}"


def resolve_content_type(filename: str, overrides: dict[str, str] | None = None) -> str:
    """Pick a content type for *filename* by extension.

    Entries in *overrides* (keyed by extension, with or without the leading
    dot) win over the ``mimetypes`` registry.
    """
    suffix = Path(filename).suffix
    if suffix and overrides:
        normalized = {_normalize_extension(k): v for k, v in overrides.items()}
        override = normalized.get(suffix.lower())
        if override:
            return override
    content_type, _ = mimetypes.guess_type(filename, strict=False)
    return content_type or DEFAULT_CONTENT_TYPE


def read_asset_bytes(path: Path) -> bytes:
    """Read a whole file, mapping filesystem failures onto the error taxonomy."""
    if not path.is_file():
        raise DocumentNotFoundError(f"Asset not found: {path}")
    try:
        return path.read_bytes()
    except FileNotFoundError:
        raise DocumentNotFoundError(f"Asset disappeared before it was read: {path}") from None
    except OSError as exc:
        raise DocumentReadError(f"Failed to read asset {path}: {exc}") from exc


@dataclass
class AssetResolver:
    """Serves the favicon and files from the flat static directory."""

    static_root: ContentRoot
    favicon_path: Path
    favicon_content_type: str | None = None
    content_types: dict[str, str] = field(default_factory=dict)

    def favicon(self) -> StaticAsset:
        """Return the favicon bytes.

        The content type is the configured one when set; otherwise it is
        sniffed from the file signature.
        """
        data = read_asset_bytes(self.favicon_path)
        content_type = (
            self.favicon_content_type or sniff_image_type(data) or DEFAULT_FAVICON_CONTENT_TYPE
        )
        return StaticAsset(data=data, content_type=content_type)

    def static(self, safe_filename: str) -> StaticAsset:
        """Return a file from the static directory verbatim."""
        path = self.static_root.path_for(safe_filename)
        logger.debug("Requesting static asset %s", path)
        data = read_asset_bytes(path)
        return StaticAsset(
            data=data,
            content_type=resolve_content_type(safe_filename, self.content_types),
        )
