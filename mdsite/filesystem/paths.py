"""Filename validation and content root path resolution."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from mdsite.exceptions import DocumentNotFoundError, InvalidFilenameError

if TYPE_CHECKING:
    from pathlib import Path

_SAFE_FILENAME_RE = re.compile(r"[a-zA-Z0-9_.-]+")


def match_filename(raw: str) -> str:
    """Validate a raw URL segment and return it unchanged as a safe filename.

    Only ASCII letters, digits, underscore, hyphen and period are allowed.
    Any ``..`` sequence is rejected as well, so the result can never name a
    parent directory. No filesystem access happens here.

    Raises:
        InvalidFilenameError: If the segment is empty or contains anything else.
    """
    if not _SAFE_FILENAME_RE.fullmatch(raw):
        raise InvalidFilenameError(f"Invalid filename: {raw!r}")
    if ".." in raw:
        raise InvalidFilenameError(f"Parent directory reference in filename: {raw!r}")
    return raw


@dataclass(frozen=True)
class ContentRoot:
    """A flat content directory exposed under a public URL prefix."""

    name: str
    directory: Path
    url_prefix: str

    def exists(self) -> bool:
        return self.directory.is_dir()

    def path_for(self, safe_filename: str) -> Path:
        """Compose the on-disk path for a validated filename.

        The name is re-validated, and the resolved path must stay inside the
        root directory so a symlink cannot point a request elsewhere.

        Raises:
            InvalidFilenameError: If the name fails validation.
            DocumentNotFoundError: If the resolved path escapes the root.
        """
        filename = match_filename(safe_filename)
        full_path = self.directory / filename
        resolved = full_path.resolve()
        if not resolved.is_relative_to(self.directory.resolve()):
            raise DocumentNotFoundError(f"{self.name}/{filename} resolves outside {self.name}")
        return full_path
