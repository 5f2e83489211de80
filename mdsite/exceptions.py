"""Application-level exception types.

Convention:
- ``InvalidFilenameError`` and ``DocumentNotFoundError`` both map to HTTP 404,
  so an external caller cannot tell an invalid name from an absent file.
- ``DocumentReadError``: the file exists but could not be read in full.
  Maps to HTTP 500.
- ``RenderError``: the Markdown conversion failed. Maps to HTTP 500.

The global handlers in ``mdsite/main.py`` log the full message server-side
and return a minimal plain-text body to the client.
"""

from __future__ import annotations


class SiteError(Exception):
    """Base class for errors raised while serving a request."""


class InvalidFilenameError(SiteError, ValueError):
    """Raised when a requested name fails the allowed-character grammar."""


class DocumentNotFoundError(SiteError):
    """Raised when the target file does not exist or is not a regular file."""


class DocumentReadError(SiteError):
    """Raised when a file exists but cannot be fully read."""


class RenderError(SiteError, RuntimeError):
    """Raised when Markdown conversion fails (parse fault, nesting limit, recursion)."""
