"""Errors raised while loading, building or searching a manifest.

Callers only need to tell apart the four kinds below; the context attributes
(``section``, ``key``, ``path``) are there for diagnostics.
"""
from __future__ import annotations

from typing import Optional


class ManifestError(Exception):
    """Base class for every manifest error."""

    def __init__(
        self,
        message: str,
        *,
        section: Optional[str] = None,
        key: Optional[str] = None,
        path: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.section = section
        self.key = key
        self.path = path

    def __str__(self) -> str:
        where = []
        if self.section is not None:
            where.append(f"section [{self.section}]")
        if self.key is not None:
            where.append(f"key {self.key!r}")
        if self.path is not None:
            where.append(f"in {self.path}")
        if not where:
            return self.message
        return f"{self.message} ({', '.join(where)})"


class DocumentFormatError(ManifestError):
    """The document is not valid TOML or a declaration has an unexpected shape."""


class InvalidRenameError(ManifestError):
    """A ``package`` rename field is present but empty."""


class ManifestIOError(ManifestError):
    """The manifest could not be located or read."""


class NotFoundError(ManifestError):
    """No dependency matched the predicate under the given selector."""
