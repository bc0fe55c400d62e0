"""The built manifest: an immutable, ordered index of dependency declarations."""

from __future__ import annotations

import logging
import os
from typing import Any, Iterator, Mapping, Optional, Tuple

from constants import Constants

from . import search as _search
from .builder import build_entries
from .errors import NotFoundError
from .loader import manifest_path, parse_document, read_document
from .models import DependencyEntry, DependencySelector, Package

logger = logging.getLogger(__name__)


class Manifest:
    """Dependencies declared in one manifest document.

    Build it once and query it many times; every search reads the same
    entry tuple and none of them writes to it, so a manifest can be shared
    between threads without locking.
    """

    __slots__ = ("_entries", "_default_selector")

    def __init__(
        self,
        entries: Tuple[DependencyEntry, ...],
        default_selector: DependencySelector = DependencySelector.DEFAULT,
    ) -> None:
        self._entries = tuple(entries)
        self._default_selector = default_selector

    @classmethod
    def from_document(
        cls,
        document: Mapping[str, Any],
        default_selector: DependencySelector = DependencySelector.DEFAULT,
    ) -> "Manifest":
        return cls(build_entries(document), default_selector)

    @classmethod
    def from_str(
        cls,
        text: str,
        default_selector: DependencySelector = DependencySelector.DEFAULT,
    ) -> "Manifest":
        return cls.from_document(parse_document(text), default_selector)

    @classmethod
    def from_path(
        cls,
        path: os.PathLike | str,
        default_selector: DependencySelector = DependencySelector.DEFAULT,
    ) -> "Manifest":
        return cls.from_document(read_document(path), default_selector)

    @classmethod
    def from_env(
        cls,
        default_selector: DependencySelector = DependencySelector.DEFAULT,
        environ: Optional[Mapping[str, str]] = None,
        *,
        dir_env: str = Constants.MANIFEST_DIR_ENV,
        file_name: str = Constants.MANIFEST_FILE,
    ) -> "Manifest":
        """Load ``Cargo.toml`` from the directory named by ``CARGO_MANIFEST_DIR``."""
        path = manifest_path(environ, dir_env=dir_env, file_name=file_name)
        return cls.from_path(path, default_selector)

    @property
    def entries(self) -> Tuple[DependencyEntry, ...]:
        return self._entries

    @property
    def default_selector(self) -> DependencySelector:
        return self._default_selector

    def with_selector(self, selector: DependencySelector) -> "Manifest":
        """Return a manifest over the same entries with another default selector."""
        return Manifest(self._entries, selector)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Package]:
        return (entry.to_package() for entry in self._entries)

    def __repr__(self) -> str:
        return f"Manifest(entries={len(self._entries)}, default_selector={self._default_selector})"

    def search(self, predicate, selector: Optional[DependencySelector] = None) -> Package:
        """Match on the upstream name only; raises NotFoundError."""
        return _search.search(self, selector, predicate)

    def search_any(self, predicate, selector: Optional[DependencySelector] = None) -> Package:
        """Match on the alias or the upstream name; raises NotFoundError."""
        return _search.search_any(self, selector, predicate)

    def find(self, predicate, selector: Optional[DependencySelector] = None) -> Optional[Package]:
        """Return the first package whose alias or upstream name matches, else None."""
        try:
            return self.search_any(predicate, selector)
        except NotFoundError:
            return None

    def find_name(self, predicate, selector: Optional[DependencySelector] = None) -> Optional[str]:
        """Return the identifier to import the matching package under, else None."""
        package = self.find(predicate, selector)
        return package.ident if package is not None else None

    def find_versioned(self, predicate, selector: Optional[DependencySelector] = None) -> Optional[Package]:
        """Like :meth:`find`, with a ``(name, version)`` predicate."""
        try:
            return _search.search_versioned(self, selector, predicate)
        except NotFoundError:
            return None

    def find_all(self, predicate, selector: Optional[DependencySelector] = None) -> Tuple[Package, ...]:
        return tuple(_search.iter_matches(self, selector, predicate))


def build_manifest(
    document: Mapping[str, Any],
    default_selector: DependencySelector = DependencySelector.DEFAULT,
) -> Manifest:
    """Build a :class:`Manifest` from a parsed document tree."""
    manifest = Manifest.from_document(document, default_selector)
    logger.debug("Built manifest with %d dependency entries", len(manifest))
    return manifest
