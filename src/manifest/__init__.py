"""Cargo manifest model and dependency-name search.

This package provides:
- models.py: Package, selectors and the normalized dependency entry
- builder.py: document tree -> ordered dependency index
- search.py: first-match searches over a built manifest
- loader.py: locating and parsing Cargo.toml
- core.py: the Manifest facade tying these together
"""

from .core import Manifest, build_manifest  # noqa: F401
from .errors import (  # noqa: F401
    DocumentFormatError,
    InvalidRenameError,
    ManifestError,
    ManifestIOError,
    NotFoundError,
)
from .loader import manifest_path, parse_document, read_document  # noqa: F401
from .models import (  # noqa: F401
    DependencyEntry,
    DependencySelector,
    Package,
    SectionKind,
    SectionTag,
)
from .search import (  # noqa: F401
    iter_matches,
    search,
    search_any,
    search_names,
    search_versioned,
)

__all__ = [
    "Manifest",
    "build_manifest",
    "Package",
    "DependencySelector",
    "DependencyEntry",
    "SectionKind",
    "SectionTag",
    "ManifestError",
    "DocumentFormatError",
    "InvalidRenameError",
    "ManifestIOError",
    "NotFoundError",
    "manifest_path",
    "parse_document",
    "read_document",
    "search",
    "search_any",
    "search_versioned",
    "search_names",
    "iter_matches",
]
