"""Search a built manifest for a dependency by name predicate.

All searches scan the index in its stored order (section priority, then
document order), so the first match is stable across calls. Nothing here
mutates the manifest.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Iterable, Iterator, Optional

from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants

from .errors import NotFoundError
from .models import DependencyEntry, DependencySelector, Package

if TYPE_CHECKING:
    from .core import Manifest

logger = logging.getLogger(__name__)

NamePredicate = Callable[[str], bool]
VersionedPredicate = Callable[[str, str], bool]
EntryPredicate = Callable[[DependencyEntry], bool]


def _scan(
    manifest: "Manifest",
    selector: Optional[DependencySelector],
    matches: EntryPredicate,
) -> Iterator[DependencyEntry]:
    selector = manifest.default_selector if selector is None else selector
    for entry in manifest.entries:
        if selector.selects(entry.section) and matches(entry):
            yield entry


def _first(
    manifest: "Manifest",
    selector: Optional[DependencySelector],
    matches: EntryPredicate,
) -> Package:
    for entry in _scan(manifest, selector, matches):
        if is_debug_enabled(logger):
            logger.debug(
                "Dependency matched",
                extra=extra_context(
                    event="match",
                    component="search",
                    key=entry.declared_key,
                    resolved=entry.resolved_name,
                    section=entry.section.describe(),
                ),
            )
        return entry.to_package()

    effective = manifest.default_selector if selector is None else selector
    raise NotFoundError(f"no dependency matched under selector {effective}")


def search(
    manifest: "Manifest",
    selector: Optional[DependencySelector],
    predicate: NamePredicate,
) -> Package:
    """Return the first dependency whose upstream name satisfies ``predicate``.

    A ``selector`` of None uses the manifest's default selector.

    Raises:
        NotFoundError: nothing matched under ``selector``.
    """
    return _first(manifest, selector, lambda e: predicate(e.resolved_name))


def search_any(
    manifest: "Manifest",
    selector: Optional[DependencySelector],
    predicate: NamePredicate,
) -> Package:
    """Like :func:`search`, but also accepts a match on the manifest key (the alias)."""
    return _first(
        manifest,
        selector,
        lambda e: predicate(e.declared_key) or predicate(e.resolved_name),
    )


def search_versioned(
    manifest: "Manifest",
    selector: Optional[DependencySelector],
    predicate: VersionedPredicate,
) -> Package:
    """Match on ``(name, version)``; a missing version is passed as ``"*"``."""

    def matches(entry: DependencyEntry) -> bool:
        version = entry.version if entry.version is not None else Constants.VERSION_WILDCARD
        return predicate(entry.declared_key, version) or predicate(entry.resolved_name, version)

    return _first(manifest, selector, matches)


def search_names(
    manifest: "Manifest",
    names: Iterable[str],
    selector: Optional[DependencySelector] = None,
) -> Package:
    """Match against a fixed set of acceptable names (alias or upstream)."""
    accepted = frozenset(names)
    return search_any(manifest, selector, accepted.__contains__)


def iter_matches(
    manifest: "Manifest",
    selector: Optional[DependencySelector],
    predicate: NamePredicate,
) -> Iterator[Package]:
    """Yield every dual-matching dependency in scan order."""
    for entry in _scan(
        manifest,
        selector,
        lambda e: predicate(e.declared_key) or predicate(e.resolved_name),
    ):
        yield entry.to_package()
