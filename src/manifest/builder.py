"""Build the ordered dependency index from a parsed manifest document.

The document is the plain ``dict`` tree produced by ``tomllib``. Every
declaration is normalized into a :class:`DependencyEntry`; nothing past this
module needs to know whether a dependency was written in the short
(``name = "1.0"``) or the long (inline/sub-table) form.

Index order: runtime, then dev, then build dependencies. For each kind the
unconditional table comes first, followed by the ``target.<expr>`` tables of
that kind in document order. Keys keep their document order inside a table.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants

from .errors import DocumentFormatError, InvalidRenameError
from .models import (
    Declaration,
    DependencyEntry,
    LongDeclaration,
    SectionKind,
    SectionTag,
    ShortDeclaration,
)

logger = logging.getLogger(__name__)


def _parse_declaration(key: str, value: Any, section: SectionTag) -> Declaration:
    """Classify a raw declaration value as the short or the long form."""
    if isinstance(value, str):
        return ShortDeclaration(version=value)

    if not isinstance(value, dict):
        raise DocumentFormatError(
            f"expected a version string or a table, found {type(value).__name__}",
            section=section.describe(),
            key=key,
        )

    version = value.get(Constants.VERSION_FIELD)
    if version is not None and not isinstance(version, str):
        raise DocumentFormatError(
            f"`{Constants.VERSION_FIELD}` must be a string, found {type(version).__name__}",
            section=section.describe(),
            key=key,
        )

    package = value.get(Constants.RENAME_FIELD)
    if package is not None and not isinstance(package, str):
        raise DocumentFormatError(
            f"`{Constants.RENAME_FIELD}` must be a string, found {type(package).__name__}",
            section=section.describe(),
            key=key,
        )

    return LongDeclaration(version=version, package=package)


def normalize_declaration(key: str, declaration: Declaration, section: SectionTag) -> DependencyEntry:
    """Turn either declaration form into the canonical entry."""
    if isinstance(declaration, ShortDeclaration):
        return DependencyEntry(
            declared_key=key,
            resolved_name=key,
            version=declaration.version,
            section=section,
        )

    resolved = key
    if declaration.package is not None:
        resolved = declaration.package
        if not resolved.strip():
            raise InvalidRenameError(
                f"`{Constants.RENAME_FIELD}` must name the upstream package",
                section=section.describe(),
                key=key,
            )

    return DependencyEntry(
        declared_key=key,
        resolved_name=resolved,
        version=declaration.version,
        section=section,
    )


def _table(container: Mapping[str, Any], name: str, where: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """Return ``container[name]`` if present, failing when it is not a table."""
    value = container.get(name)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise DocumentFormatError(
            f"expected a table, found {type(value).__name__}",
            section=where or name,
        )
    return value


def _target_tables(document: Mapping[str, Any]) -> List[Tuple[str, Dict[str, Any]]]:
    targets = _table(document, Constants.TARGET_KEY)
    if targets is None:
        return []

    blocks = []
    for expr, block in targets.items():
        if not isinstance(block, dict):
            raise DocumentFormatError(
                f"expected a table, found {type(block).__name__}",
                section=f"{Constants.TARGET_KEY}.{expr}",
            )
        blocks.append((expr, block))
    return blocks


def _section_tables(document: Mapping[str, Any]) -> Iterator[Tuple[SectionTag, Dict[str, Any]]]:
    targets = _target_tables(document)
    for kind in SectionKind:
        table = _table(document, kind.table_key)
        if table is not None:
            yield SectionTag(kind), table
        for expr, block in targets:
            tag = SectionTag(kind, target=expr)
            table = _table(block, kind.table_key, where=tag.describe())
            if table is not None:
                yield tag, table


def build_entries(document: Mapping[str, Any]) -> Tuple[DependencyEntry, ...]:
    """Walk every recognized section and return the ordered dependency index.

    Unrecognized keys are ignored; absent sections contribute nothing.

    Raises:
        DocumentFormatError: a section or declaration has an unexpected shape.
        InvalidRenameError: a ``package`` field is empty.
    """
    if not isinstance(document, Mapping):
        raise DocumentFormatError(
            f"expected the document root to be a table, found {type(document).__name__}"
        )

    entries: List[DependencyEntry] = []
    for tag, table in _section_tables(document):
        before = len(entries)
        for key, value in table.items():
            declaration = _parse_declaration(key, value, tag)
            entries.append(normalize_declaration(key, declaration, tag))

        if is_debug_enabled(logger):
            logger.debug(
                "Indexed dependency section",
                extra=extra_context(
                    event="section_indexed",
                    component="builder",
                    section=tag.describe(),
                    count=len(entries) - before,
                ),
            )

    return tuple(entries)
