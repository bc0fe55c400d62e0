"""Data models for manifest dependencies and search selection."""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from enum import Enum, Flag
from typing import Optional, Union

from constants import Constants


@functools.total_ordering
@dataclass(frozen=True)
class Package:
    """A dependency found in the manifest.

    ``name`` is the upstream package name and ``version`` the declared
    requirement. ``key`` is the alias the manifest declares it under; it does
    not take part in equality or ordering.
    """

    name: str
    version: Optional[str] = None
    key: Optional[str] = field(default=None, compare=False)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Package):
            return NotImplemented
        # A missing version sorts before every declared one
        return (self.name, self.version is not None, self.version or "") < (
            other.name,
            other.version is not None,
            other.version or "",
        )

    @property
    def original_name(self) -> str:
        return self.name

    @property
    def import_name(self) -> str:
        """Name under which the importing package sees this dependency."""
        return self.key if self.key is not None else self.name

    @property
    def ident(self) -> str:
        """``import_name`` as a valid identifier (``-`` becomes ``_``)."""
        return self.import_name.replace("-", "_")

    @property
    def is_original(self) -> bool:
        """True when the dependency is not renamed."""
        return self.import_name == self.name


class SectionKind(Enum):
    """Declaration contexts, in search priority order."""

    RUNTIME = Constants.DEPENDENCIES_KEY
    DEV = Constants.DEV_DEPENDENCIES_KEY
    BUILD = Constants.BUILD_DEPENDENCIES_KEY

    @property
    def table_key(self) -> str:
        return self.value

    @property
    def selector(self) -> "DependencySelector":
        return _KIND_SELECTORS[self]


@dataclass(frozen=True)
class SectionTag:
    """Where a declaration came from: its kind and, if any, the target expression."""

    kind: SectionKind
    target: Optional[str] = None

    @property
    def is_conditional(self) -> bool:
        return self.target is not None

    def describe(self) -> str:
        if self.target is None:
            return self.kind.table_key
        return f"{Constants.TARGET_KEY}.{self.target}.{self.kind.table_key}"


class DependencySelector(Flag):
    """Which declaration contexts take part in a search.

    A kind flag covers both the unconditional table and every
    ``target.<expr>`` table of that kind. ``NO_TARGET`` restricts the search
    to the unconditional tables.
    """

    RUNTIME = 1
    DEV = 2
    BUILD = 4
    NO_TARGET = 8

    DEFAULT = RUNTIME | DEV
    RELEASE = RUNTIME | BUILD
    ALL = RUNTIME | DEV | BUILD

    def selects(self, tag: SectionTag) -> bool:
        if not tag.kind.selector & self:
            return False
        return not (tag.is_conditional and self & DependencySelector.NO_TARGET)

    @classmethod
    def parse(cls, spelling: str) -> "DependencySelector":
        """Parse ``default``, ``dev``, ``all`` or a ``+``-joined combination."""
        selector = None
        for part in spelling.split("+"):
            name = part.strip().lower()
            if name not in _SELECTOR_NAMES:
                raise ValueError(f"unknown dependency selector: {part.strip()!r}")
            value = _SELECTOR_NAMES[name]
            selector = value if selector is None else selector | value
        return selector


_KIND_SELECTORS = {
    SectionKind.RUNTIME: DependencySelector.RUNTIME,
    SectionKind.DEV: DependencySelector.DEV,
    SectionKind.BUILD: DependencySelector.BUILD,
}

_SELECTOR_NAMES = {
    "runtime": DependencySelector.RUNTIME,
    "normal": DependencySelector.RUNTIME,
    "dev": DependencySelector.DEV,
    "build": DependencySelector.BUILD,
    "no-target": DependencySelector.NO_TARGET,
    "unconditional": DependencySelector.NO_TARGET,
    "default": DependencySelector.DEFAULT,
    "release": DependencySelector.RELEASE,
    "all": DependencySelector.ALL,
}


@dataclass(frozen=True)
class ShortDeclaration:
    """``name = "1.0"``"""

    version: str


@dataclass(frozen=True)
class LongDeclaration:
    """``name = { version = "1.0", package = "real-name" }``"""

    version: Optional[str] = None
    package: Optional[str] = None


Declaration = Union[ShortDeclaration, LongDeclaration]


@dataclass(frozen=True)
class DependencyEntry:
    """One normalized declaration in the manifest index."""

    declared_key: str
    resolved_name: str
    version: Optional[str]
    section: SectionTag

    @property
    def is_renamed(self) -> bool:
        return self.declared_key != self.resolved_name

    def to_package(self) -> Package:
        return Package(name=self.resolved_name, version=self.version, key=self.declared_key)
