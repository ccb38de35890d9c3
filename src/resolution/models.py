"""Data models for module resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple, Union

import semantic_version


class SpecifierKind(Enum):
    """How a specifier is resolved."""
    CORE = "core"
    PATH = "path"
    PACKAGE = "package"


@dataclass(frozen=True)
class ResolutionRequest:
    """One resolve call: the specifier and the location it is anchored to."""
    specifier: str
    base_path: Optional[str] = None


@dataclass(frozen=True)
class StringTarget:
    """A concrete subpath inside the package, possibly holding one ``*``."""
    value: str


@dataclass(frozen=True)
class ConditionalMap:
    """Condition name -> target, in declaration order."""
    conditions: Tuple[Tuple[str, "ExportTarget"], ...]

    def get(self, condition: str) -> Optional["ExportTarget"]:
        for name, target in self.conditions:
            if name == condition:
                return target
        return None


@dataclass(frozen=True)
class Alternatives:
    """Ordered fallbacks; the first one that resolves wins."""
    options: Tuple["ExportTarget", ...]


ExportTarget = Union[StringTarget, ConditionalMap, Alternatives]


@dataclass(frozen=True)
class ExportsMap:
    """Subpath key (``.``, ``./lib``, ``./lib/*``) -> export target."""
    entries: Dict[str, ExportTarget] = field(default_factory=dict)


@dataclass(frozen=True)
class PackageDescriptor:
    """The recognized fields of a package.json; other keys are ignored."""
    path: str
    name: Optional[str] = None
    version: Optional[semantic_version.Version] = None
    type: Optional[str] = None
    main: Optional[str] = None
    module: Optional[str] = None
    exports: Optional[ExportsMap] = None

    @property
    def directory(self) -> str:
        return self.path.rsplit("/", 1)[0]


@dataclass(frozen=True)
class PackageLocation:
    """A package directory found for a bare specifier."""
    directory: str
    package_name: str
    subpath: str  # "." for the package root, "./x/y" otherwise
    descriptor: Optional[PackageDescriptor]
