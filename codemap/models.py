"""
Data models for the C# API surface map.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class MemberKind(str, Enum):
    """Closed set of declaration kinds that appear in the map."""

    NAMESPACE = "Namespace"
    CLASS = "Class"
    INTERFACE = "Interface"
    RECORD = "Record"
    ENUM = "Enum"
    CONSTRUCTOR = "Constructor"
    METHOD = "Method"
    PROPERTY = "Property"

    @property
    def is_type(self) -> bool:
        return self in _TYPE_KINDS

    @property
    def is_callable(self) -> bool:
        return self in (MemberKind.METHOD, MemberKind.CONSTRUCTOR)

    @property
    def can_nest(self) -> bool:
        """Whether declarations nested in this kind belong to the map."""
        return self in _NESTING_KINDS


_TYPE_KINDS = frozenset({MemberKind.CLASS, MemberKind.INTERFACE, MemberKind.RECORD, MemberKind.ENUM})
_NESTING_KINDS = frozenset({MemberKind.NAMESPACE, MemberKind.CLASS, MemberKind.INTERFACE, MemberKind.RECORD})


@dataclass(frozen=True)
class Member:
    """One node of the declaration tree.

    Attributes:
        kind: Declaration kind.
        signature: Canonical one-line signature text.
        line: 1-indexed declaration line, or None when unknown.
        is_static: Whether the declaration carries the ``static`` modifier.
        doc: Short documentation summary, or None.
        base_types: Base type names in declaration order (classes and interfaces).
        attributes: Attribute names in declaration order.
        children: Declarations lexically nested in this one.
    """

    kind: MemberKind
    signature: str
    line: Optional[int] = None
    is_static: bool = False
    doc: Optional[str] = None
    base_types: Tuple[str, ...] = ()
    attributes: Tuple[str, ...] = ()
    children: Tuple["Member", ...] = ()


@dataclass(frozen=True)
class FileMap:
    """Top-level members of one source file, keyed by its relative path."""

    path: str
    members: Tuple[Member, ...]


@dataclass(frozen=True)
class MemberCounts:
    """Namespace, type and method tallies for a member forest."""

    namespaces: int = 0
    types: int = 0
    methods: int = 0

    def __add__(self, other: "MemberCounts") -> "MemberCounts":
        if not isinstance(other, MemberCounts):
            return NotImplemented
        return MemberCounts(
            namespaces=self.namespaces + other.namespaces,
            types=self.types + other.types,
            methods=self.methods + other.methods,
        )


@dataclass(frozen=True)
class ProjectUnit:
    """A project to map: display name, root directory and ordered source files."""

    name: str
    root: str
    source_files: Tuple[str, ...]


@dataclass
class ProjectMap:
    """Mapping result for one project unit."""

    name: str
    files: List[FileMap] = field(default_factory=list)
    counts: MemberCounts = field(default_factory=MemberCounts)
    failed_files: List[str] = field(default_factory=list)

    def to_summary(self) -> Dict[str, int]:
        return {
            "files": len(self.files),
            "namespaces": self.counts.namespaces,
            "types": self.counts.types,
            "methods": self.counts.methods,
        }


class RunSummary:
    """Process-wide counters for one mapping run."""

    def __init__(self):
        self.projects = 0
        self.files = 0
        self.namespaces = 0
        self.types = 0
        self.methods = 0

    def add_project(self, project_map: ProjectMap) -> None:
        """Merge a finished project into the run totals."""
        self.projects += 1
        self.files += len(project_map.files)
        self.namespaces += project_map.counts.namespaces
        self.types += project_map.counts.types
        self.methods += project_map.counts.methods

    def to_dict(self) -> Dict[str, int]:
        """Convert summary to dictionary."""
        return {
            "projects": self.projects,
            "files": self.files,
            "namespaces": self.namespaces,
            "types": self.types,
            "methods": self.methods,
        }

    def __str__(self) -> str:
        return (
            f"Mapped {self.projects} project(s): {self.files} files, "
            f"{self.namespaces} namespaces, {self.types} types, "
            f"{self.methods} methods"
        )
