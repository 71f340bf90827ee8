"""Data models for the component-graph pipeline."""

from __future__ import annotations

import enum
import functools
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, Mapping


class VersionError(ValueError):
    """A version string could not be parsed or compared."""


class MetadataError(ValueError):
    """Component metadata could not be read or is inconsistent."""


class ComponentKind(enum.Enum):
    EXECUTABLE = "executable"
    LIBRARY = "library"
    OTHER = "other"


class DependencyType(enum.Enum):
    DIRECT = "direct"
    REDUNDANT = "redundant"
    INDIRECT = "indirect"


class DependencyScope(enum.Enum):
    INCLUDED = "included"
    EXTERNAL = "external"


class DiagramFormat(enum.Enum):
    DOT = "dot"
    PLANTUML = "plantuml"
    MERMAID = "mermaid"

    @property
    def extension(self) -> str:
        return {
            DiagramFormat.DOT: ".dot",
            DiagramFormat.PLANTUML: ".puml",
            DiagramFormat.MERMAID: ".mmd",
        }[self]


_VERSION_RE = re.compile(
    r"^[vV]?(?P<release>\d+(?:\.\d+)*)"
    r"(?:-(?P<pre>[0-9A-Za-z.-]+))?"
    r"(?:\+[0-9A-Za-z.-]+)?$"
)


@functools.total_ordering
class ComponentVersion:
    """Comparable version value such as ``8.0.0.0`` or ``2.1-beta.1``.

    Release components compare numerically and trailing zeros are ignored,
    so ``1.0`` equals ``1.0.0``. A pre-release sorts before its release.
    Build metadata after ``+`` is kept in the text but not compared.
    """

    __slots__ = ("text", "release", "prerelease")

    def __init__(self, text: str):
        match = _VERSION_RE.match(text.strip()) if isinstance(text, str) else None
        if match is None:
            raise VersionError(f"Unparseable version: {text!r}")
        self.text = text.strip()
        release = [int(part) for part in match.group("release").split(".")]
        while len(release) > 1 and release[-1] == 0:
            release.pop()
        self.release: tuple[int, ...] = tuple(release)
        pre = match.group("pre")
        self.prerelease: tuple[str, ...] = tuple(pre.split(".")) if pre else ()

    @classmethod
    def parse(cls, value: ComponentVersion | str) -> ComponentVersion:
        if isinstance(value, ComponentVersion):
            return value
        return cls(value)

    def _key(self) -> tuple:
        if not self.prerelease:
            return (self.release, (1,))
        ids = tuple(
            (0, int(part), "") if part.isdigit() else (1, 0, part)
            for part in self.prerelease
        )
        return (self.release, (0, ids))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComponentVersion):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: ComponentVersion) -> bool:
        if not isinstance(other, ComponentVersion):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"ComponentVersion({self.text!r})"


@dataclass(frozen=True)
class Reference:
    """One declared first-level dependency of a component."""
    name: str
    version: str


@dataclass
class ComponentRecord:
    """Result from the metadata provider stage."""
    name: str
    version: str
    kind: ComponentKind = ComponentKind.OTHER
    references: list[Reference] = field(default_factory=list)
    source: Path | None = None


class ComponentBatch(Mapping[str, ComponentRecord]):
    """Read-only name -> ComponentRecord mapping, in insertion order."""

    def __init__(self, records: Mapping[str, ComponentRecord] | None = None):
        self._records: dict[str, ComponentRecord] = dict(records or {})

    def __getitem__(self, name: str) -> ComponentRecord:
        return self._records[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"ComponentBatch({list(self._records)!r})"


def build_batch(records: Iterable[ComponentRecord]) -> ComponentBatch:
    """Index records by name. Component names must be unique."""
    indexed: dict[str, ComponentRecord] = {}
    for record in records:
        existing = indexed.get(record.name)
        if existing is not None:
            raise MetadataError(
                f"Duplicate component {record.name!r} "
                f"(from {existing.source or '<memory>'} and {record.source or '<memory>'})"
            )
        indexed[record.name] = record
    return ComponentBatch(indexed)


@dataclass(frozen=True)
class DependencyEdge:
    """Classified root -> target relationship produced by the resolver."""
    root_name: str
    root_kind: ComponentKind
    target_name: str
    target_version: ComponentVersion
    shortest_chain: int
    longest_chain: int
    dependency_type: DependencyType
    scope: DependencyScope


@dataclass(frozen=True)
class ResolutionResult:
    """Immutable edge collection for one resolved batch."""
    edges: tuple[DependencyEdge, ...] = ()
    roots: tuple[str, ...] = ()

    def __iter__(self) -> Iterator[DependencyEdge]:
        return iter(self.edges)

    def __len__(self) -> int:
        return len(self.edges)

    def get(self, root_name: str, target_name: str) -> DependencyEdge | None:
        for edge in self.edges:
            if edge.root_name == root_name and edge.target_name == target_name:
                return edge
        return None

    def edges_from(self, root_name: str) -> list[DependencyEdge]:
        return [e for e in self.edges if e.root_name == root_name]

    def filter(
        self,
        types: Iterable[DependencyType] | None = None,
        scopes: Iterable[DependencyScope] | None = None,
    ) -> list[DependencyEdge]:
        wanted_types = set(types) if types is not None else None
        wanted_scopes = set(scopes) if scopes is not None else None
        return [
            e for e in self.edges
            if (wanted_types is None or e.dependency_type in wanted_types)
            and (wanted_scopes is None or e.scope in wanted_scopes)
        ]

    def count_by_type(self) -> dict[DependencyType, int]:
        counts = {t: 0 for t in DependencyType}
        for edge in self.edges:
            counts[edge.dependency_type] += 1
        return counts


@dataclass
class PipelineResult:
    """Result from the render/export stage."""
    output_dir: Path
    result: ResolutionResult = field(default_factory=ResolutionResult)
    files_created: list[Path] = field(default_factory=list)
    csv_path: Path | None = None


@dataclass
class PipelineConfig:
    """Configuration for the resolve-and-render pipeline."""
    inputs: list[Path] = field(default_factory=list)
    output_dir: Path = field(default_factory=lambda: Path("diagrams"))
    formats: list[DiagramFormat] = field(default_factory=lambda: [DiagramFormat.DOT])
    styles_file: Path | None = None
    dependency_types: list[DependencyType] = field(
        default_factory=lambda: [DependencyType.DIRECT]
    )
    scopes: list[DependencyScope] = field(
        default_factory=lambda: [DependencyScope.INCLUDED]
    )
    write_csv: bool = True
    diagram_name: str = "dependencies"

    def __post_init__(self):
        if self.styles_file is None:
            env_styles = os.getenv("COMPONENT_GRAPH_STYLES", "")
            if env_styles:
                self.styles_file = Path(env_styles)
