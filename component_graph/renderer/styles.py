"""Name -> style lookup and edge filtering for diagram renderers."""

from __future__ import annotations

import fnmatch
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from component_graph.models import DependencyEdge, DependencyScope, DependencyType, MetadataError


@dataclass(frozen=True)
class NodeStyle:
    color: str = "#FFFFFF"
    shape: str | None = None  # Graphviz shape; None picks one from the component kind


DEFAULT_STYLE = NodeStyle()


@dataclass(frozen=True)
class StyleRule:
    pattern: str
    style: NodeStyle

    def matches(self, name: str) -> bool:
        return fnmatch.fnmatchcase(name, self.pattern)


@dataclass
class StyleLookup:
    """Ordered glob rules; the first rule matching a component name wins."""
    rules: list[StyleRule] = field(default_factory=list)
    default: NodeStyle = DEFAULT_STYLE

    def style_for(self, name: str) -> NodeStyle:
        for rule in self.rules:
            if rule.matches(name):
                return rule.style
        return self.default

    @classmethod
    def from_dict(cls, data: dict) -> StyleLookup:
        default_data = data.get("default") or {}
        default = NodeStyle(
            color=default_data.get("color", DEFAULT_STYLE.color),
            shape=default_data.get("shape"),
        )
        rules = []
        for entry in data.get("rules", []):
            if "pattern" not in entry:
                raise MetadataError(f"Style rule without a pattern: {entry!r}")
            rules.append(StyleRule(
                pattern=entry["pattern"],
                style=NodeStyle(
                    color=entry.get("color", default.color),
                    shape=entry.get("shape", default.shape),
                ),
            ))
        return cls(rules=rules, default=default)

    @classmethod
    def from_file(cls, path: Path) -> StyleLookup:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise MetadataError(f"Cannot read style file {path}: {e}")
        return cls.from_dict(data)


class EdgeFilter:
    """Keeps edges whose dependency type and scope are both wanted.

    The default keeps Direct + Included edges, which gives the most readable
    diagrams.
    """

    def __init__(
        self,
        types: Iterable[DependencyType] | None = None,
        scopes: Iterable[DependencyScope] | None = None,
    ):
        self.types = frozenset(types) if types is not None else frozenset({DependencyType.DIRECT})
        self.scopes = (
            frozenset(scopes) if scopes is not None else frozenset({DependencyScope.INCLUDED})
        )

    @classmethod
    def everything(cls) -> EdgeFilter:
        return cls(types=DependencyType, scopes=DependencyScope)

    def __call__(self, edge: DependencyEdge) -> bool:
        return edge.dependency_type in self.types and edge.scope in self.scopes
