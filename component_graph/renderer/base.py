"""Abstract base renderer that turns resolved edges into diagram text."""

from __future__ import annotations

import abc
from dataclasses import dataclass

from component_graph.models import (
    ComponentKind,
    ComponentVersion,
    DependencyEdge,
    DependencyType,
    ResolutionResult,
)
from component_graph.renderer.styles import EdgeFilter, NodeStyle, StyleLookup


@dataclass
class DiagramNode:
    node_id: str
    name: str
    kind: ComponentKind | None  # None for components outside the batch
    version: ComponentVersion | None
    style: NodeStyle

    @property
    def label(self) -> str:
        if self.version is None:
            return self.name
        return f"{self.name}\n{self.version}"


def collect_nodes(
    result: ResolutionResult,
    edges: list[DependencyEdge],
    styles: StyleLookup,
) -> dict[str, DiagramNode]:
    """Nodes touched by ``edges`` in first-appearance order.

    Kinds come from the edges rooted at a component and versions are the
    highest observed for it anywhere in ``result``.
    """
    kinds: dict[str, ComponentKind] = {}
    versions: dict[str, ComponentVersion] = {}
    for edge in result.edges:
        kinds.setdefault(edge.root_name, edge.root_kind)
        seen = versions.get(edge.target_name)
        if seen is None or edge.target_version > seen:
            versions[edge.target_name] = edge.target_version

    nodes: dict[str, DiagramNode] = {}
    for edge in edges:
        for name in (edge.root_name, edge.target_name):
            if name in nodes:
                continue
            nodes[name] = DiagramNode(
                node_id=f"n{len(nodes)}",
                name=name,
                kind=kinds.get(name),
                version=versions.get(name),
                style=styles.style_for(name),
            )
    return nodes


class BaseRenderer(abc.ABC):
    """Base class for diagram notations."""

    @abc.abstractmethod
    def header(self, title: str) -> list[str]:
        """Opening lines of the diagram."""

    @abc.abstractmethod
    def render_node(self, node: DiagramNode) -> list[str]:
        """Declaration lines for one node."""

    @abc.abstractmethod
    def render_edge(self, edge: DependencyEdge, nodes: dict[str, DiagramNode]) -> str:
        """One line drawing ``edge``."""

    def footer(self) -> list[str]:
        return []

    def render(
        self,
        result: ResolutionResult,
        styles: StyleLookup | None = None,
        edge_filter: EdgeFilter | None = None,
        title: str = "dependencies",
    ) -> str:
        styles = styles or StyleLookup()
        edge_filter = edge_filter or EdgeFilter()

        edges = [edge for edge in result.edges if edge_filter(edge)]
        nodes = collect_nodes(result, edges, styles)

        lines = self.header(title)
        for node in nodes.values():
            lines.extend(self.render_node(node))
        for edge in edges:
            lines.append(self.render_edge(edge, nodes))
        lines.extend(self.footer())
        return "\n".join(lines) + "\n"


EDGE_LINE_STYLES: dict[DependencyType, str] = {
    DependencyType.DIRECT: "solid",
    DependencyType.REDUNDANT: "dashed",
    DependencyType.INDIRECT: "dotted",
}
