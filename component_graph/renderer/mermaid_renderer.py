"""Mermaid flowchart renderer."""

from __future__ import annotations

from component_graph.models import ComponentKind, DependencyEdge, DependencyType
from component_graph.renderer.base import BaseRenderer, DiagramNode

_ARROWS = {
    DependencyType.DIRECT: "-->",
    DependencyType.REDUNDANT: "==>",
    DependencyType.INDIRECT: "-.->",
}

# (open, close) brackets per kind
_SHAPES = {
    ComponentKind.EXECUTABLE: ("[", "]"),
    ComponentKind.LIBRARY: ("[[", "]]"),
    ComponentKind.OTHER: ("(", ")"),
}


class MermaidRenderer(BaseRenderer):
    def header(self, title: str) -> list[str]:
        return ["---", f"title: {title}", "---", "flowchart LR"]

    def render_node(self, node: DiagramNode) -> list[str]:
        opening, closing = _SHAPES.get(node.kind, ("([", "])"))
        label = node.label.replace('"', "#quot;").replace("\n", "<br/>")
        return [
            f'  {node.node_id}{opening}"{label}"{closing}',
            f"  style {node.node_id} fill:{node.style.color}",
        ]

    def render_edge(self, edge: DependencyEdge, nodes: dict[str, DiagramNode]) -> str:
        source = nodes[edge.root_name].node_id
        target = nodes[edge.target_name].node_id
        return f"  {source} {_ARROWS[edge.dependency_type]}|{edge.target_version}| {target}"
