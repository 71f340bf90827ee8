"""Graphviz DOT renderer."""

from __future__ import annotations

from component_graph.models import ComponentKind, DependencyEdge
from component_graph.renderer.base import EDGE_LINE_STYLES, BaseRenderer, DiagramNode

_SHAPES = {
    ComponentKind.EXECUTABLE: "box3d",
    ComponentKind.LIBRARY: "component",
    ComponentKind.OTHER: "box",
}


def _quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


class DotRenderer(BaseRenderer):
    def header(self, title: str) -> list[str]:
        return [
            f"digraph {_quote(title)} {{",
            "  rankdir=LR;",
            '  node [style=filled, fontname="Helvetica"];',
        ]

    def render_node(self, node: DiagramNode) -> list[str]:
        shape = node.style.shape or _SHAPES.get(node.kind, "ellipse")
        return [
            f"  {node.node_id} [label={_quote(node.label)}, shape={shape}, "
            f"fillcolor={_quote(node.style.color)}];"
        ]

    def render_edge(self, edge: DependencyEdge, nodes: dict[str, DiagramNode]) -> str:
        source = nodes[edge.root_name].node_id
        target = nodes[edge.target_name].node_id
        return (
            f"  {source} -> {target} [label={_quote(str(edge.target_version))}, "
            f"style={EDGE_LINE_STYLES[edge.dependency_type]}];"
        )

    def footer(self) -> list[str]:
        return ["}"]
