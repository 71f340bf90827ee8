"""PlantUML component-diagram renderer."""

from __future__ import annotations

from component_graph.models import DependencyEdge, DependencyType
from component_graph.renderer.base import BaseRenderer, DiagramNode

_ARROWS = {
    DependencyType.DIRECT: "-->",
    DependencyType.REDUNDANT: "-[dashed]->",
    DependencyType.INDIRECT: "..>",
}


class PlantUmlRenderer(BaseRenderer):
    def header(self, title: str) -> list[str]:
        return [f"@startuml {title}", "left to right direction"]

    def render_node(self, node: DiagramNode) -> list[str]:
        label = node.label.replace('"', "'").replace("\n", "\\n")
        stereotype = f" <<{node.kind.value}>>" if node.kind else " <<external>>"
        return [f'component "{label}" as {node.node_id}{stereotype} {node.style.color}']

    def render_edge(self, edge: DependencyEdge, nodes: dict[str, DiagramNode]) -> str:
        source = nodes[edge.root_name].node_id
        target = nodes[edge.target_name].node_id
        return f"{source} {_ARROWS[edge.dependency_type]} {target} : {edge.target_version}"

    def footer(self) -> list[str]:
        return ["@enduml"]
