"""Renderer registry."""

from __future__ import annotations

from component_graph.models import DiagramFormat, ResolutionResult
from component_graph.renderer.base import BaseRenderer, DiagramNode
from component_graph.renderer.dot_renderer import DotRenderer
from component_graph.renderer.mermaid_renderer import MermaidRenderer
from component_graph.renderer.plantuml_renderer import PlantUmlRenderer
from component_graph.renderer.styles import (
    DEFAULT_STYLE,
    EdgeFilter,
    NodeStyle,
    StyleLookup,
    StyleRule,
)

_RENDERERS: dict[DiagramFormat, BaseRenderer] = {
    DiagramFormat.DOT: DotRenderer(),
    DiagramFormat.PLANTUML: PlantUmlRenderer(),
    DiagramFormat.MERMAID: MermaidRenderer(),
}


def render_edges(
    fmt: DiagramFormat,
    result: ResolutionResult,
    styles: StyleLookup | None = None,
    edge_filter: EdgeFilter | None = None,
    title: str = "dependencies",
) -> str:
    """Render a resolution result in the requested notation."""
    renderer = _RENDERERS.get(fmt)
    if renderer is None:
        raise ValueError(f"No renderer for format: {fmt}")
    return renderer.render(result, styles=styles, edge_filter=edge_filter, title=title)


__all__ = [
    "BaseRenderer",
    "DEFAULT_STYLE",
    "DiagramNode",
    "EdgeFilter",
    "NodeStyle",
    "StyleLookup",
    "StyleRule",
    "render_edges",
]
