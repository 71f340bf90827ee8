"""Tests for style lookup, edge filtering and diagram renderers."""

import json
from pathlib import Path

import pytest

from component_graph.models import (
    ComponentKind, ComponentRecord, DependencyScope, DependencyType,
    DiagramFormat, MetadataError, Reference, build_batch,
)
from component_graph.analysis.dependency_graph import resolve_dependencies
from component_graph.renderer import (
    DEFAULT_STYLE, EdgeFilter, NodeStyle, StyleLookup, StyleRule, render_edges,
)
from component_graph.renderer.base import collect_nodes

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def result():
    batch = build_batch([
        ComponentRecord("App", "1.0", ComponentKind.EXECUTABLE, [
            Reference("Core", "1.0"), Reference("Util", "1.0"), Reference("Json", "13.0.1"),
        ]),
        ComponentRecord("Core", "1.0", ComponentKind.LIBRARY, [Reference("Util", "1.2")]),
        ComponentRecord("Util", "1.2", ComponentKind.LIBRARY, []),
    ])
    return resolve_dependencies(batch)


# ── Styles ────────────────────────────────────────────────────

class TestStyleLookup:
    def test_first_match_wins(self):
        lookup = StyleLookup(rules=[
            StyleRule("Company.*.Api", NodeStyle(color="#FF0000")),
            StyleRule("Company.*", NodeStyle(color="#00FF00")),
        ])
        assert lookup.style_for("Company.Orders.Api").color == "#FF0000"
        assert lookup.style_for("Company.Orders").color == "#00FF00"

    def test_default_when_nothing_matches(self):
        assert StyleLookup().style_for("Anything") == DEFAULT_STYLE
        assert DEFAULT_STYLE.color == "#FFFFFF"
        assert DEFAULT_STYLE.shape is None

    def test_matching_is_case_sensitive(self):
        lookup = StyleLookup(rules=[StyleRule("Microsoft.*", NodeStyle(color="#DDDDDD"))])
        assert lookup.style_for("microsoft.extensions") == DEFAULT_STYLE

    def test_from_file(self):
        lookup = StyleLookup.from_file(FIXTURES / "styles.json")
        assert lookup.default.color == "#EEEEEE"
        worker = lookup.style_for("CompanyXyz.DependencySample.Worker")
        assert worker == NodeStyle(color="#FFCC00", shape="box3d")
        assert lookup.style_for("CompanyXyz.DependencySample.Library1").color == "#99CCFF"
        assert lookup.style_for("Newtonsoft.Json").color == "#EEEEEE"

    def test_rule_without_pattern(self, tmp_path):
        path = tmp_path / "styles.json"
        path.write_text(json.dumps({"rules": [{"color": "#000000"}]}))
        with pytest.raises(MetadataError, match="without a pattern"):
            StyleLookup.from_file(path)


class TestEdgeFilter:
    def test_default_keeps_direct_included(self, result):
        kept = [(e.root_name, e.target_name) for e in result.edges if EdgeFilter()(e)]
        assert kept == [("App", "Core"), ("Core", "Util")]

    def test_everything(self, result):
        assert all(EdgeFilter.everything()(e) for e in result.edges)

    def test_custom(self, result):
        edge_filter = EdgeFilter(types=[DependencyType.REDUNDANT], scopes=[DependencyScope.INCLUDED])
        kept = [(e.root_name, e.target_name) for e in result.edges if edge_filter(e)]
        assert kept == [("App", "Util")]


# ── Nodes ─────────────────────────────────────────────────────

class TestCollectNodes:
    def test_kinds_versions_and_order(self, result):
        nodes = collect_nodes(result, list(result.edges), StyleLookup())
        assert list(nodes) == ["App", "Core", "Util", "Json"]
        assert nodes["App"].kind == ComponentKind.EXECUTABLE
        assert nodes["App"].version is None
        assert nodes["Json"].kind is None
        assert str(nodes["Util"].version) == "1.2"
        assert nodes["Util"].label == "Util\n1.2"
        assert [n.node_id for n in nodes.values()] == ["n0", "n1", "n2", "n3"]


# ── Renderers ─────────────────────────────────────────────────

class TestRenderers:
    def test_dot(self, result):
        text = render_edges(DiagramFormat.DOT, result, edge_filter=EdgeFilter.everything())
        assert text.startswith('digraph "dependencies" {')
        assert text.rstrip().endswith("}")
        assert 'n0 [label="App", shape=box3d, fillcolor="#FFFFFF"];' in text
        assert 'n3 [label="Json\\n13.0.1", shape=ellipse' in text
        assert 'n0 -> n2 [label="1.2", style=dashed];' in text
        assert 'n1 -> n2 [label="1.2", style=solid];' in text

    def test_dot_style_shape_override(self, result):
        styles = StyleLookup(rules=[StyleRule("Core", NodeStyle(color="#123456", shape="note"))])
        text = render_edges(DiagramFormat.DOT, result, styles=styles)
        assert 'shape=note, fillcolor="#123456"' in text

    def test_plantuml(self, result):
        text = render_edges(DiagramFormat.PLANTUML, result, edge_filter=EdgeFilter.everything(),
                            title="sample")
        lines = text.splitlines()
        assert lines[0] == "@startuml sample"
        assert lines[-1] == "@enduml"
        assert 'component "Json\\n13.0.1" as n3 <<external>> #FFFFFF' in lines
        assert "n0 -[dashed]-> n2 : 1.2" in lines
        assert "n0 --> n1 : 1.0" in lines

    def test_mermaid(self, result):
        text = render_edges(DiagramFormat.MERMAID, result, edge_filter=EdgeFilter.everything())
        lines = text.splitlines()
        assert "flowchart LR" in lines
        assert '  n1[["Core<br/>1.0"]]' in lines
        assert "  style n1 fill:#FFFFFF" in lines
        assert "  n0 ==>|1.2| n2" in lines

    def test_indirect_edges_are_dotted(self):
        batch = build_batch([
            ComponentRecord("A", "1", references=[Reference("B", "1")]),
            ComponentRecord("B", "1", references=[Reference("C", "1")]),
            ComponentRecord("C", "1"),
        ])
        text = render_edges(
            DiagramFormat.PLANTUML, resolve_dependencies(batch),
            edge_filter=EdgeFilter(types=[DependencyType.INDIRECT]),
        )
        assert "n0 ..> n1 : 1" in text

    def test_filtered_out_everything(self, result):
        text = render_edges(
            DiagramFormat.DOT, result,
            edge_filter=EdgeFilter(types=[DependencyType.INDIRECT]),
        )
        assert "->" not in text

    def test_unknown_format(self, result):
        with pytest.raises(ValueError, match="No renderer"):
            render_edges("svg", result)
