"""Tests for version ordering, batches and result helpers."""

import pytest

from component_graph.models import (
    ComponentKind, ComponentRecord, ComponentVersion, DependencyScope,
    DependencyType, MetadataError, PipelineConfig, VersionError, build_batch,
)
from component_graph.analysis.dependency_graph import resolve_dependencies


class TestComponentVersion:
    @pytest.mark.parametrize("lower,higher", [
        ("1.9", "1.10"),
        ("1.0", "1.0.1"),
        ("2.0-beta", "2.0"),
        ("1.0-alpha", "1.0-beta"),
        ("1.0-2", "1.0-alpha"),
        ("8.0.0.0", "8.0.1"),
        ("0.9.9", "v1"),
    ])
    def test_ordering(self, lower, higher):
        assert ComponentVersion(lower) < ComponentVersion(higher)
        assert ComponentVersion(higher) > ComponentVersion(lower)

    @pytest.mark.parametrize("a,b", [
        ("1.0", "1.0.0"),
        ("8.0.0.0", "8"),
        ("v2.1", "2.1"),
        ("1.0+build.5", "1.0"),
    ])
    def test_equivalent_spellings(self, a, b):
        assert ComponentVersion(a) == ComponentVersion(b)
        assert hash(ComponentVersion(a)) == hash(ComponentVersion(b))

    def test_text_is_preserved(self):
        assert str(ComponentVersion("8.0.0.0")) == "8.0.0.0"

    @pytest.mark.parametrize("text", ["", "latest", "1..2", "1.x", "-1"])
    def test_unparseable(self, text):
        with pytest.raises(VersionError):
            ComponentVersion(text)

    def test_non_string_rejected(self):
        with pytest.raises(VersionError):
            ComponentVersion(None)

    def test_parse_passes_through_instances(self):
        version = ComponentVersion("1.2")
        assert ComponentVersion.parse(version) is version
        assert ComponentVersion.parse("1.2") == version


class TestBatch:
    def test_build_batch_keeps_order(self):
        batch = build_batch([ComponentRecord("b", "1"), ComponentRecord("a", "1")])
        assert list(batch) == ["b", "a"]
        assert batch["a"].version == "1"
        assert "c" not in batch

    def test_duplicate_name_rejected(self):
        with pytest.raises(MetadataError, match="Duplicate component 'a'"):
            build_batch([ComponentRecord("a", "1"), ComponentRecord("a", "2")])

    def test_record_defaults(self):
        record = ComponentRecord("a", "1")
        assert record.kind == ComponentKind.OTHER
        assert record.references == []


class TestResolutionResult:
    def test_filter_and_counts(self):
        from component_graph.models import Reference
        batch = build_batch([
            ComponentRecord("X", "1", references=[Reference("Y", "1"), Reference("Z", "1")]),
            ComponentRecord("Y", "1", references=[Reference("Z", "1")]),
        ])
        result = resolve_dependencies(batch)

        direct_included = result.filter(
            types=[DependencyType.DIRECT], scopes=[DependencyScope.INCLUDED],
        )
        assert [(e.root_name, e.target_name) for e in direct_included] == [("X", "Y")]
        assert len(result.filter()) == len(result)
        assert [e.target_name for e in result.edges_from("Y")] == ["Z"]
        assert result.count_by_type() == {
            DependencyType.DIRECT: 2,
            DependencyType.REDUNDANT: 1,
            DependencyType.INDIRECT: 0,
        }


class TestPipelineConfig:
    def test_styles_from_environment(self, monkeypatch, tmp_path):
        styles = tmp_path / "styles.json"
        monkeypatch.setenv("COMPONENT_GRAPH_STYLES", str(styles))
        assert PipelineConfig().styles_file == styles

    def test_explicit_styles_win(self, monkeypatch, tmp_path):
        monkeypatch.setenv("COMPONENT_GRAPH_STYLES", "/elsewhere.json")
        config = PipelineConfig(styles_file=tmp_path / "mine.json")
        assert config.styles_file == tmp_path / "mine.json"

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("COMPONENT_GRAPH_STYLES", raising=False)
        config = PipelineConfig()
        assert config.styles_file is None
        assert config.dependency_types == [DependencyType.DIRECT]
        assert config.scopes == [DependencyScope.INCLUDED]
