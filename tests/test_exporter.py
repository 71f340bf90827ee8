"""Tests for the CSV edge table."""

import csv

import pytest

from component_graph.models import (
    ComponentKind, ComponentRecord, MetadataError, Reference, build_batch,
)
from component_graph.analysis.dependency_graph import resolve_dependencies
from component_graph.exporter import CSV_COLUMNS, read_edges_csv, write_edges_csv


@pytest.fixture
def result():
    batch = build_batch([
        ComponentRecord("Svc", "2.0", ComponentKind.EXECUTABLE, [
            Reference("Lib", "1.0"), Reference("Json", "13.0.3"),
        ]),
        ComponentRecord("Lib", "1.0", ComponentKind.LIBRARY, [Reference("Json", "12.0.1")]),
    ])
    return resolve_dependencies(batch)


def test_write_rows(result, tmp_path):
    path = write_edges_csv(result, tmp_path / "out" / "edges.csv")
    with path.open(newline="") as fh:
        rows = list(csv.DictReader(fh))

    assert list(rows[0]) == CSV_COLUMNS
    assert len(rows) == len(result)
    svc_json = next(r for r in rows if r["root_name"] == "Svc" and r["target_name"] == "Json")
    assert svc_json == {
        "root_name": "Svc",
        "root_kind": "executable",
        "target_name": "Json",
        "target_version": "13.0.3",
        "shortest_chain": "1",
        "longest_chain": "2",
        "dependency_type": "redundant",
        "scope": "external",
    }


def test_read_back(result, tmp_path):
    path = write_edges_csv(result, tmp_path / "edges.csv")
    loaded = read_edges_csv(path)
    assert loaded.edges == result.edges
    assert loaded.roots == ("Svc", "Lib")


def test_roots_without_edges_are_not_restored(tmp_path):
    batch = build_batch([
        ComponentRecord("Svc", "2.0", ComponentKind.EXECUTABLE, [Reference("Lib", "1.0")]),
        ComponentRecord("Lib", "1.0", ComponentKind.LIBRARY),
    ])
    result = resolve_dependencies(batch)
    assert result.roots == ("Svc", "Lib")

    loaded = read_edges_csv(write_edges_csv(result, tmp_path / "edges.csv"))
    assert loaded.edges == result.edges
    assert loaded.roots == ("Svc",)


def test_missing_columns(tmp_path):
    path = tmp_path / "edges.csv"
    path.write_text("root_name,target_name\nA,B\n")
    with pytest.raises(MetadataError, match="missing column"):
        read_edges_csv(path)


def test_malformed_row(result, tmp_path):
    path = write_edges_csv(result, tmp_path / "edges.csv")
    text = path.read_text().replace("redundant", "sideways")
    path.write_text(text)
    with pytest.raises(MetadataError, match=r"edges.csv:\d+: malformed edge row"):
        read_edges_csv(path)
