"""CSV interchange for resolved edges."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from component_graph.models import (
    ComponentKind,
    ComponentVersion,
    DependencyEdge,
    DependencyScope,
    DependencyType,
    MetadataError,
    ResolutionResult,
)

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "root_name",
    "root_kind",
    "target_name",
    "target_version",
    "shortest_chain",
    "longest_chain",
    "dependency_type",
    "scope",
]


def write_edges_csv(result: ResolutionResult, path: Path) -> Path:
    """Write one row per edge, in result order."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=CSV_COLUMNS)
        writer.writeheader()
        for edge in result.edges:
            writer.writerow({
                "root_name": edge.root_name,
                "root_kind": edge.root_kind.value,
                "target_name": edge.target_name,
                "target_version": str(edge.target_version),
                "shortest_chain": edge.shortest_chain,
                "longest_chain": edge.longest_chain,
                "dependency_type": edge.dependency_type.value,
                "scope": edge.scope.value,
            })
    logger.info("Wrote %d edge(s) to %s", len(result.edges), path)
    return path


def read_edges_csv(path: Path) -> ResolutionResult:
    """Read a file written by ``write_edges_csv`` back into a result.

    The table holds edges only, so ``roots`` is rebuilt from the rows: a
    component with no outgoing edge is not among the restored roots.
    """
    edges: list[DependencyEdge] = []
    roots: dict[str, None] = {}
    with path.open(newline="", encoding="utf-8") as fh:
        reader = csv.DictReader(fh)
        missing = set(CSV_COLUMNS) - set(reader.fieldnames or [])
        if missing:
            raise MetadataError(f"{path} is missing column(s): {', '.join(sorted(missing))}")
        for line_no, row in enumerate(reader, start=2):
            try:
                edge = DependencyEdge(
                    root_name=row["root_name"],
                    root_kind=ComponentKind(row["root_kind"]),
                    target_name=row["target_name"],
                    target_version=ComponentVersion(row["target_version"]),
                    shortest_chain=int(row["shortest_chain"]),
                    longest_chain=int(row["longest_chain"]),
                    dependency_type=DependencyType(row["dependency_type"]),
                    scope=DependencyScope(row["scope"]),
                )
            except (TypeError, ValueError) as e:
                raise MetadataError(f"{path}:{line_no}: malformed edge row: {e}")
            edges.append(edge)
            roots.setdefault(edge.root_name)
    return ResolutionResult(edges=tuple(edges), roots=tuple(roots))
