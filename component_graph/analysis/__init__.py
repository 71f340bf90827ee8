"""Dependency graph resolution."""

from component_graph.analysis.dependency_graph import (
    DependencyGraphResolver,
    classify_edge,
    edge_scope,
    resolve_dependencies,
)

__all__ = ["DependencyGraphResolver", "classify_edge", "edge_scope", "resolve_dependencies"]
