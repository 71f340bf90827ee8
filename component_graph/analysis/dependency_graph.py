"""Dependency graph resolver — walks every root's closure, aggregates path lengths, classifies edges."""

from __future__ import annotations

import logging
from typing import Iterator, Mapping

from component_graph.models import (
    ComponentRecord,
    ComponentVersion,
    DependencyEdge,
    DependencyScope,
    DependencyType,
    Reference,
    ResolutionResult,
    VersionError,
)
from component_graph.analysis.graph_models import EdgeKey, EdgeStats

logger = logging.getLogger(__name__)


def classify_edge(shortest_chain: int, longest_chain: int) -> DependencyType:
    """Classify a finished edge from its chain lengths."""
    if longest_chain == 1:
        return DependencyType.DIRECT
    if shortest_chain == 1:
        return DependencyType.REDUNDANT
    return DependencyType.INDIRECT


def edge_scope(target_name: str, batch: Mapping[str, ComponentRecord]) -> DependencyScope:
    if target_name in batch:
        return DependencyScope.INCLUDED
    return DependencyScope.EXTERNAL


class DependencyGraphResolver:
    """Resolve the classified transitive dependency graph of a component batch."""

    def resolve(self, batch: Mapping[str, ComponentRecord]) -> ResolutionResult:
        stats: dict[EdgeKey, EdgeStats] = {}

        for root_name in batch:
            self._walk_root(batch, root_name, stats)

        edges = tuple(self._finish(batch, key, edge) for key, edge in stats.items())
        logger.info(
            "Resolved %d edge(s) across %d component(s)", len(edges), len(batch),
        )
        return ResolutionResult(edges=edges, roots=tuple(batch))

    def _walk_root(
        self,
        batch: Mapping[str, ComponentRecord],
        root_name: str,
        stats: dict[EdgeKey, EdgeStats],
    ) -> None:
        """Depth-first walk from one root, recording every acyclic path.

        Uses an explicit frame stack so path depth is not bounded by the
        interpreter's recursion limit. ``frames[i]`` iterates the references
        of ``path[i]``.
        """
        path: list[str] = [root_name]
        on_path: set[str] = {root_name}
        frames: list[Iterator[Reference]] = [iter(batch[root_name].references)]

        while frames:
            ref = next(frames[-1], None)
            if ref is None:
                frames.pop()
                on_path.discard(path.pop())
                continue

            if ref.name in on_path:
                logger.debug("Cycle at %s: %s -> %s", root_name, path[-1], ref.name)
                continue
            self._record(stats, EdgeKey(root_name, ref.name), len(path), ref.version)

            child = batch.get(ref.name)
            if child is None:
                continue
            path.append(ref.name)
            on_path.add(ref.name)
            frames.append(iter(child.references))

    @staticmethod
    def _record(
        stats: dict[EdgeKey, EdgeStats],
        key: EdgeKey,
        depth: int,
        version_text: str,
    ) -> None:
        try:
            version = ComponentVersion.parse(version_text)
        except VersionError as e:
            raise VersionError(
                f"Cannot compare version of {key.target!r} reached from {key.root!r}: {e}"
            ) from e

        existing = stats.get(key)
        if existing is None:
            stats[key] = EdgeStats.first_seen(depth, version)
        else:
            existing.widen(depth, version)

    @staticmethod
    def _finish(
        batch: Mapping[str, ComponentRecord],
        key: EdgeKey,
        edge: EdgeStats,
    ) -> DependencyEdge:
        return DependencyEdge(
            root_name=key.root,
            root_kind=batch[key.root].kind,
            target_name=key.target,
            target_version=edge.target_version,
            shortest_chain=edge.shortest_chain,
            longest_chain=edge.longest_chain,
            dependency_type=classify_edge(edge.shortest_chain, edge.longest_chain),
            scope=edge_scope(key.target, batch),
        )


def resolve_dependencies(batch: Mapping[str, ComponentRecord]) -> ResolutionResult:
    """Convenience wrapper around ``DependencyGraphResolver().resolve``."""
    return DependencyGraphResolver().resolve(batch)
