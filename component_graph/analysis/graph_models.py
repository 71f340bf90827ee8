"""Running state kept per (root, target) pair while the graph is walked."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from component_graph.models import ComponentVersion


class EdgeKey(NamedTuple):
    root: str
    target: str


@dataclass
class EdgeStats:
    shortest_chain: int
    longest_chain: int
    target_version: ComponentVersion

    @classmethod
    def first_seen(cls, depth: int, version: ComponentVersion) -> EdgeStats:
        return cls(shortest_chain=depth, longest_chain=depth, target_version=version)

    def widen(self, depth: int, version: ComponentVersion) -> None:
        """Fold another path of length ``depth`` into the running statistics."""
        self.shortest_chain = min(self.shortest_chain, depth)
        self.longest_chain = max(self.longest_chain, depth)
        if version > self.target_version:
            self.target_version = version
