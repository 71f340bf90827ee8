"""Abstract base metadata provider."""

from __future__ import annotations

import abc
import fnmatch
from pathlib import Path

from component_graph.models import ComponentRecord


class BaseMetadataProvider(abc.ABC):
    """Base class for readers that turn a compiled artifact into a ComponentRecord."""

    patterns: tuple[str, ...]

    @abc.abstractmethod
    def read(self, path: Path) -> ComponentRecord:
        """Read name, version, kind and direct references from one artifact."""

    def handles(self, path: Path) -> bool:
        name = path.name.lower()
        return any(fnmatch.fnmatch(name, pattern) for pattern in self.patterns)
