"""Metadata provider registry and batch loader."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from component_graph.models import ComponentBatch, ComponentRecord, MetadataError, build_batch
from component_graph.provider.base import BaseMetadataProvider
from component_graph.provider.deps_json_provider import DepsJsonProvider
from component_graph.provider.manifest_provider import ManifestProvider, record_from_dict
from component_graph.provider.wheel_provider import WheelProvider

logger = logging.getLogger(__name__)

_PROVIDERS: list[BaseMetadataProvider] = [
    DepsJsonProvider(),
    ManifestProvider(),
    WheelProvider(),
]


def get_provider(path: Path) -> BaseMetadataProvider | None:
    """Pick the provider that understands ``path``, if any."""
    for provider in _PROVIDERS:
        if provider.handles(path):
            return provider
    return None


def _expand(paths: Iterable[Path]) -> list[Path]:
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(p for p in sorted(path.rglob("*")) if p.is_file())
        else:
            files.append(path)
    return files


def read_components(path: Path) -> list[ComponentRecord]:
    """Read every component described by one file."""
    provider = get_provider(path)
    if provider is None:
        raise MetadataError(f"No metadata provider for {path}")
    if isinstance(provider, ManifestProvider):
        return provider.read_all(path)
    return [provider.read(path)]


def load_components(paths: Iterable[Path]) -> ComponentBatch:
    """Read all supported files under ``paths`` into a batch keyed by name.

    Directories are searched recursively; unsupported files inside them are
    skipped. A file named explicitly must be supported.
    """
    paths = list(paths)
    records: list[ComponentRecord] = []
    explicit = {p for p in paths if not p.is_dir()}
    for path in _expand(paths):
        if get_provider(path) is None:
            if path in explicit:
                raise MetadataError(f"No metadata provider for {path}")
            logger.debug("Skipping unsupported file %s", path)
            continue
        try:
            records.extend(read_components(path))
        except MetadataError:
            logger.error("Failed to read component metadata from %s", path)
            raise
    logger.info("Loaded %d component(s)", len(records))
    return build_batch(records)


__all__ = [
    "BaseMetadataProvider",
    "DepsJsonProvider",
    "ManifestProvider",
    "WheelProvider",
    "get_provider",
    "load_components",
    "read_components",
    "record_from_dict",
]
