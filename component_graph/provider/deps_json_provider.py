""".NET dependency manifests (``<Assembly>.deps.json``) written beside compiled assemblies."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from component_graph.models import ComponentKind, ComponentRecord, MetadataError, Reference
from component_graph.provider.base import BaseMetadataProvider

logger = logging.getLogger(__name__)

_SUFFIX = ".deps.json"


def _split_library_key(key: str) -> tuple[str, str]:
    """``"Microsoft.Extensions.Hosting/8.0.0"`` -> (name, version)."""
    name, _, version = key.partition("/")
    return name, version or "0"


class DepsJsonProvider(BaseMetadataProvider):
    """Reads the assembly named by the file stem out of its deps.json.

    The assembly counts as an executable when a ``.runtimeconfig.json``
    sits next to the manifest, as the SDK only writes one for apps.
    """

    patterns = ("*.deps.json",)

    def read(self, path: Path) -> ComponentRecord:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise MetadataError(f"Cannot read deps manifest {path}: {e}")

        assembly = path.name[: -len(_SUFFIX)]
        target = self._runtime_target(data, path)

        for key, entry in target.items():
            name, version = _split_library_key(key)
            if name.lower() != assembly.lower():
                continue
            dependencies = (entry or {}).get("dependencies", {})
            references = [
                Reference(name=dep_name, version=str(dep_version))
                for dep_name, dep_version in dependencies.items()
            ]
            logger.debug("%s: %s %s with %d reference(s)", path, name, version, len(references))
            return ComponentRecord(
                name=name,
                version=version,
                kind=self._infer_kind(path, assembly),
                references=references,
                source=path,
            )

        raise MetadataError(f"{path} has no library entry for {assembly!r}")

    @staticmethod
    def _runtime_target(data: dict, path: Path) -> dict:
        targets = data.get("targets") if isinstance(data, dict) else None
        if not isinstance(targets, dict) or not targets:
            raise MetadataError(f"{path} has no 'targets' section")
        runtime_name = (data.get("runtimeTarget") or {}).get("name")
        if runtime_name and runtime_name in targets:
            return targets[runtime_name]
        return next(iter(targets.values()))

    @staticmethod
    def _infer_kind(path: Path, assembly: str) -> ComponentKind:
        if (path.parent / f"{assembly}.runtimeconfig.json").exists():
            return ComponentKind.EXECUTABLE
        return ComponentKind.LIBRARY
