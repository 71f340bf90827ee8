"""Plain JSON component manifests (``*.component.json``)."""

from __future__ import annotations

import json
from pathlib import Path

from component_graph.models import ComponentKind, ComponentRecord, MetadataError, Reference
from component_graph.provider.base import BaseMetadataProvider


def parse_kind(value: str | None) -> ComponentKind:
    if not value:
        return ComponentKind.OTHER
    try:
        return ComponentKind(value.lower())
    except ValueError:
        raise MetadataError(f"Unknown component kind: {value!r}")


def record_from_dict(data: dict, source: Path | None = None) -> ComponentRecord:
    """Build a ComponentRecord from its JSON form."""
    try:
        name = data["name"]
        version = str(data.get("version", "0"))
        references = [
            Reference(name=ref["name"], version=str(ref.get("version", "0")))
            for ref in data.get("references", [])
        ]
    except (KeyError, TypeError) as e:
        raise MetadataError(f"Malformed component entry in {source or '<memory>'}: {e}")

    return ComponentRecord(
        name=name,
        version=version,
        kind=parse_kind(data.get("kind")),
        references=references,
        source=source,
    )


class ManifestProvider(BaseMetadataProvider):
    """Reads one component, or a ``{"components": [...]}`` list, from JSON."""

    patterns = ("*.component.json", "components.json")

    def read(self, path: Path) -> ComponentRecord:
        records = self.read_all(path)
        if len(records) != 1:
            raise MetadataError(
                f"{path} describes {len(records)} components; use read_all()"
            )
        return records[0]

    def read_all(self, path: Path) -> list[ComponentRecord]:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise MetadataError(f"Cannot read manifest {path}: {e}")

        if isinstance(data, dict) and "components" in data:
            entries = data["components"]
        else:
            entries = [data]
        if not isinstance(entries, list):
            raise MetadataError(f"'components' in {path} must be a list")
        return [record_from_dict(entry, source=path) for entry in entries]
