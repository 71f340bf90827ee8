"""Built Python wheels (``*.whl``): reads ``*.dist-info/METADATA``."""

from __future__ import annotations

import re
import zipfile
from email.parser import Parser
from pathlib import Path

from component_graph.models import ComponentKind, ComponentRecord, MetadataError, Reference
from component_graph.provider.base import BaseMetadataProvider

_NAME_RE = re.compile(r"^\s*([A-Za-z0-9][A-Za-z0-9._-]*)")
_LOWER_BOUND_RE = re.compile(r"(===|==|>=|~=)\s*([^\s,;()]+)")


def normalize_name(name: str) -> str:
    """Canonical distribution name, so ``Typing_Extensions`` matches ``typing-extensions``."""
    return re.sub(r"[-_.]+", "-", name).lower()


def parse_requirement(requirement: str) -> Reference | None:
    """Turn one ``Requires-Dist`` value into a Reference.

    Returns None for requirements that only apply to an extra. The version
    is the specifier's lower bound, or ``0`` when unpinned.
    """
    spec, _, marker = requirement.partition(";")
    if "extra" in marker:
        return None
    match = _NAME_RE.match(spec)
    if match is None:
        return None
    version = "0"
    bound = _LOWER_BOUND_RE.search(spec[match.end():])
    if bound:
        version = bound.group(2).removesuffix(".*")
    return Reference(name=normalize_name(match.group(1)), version=version)


class WheelProvider(BaseMetadataProvider):
    patterns = ("*.whl",)

    def read(self, path: Path) -> ComponentRecord:
        try:
            with zipfile.ZipFile(path) as wheel:
                metadata_name = next(
                    (n for n in wheel.namelist() if n.endswith(".dist-info/METADATA")),
                    None,
                )
                if metadata_name is None:
                    raise MetadataError(f"{path} has no dist-info METADATA")
                text = wheel.read(metadata_name).decode("utf-8")
        except (OSError, UnicodeDecodeError, zipfile.BadZipFile) as e:
            raise MetadataError(f"Cannot open wheel {path}: {e}")

        message = Parser().parsestr(text, headersonly=True)
        name = message.get("Name")
        if not name:
            raise MetadataError(f"{path} METADATA has no Name")

        references = []
        for requirement in message.get_all("Requires-Dist") or []:
            ref = parse_requirement(requirement)
            if ref is not None:
                references.append(ref)

        return ComponentRecord(
            name=normalize_name(name),
            version=message.get("Version", "0"),
            kind=ComponentKind.LIBRARY,
            references=references,
            source=path,
        )
