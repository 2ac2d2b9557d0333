"""
``.lvtresources`` - the list of generated resources and views.

The generated home page reads this file to link to every resource.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import List, Union

from ..faults.domains import GenerationFault

RESOURCES_FILE = ".lvtresources"


@dataclass
class ResourceEntry:
    name: str
    path: str
    type: str  # resource, view or schema


def read_resources(base_path: Union[str, Path]) -> List[ResourceEntry]:
    path = Path(base_path) / RESOURCES_FILE
    if not path.is_file():
        return []
    try:
        data = json.loads(path.read_text(encoding="utf-8") or "[]")
    except json.JSONDecodeError as exc:
        raise GenerationFault(RESOURCES_FILE, f"invalid JSON: {exc}") from exc
    return [ResourceEntry(name=e["name"], path=e.get("path", ""), type=e.get("type", "resource")) for e in data]


def write_resources(base_path: Union[str, Path], resources: List[ResourceEntry]) -> None:
    path = Path(base_path) / RESOURCES_FILE
    path.write_text(json.dumps([asdict(r) for r in resources], indent=2), encoding="utf-8")


def register_resource(base_path: Union[str, Path], name: str, path: str, type: str) -> bool:
    """
    Add an entry unless one is already registered.

    Entries match on path, or on name for path-less schema entries.
    Returns True when a new entry was written.
    """
    resources = read_resources(base_path)
    for r in resources:
        if (path and r.path == path) or (not path and not r.path and r.name == name):
            return False
    resources.append(ResourceEntry(name=name, path=path, type=type))
    write_resources(base_path, resources)
    return True
