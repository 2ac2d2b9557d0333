"""
Kit loading.

A kit is a directory holding ``kit.yaml``. Kits are searched in order:

    1. ``<project>/.lvt/kits/<name>``
    2. ``~/.config/lvt/kits/<name>``
    3. kits shipped with lvt (``lvt/kits/system/<name>``)
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from ..faults.domains import GenerationFault, KitNotFoundFault
from .helpers import FRAMEWORKS, CSSHelpers, helpers_for

logger = logging.getLogger("lvt.kits")

MANIFEST_FILE = "kit.yaml"
SYSTEM_KITS = ("multi", "single", "simple")

_VERSION_RE = re.compile(r"^\d+\.\d+\.\d+(?:[-+][0-9A-Za-z.-]+)?$")


@dataclass
class KitManifest:
    name: str
    version: str
    description: str = ""
    framework: str = "livetemplate"
    css_framework: str = "none"
    layout: str = ""
    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KitManifest":
        return cls(
            name=str(data.get("name", "")),
            version=str(data.get("version", "")),
            description=data.get("description", "") or "",
            framework=data.get("framework", "livetemplate") or "livetemplate",
            css_framework=data.get("css_framework", "none") or "none",
            layout=data.get("layout", "") or "",
            tags=list(data.get("tags") or []),
        )

    def validate(self) -> None:
        if not self.name:
            raise GenerationFault("kit manifest", "name is required")
        if not _VERSION_RE.match(self.version):
            raise GenerationFault(
                f"kit '{self.name}'", f"invalid version '{self.version}', expected semver"
            )
        if self.css_framework not in FRAMEWORKS:
            raise GenerationFault(
                f"kit '{self.name}'",
                f"unknown css_framework '{self.css_framework}' "
                f"(supported: {', '.join(FRAMEWORKS)})",
            )


@dataclass
class KitInfo:
    manifest: KitManifest
    source: str
    helpers: CSSHelpers

    @property
    def name(self) -> str:
        return self.manifest.name


def parse_manifest(text: str, source: str = "<string>") -> KitManifest:
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise GenerationFault(f"kit manifest {source}", f"invalid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise GenerationFault(f"kit manifest {source}", "expected a mapping")
    manifest = KitManifest.from_dict(data)
    manifest.validate()
    return manifest


class KitLoader:
    """Resolves kit names to ``KitInfo``."""

    def __init__(self, project_root: Optional[Union[str, Path]] = None):
        self.search_paths: List[Path] = []
        if project_root is not None:
            self.search_paths.append(Path(project_root) / ".lvt" / "kits")
        self.search_paths.append(Path.home() / ".config" / "lvt" / "kits")

    def _read_manifest(self, name: str) -> Optional[tuple]:
        for base in self.search_paths:
            path = base / name / MANIFEST_FILE
            if path.is_file():
                return path.read_text(encoding="utf-8"), str(path)

        embedded = resources.files("lvt.kits").joinpath("system", name, MANIFEST_FILE)
        if embedded.is_file():
            return embedded.read_text(encoding="utf-8"), "system"
        return None

    def load(self, name: str, css_framework: Optional[str] = None) -> KitInfo:
        """
        Load a kit, optionally overriding its CSS framework.

        Raises:
            KitNotFoundFault: If no kit by that name exists.
        """
        found = self._read_manifest(name)
        if found is None:
            raise KitNotFoundFault(name, self.available())
        text, source = found

        manifest = parse_manifest(text, source)
        if manifest.name != name:
            raise GenerationFault(
                f"kit '{name}'",
                f"manifest name '{manifest.name}' must match directory name '{name}'",
            )

        framework = css_framework or manifest.css_framework
        try:
            helpers = helpers_for(framework)
        except KeyError:
            raise GenerationFault(
                f"kit '{name}'",
                f"unknown CSS framework '{framework}' (supported: {', '.join(FRAMEWORKS)})",
            ) from None

        logger.debug("Loaded kit %s from %s (css=%s)", name, source, framework)
        return KitInfo(manifest=manifest, source=source, helpers=helpers)

    def available(self) -> List[str]:
        names = set(SYSTEM_KITS)
        for base in self.search_paths:
            if base.is_dir():
                names.update(p.name for p in base.iterdir() if (p / MANIFEST_FILE).is_file())
        return sorted(names)
