"""
``.lvtstack`` tracking file.

Records which provider and options produced the ``deploy/`` tree and a
SHA-256 checksum for every generated file, so ``lvt stack validate``
can report files edited since generation.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from ..faults.domains import StackFault
from .types import StackConfig

logger = logging.getLogger("lvt.stack.tracking")

TRACKING_FILE = ".lvtstack"
TRACKING_VERSION = 1


def file_checksum(path: Union[str, Path]) -> str:
    digest = hashlib.sha256()
    with open(path, "rb") as fh:
        for chunk in iter(lambda: fh.read(65536), b""):
            digest.update(chunk)
    return digest.hexdigest()


@dataclass
class TrackedFile:
    path: str
    checksum: str
    modified: bool = False


@dataclass
class TrackingFile:
    provider: str
    configuration: Dict[str, Any]
    generated_at: str = ""
    generator_version: str = ""
    version: int = TRACKING_VERSION
    files: List[TrackedFile] = field(default_factory=list)

    @classmethod
    def new(cls, config: StackConfig, generator_version: str = "") -> "TrackingFile":
        return cls(
            provider=config.provider,
            configuration=config.to_dict(),
            generated_at=datetime.now(tz=timezone.utc).isoformat(),
            generator_version=generator_version,
        )

    @property
    def config(self) -> StackConfig:
        return StackConfig.from_dict(self.provider, self.configuration)

    def add_file(self, path: str, checksum: str) -> None:
        self.files.append(TrackedFile(path=path, checksum=checksum))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "provider": self.provider,
            "generated_at": self.generated_at,
            "generator_version": self.generator_version,
            "configuration": dict(self.configuration),
            "files": [
                {"path": f.path, "checksum": f.checksum, "modified": f.modified}
                for f in self.files
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrackingFile":
        return cls(
            version=int(data.get("version", TRACKING_VERSION)),
            provider=str(data.get("provider", "")),
            generated_at=str(data.get("generated_at", "")),
            generator_version=str(data.get("generator_version", "")),
            configuration=dict(data.get("configuration") or {}),
            files=[
                TrackedFile(
                    path=f["path"],
                    checksum=f["checksum"],
                    modified=bool(f.get("modified", False)),
                )
                for f in data.get("files") or []
            ],
        )

    def write(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        try:
            path.write_text(yaml.safe_dump(self.to_dict(), sort_keys=False), encoding="utf-8")
        except OSError as exc:
            raise StackFault(f"failed to write tracking file: {exc}") from exc
        return path

    def check_modifications(self, base_path: Union[str, Path]) -> List[str]:
        """
        Paths whose checksum no longer matches. Deleted files are skipped;
        matching entries get ``modified`` set.
        """
        base = Path(base_path)
        modified = []
        for tracked in self.files:
            full = base / tracked.path
            if not full.exists():
                logger.debug("Tracked file %s no longer exists", tracked.path)
                continue
            try:
                current = file_checksum(full)
            except OSError as exc:
                raise StackFault(f"failed to calculate checksum for {tracked.path}: {exc}") from exc
            if current != tracked.checksum:
                tracked.modified = True
                modified.append(tracked.path)
        return modified


def read_tracking_file(path: Union[str, Path]) -> TrackingFile:
    """
    Raises:
        StackFault: If the file is missing or not valid YAML.
    """
    path = Path(path)
    if not path.exists():
        raise StackFault(f"no stack found ({TRACKING_FILE} missing). Run 'lvt gen stack <provider>' first")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise StackFault(f"failed to read tracking file: {exc}") from exc
    if not isinstance(data, dict):
        raise StackFault("failed to read tracking file: expected a mapping")
    return TrackingFile.from_dict(data)
