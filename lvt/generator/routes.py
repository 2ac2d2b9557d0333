"""
Route injection into the generated ``cmd/<app>/main.go``.

Routes go right after the ``// TODO: Add routes here`` marker and the
handler package is added to the import block. Injection is idempotent.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from ..faults.domains import GenerationFault

logger = logging.getLogger("lvt.generator.routes")

ROUTE_MARKER = "// TODO: Add routes here"


@dataclass
class RouteInfo:
    path: str
    package_name: str
    handler_call: str
    import_path: str

    @property
    def statement(self) -> str:
        return f'http.Handle("{self.path}", {self.handler_call})'


def find_main_go(base_path: Union[str, Path]) -> Optional[Path]:
    """First ``cmd/*/main.go`` under ``base_path``."""
    cmd_dir = Path(base_path) / "cmd"
    if not cmd_dir.is_dir():
        return None
    for entry in sorted(cmd_dir.iterdir()):
        candidate = entry / "main.go"
        if entry.is_dir() and candidate.is_file():
            return candidate
    return None


def _has_route(lines: List[str], statement: str) -> bool:
    return any(
        statement in line and not line.strip().startswith("//")
        for line in lines
    )


def _add_import(lines: List[str], import_path: str) -> List[str]:
    quoted = f'"{import_path}"'
    if any(line.strip() == quoted or line.strip().endswith(" " + quoted) for line in lines):
        return lines

    for i, line in enumerate(lines):
        if line.strip() == "import (":
            for j in range(i + 1, len(lines)):
                if lines[j].strip() == ")":
                    return lines[:j] + [f"\t{quoted}"] + lines[j:]
            break
    raise GenerationFault("route", "import block not found in main.go")


def inject_route(main_go: Union[str, Path], route: RouteInfo) -> bool:
    """
    Add ``route`` to ``main_go``.

    Returns False if the route was already present.

    Raises:
        GenerationFault: If the route marker or import block is missing.
    """
    main_go = Path(main_go)
    lines = main_go.read_text(encoding="utf-8").split("\n")

    if _has_route(lines, route.statement):
        return False

    marker = next((i for i, line in enumerate(lines) if ROUTE_MARKER in line), None)
    if marker is None:
        raise GenerationFault("route", f"marker '{ROUTE_MARKER}' not found in {main_go.name}")

    indent = lines[marker][: len(lines[marker]) - len(lines[marker].lstrip())]
    # skip the example comment that follows the marker
    insert_at = marker + 1
    while insert_at < len(lines) and lines[insert_at].strip().startswith("// Example"):
        insert_at += 1
    lines.insert(insert_at, indent + route.statement)

    lines = _add_import(lines, route.import_path)
    main_go.write_text("\n".join(lines), encoding="utf-8")
    logger.info("Injected route %s into %s", route.path, main_go)
    return True
