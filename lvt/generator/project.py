"""
App generator - ``lvt new``.

Multi/single kits lay out a full project::

    <app>/
        cmd/<app>/main.go
        go.mod
        README.md
        .lvtrc
        .lvtresources
        internal/app/home/{home.go,home.tmpl}
        internal/database/{db.go,sqlc.yaml,schema.sql,queries.sql}
        internal/database/models/models.go
        internal/database/migrations/
        internal/shared/
        web/assets/

The simple kit writes ``main.go``, ``<app>.tmpl``, ``go.mod``,
``README.md`` and ``.lvtrc`` only.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional, Union

from ..config.project import ProjectConfig, save_project_config
from ..faults.domains import GenerationFault
from ..kits.loader import KitLoader
from .render import Renderer
from .tracker import write_resources
from .types import AppData, GenerationResult

logger = logging.getLogger("lvt.generator.project")

APP_NAME_RE = re.compile(r"^[a-z][a-z0-9_-]*$")

PROJECT_DIRS = (
    "cmd/{app}",
    "internal/app/home",
    "internal/database/models",
    "internal/database/migrations",
    "internal/shared",
    "web/assets",
)

PROJECT_FILES = (
    ("app/main.go.j2", "cmd/{app}/main.go"),
    ("app/go.mod.j2", "go.mod"),
    ("app/db.go.j2", "internal/database/db.go"),
    ("app/sqlc.yaml.j2", "internal/database/sqlc.yaml"),
    ("app/models.go.j2", "internal/database/models/models.go"),
    ("app/home.go.j2", "internal/app/home/home.go"),
    ("app/home.tmpl.j2", "internal/app/home/home.tmpl"),
    ("app/README.md.j2", "README.md"),
)

SIMPLE_FILES = (
    ("simple/main.go.j2", "main.go"),
    ("simple/index.tmpl.j2", "{app}.tmpl"),
    ("simple/go.mod.j2", "go.mod"),
    ("simple/README.md.j2", "README.md"),
)


def generate_app(
    app_name: str,
    *,
    module_name: Optional[str] = None,
    kit: str = "multi",
    dev_mode: bool = True,
    parent_dir: Union[str, Path] = ".",
    renderer: Optional[Renderer] = None,
) -> GenerationResult:
    """
    Create a new app directory under ``parent_dir``.

    Raises:
        GenerationFault: If the name is invalid or the directory exists.
    """
    app = app_name.strip().lower()
    if not app:
        raise GenerationFault("app", "app name cannot be empty")
    if not APP_NAME_RE.match(app):
        raise GenerationFault(
            "app", f"invalid app name '{app_name}': use lowercase letters, digits, '-' and '_'"
        )

    root = Path(parent_dir) / app
    if root.exists():
        raise GenerationFault("app", f"directory '{app}' already exists")

    kit_info = KitLoader().load(kit)
    renderer = renderer or Renderer()
    data = AppData(
        app_name=app,
        module_name=module_name or app,
        kit_name=kit_info.name,
        css=kit_info.helpers,
        dev_mode=dev_mode,
    )
    context = dict(data.__dict__)
    result = GenerationResult()

    simple = kit_info.manifest.layout == "simple"
    if not simple:
        for d in PROJECT_DIRS:
            (root / d.format(app=app)).mkdir(parents=True, exist_ok=True)

    for template, target in SIMPLE_FILES if simple else PROJECT_FILES:
        path = renderer.write(template, context, root / target.format(app=app))
        result.files.append(str(path))

    if not simple:
        db_dir = root / "internal" / "database"
        (db_dir / "schema.sql").write_text("-- Database schema\n", encoding="utf-8")
        (db_dir / "queries.sql").write_text("-- Database queries\n", encoding="utf-8")
        write_resources(root, [])
        result.files.extend([
            str(db_dir / "schema.sql"),
            str(db_dir / "queries.sql"),
            str(root / ".lvtresources"),
        ])

    config = ProjectConfig(module=data.module_name, kit=kit_info.name, dev_mode=dev_mode)
    result.files.append(str(save_project_config(root, config)))

    logger.info("Created app %s with kit %s", app, kit_info.name)
    return result
