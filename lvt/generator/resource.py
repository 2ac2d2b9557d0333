"""
Resource generator - CRUD handler, template, test and database files.

For ``lvt gen resource posts title:string body:text`` this writes:

    <app>/posts/posts.go            handler
    <app>/posts/posts.tmpl          template
    <app>/posts/posts_test.go       test
    <db>/migrations/<ts>_create_posts.sql
    <db>/schema.sql                 (appended)
    <db>/queries.sql                (appended)

then injects the route into ``cmd/*/main.go`` and registers the resource
in ``.lvtresources``.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

from ..config.project import load_project_config
from ..faults.domains import GenerationFault
from ..kits.loader import KitLoader
from ..migration.runner import next_migration_path
from ..parser.fields import Field
from .layout import app_dir, database_dir
from .render import Renderer
from .routes import RouteInfo, find_main_go, inject_route
from .tracker import register_resource
from .types import EDIT_MODES, PAGINATION_MODES, GenerationResult, ResourceData

logger = logging.getLogger("lvt.generator.resource")

NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")


def validate_name(kind: str, name: str) -> str:
    name = name.strip()
    if not name:
        raise GenerationFault(kind, "name cannot be empty")
    if not NAME_RE.match(name):
        raise GenerationFault(
            kind,
            f"invalid name '{name}': use letters, digits and underscores, starting with a letter",
        )
    return name


def resource_context(data: ResourceData) -> Dict[str, Any]:
    context = dict(data.__dict__)
    context["display"] = data.display
    context["references"] = data.references
    return context


def write_database_files(
    base_path: Path,
    data: ResourceData,
    renderer: Renderer,
    result: GenerationResult,
    now: Optional[datetime] = None,
) -> None:
    """Migration file plus schema.sql / queries.sql appends."""
    db_dir = database_dir(base_path)
    migrations = db_dir / "migrations"
    migrations.mkdir(parents=True, exist_ok=True)

    context = resource_context(data)
    migration = next_migration_path(migrations, f"create_{data.table_name}", now)
    renderer.write("resource/migration.sql.j2", context, migration)
    result.files.append(str(migration))

    result.files.append(str(renderer.append("resource/schema.sql.j2", context, db_dir / "schema.sql")))
    result.files.append(str(renderer.append("resource/queries.sql.j2", context, db_dir / "queries.sql")))


def inject_routes(base_path: Path, routes: Sequence[RouteInfo], result: GenerationResult) -> None:
    main_go = find_main_go(base_path)
    if main_go is None:
        for route in routes:
            result.warnings.append(
                f"cmd/*/main.go not found; add manually: {route.statement}"
            )
        return
    for route in routes:
        try:
            inject_route(main_go, route)
            result.routes.append(route.path)
        except GenerationFault as exc:
            result.warnings.append(
                f"Could not auto-inject route {route.path}: {exc.message}. "
                f"Please add manually: {route.statement}"
            )


def generate_resource(
    base_path: Union[str, Path],
    module_name: str,
    name: str,
    fields: Sequence[Field],
    *,
    kit: str = "multi",
    css_framework: Optional[str] = None,
    pagination_mode: str = "infinite",
    page_size: int = 20,
    edit_mode: str = "modal",
    renderer: Optional[Renderer] = None,
    now: Optional[datetime] = None,
) -> GenerationResult:
    """
    Generate a CRUD resource.

    Raises:
        GenerationFault: On invalid options or a failed write.
    """
    base = Path(base_path)
    name = validate_name("resource", name)
    if not fields:
        raise GenerationFault("resource", "at least one field is required")
    if pagination_mode not in PAGINATION_MODES:
        raise GenerationFault(
            "resource",
            f"invalid pagination mode '{pagination_mode}' (supported: {', '.join(PAGINATION_MODES)})",
        )
    if edit_mode not in EDIT_MODES:
        raise GenerationFault(
            "resource", f"invalid edit mode '{edit_mode}' (supported: {', '.join(EDIT_MODES)})"
        )
    if page_size <= 0:
        raise GenerationFault("resource", "page size must be greater than 0")

    kit_info = KitLoader(base).load(kit, css_framework)
    if kit_info.manifest.layout == "simple":
        raise GenerationFault("resource", "the simple kit has no database; create the app with --kit multi or single")
    renderer = renderer or Renderer()
    handlers_dir, import_sub = app_dir(base)

    data = ResourceData.build(
        name,
        module_name,
        fields,
        kit_name=kit_info.name,
        css=kit_info.helpers,
        dev_mode=load_project_config(base).dev_mode,
        pagination_mode=pagination_mode,
        page_size=page_size,
        edit_mode=edit_mode,
    )
    data.import_path = f"{module_name}/{import_sub}/{data.package_name}"
    data.db_import = f"{module_name}/{database_dir(base).relative_to(base).as_posix()}"

    result = GenerationResult()
    context = resource_context(data)
    out_dir = handlers_dir / data.package_name
    pkg = data.package_name

    for template, filename in (
        ("resource/handler.go.j2", f"{pkg}.go"),
        ("resource/template.tmpl.j2", f"{pkg}.tmpl"),
        ("resource/test.go.j2", f"{pkg}_test.go"),
    ):
        result.files.append(str(renderer.write(template, context, out_dir / filename)))

    write_database_files(base, data, renderer, result, now)

    handler = f"{pkg}.Handler(queries)"
    routes = [RouteInfo(f"/{pkg}", pkg, handler, data.import_path)]
    if edit_mode == "page":
        routes.append(RouteInfo(f"/{pkg}/", pkg, handler, data.import_path))
    inject_routes(base, routes, result)

    register_resource(base, data.resource_name, f"/{pkg}", "resource")
    logger.info("Generated resource %s (%d files)", data.resource_name, len(result.files))
    return result
