"""
MCP tool handlers.

Each handler wraps one lvt operation and returns a JSON-serializable
dict with ``success`` and ``message``. Faults become
``{"success": False, ...}`` instead of propagating to the client.
"""

from __future__ import annotations

import functools
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List

from ..config.project import load_project_config, read_module_name
from ..faults import Fault
from ..generator import generate_app, generate_resource, generate_schema, generate_view
from ..generator.types import GenerationResult
from ..migration import create_migration, find_migrations_dir, migrate_down, migrate_up, migration_status
from ..parser import parse_fields_with_inference
from ..seeder import describe_table, get_table, load_tables, seed_resource, summarize_tables

logger = logging.getLogger("lvt.mcp.tools")

ToolResult = Dict[str, Any]


def fault_safe(func: Callable[..., Awaitable[ToolResult]]) -> Callable[..., Awaitable[ToolResult]]:
    @functools.wraps(func)
    async def wrapper(*args, **kwargs) -> ToolResult:
        try:
            return await func(*args, **kwargs)
        except Fault as exc:
            logger.warning("%s failed: %s", func.__name__, exc.message)
            return {"success": False, "message": exc.message, "code": exc.code}
    return wrapper


def _generation(result: GenerationResult, message: str) -> ToolResult:
    return {
        "success": True,
        "message": message,
        "files": list(result.files),
        "routes": list(result.routes),
        "warnings": list(result.warnings),
    }


@fault_safe
async def lvt_new(name: str, kit: str = "multi", module: str = "", dev_mode: bool = True, parent_dir: str = ".") -> ToolResult:
    """Create a new LiveTemplate app."""
    result = generate_app(name, module_name=module or None, kit=kit, dev_mode=dev_mode, parent_dir=parent_dir)
    return _generation(result, f"Created app '{name}' with the {kit} kit")


@fault_safe
async def lvt_gen_resource(
    name: str,
    fields: List[str],
    project_dir: str = ".",
    pagination: str = "infinite",
    page_size: int = 20,
    edit_mode: str = "modal",
) -> ToolResult:
    """Generate a CRUD resource. Fields are 'name:type' or bare names with inferred types."""
    base = Path(project_dir)
    parsed = parse_fields_with_inference(fields)
    result = generate_resource(
        base,
        read_module_name(base),
        name,
        parsed,
        kit=load_project_config(base).get_kit(),
        pagination_mode=pagination,
        page_size=page_size,
        edit_mode=edit_mode,
    )
    return _generation(result, f"Generated resource '{name}'")


@fault_safe
async def lvt_gen_view(name: str, project_dir: str = ".") -> ToolResult:
    """Generate a view without database backing."""
    base = Path(project_dir)
    result = generate_view(base, read_module_name(base), name, kit=load_project_config(base).get_kit())
    return _generation(result, f"Generated view '{name}'")


@fault_safe
async def lvt_gen_schema(table: str, fields: List[str], project_dir: str = ".") -> ToolResult:
    """Generate database files only: migration, schema and queries."""
    base = Path(project_dir)
    result = generate_schema(base, read_module_name(base), table, parse_fields_with_inference(fields))
    return _generation(result, f"Generated schema for '{table}'")


@fault_safe
async def lvt_migration_up(project_dir: str = ".") -> ToolResult:
    """Apply all pending migrations."""
    applied = await migrate_up(project_dir)
    return {
        "success": True,
        "message": f"Applied {len(applied)} migration(s)" if applied else "No pending migrations",
        "applied": [m.filename for m in applied],
    }


@fault_safe
async def lvt_migration_down(project_dir: str = ".") -> ToolResult:
    """Roll back the most recent migration."""
    reverted = await migrate_down(project_dir)
    if reverted is None:
        return {"success": True, "message": "No migrations to roll back", "reverted": None}
    return {"success": True, "message": f"Rolled back {reverted.filename}", "reverted": reverted.filename}


@fault_safe
async def lvt_migration_status(project_dir: str = ".") -> ToolResult:
    """List migrations with their applied state."""
    states = await migration_status(project_dir)
    return {
        "success": True,
        "message": f"{sum(s.applied for s in states)} of {len(states)} migration(s) applied",
        "migrations": [
            {
                "version": s.migration.version,
                "name": s.migration.name,
                "applied": s.applied,
                "applied_at": s.applied_at,
            }
            for s in states
        ],
    }


@fault_safe
async def lvt_migration_create(name: str, project_dir: str = ".") -> ToolResult:
    """Create an empty migration file."""
    path = create_migration(find_migrations_dir(project_dir), name)
    return {"success": True, "message": f"Created {path.name}", "path": str(path)}


@fault_safe
async def lvt_seed(resource: str, count: int = 0, cleanup: bool = False, project_dir: str = ".") -> ToolResult:
    """Insert fake rows into a resource table, or remove previously seeded rows."""
    report = await seed_resource(resource, count=count, cleanup=cleanup, start=project_dir)
    parts = []
    if cleanup:
        parts.append(f"removed {report.removed}")
    if report.seeded:
        parts.append(f"seeded {report.seeded}")
    return {
        "success": True,
        "message": f"{report.table}: " + ", ".join(parts),
        "removed": report.removed,
        "seeded": report.seeded,
        "total_test_records": report.total_test_records,
    }


@fault_safe
async def lvt_resource_list(project_dir: str = ".") -> ToolResult:
    """List tables defined in schema.sql."""
    resources = summarize_tables(load_tables(project_dir))
    return {
        "success": True,
        "message": f"{len(resources)} resource(s)" if resources else "No resources found in schema.",
        "resources": resources,
    }


@fault_safe
async def lvt_resource_describe(name: str, project_dir: str = ".") -> ToolResult:
    """Describe a table: columns, constraints, example values and indexes."""
    details = describe_table(get_table(name, project_dir))
    return {"success": True, "message": f"Resource '{details['name']}'", **details}


TOOLS: Dict[str, Callable[..., Awaitable[ToolResult]]] = {
    "lvt_new": lvt_new,
    "lvt_gen_resource": lvt_gen_resource,
    "lvt_gen_view": lvt_gen_view,
    "lvt_gen_schema": lvt_gen_schema,
    "lvt_migration_up": lvt_migration_up,
    "lvt_migration_down": lvt_migration_down,
    "lvt_migration_status": lvt_migration_status,
    "lvt_migration_create": lvt_migration_create,
    "lvt_seed": lvt_seed,
    "lvt_resource_list": lvt_resource_list,
    "lvt_resource_describe": lvt_resource_describe,
}
