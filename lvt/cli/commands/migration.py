"""``lvt migration`` - goose-format migrations."""

from __future__ import annotations

import asyncio
from pathlib import Path

from ...migration import create_migration, find_migrations_dir, migrate_down, migrate_up, migration_status
from ..utils.colors import _CHECK, dim, info, success, table
from ..utils.workspace import require_project_root


def cmd_migration_up() -> int:
    applied = asyncio.run(migrate_up(require_project_root()))
    if not applied:
        info("No pending migrations.")
        return 0
    for migration in applied:
        success(f"  {_CHECK} Applied {migration.filename}")
    return len(applied)


def cmd_migration_down() -> None:
    reverted = asyncio.run(migrate_down(require_project_root()))
    if reverted is None:
        info("No migrations to roll back.")
    else:
        success(f"  {_CHECK} Rolled back {reverted.filename}")


def cmd_migration_status() -> None:
    states = asyncio.run(migration_status(require_project_root()))
    if not states:
        info("No migrations found.")
        return
    table(
        ["Version", "Name", "Status", "Applied at"],
        [
            [s.migration.version, s.migration.name, "applied" if s.applied else "pending", s.applied_at or ""]
            for s in states
        ],
    )
    pending = sum(1 for s in states if not s.applied)
    dim(f"  {len(states) - pending} applied, {pending} pending")


def cmd_migration_create(name: str) -> Path:
    path = create_migration(find_migrations_dir(require_project_root()), name)
    success(f"  {_CHECK} Created {path}")
    return path
