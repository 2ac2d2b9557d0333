"""
Migration runner for goose-format SQL files.

Migration files are named ``<YYYYMMDDHHMMSS>_<name>.sql`` and split into
sections by goose annotations:

    -- +goose Up
    -- +goose StatementBegin
    CREATE TABLE ...;
    -- +goose StatementEnd

    -- +goose Down
    DROP TABLE ...;

Applied versions are recorded in ``goose_db_version`` with goose's own
column layout, so databases migrated by goose itself are understood.
"""

from __future__ import annotations

import logging
import os
import shutil
import sqlite3
import subprocess
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import AsyncIterator, Dict, List, Optional, Tuple, Union

from ..config.project import find_project_root
from ..db.engine import DEFAULT_DB_NAME, Database
from ..faults.domains import DatabaseFault, MigrationFault

logger = logging.getLogger("lvt.migration")

VERSION_TABLE = "goose_db_version"
TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"
MAX_TIMESTAMP_RETRIES = 3600

MIGRATIONS_DIR_CANDIDATES = (
    "internal/database/migrations",
    "database/migrations",
)

MIGRATION_TEMPLATE = """\
-- +goose Up
-- +goose StatementBegin
-- Add your SQL here
-- +goose StatementEnd

-- +goose Down
-- +goose StatementBegin
-- Add your SQL here
-- +goose StatementEnd
"""


@dataclass
class Migration:
    """A migration file on disk."""
    version: int
    name: str
    path: Path

    @property
    def filename(self) -> str:
        return self.path.name


@dataclass
class MigrationState:
    migration: Migration
    applied: bool
    applied_at: Optional[str] = None


# ── File parsing ─────────────────────────────────────────────────────────────


def parse_migration_sql(text: str) -> Tuple[List[str], List[str]]:
    """
    Split goose-annotated SQL into ``(up_statements, down_statements)``.

    Outside a StatementBegin/End block a statement ends at a line ending
    with ``;``. Inside a block the whole block is one statement.
    """
    sections: Dict[str, List[str]] = {"up": [], "down": []}
    section: Optional[str] = None
    in_block = False
    buffer: List[str] = []

    def flush() -> None:
        stmt = "\n".join(buffer).strip()
        has_sql = any(l.strip() and not l.strip().startswith("--") for l in buffer)
        if section and has_sql:
            sections[section].append(stmt)
        buffer.clear()

    for line in text.splitlines():
        stripped = line.strip()
        annotation = stripped[len("-- +goose"):].strip().lower() if stripped.startswith("-- +goose") else None

        if annotation is not None:
            if annotation.startswith("up"):
                flush()
                section = "up"
            elif annotation.startswith("down"):
                flush()
                section = "down"
            elif annotation == "statementbegin":
                flush()
                in_block = True
            elif annotation == "statementend":
                flush()
                in_block = False
            continue

        if section is None:
            continue
        if not in_block and (not stripped or stripped.startswith("--")):
            continue

        buffer.append(line)
        if not in_block and stripped.endswith(";"):
            flush()

    flush()
    return sections["up"], sections["down"]


def split_statements(sql: str) -> List[str]:
    """
    Split SQL text into single statements.

    Semicolons inside string literals and trigger bodies do not split.
    """
    statements: List[str] = []
    pending = ""
    for piece in sql.split(";"):
        pending += piece + ";"
        if sqlite3.complete_statement(pending):
            if pending.strip(" \t\r\n;"):
                statements.append(pending.strip())
            pending = ""
    if pending.strip(" \t\r\n;"):
        statements.append(pending.strip().rstrip(";"))
    return statements


def _parse_filename(path: Path) -> Optional[Migration]:
    version, sep, name = path.stem.partition("_")
    if not sep or not version.isdigit():
        return None
    return Migration(version=int(version), name=name, path=path)


def list_migrations(migrations_dir: Union[str, Path]) -> List[Migration]:
    """Migration files in version order."""
    migrations_dir = Path(migrations_dir)
    if not migrations_dir.is_dir():
        return []

    found: List[Migration] = []
    seen: Dict[int, Path] = {}
    for path in sorted(migrations_dir.glob("*.sql")):
        migration = _parse_filename(path)
        if migration is None:
            logger.debug("Ignoring non-migration file %s", path.name)
            continue
        if migration.version in seen:
            raise MigrationFault(
                f"duplicate version {migration.version}: "
                f"{seen[migration.version].name} and {path.name}"
            )
        seen[migration.version] = path
        found.append(migration)
    return sorted(found, key=lambda m: m.version)


def next_migration_path(
    migrations_dir: Union[str, Path],
    name: str,
    now: Optional[datetime] = None,
) -> Path:
    """
    Path for a new migration with a timestamp no other file uses.

    Collisions bump the timestamp one second at a time.
    """
    migrations_dir = Path(migrations_dir)
    stamp = now or datetime.now()
    for _ in range(MAX_TIMESTAMP_RETRIES):
        prefix = stamp.strftime(TIMESTAMP_FORMAT)
        if not any(migrations_dir.glob(f"{prefix}_*.sql")):
            return migrations_dir / f"{prefix}_{name}.sql"
        stamp += timedelta(seconds=1)
    raise MigrationFault(
        f"failed to generate unique migration timestamp after {MAX_TIMESTAMP_RETRIES} attempts"
    )


def create_migration(
    migrations_dir: Union[str, Path],
    name: str,
    now: Optional[datetime] = None,
) -> Path:
    """Write an empty goose migration and return its path."""
    name = name.strip()
    if not name:
        raise MigrationFault("migration name cannot be empty")

    migrations_dir = Path(migrations_dir)
    migrations_dir.mkdir(parents=True, exist_ok=True)
    path = next_migration_path(migrations_dir, name, now)
    path.write_text(MIGRATION_TEMPLATE, encoding="utf-8")
    logger.info("Created migration %s", path.name)
    return path


def find_migrations_dir(start: Optional[Union[str, Path]] = None) -> Path:
    """
    Walk upward looking for a migrations directory.

    Raises:
        MigrationFault: If none is found.
    """
    current = Path(start or os.getcwd()).resolve()
    while True:
        for candidate in MIGRATIONS_DIR_CANDIDATES:
            path = current / candidate
            if path.is_dir():
                return path
        if current.parent == current:
            break
        current = current.parent

    raise MigrationFault(
        "migrations directory not found (looking for "
        + " or ".join(MIGRATIONS_DIR_CANDIDATES) + ")"
    )


def run_sqlc_generate(database_dir: Union[str, Path]) -> bool:
    """
    Run ``sqlc generate`` in ``database_dir`` if sqlc is installed.

    Returns False when sqlc is missing or fails; the caller reports it.
    """
    sqlc = shutil.which("sqlc")
    if sqlc is None:
        logger.warning("sqlc not found on PATH; skipping code generation")
        return False
    result = subprocess.run(
        [sqlc, "generate"],
        cwd=str(database_dir),
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        logger.warning("sqlc generate failed: %s", result.stderr.strip())
        return False
    return True


# ── Runner ───────────────────────────────────────────────────────────────────


class MigrationRunner:
    """
    Applies and reverts goose migrations against a ``Database``.

    Usage:
        async with Database("app.db") as db:
            runner = MigrationRunner(db, "internal/database/migrations")
            applied = await runner.up()
    """

    def __init__(self, db: Database, migrations_dir: Union[str, Path]):
        self.db = db
        self.migrations_dir = Path(migrations_dir)

    async def ensure_version_table(self) -> None:
        if await self.db.table_exists(VERSION_TABLE):
            return
        await self.db.execute(
            f"""
            CREATE TABLE {VERSION_TABLE} (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                version_id INTEGER NOT NULL,
                is_applied INTEGER NOT NULL,
                tstamp TIMESTAMP DEFAULT (datetime('now'))
            )
            """
        )
        # goose seeds the table with version 0
        await self.db.execute(
            f"INSERT INTO {VERSION_TABLE} (version_id, is_applied) VALUES (0, 1)"
        )

    async def applied_versions(self) -> Dict[int, str]:
        """Map of applied version -> timestamp, excluding goose's version 0."""
        await self.ensure_version_table()
        rows = await self.db.fetch_all(
            f"SELECT version_id, is_applied, tstamp FROM {VERSION_TABLE} ORDER BY id DESC"
        )
        latest: Dict[int, Tuple[bool, str]] = {}
        for row in rows:
            version = int(row["version_id"])
            if version not in latest:
                latest[version] = (bool(row["is_applied"]), str(row["tstamp"]))
        return {v: ts for v, (applied, ts) in latest.items() if applied and v != 0}

    async def status(self) -> List[MigrationState]:
        applied = await self.applied_versions()
        return [
            MigrationState(migration=m, applied=m.version in applied, applied_at=applied.get(m.version))
            for m in list_migrations(self.migrations_dir)
        ]

    async def pending(self) -> List[Migration]:
        return [s.migration for s in await self.status() if not s.applied]

    async def _run(self, migration: Migration, statements: List[str], *, applied: bool) -> None:
        try:
            async with self.db.transaction():
                for stmt in statements:
                    for part in split_statements(stmt):
                        await self.db.execute(part)
                if applied:
                    await self.db.execute(
                        f"INSERT INTO {VERSION_TABLE} (version_id, is_applied) VALUES (?, 1)",
                        [migration.version],
                    )
                else:
                    await self.db.execute(
                        f"DELETE FROM {VERSION_TABLE} WHERE version_id = ?",
                        [migration.version],
                    )
        except DatabaseFault as exc:
            raise MigrationFault(exc.message, migration=migration.filename) from exc

    async def up(self) -> List[Migration]:
        """Apply all pending migrations, one transaction each."""
        applied: List[Migration] = []
        for migration in await self.pending():
            up_sql, _ = parse_migration_sql(migration.path.read_text(encoding="utf-8"))
            await self._run(migration, up_sql, applied=True)
            logger.info("Applied migration %s", migration.filename)
            applied.append(migration)
        return applied

    async def down(self) -> Optional[Migration]:
        """Revert the most recently applied migration, if any."""
        applied = await self.applied_versions()
        if not applied:
            return None

        version = max(applied)
        by_version = {m.version: m for m in list_migrations(self.migrations_dir)}
        migration = by_version.get(version)
        if migration is None:
            raise MigrationFault(f"no migration file found for applied version {version}")

        _, down_sql = parse_migration_sql(migration.path.read_text(encoding="utf-8"))
        await self._run(migration, down_sql, applied=False)
        logger.info("Reverted migration %s", migration.filename)
        return migration


# ── Project entry points ─────────────────────────────────────────────────────


def migration_database_path(start: Optional[Union[str, Path]] = None) -> Path:
    """``LVT_DB_PATH`` or ``app.db`` at the project root; may not exist yet."""
    override = os.environ.get("LVT_DB_PATH")
    if override:
        return Path(override)
    root = find_project_root(start) or Path(start or os.getcwd()).resolve()
    return root / DEFAULT_DB_NAME


@asynccontextmanager
async def open_runner(start: Optional[Union[str, Path]] = None) -> AsyncIterator[MigrationRunner]:
    """Runner for the project containing ``start``, with its database open."""
    migrations_dir = find_migrations_dir(start)
    async with Database(migration_database_path(start)) as db:
        yield MigrationRunner(db, migrations_dir)


async def migrate_up(start: Optional[Union[str, Path]] = None) -> List[Migration]:
    async with open_runner(start) as runner:
        return await runner.up()


async def migrate_down(start: Optional[Union[str, Path]] = None) -> Optional[Migration]:
    async with open_runner(start) as runner:
        return await runner.down()


async def migration_status(start: Optional[Union[str, Path]] = None) -> List[MigrationState]:
    async with open_runner(start) as runner:
        return await runner.status()
