"""
Async SQLite engine used by the seeder and the migration runner.

Thin wrapper over ``aiosqlite``: one connection, explicit transactions,
rows returned as dicts. Failures surface as ``DatabaseFault``.

Usage:
    async with Database("app.db") as db:
        async with db.transaction():
            await db.execute("INSERT INTO posts (id) VALUES (?)", ["p1"])
        rows = await db.fetch_all("SELECT * FROM posts")
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Dict, List, Optional, Sequence, Union

import aiosqlite

from ..faults.domains import DatabaseFault

logger = logging.getLogger("lvt.db")

DEFAULT_DB_NAME = "app.db"


def quote_ident(name: str) -> str:
    """Quote an SQL identifier."""
    return '"' + name.replace('"', '""') + '"'


class Database:
    """Async SQLite connection manager."""

    def __init__(self, path: Union[str, Path]):
        self.path = str(path)
        self._conn: Optional[aiosqlite.Connection] = None

    # ── Connection management ────────────────────────────────────────

    @property
    def is_connected(self) -> bool:
        return self._conn is not None

    async def connect(self) -> None:
        if self._conn is not None:
            return
        try:
            # Autocommit mode; transactions are opened explicitly.
            self._conn = await aiosqlite.connect(self.path, isolation_level=None)
        except Exception as exc:
            raise DatabaseFault(
                f"failed to open database {self.path}: {exc}", path=self.path
            ) from exc
        self._conn.row_factory = aiosqlite.Row
        await self._conn.execute("PRAGMA foreign_keys=ON")
        logger.debug("SQLite connected: %s", self.path)

    async def disconnect(self) -> None:
        if self._conn is None:
            return
        await self._conn.close()
        self._conn = None
        logger.debug("SQLite disconnected: %s", self.path)

    async def __aenter__(self) -> "Database":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.disconnect()

    def _connection(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise DatabaseFault("database is not connected", path=self.path)
        return self._conn

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """
        Run the enclosed statements in one transaction.

        Commits on normal exit, rolls back on any exception.
        """
        conn = self._connection()
        await conn.execute("BEGIN")
        try:
            yield
        except BaseException:
            await conn.execute("ROLLBACK")
            raise
        else:
            await conn.execute("COMMIT")

    # ── Query execution ──────────────────────────────────────────────

    async def execute(self, sql: str, params: Optional[Sequence[Any]] = None) -> int:
        """Execute a statement and return the affected row count."""
        try:
            cursor = await self._connection().execute(sql, params or [])
            rowcount = cursor.rowcount
            await cursor.close()
            return rowcount
        except DatabaseFault:
            raise
        except Exception as exc:
            raise DatabaseFault(f"query failed: {exc}", path=self.path,
                                metadata={"sql": sql[:200]}) from exc

    async def fetch_all(
        self, sql: str, params: Optional[Sequence[Any]] = None
    ) -> List[Dict[str, Any]]:
        try:
            async with self._connection().execute(sql, params or []) as cursor:
                rows = await cursor.fetchall()
        except DatabaseFault:
            raise
        except Exception as exc:
            raise DatabaseFault(f"query failed: {exc}", path=self.path,
                                metadata={"sql": sql[:200]}) from exc
        return [dict(row) for row in rows]

    async def fetch_one(
        self, sql: str, params: Optional[Sequence[Any]] = None
    ) -> Optional[Dict[str, Any]]:
        rows = await self.fetch_all(sql, params)
        return rows[0] if rows else None

    async def fetch_val(self, sql: str, params: Optional[Sequence[Any]] = None) -> Any:
        """Return the first column of the first row, or None."""
        row = await self.fetch_one(sql, params)
        if row is None:
            return None
        return next(iter(row.values()))

    # ── Introspection ────────────────────────────────────────────────

    async def table_exists(self, table_name: str) -> bool:
        row = await self.fetch_one(
            "SELECT name FROM sqlite_master WHERE type='table' AND name=?",
            [table_name],
        )
        return row is not None


def find_database_path(
    start: Optional[Union[str, Path]] = None,
    name: str = DEFAULT_DB_NAME,
) -> Path:
    """
    Walk upward from ``start`` looking for the SQLite database file.

    ``LVT_DB_PATH`` overrides the lookup when set.

    Raises:
        DatabaseFault: If no database file is found.
    """
    override = os.environ.get("LVT_DB_PATH")
    if override:
        path = Path(override)
        if not path.is_file():
            raise DatabaseFault(f"database not found at LVT_DB_PATH={override}", path=override)
        return path

    current = Path(start or os.getcwd()).resolve()
    while True:
        candidate = current / name
        if candidate.is_file():
            return candidate
        if current.parent == current:
            break
        current = current.parent

    raise DatabaseFault(
        f"database not found (looking for {name}). "
        "Run this command from your project root.",
        path=name,
    )
