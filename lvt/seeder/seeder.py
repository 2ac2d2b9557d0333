"""
Seeder - inserts fake rows and removes them again.

Seeded rows are recognisable by their id prefix (``test-seed-``), so
cleanup never touches real data.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from ..db.engine import Database, find_database_path, quote_ident
from ..faults.domains import DatabaseFault, SeedFault
from .generator import SEED_ID_PREFIX, ValueGenerator, generate_id
from .inspect import get_table
from .schema import TableSchema

logger = logging.getLogger("lvt.seeder")

SEED_ID_PATTERN = SEED_ID_PREFIX + "%"
PROGRESS_EVERY = 10

ProgressCallback = Callable[[int, int], None]


class Seeder:
    """
    Seeds and cleans test data in an open ``Database``.

    Args:
        db: Connected database.
        generator: Value generator, a fresh ``ValueGenerator`` by default.
    """

    def __init__(self, db: Database, generator: Optional[ValueGenerator] = None):
        self.db = db
        self.generator = generator or ValueGenerator()

    def generate_row(
        self,
        table: TableSchema,
        index: int,
        parent_ids: Optional[Dict[str, List[Any]]] = None,
    ) -> List[Any]:
        """
        Values for one row, in column order.

        Foreign key columns take a random id from ``parent_ids`` (keyed by
        lower-cased column name), or None when the parent has no rows.
        """
        parent_ids = parent_ids or {}
        values: List[Any] = []
        for col in table.columns:
            name = col.name.lower()
            if name == "id":
                values.append(generate_id(index))
            elif name in ("created_at", "updated_at"):
                values.append(self.generator.created_at())
            elif name in parent_ids:
                ids = parent_ids[name]
                values.append(self.generator.fake.random_element(ids) if ids else None)
            else:
                values.append(self.generator.value(col))
        return values

    async def load_parent_ids(self, table: TableSchema) -> Dict[str, List[Any]]:
        """
        Existing ids for every foreign key column of ``table``.

        Raises:
            SeedFault: If a NOT NULL foreign key points at an empty table.
        """
        parent_ids: Dict[str, List[Any]] = {}
        for col in table.columns:
            if not col.references:
                continue
            sql = (
                f"SELECT {quote_ident(col.references_column)} "
                f"FROM {quote_ident(col.references)}"
            )
            try:
                rows = await self.db.fetch_all(sql)
            except DatabaseFault as exc:
                raise SeedFault(
                    table.name, f"failed to read referenced table {col.references}: {exc.message}"
                ) from exc
            ids = [next(iter(row.values())) for row in rows]
            if not ids and not col.nullable:
                raise SeedFault(
                    table.name,
                    f"{col.name} references {col.references}, which has no rows "
                    f"(seed {col.references} first)",
                )
            logger.debug("%s.%s: %d parent ids from %s", table.name, col.name, len(ids), col.references)
            parent_ids[col.name.lower()] = ids
        return parent_ids

    async def seed(
        self,
        table: TableSchema,
        count: int,
        on_progress: Optional[ProgressCallback] = None,
    ) -> int:
        """
        Insert ``count`` rows in a single transaction.

        ``on_progress(done, total)`` is called every ten rows and after
        the last one.

        Raises:
            SeedFault: If the count is invalid, a referenced table is
                empty, or an insert fails. No rows are kept in that case.
        """
        if count <= 0:
            raise SeedFault(table.name, "count must be greater than 0")
        if not table.columns:
            raise SeedFault(table.name, "table has no columns")

        parent_ids = await self.load_parent_ids(table)

        columns = ", ".join(quote_ident(c.name) for c in table.columns)
        placeholders = ", ".join("?" for _ in table.columns)
        sql = f"INSERT INTO {quote_ident(table.name)} ({columns}) VALUES ({placeholders})"

        logger.info("Seeding %s with %d rows", table.name, count)
        try:
            async with self.db.transaction():
                for i in range(count):
                    try:
                        await self.db.execute(sql, self.generate_row(table, i, parent_ids))
                    except DatabaseFault as exc:
                        raise SeedFault(table.name, f"failed to insert row {i + 1}: {exc.message}") from exc
                    done = i + 1
                    if on_progress and (done % PROGRESS_EVERY == 0 or done == count):
                        on_progress(done, count)
        except DatabaseFault as exc:
            raise SeedFault(table.name, exc.message) from exc

        return count

    async def cleanup(self, table_name: str) -> int:
        """Delete seeded rows. Returns the number removed."""
        try:
            removed = await self.db.execute(
                f"DELETE FROM {quote_ident(table_name)} WHERE id LIKE ?",
                [SEED_ID_PATTERN],
            )
        except DatabaseFault as exc:
            raise SeedFault(table_name, f"failed to delete test data: {exc.message}") from exc
        logger.info("Removed %d seeded rows from %s", removed, table_name)
        return removed

    async def count_test_records(self, table_name: str) -> int:
        try:
            value = await self.db.fetch_val(
                f"SELECT COUNT(*) FROM {quote_ident(table_name)} WHERE id LIKE ?",
                [SEED_ID_PATTERN],
            )
        except DatabaseFault as exc:
            raise SeedFault(table_name, f"failed to count test records: {exc.message}") from exc
        return int(value or 0)


@dataclass
class SeedReport:
    table: str
    removed: int = 0
    seeded: int = 0
    total_test_records: int = 0


async def seed_resource(
    resource: str,
    *,
    count: int = 0,
    cleanup: bool = False,
    start: Optional[Union[str, Path]] = None,
    on_progress: Optional[ProgressCallback] = None,
    generator: Optional[ValueGenerator] = None,
) -> SeedReport:
    """
    Seed and/or clean the table backing ``resource`` in the project
    containing ``start``. Cleanup runs first when both are requested.

    Raises:
        SeedFault: If neither action is requested or the count is negative.
        ResourceNotFoundFault: If the schema has no such table.
    """
    if count < 0:
        raise SeedFault(resource, "count must be greater than 0")
    if count == 0 and not cleanup:
        raise SeedFault(resource, "specify --count N to seed or --cleanup to remove test data")

    table = get_table(resource, start)
    db_path = find_database_path(start)

    report = SeedReport(table=table.name)
    async with Database(db_path) as db:
        seeder = Seeder(db, generator)
        if cleanup:
            report.removed = await seeder.cleanup(table.name)
        if count > 0:
            report.seeded = await seeder.seed(table, count, on_progress)
        report.total_test_records = await seeder.count_test_records(table.name)
    return report
