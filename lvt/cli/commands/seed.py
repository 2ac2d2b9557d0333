"""``lvt seed`` - fake data for a resource table."""

from __future__ import annotations

import asyncio

import click

from ...seeder import SeedReport, seed_resource
from ..utils.colors import _CHECK, dim, kv, success
from ..utils.workspace import require_project_root


def _progress(done: int, total: int) -> None:
    dim(f"  seeded {done}/{total}")


def cmd_seed(resource: str, *, count: int = 0, cleanup: bool = False) -> SeedReport:
    root = require_project_root()
    report = asyncio.run(
        seed_resource(resource, count=count, cleanup=cleanup, start=root, on_progress=_progress)
    )
    if cleanup:
        success(f"  {_CHECK} Removed {report.removed} test record(s) from {report.table}")
    if report.seeded:
        success(f"  {_CHECK} Seeded {report.seeded} record(s) into {report.table}")
    click.echo()
    kv("Test records", report.total_test_records)
    return report
