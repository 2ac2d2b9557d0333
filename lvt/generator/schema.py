"""
Schema generator - database files only (migration, schema, queries).
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence, Union

from ..faults.domains import GenerationFault
from ..migration.runner import run_sqlc_generate
from ..parser.fields import Field
from .layout import database_dir
from .render import Renderer
from .resource import validate_name, write_database_files
from .tracker import register_resource
from .types import GenerationResult, ResourceData

logger = logging.getLogger("lvt.generator.schema")


def generate_schema(
    base_path: Union[str, Path],
    module_name: str,
    table: str,
    fields: Sequence[Field],
    *,
    renderer: Optional[Renderer] = None,
    now: Optional[datetime] = None,
    run_sqlc: bool = True,
) -> GenerationResult:
    base = Path(base_path)
    table = validate_name("schema", table)
    if not fields:
        raise GenerationFault("schema", "at least one field is required")

    data = ResourceData.build(table, module_name, fields)
    result = GenerationResult()
    write_database_files(base, data, renderer or Renderer(), result, now)

    if run_sqlc and not run_sqlc_generate(database_dir(base)):
        result.warnings.append("sqlc generate did not run; run 'sqlc generate' manually later")

    register_resource(base, data.resource_name, "", "schema")
    logger.info("Generated schema for %s", data.table_name)
    return result
