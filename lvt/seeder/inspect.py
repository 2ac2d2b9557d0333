"""
Resource inspection for ``lvt resource list`` and ``lvt resource describe``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..faults.domains import ResourceNotFoundFault
from .generator import GENERATED_COLUMNS, ValueGenerator
from .schema import TableSchema, find_schema_file, find_table, parse_schema


def load_tables(start: Optional[Union[str, Path]] = None) -> List[TableSchema]:
    """Tables from the project's ``schema.sql``."""
    return parse_schema(find_schema_file(start))


def get_table(name: str, start: Optional[Union[str, Path]] = None) -> TableSchema:
    """
    Raises:
        ResourceNotFoundFault: If the schema has no such table.
    """
    table = find_table(load_tables(start), name)
    if table is None:
        raise ResourceNotFoundFault(name)
    return table


def column_constraints(table: TableSchema, column_name: str) -> List[str]:
    col = table.column(column_name)
    if col is None:
        return []
    constraints = []
    if col.is_primary_key:
        constraints.append("PRIMARY KEY")
    if not col.nullable:
        constraints.append("NOT NULL")
    if col.references:
        constraints.append(f"REFERENCES {col.references}({col.references_column})")
    return constraints


def summarize_tables(tables: List[TableSchema]) -> List[Dict[str, Any]]:
    return [{"name": t.name, "columns": len(t.columns)} for t in tables]


def describe_table(table: TableSchema, generator: Optional[ValueGenerator] = None) -> Dict[str, Any]:
    """Columns with constraints and example values, indexes, and a seed hint."""
    generator = generator or ValueGenerator()
    columns = []
    for col in table.columns:
        columns.append({
            "name": col.name,
            "type": col.type,
            "constraints": column_constraints(table, col.name),
            "example": generator.example(col),
            "generated": col.name.lower() in GENERATED_COLUMNS,
        })
    return {
        "name": table.name,
        "primary_key": table.primary_key,
        "columns": columns,
        "indexes": [
            {"name": idx.name, "columns": list(idx.columns), "unique": idx.unique}
            for idx in table.indexes
        ],
        "seed_command": f"lvt seed {table.name} --count 50",
    }
