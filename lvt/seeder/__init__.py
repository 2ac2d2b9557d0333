"""
Schema parsing and test-data seeding.
"""

from .generator import ValueGenerator, format_example, generate_id
from .inspect import describe_table, get_table, load_tables, summarize_tables
from .schema import (
    Column,
    Index,
    TableSchema,
    find_schema_file,
    find_table,
    parse_content,
    parse_content_with_diagnostics,
    parse_schema,
    split_columns,
    strip_comments,
)
from .seeder import Seeder, SeedReport, seed_resource

__all__ = [
    "ValueGenerator",
    "format_example",
    "generate_id",
    "describe_table",
    "get_table",
    "load_tables",
    "summarize_tables",
    "Column",
    "Index",
    "TableSchema",
    "find_schema_file",
    "find_table",
    "parse_content",
    "parse_content_with_diagnostics",
    "parse_schema",
    "split_columns",
    "strip_comments",
    "Seeder",
    "SeedReport",
    "seed_resource",
]
