"""
Goose-compatible SQL migrations.
"""

from .runner import (
    MIGRATION_TEMPLATE,
    VERSION_TABLE,
    Migration,
    MigrationRunner,
    MigrationState,
    create_migration,
    find_migrations_dir,
    list_migrations,
    migrate_down,
    migrate_up,
    migration_database_path,
    migration_status,
    next_migration_path,
    open_runner,
    parse_migration_sql,
    run_sqlc_generate,
    split_statements,
)

__all__ = [
    "MIGRATION_TEMPLATE",
    "VERSION_TABLE",
    "Migration",
    "MigrationRunner",
    "MigrationState",
    "create_migration",
    "find_migrations_dir",
    "list_migrations",
    "migrate_down",
    "migrate_up",
    "migration_database_path",
    "migration_status",
    "next_migration_path",
    "open_runner",
    "parse_migration_sql",
    "run_sqlc_generate",
    "split_statements",
]
