"""
Async SQLite access for lvt.
"""

from .engine import DEFAULT_DB_NAME, Database, find_database_path, quote_ident

__all__ = ["DEFAULT_DB_NAME", "Database", "find_database_path", "quote_ident"]
