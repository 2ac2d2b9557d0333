"""
Schema Parser - reads ``schema.sql`` into ``TableSchema`` records.

Best-effort, regex driven:

    1. strip ``--`` line comments and ``/* */`` block comments
    2. match ``CREATE TABLE [IF NOT EXISTS] name (`` and scan to the
       matching ``)`` to get the body
    3. split ``body`` on top-level commas (paren-aware)
    4. classify each clause as a column or a table constraint; inline
       ``REFERENCES`` and ``FOREIGN KEY`` clauses mark parent tables
    5. match ``CREATE [UNIQUE] INDEX ... ON table (cols)`` and attach

Statements that do not fit the expected shape are skipped rather than
raising. ``parse_content_with_diagnostics`` reports what was skipped.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple, Union

from ..faults.domains import SchemaNotFoundFault, SchemaReadFault

logger = logging.getLogger("lvt.seeder.schema")

SCHEMA_CANDIDATES = (
    "internal/database/schema.sql",
    "database/schema.sql",
)

# ── Compiled regex patterns ──────────────────────────────────────────────────
RE_LINE_COMMENT = re.compile(r"--[^\n]*")
RE_BLOCK_COMMENT = re.compile(r"/\*[\s\S]*?\*/")

# Bare, "double", `back` or [bracket] quoted identifier.
_IDENT = r"[\"`\[]?(\w+)[\"`\]]?"

# Only the opening of the statement; the body is found by a depth scan.
RE_TABLE_START = re.compile(
    r"CREATE\s+TABLE\s+(?:IF\s+NOT\s+EXISTS\s+)?" + _IDENT + r"\s*\(",
    re.IGNORECASE,
)
RE_TABLE_HEAD = re.compile(r"CREATE\s+TABLE\b", re.IGNORECASE)

RE_INDEX = re.compile(
    r"CREATE\s+(UNIQUE\s+)?INDEX\s+(?:IF\s+NOT\s+EXISTS\s+)?" + _IDENT + r"\s+"
    r"ON\s+" + _IDENT + r"\s*\(([^)]+)\)",
    re.IGNORECASE,
)

# Table-level clauses; whole keywords only (`unique_code` is a column).
RE_CONSTRAINT = re.compile(
    r"^(?:CONSTRAINT|FOREIGN\s+KEY|CHECK|UNIQUE|PRIMARY\s+KEY)\b", re.IGNORECASE
)
RE_FOREIGN_KEY = re.compile(
    r"^(?:CONSTRAINT\s+\S+\s+)?FOREIGN\s+KEY\s*\(\s*" + _IDENT + r"\s*\)", re.IGNORECASE
)
RE_REFERENCES = re.compile(
    r"\bREFERENCES\s+" + _IDENT + r"(?:\s*\(\s*" + _IDENT + r"\s*\))?", re.IGNORECASE
)

_QUOTES = "\"`[]"


@dataclass
class Column:
    name: str
    type: str
    nullable: bool = True
    is_primary_key: bool = False
    # Parent table and column for foreign keys, empty otherwise.
    references: str = ""
    references_column: str = ""


@dataclass
class Index:
    name: str
    columns: List[str] = field(default_factory=list)
    unique: bool = False


@dataclass
class TableSchema:
    """A table as declared in schema.sql, columns in declaration order."""

    name: str
    columns: List[Column] = field(default_factory=list)
    primary_key: str = ""
    indexes: List[Index] = field(default_factory=list)

    def column(self, name: str) -> Optional[Column]:
        lower = name.lower()
        for col in self.columns:
            if col.name.lower() == lower:
                return col
        return None


def strip_comments(sql: str) -> str:
    sql = RE_LINE_COMMENT.sub("", sql)
    return RE_BLOCK_COMMENT.sub("", sql)


def split_columns(body: str) -> List[str]:
    """Split on commas at parenthesis depth zero, outside string literals."""
    parts: List[str] = []
    current: List[str] = []
    depth = 0
    in_string = False

    for ch in body:
        if ch == "'":
            in_string = not in_string
        elif in_string:
            pass
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        elif ch == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(ch)

    if current:
        parts.append("".join(current))
    return parts


def find_body_end(sql: str, start: int) -> int:
    """
    Index of the parenthesis closing the one opened just before ``start``.

    Returns -1 when the statement ends (``;`` or end of text) first.
    """
    depth = 1
    in_string = False
    for pos in range(start, len(sql)):
        ch = sql[pos]
        if ch == "'":
            in_string = not in_string
        elif in_string:
            continue
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return pos
        elif ch == ";":
            return -1
    return -1


def _references(clause: str) -> Tuple[str, str]:
    match = RE_REFERENCES.search(clause)
    if match is None:
        return "", ""
    return match.group(1), match.group(2) or "id"


def parse_column(clause: str) -> Optional[Column]:
    """
    Parse one column definition.

    Returns None for table-level constraints and for clauses with fewer
    than two tokens.
    """
    clause = clause.strip()
    if not clause:
        return None

    if RE_CONSTRAINT.match(clause):
        return None

    tokens = clause.split()
    if len(tokens) < 2:
        return None

    upper = clause.upper()
    is_pk = "PRIMARY KEY" in upper
    references, references_column = _references(clause)
    return Column(
        name=tokens[0].strip(_QUOTES),
        type=tokens[1].upper(),
        nullable=not (is_pk or "NOT NULL" in upper),
        is_primary_key=is_pk,
        references=references,
        references_column=references_column,
    )


def parse_columns(body: str) -> List[Column]:
    columns = []
    foreign_keys = []
    for clause in split_columns(body):
        col = parse_column(clause)
        if col is not None:
            columns.append(col)
            continue
        fk = RE_FOREIGN_KEY.match(clause.strip())
        if fk:
            foreign_keys.append((fk.group(1), *_references(clause)))

    # FOREIGN KEY (col) REFERENCES parent(id) clauses
    for name, parent, parent_column in foreign_keys:
        for col in columns:
            if col.name.lower() == name.lower() and parent:
                col.references, col.references_column = parent, parent_column
    return columns


def _statement_head(sql: str, start: int, limit: int = 80) -> str:
    end = sql.find(";", start)
    if end == -1:
        end = len(sql)
    head = " ".join(sql[start:end].split())
    return head if len(head) <= limit else head[:limit - 3] + "..."


def parse_content_with_diagnostics(sql: str) -> Tuple[List[TableSchema], List[str]]:
    """
    Parse SQL text.

    Returns:
        ``(tables, skipped)`` where ``skipped`` holds the heads of
        ``CREATE TABLE`` statements that could not be parsed.
    """
    sql = strip_comments(sql)

    tables: List[TableSchema] = []
    parsed_at = set()
    for match in RE_TABLE_START.finditer(sql):
        end = find_body_end(sql, match.end())
        if end == -1:
            continue
        parsed_at.add(match.start())
        columns = parse_columns(sql[match.end():end])
        primary_key = next((c.name for c in columns if c.is_primary_key), "")
        tables.append(TableSchema(name=match.group(1), columns=columns, primary_key=primary_key))

    skipped = [
        _statement_head(sql, head.start())
        for head in RE_TABLE_HEAD.finditer(sql)
        if head.start() not in parsed_at
    ]
    for statement in skipped:
        logger.debug("Skipping unparsed statement: %s", statement)

    for match in RE_INDEX.finditer(sql):
        table = find_table(tables, match.group(3))
        if table is None:
            logger.debug("Index %s targets unknown table %s", match.group(2), match.group(3))
            continue
        table.indexes.append(Index(
            name=match.group(2),
            columns=[c.strip().strip(_QUOTES) for c in match.group(4).split(",")],
            unique=bool(match.group(1)),
        ))

    return tables, skipped


def parse_content(sql: str) -> List[TableSchema]:
    """Parse SQL text into tables. Unparseable statements are dropped."""
    tables, _ = parse_content_with_diagnostics(sql)
    return tables


def parse_schema(path: Union[str, Path]) -> List[TableSchema]:
    """
    Read and parse a schema file.

    Raises:
        SchemaReadFault: If the file cannot be read.
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SchemaReadFault(str(path), exc.strerror or str(exc)) from exc
    return parse_content(content)


def find_table(tables: List[TableSchema], name: str) -> Optional[TableSchema]:
    """Case-insensitive lookup by table name."""
    lower = name.lower()
    for table in tables:
        if table.name.lower() == lower:
            return table
    return None


def find_schema_file(start: Optional[Union[str, Path]] = None) -> Path:
    """
    Walk upward from ``start`` looking for a schema file.

    Raises:
        SchemaNotFoundFault: If no candidate exists up to the filesystem root.
    """
    current = Path(start or os.getcwd()).resolve()
    while True:
        for candidate in SCHEMA_CANDIDATES:
            path = current / candidate
            if path.is_file():
                return path
        if current.parent == current:
            break
        current = current.parent

    raise SchemaNotFoundFault(list(SCHEMA_CANDIDATES))
