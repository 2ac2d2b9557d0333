"""
Field Parser - turns CLI field tokens into typed ``Field`` records.

Token forms:
    title:string                      -> plain field
    body:text                         -> long-text field (textarea)
    author:references:users           -> foreign key, ON DELETE CASCADE
    author:references:users:set_null  -> foreign key, ON DELETE SET NULL
    title                             -> type inferred from name
                                         (``parse_fields_with_inference`` only)

Tokens are split on the first ``:`` only; everything after it is the
declared type, so ``references:`` directives keep their own colons.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from ..faults.domains import FieldParseFault
from .inference import InferenceRules, infer_type

REFERENCES_PREFIX = "references:"

SUPPORTED_TYPES = "string, text, int, bool, float, time, references:table"

# token -> (go type, sql type, is_textarea)
TYPE_MAP = {
    "string": ("string", "TEXT", False),
    "str": ("string", "TEXT", False),
    "text": ("string", "TEXT", True),
    "textarea": ("string", "TEXT", True),
    "longtext": ("string", "TEXT", True),
    "int": ("int64", "INTEGER", False),
    "integer": ("int64", "INTEGER", False),
    "bool": ("bool", "BOOLEAN", False),
    "boolean": ("bool", "BOOLEAN", False),
    "float": ("float64", "REAL", False),
    "float64": ("float64", "REAL", False),
    "decimal": ("float64", "REAL", False),
    "time": ("time.Time", "DATETIME", False),
    "datetime": ("time.Time", "DATETIME", False),
    "timestamp": ("time.Time", "DATETIME", False),
}

ON_DELETE_ACTIONS = {
    "CASCADE": "CASCADE",
    "SET NULL": "SET NULL",
    "SET_NULL": "SET NULL",
    "RESTRICT": "RESTRICT",
    "NO ACTION": "NO ACTION",
    "NO_ACTION": "NO ACTION",
}

DEFAULT_ON_DELETE = "CASCADE"


@dataclass(frozen=True)
class Field:
    """A validated field declaration."""

    name: str
    type: str
    go_type: str
    sql_type: str
    is_textarea: bool = False
    is_reference: bool = False
    referenced_table: str = ""
    on_delete: str = ""

    @property
    def is_long_text(self) -> bool:
        return self.is_textarea


def is_reference_type(typ: str) -> bool:
    return typ.lower().startswith(REFERENCES_PREFIX)


def map_type(typ: str) -> Tuple[str, str, bool]:
    """
    Map a declared type token to ``(go_type, sql_type, is_textarea)``.

    Reference directives map to ``string``/``TEXT`` to match the string
    primary keys used throughout generated apps.

    Raises:
        FieldParseFault: If the token is not a supported type.
    """
    if is_reference_type(typ):
        return "string", "TEXT", False

    try:
        return TYPE_MAP[typ.lower()]
    except KeyError:
        raise FieldParseFault(
            f"unsupported type '{typ}' (supported: {SUPPORTED_TYPES})"
        ) from None


def _parse_reference(name: str, typ: str) -> Tuple[str, str]:
    """Return ``(table, on_delete)`` for a ``references:`` directive."""
    parts = typ.split(":")
    table = parts[1].strip() if len(parts) > 1 else ""
    if not table or len(parts) > 3:
        raise FieldParseFault(
            f"field '{name}': invalid references syntax, "
            "expected 'references:table_name[:on_delete]'",
            field=name,
        )

    if len(parts) == 2:
        return table, DEFAULT_ON_DELETE

    raw_action = parts[2].strip()
    action = ON_DELETE_ACTIONS.get(raw_action.upper())
    if action is None:
        raise FieldParseFault(
            f"field '{name}': invalid ON DELETE action '{raw_action}' "
            "(supported: CASCADE, SET_NULL, RESTRICT, NO_ACTION)",
            field=name,
        )
    return table, action


def build_field(name: str, typ: str) -> Field:
    """Validate a ``(name, type)`` pair and build the ``Field``."""
    name = name.strip()
    typ = typ.strip()

    if not name:
        raise FieldParseFault("field name cannot be empty")
    if not typ:
        raise FieldParseFault(
            f"field type cannot be empty for field '{name}'", field=name
        )

    try:
        go_type, sql_type, is_textarea = map_type(typ)
    except FieldParseFault as exc:
        raise FieldParseFault(f"field '{name}': {exc.message}", field=name) from None

    if not is_reference_type(typ):
        return Field(
            name=name,
            type=typ,
            go_type=go_type,
            sql_type=sql_type,
            is_textarea=is_textarea,
        )

    table, on_delete = _parse_reference(name, typ)
    return Field(
        name=name,
        type=typ,
        go_type=go_type,
        sql_type=sql_type,
        is_textarea=False,
        is_reference=True,
        referenced_table=table,
        on_delete=on_delete,
    )


def parse_fields(tokens: Iterable[str]) -> List[Field]:
    """
    Parse explicit ``name:type`` tokens.

    The first invalid token aborts the parse.

    Raises:
        FieldParseFault: On an empty token list or any invalid token.
    """
    tokens = list(tokens)
    if not tokens:
        raise FieldParseFault("no fields provided")

    fields: List[Field] = []
    for token in tokens:
        if ":" not in token:
            raise FieldParseFault(
                f"invalid field format '{token}', expected 'name:type'",
                field=token,
            )
        name, typ = token.split(":", 1)
        fields.append(build_field(name, typ))
    return fields


def parse_field_input(token: str, rules: Optional[InferenceRules] = None) -> Tuple[str, str]:
    """
    Split a token into ``(name, type)``, inferring the type when absent.
    """
    if ":" in token:
        name, typ = token.split(":", 1)
        return name.strip(), typ.strip()
    name = token.strip()
    return name, infer_type(name, rules)


def parse_fields_with_inference(
    tokens: Iterable[str],
    rules: Optional[InferenceRules] = None,
) -> List[Field]:
    """
    Parse tokens where ``:type`` is optional.

    Bare names get a type from ``infer_type``; everything else follows
    ``parse_fields``.
    """
    tokens = list(tokens)
    if not tokens:
        raise FieldParseFault("no fields provided")

    return [build_field(*parse_field_input(token, rules)) for token in tokens]


def _export_name(name: str) -> str:
    return "".join(part[:1].upper() + part[1:] for part in name.split("_") if part)


def fields_to_go_struct(fields: Iterable[Field]) -> str:
    """Render Go struct field lines with json tags."""
    return "".join(
        f'\t{_export_name(f.name)} {f.go_type} `json:"{f.name}"`\n' for f in fields
    )


def fields_to_sql_columns(fields: Iterable[Field]) -> str:
    """Render ``name TYPE NOT NULL`` column lines joined by ``,\\n``."""
    return ",\n".join(f"  {f.name} {f.sql_type} NOT NULL" for f in fields)
