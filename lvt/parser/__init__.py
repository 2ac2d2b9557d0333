"""
Field declaration parsing and name-based type inference.
"""

from .fields import (
    Field,
    build_field,
    fields_to_go_struct,
    fields_to_sql_columns,
    map_type,
    parse_field_input,
    parse_fields,
    parse_fields_with_inference,
)
from .inference import DEFAULT_RULES, InferenceRules, infer_type

__all__ = [
    "Field",
    "build_field",
    "fields_to_go_struct",
    "fields_to_sql_columns",
    "map_type",
    "parse_field_input",
    "parse_fields",
    "parse_fields_with_inference",
    "DEFAULT_RULES",
    "InferenceRules",
    "infer_type",
]
