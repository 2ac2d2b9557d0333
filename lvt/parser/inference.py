"""
Name-based type inference for field declarations.

When a field is given without an explicit ``:type`` the CLI guesses one
from the field name. The guess is a convenience, never an error: every
name maps to some type token, falling back to ``string``.

The rule tables are plain data (``InferenceRules``) so they can be
extended or replaced without touching the parser.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

DEFAULT_TYPE = "string"

EXACT_MATCHES: Dict[str, str] = {
    # String fields
    "name": "string",
    "title": "string",
    "email": "string",
    "username": "string",
    "password": "string",
    "token": "string",
    "url": "string",
    "slug": "string",
    "path": "string",
    "code": "string",
    "key": "string",
    "address": "string",
    "city": "string",
    "state": "string",
    "country": "string",
    "phone": "string",
    "status": "string",
    "type": "string",
    # Long text
    "description": "text",
    "content": "text",
    "body": "text",
    # Integer fields
    "age": "int",
    "count": "int",
    "quantity": "int",
    "views": "int",
    "likes": "int",
    "shares": "int",
    "score": "int",
    "rank": "int",
    "level": "int",
    "year": "int",
    "month": "int",
    "day": "int",
    # Float fields
    "price": "float",
    "amount": "float",
    "total": "float",
    "rating": "float",
    "lat": "float",
    "lng": "float",
    "latitude": "float",
    "longitude": "float",
    # Boolean fields
    "enabled": "bool",
    "active": "bool",
    "published": "bool",
    "verified": "bool",
    "approved": "bool",
    "deleted": "bool",
    "hidden": "bool",
    "visible": "bool",
    "featured": "bool",
    "public": "bool",
    "private": "bool",
    # Time fields
    "created_at": "time",
    "updated_at": "time",
    "deleted_at": "time",
    "published_at": "time",
    "started_at": "time",
    "ended_at": "time",
    "expires_at": "time",
}


def _suffix(*suffixes: str) -> Callable[[str], bool]:
    return lambda name: name.endswith(suffixes)


def _prefix(*prefixes: str) -> Callable[[str], bool]:
    return lambda name: name.startswith(prefixes)


def _contains(*parts: str) -> Callable[[str], bool]:
    return lambda name: any(p in name for p in parts)


# Evaluated in order; first match wins.
PATTERN_RULES: List[Tuple[Callable[[str], bool], str]] = [
    (_suffix("_at", "_date", "_time"), "time"),
    (_prefix("is_", "has_", "can_", "should_"), "bool"),
    (_suffix("_count", "_number", "_index", "_id", "id"), "int"),
    (_suffix("_price", "_amount", "_total", "_rate"), "float"),
    (_contains("email", "url"), "string"),
    (_contains("price", "amount"), "float"),
]


@dataclass
class InferenceRules:
    """
    Lookup tables used by ``infer_type``.

    ``exact`` is consulted first with the lower-cased name, then each
    ``(predicate, type)`` pair in ``patterns`` in order.
    """

    exact: Dict[str, str] = field(default_factory=lambda: dict(EXACT_MATCHES))
    patterns: List[Tuple[Callable[[str], bool], str]] = field(
        default_factory=lambda: list(PATTERN_RULES)
    )
    default: str = DEFAULT_TYPE

    def infer(self, name: str) -> str:
        lower = name.strip().lower()
        if lower in self.exact:
            return self.exact[lower]
        for predicate, typ in self.patterns:
            if predicate(lower):
                return typ
        return self.default

    def with_exact(self, **overrides: str) -> "InferenceRules":
        """Return a copy with extra exact-name mappings."""
        exact = dict(self.exact)
        exact.update({k.lower(): v for k, v in overrides.items()})
        return InferenceRules(exact=exact, patterns=list(self.patterns), default=self.default)


DEFAULT_RULES = InferenceRules()


def infer_type(name: str, rules: Optional[InferenceRules] = None) -> str:
    """Suggest a type token for a field name."""
    return (rules or DEFAULT_RULES).infer(name)
