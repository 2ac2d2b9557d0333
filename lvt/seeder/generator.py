"""
Fake value generation for seeding.

Values are chosen from the column name first (``email`` gets an email
address, ``price`` a float) and fall back to the SQL type.
"""

from __future__ import annotations

import time
from datetime import datetime, timedelta
from typing import Any, Callable, List, Optional, Sequence, Tuple

from faker import Faker

from .schema import Column

SEED_ID_PREFIX = "test-seed-"
GENERATED_COLUMNS = frozenset({"id", "created_at", "updated_at"})
STATUS_VALUES = ["active", "inactive", "pending", "completed"]


def _has(name: str, *parts: str) -> bool:
    return any(p in name for p in parts)


class ValueGenerator:
    """
    Generates realistic values for columns.

    Args:
        seed: Optional seed for reproducible output.
        locale: Faker locale.
    """

    def __init__(self, seed: Optional[int] = None, locale: str = "en_US"):
        self.fake = Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)

        f = self.fake
        # (name substrings, excluded substrings, factory); first match wins
        self._name_rules: List[Tuple[Sequence[str], Sequence[str], Callable[[Column], Any]]] = [
            (("email",), (), lambda c: f.email()),
            (("username", "user_name"), (), lambda c: f.user_name()),
            (("first_name", "firstname"), (), lambda c: f.first_name()),
            (("last_name", "lastname"), (), lambda c: f.last_name()),
            (("name",), ("filename",), lambda c: f.name()),
            (("phone", "mobile", "telephone"), (), lambda c: f.phone_number()),
            (("address",), (), lambda c: f.street_address()),
            (("city",), (), lambda c: f.city()),
            (("state", "province"), (), lambda c: f.state()),
            (("country",), (), lambda c: f.country()),
            (("zip", "postal"), (), lambda c: f.postcode()),
            (("url", "website", "link"), (), lambda c: f.url()),
            (("image", "avatar", "photo", "picture"), (), lambda c: f.image_url()),
            (("title",), (), self._title),
            (("job", "position", "occupation"), (), lambda c: f.job()),
            (("company", "organization"), (), lambda c: f.company()),
            (("content", "description", "body", "bio"), (), lambda c: f.paragraph(nb_sentences=3)),
            (("text", "comment", "note", "message"), (), lambda c: f.sentence(nb_words=12)),
            (("price", "amount", "cost", "fee", "salary"), (), lambda c: f.pyfloat(min_value=10, max_value=10000, right_digits=2)),
            (("quantity", "count", "stock"), (), lambda c: f.random_int(1, 1000)),
            (("age",), ("page", "message", "usage"), lambda c: f.random_int(18, 99)),
            (("rating", "score"), (), lambda c: f.pyfloat(min_value=1, max_value=5, right_digits=1)),
            (("status",), (), lambda c: f.random_element(STATUS_VALUES)),
            (("category", "type"), (), lambda c: f.word()),
            (("color", "colour"), (), lambda c: f.color_name()),
            (("uuid",), (), lambda c: f.uuid4()),
            (("date", "birthday", "dob"), (), lambda c: f.date(pattern="%Y-%m-%d")),
        ]

    def _title(self, column: Column) -> str:
        return self.fake.catch_phrase()

    def value(self, column: Column) -> Any:
        """Return a value for ``column``, or None for seeder-managed columns."""
        if column.name.lower() in GENERATED_COLUMNS:
            return None

        lower = column.name.lower()
        for parts, excluded, factory in self._name_rules:
            if _has(lower, *parts) and not _has(lower, *excluded):
                return factory(column)

        return self.by_type(column.type)

    def by_type(self, sql_type: str) -> Any:
        upper = sql_type.upper()
        f = self.fake
        if "INT" in upper:
            return f.random_int(1, 1000)
        if "BOOL" in upper:
            return f.boolean()
        if _has(upper, "REAL", "FLOAT", "DOUBLE", "DECIMAL", "NUMERIC"):
            return f.pyfloat(min_value=0, max_value=1000, right_digits=2)
        if _has(upper, "TEXT", "CHAR", "CLOB"):
            return f.sentence(nb_words=10)
        if _has(upper, "DATE", "TIME"):
            return f.date_time().strftime("%Y-%m-%d %H:%M:%S")
        return f.word()

    def created_at(self) -> str:
        """A timestamp within the last 90 days."""
        ago = timedelta(
            days=self.fake.random_int(0, 90),
            hours=self.fake.random_int(0, 23),
            minutes=self.fake.random_int(0, 59),
        )
        return (datetime.now() - ago).strftime("%Y-%m-%d %H:%M:%S")

    def example(self, column: Column) -> str:
        """Human-readable example value for ``resource describe``."""
        return format_example(self.value(column))


def generate_id(index: int) -> str:
    return f"{SEED_ID_PREFIX}{time.time_ns()}-{index}"


def _quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


def format_example(value: Any) -> str:
    if value is None:
        return "(auto-generated)"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        if len(value) > 50:
            return _quote(value[:47]) + "..."
        return _quote(value)
    if isinstance(value, float):
        return f"{value:.2f}"
    return str(value)
