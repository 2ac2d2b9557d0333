"""
Naming helpers and template context types for code generation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..kits.helpers import CSSHelpers
from ..parser.fields import Field

GO_INITIALISMS = frozenset({
    "id", "url", "http", "https", "api", "uri", "sql",
    "json", "xml", "html", "css", "js",
})

IRREGULAR_PLURALS = {
    "person": "people",
    "child": "children",
    "tooth": "teeth",
    "foot": "feet",
    "man": "men",
    "woman": "women",
    "mouse": "mice",
}
IRREGULAR_SINGULARS = {v: k for k, v in IRREGULAR_PLURALS.items()}

PAGINATION_MODES = ("infinite", "load-more", "prev-next", "numbers")
EDIT_MODES = ("modal", "page")


def to_camel_case(name: str) -> str:
    """``user_id`` -> ``UserID``; Go initialisms stay upper-case."""
    parts = []
    for part in name.split("_"):
        if not part:
            continue
        if part.lower() in GO_INITIALISMS:
            parts.append(part.upper())
        else:
            parts.append(part[0].upper() + part[1:])
    return "".join(parts)


def title(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def singularize(word: str) -> str:
    if word in IRREGULAR_SINGULARS:
        return IRREGULAR_SINGULARS[word]
    if word.endswith("ies") and len(word) > 3:
        return word[:-3] + "y"
    if word.endswith(("ses", "xes", "zes", "ches", "shes")):
        return word[:-2]
    if word.endswith("s") and len(word) > 1:
        return word[:-1]
    return word


def pluralize(word: str) -> str:
    if word.endswith("s"):
        return word
    if word in IRREGULAR_PLURALS:
        return IRREGULAR_PLURALS[word]
    if len(word) >= 2 and word.endswith("y") and word[-2] not in "aeiou":
        return word[:-1] + "ies"
    if word.endswith(("x", "z", "ch", "sh")):
        return word + "es"
    return word + "s"


def display_field(fields: Sequence[Field]) -> Optional[Field]:
    """Field shown as a record's label: title > name > id > first."""
    if not fields:
        return None
    for wanted in ("title", "name", "id"):
        for f in fields:
            if f.name.lower() == wanted:
                return f
    return fields[0]


@dataclass
class ResourceData:
    """Context for resource and schema templates."""

    package_name: str
    module_name: str
    resource_name: str
    resource_name_lower: str
    resource_name_singular: str
    resource_name_plural: str
    table_name: str
    fields: List[Field] = field(default_factory=list)
    kit_name: str = "multi"
    css: Optional[CSSHelpers] = None
    dev_mode: bool = False
    pagination_mode: str = "infinite"
    page_size: int = 20
    edit_mode: str = "modal"
    import_path: str = ""
    db_import: str = ""

    @classmethod
    def build(cls, name: str, module_name: str, fields: Sequence[Field], **options) -> "ResourceData":
        lower = name.strip().lower()
        singular = singularize(lower)
        plural = pluralize(singular)
        return cls(
            package_name=lower,
            module_name=module_name,
            resource_name=title(lower),
            resource_name_lower=lower,
            resource_name_singular=to_camel_case(singular),
            resource_name_plural=to_camel_case(plural),
            table_name=plural,
            fields=list(fields),
            **options,
        )

    @property
    def display(self) -> Optional[Field]:
        return display_field(self.fields)

    @property
    def references(self) -> List[Field]:
        return [f for f in self.fields if f.is_reference]


@dataclass
class ViewData:
    package_name: str
    module_name: str
    view_name: str
    view_name_lower: str
    kit_name: str = "multi"
    css: Optional[CSSHelpers] = None
    dev_mode: bool = False


@dataclass
class AppData:
    app_name: str
    module_name: str
    kit_name: str = "multi"
    css: Optional[CSSHelpers] = None
    dev_mode: bool = True


@dataclass
class GenerationResult:
    """What a generator wrote, plus anything the user should follow up on."""

    files: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    routes: List[str] = field(default_factory=list)
