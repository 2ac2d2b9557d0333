"""
CSS framework helpers exposed to templates as ``css``.

Templates ask for classes by role instead of hard-coding a framework:

    <input class="[[ css.cls('input') ]]">
    <button class="[[ css.button('danger') ]]">Delete</button>
"""

from __future__ import annotations

from typing import Dict, Type


class CSSHelpers:
    """Class names for one CSS framework. Unknown roles render empty."""

    name = "none"
    cdn = ""
    needs_wrapper = False
    needs_article = False

    classes: Dict[str, str] = {}
    buttons: Dict[str, str] = {}
    pagination_states: Dict[str, str] = {}

    def cls(self, role: str) -> str:
        return self.classes.get(role, "")

    def button(self, variant: str = "primary") -> str:
        return self.buttons.get(variant, self.buttons.get("primary", ""))

    def pagination_button(self, state: str = "") -> str:
        return self.pagination_states.get(state, self.pagination_states.get("", ""))

    @property
    def needs_table_wrapper(self) -> bool:
        return bool(self.cls("table_container"))

    def __repr__(self) -> str:
        return f"<CSSHelpers {self.name}>"


class TailwindHelpers(CSSHelpers):
    name = "tailwind"
    cdn = '<script src="https://cdn.jsdelivr.net/npm/@tailwindcss/browser@4"></script>'
    classes = {
        "container": "max-w-7xl mx-auto px-4 py-8",
        "box": "bg-white shadow rounded-lg p-6 mb-6",
        "columns": "grid grid-cols-1 md:grid-cols-2 lg:grid-cols-3 gap-4",
        "field": "mb-4",
        "label": "block text-sm font-medium text-gray-700 mb-2",
        "input": "w-full px-3 py-2 border border-gray-300 rounded-md focus:outline-none focus:ring-2 focus:ring-blue-500",
        "textarea": "w-full px-3 py-2 border border-gray-300 rounded-md focus:outline-none focus:ring-2 focus:ring-blue-500",
        "select": "w-full px-3 py-2 border border-gray-300 rounded-md focus:outline-none focus:ring-2 focus:ring-blue-500",
        "checkbox": "flex items-center",
        "button_group": "flex gap-2",
        "form": "space-y-4",
        "table": "min-w-full divide-y divide-gray-200",
        "table_container": "overflow-x-auto",
        "thead": "bg-gray-50",
        "th": "px-6 py-3 text-left text-xs font-medium text-gray-500 uppercase tracking-wider",
        "td": "px-6 py-4 whitespace-nowrap text-sm text-gray-900",
        "tr": "hover:bg-gray-50",
        "title": "text-3xl font-bold text-gray-900 mb-6",
        "subtitle": "text-lg text-gray-600 mb-4",
        "text_muted": "text-gray-500",
        "text_danger": "text-red-600",
        "pagination": "flex items-center justify-between mt-4",
        "loading": "animate-pulse text-gray-500",
    }
    buttons = {
        "primary": "bg-blue-600 text-white px-4 py-2 rounded-md hover:bg-blue-700 disabled:opacity-50",
        "secondary": "bg-gray-600 text-white px-2 py-1 text-sm rounded hover:bg-gray-700",
        "danger": "bg-red-600 text-white px-4 py-2 rounded-md hover:bg-red-700 disabled:opacity-50",
    }
    pagination_states = {
        "": "px-3 py-1 border rounded hover:bg-gray-100",
        "active": "px-3 py-1 border rounded bg-blue-600 text-white",
    }


class BulmaHelpers(CSSHelpers):
    name = "bulma"
    cdn = '<link rel="stylesheet" href="https://cdn.jsdelivr.net/npm/bulma@1.0.4/css/bulma.min.css">'
    needs_wrapper = True
    classes = {
        "container": "container",
        "section": "section",
        "box": "box",
        "columns": "columns",
        "field": "field",
        "label": "label",
        "input": "input",
        "textarea": "textarea",
        "checkbox": "checkbox",
        "button_group": "buttons",
        "table": "table is-fullwidth is-striped",
        "table_container": "table-container",
        "title": "title",
        "subtitle": "subtitle",
        "text_muted": "has-text-grey",
        "text_danger": "has-text-danger",
        "pagination": "pagination",
        "loading": "is-loading",
    }
    buttons = {
        "primary": "button is-primary",
        "secondary": "button is-small",
        "danger": "button is-danger",
    }
    pagination_states = {
        "": "pagination-link",
        "active": "pagination-link is-current",
    }


class PicoHelpers(CSSHelpers):
    name = "pico"
    cdn = '<link rel="stylesheet" href="https://cdn.jsdelivr.net/npm/@picocss/pico@2/css/pico.min.css">'
    needs_article = True
    classes = {
        "container": "container",
        "table": "striped",
        "text_muted": "secondary",
    }
    buttons = {
        "primary": "",
        "secondary": "secondary",
        "danger": "contrast",
    }


class NoneHelpers(CSSHelpers):
    name = "none"


FRAMEWORKS: Dict[str, Type[CSSHelpers]] = {
    "tailwind": TailwindHelpers,
    "bulma": BulmaHelpers,
    "pico": PicoHelpers,
    "none": NoneHelpers,
}


def helpers_for(framework: str) -> CSSHelpers:
    """
    Return helpers for ``framework``.

    Raises:
        KeyError: If the framework is unknown.
    """
    return FRAMEWORKS[framework.lower()]()
