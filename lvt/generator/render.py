"""
Template rendering over the packaged ``lvt/templates`` tree.

Generated files are Go source and Go ``html/template`` files, which use
``{{ }}`` themselves. Our templates therefore use ``[[ ]]`` for
expressions and ``[% %]`` for statements, so Go syntax passes through
untouched.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

from ..faults.domains import GenerationFault
from .types import display_field, pluralize, singularize, title, to_camel_case

logger = logging.getLogger("lvt.generator.render")


def create_environment() -> Environment:
    env = Environment(
        loader=PackageLoader("lvt", "templates"),
        variable_start_string="[[",
        variable_end_string="]]",
        block_start_string="[%",
        block_end_string="%]",
        comment_start_string="[#",
        comment_end_string="#]",
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        autoescape=False,
    )
    env.filters.update({
        "camel": to_camel_case,
        "title": title,
        "plural": pluralize,
        "singular": singularize,
    })
    env.globals["display_field"] = display_field
    return env


class Renderer:
    """Renders named templates and writes or appends the output."""

    def __init__(self, env: Optional[Environment] = None):
        self.env = env or create_environment()

    def render(self, template: str, context: Dict[str, Any]) -> str:
        try:
            return self.env.get_template(template).render(**context)
        except TemplateError as exc:
            raise GenerationFault(template, f"template error: {exc}") from exc

    def write(self, template: str, context: Dict[str, Any], path: Union[str, Path]) -> Path:
        path = Path(path)
        content = self.render(template, context)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise GenerationFault(str(path), f"failed to write file: {exc}") from exc
        logger.debug("Wrote %s from %s", path, template)
        return path

    def append(
        self,
        template: str,
        context: Dict[str, Any],
        path: Union[str, Path],
        separator: str = "\n",
    ) -> Path:
        path = Path(path)
        content = self.render(template, context)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("a", encoding="utf-8") as fh:
                fh.write(separator)
                fh.write(content)
        except OSError as exc:
            raise GenerationFault(str(path), f"failed to append to file: {exc}") from exc
        logger.debug("Appended %s to %s", template, path)
        return path
