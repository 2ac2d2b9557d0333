"""
View generator - a handler and template without database backing.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from ..config.project import load_project_config
from ..kits.loader import KitLoader
from .layout import app_dir
from .render import Renderer
from .resource import inject_routes, validate_name
from .routes import RouteInfo
from .tracker import register_resource
from .types import GenerationResult, ViewData, title

logger = logging.getLogger("lvt.generator.view")


def generate_view(
    base_path: Union[str, Path],
    module_name: str,
    name: str,
    *,
    kit: str = "multi",
    css_framework: Optional[str] = None,
    renderer: Optional[Renderer] = None,
) -> GenerationResult:
    base = Path(base_path)
    name = validate_name("view", name)
    kit_info = KitLoader(base).load(kit, css_framework)
    renderer = renderer or Renderer()
    handlers_dir, import_sub = app_dir(base)

    lower = name.lower()
    data = ViewData(
        package_name=lower,
        module_name=module_name,
        view_name=title(lower),
        view_name_lower=lower,
        kit_name=kit_info.name,
        css=kit_info.helpers,
        dev_mode=load_project_config(base).dev_mode,
    )
    context = dict(data.__dict__)

    result = GenerationResult()
    out_dir = handlers_dir / lower
    for template, filename in (
        ("view/handler.go.j2", f"{lower}.go"),
        ("view/template.tmpl.j2", f"{lower}.tmpl"),
        ("view/test.go.j2", f"{lower}_test.go"),
    ):
        result.files.append(str(renderer.write(template, context, out_dir / filename)))

    import_path = f"{module_name}/{import_sub}/{lower}"
    inject_routes(base, [RouteInfo(f"/{lower}", lower, f"{lower}.Handler()", import_path)], result)

    register_resource(base, data.view_name, f"/{lower}", "view")
    logger.info("Generated view %s", data.view_name)
    return result
