"""
Code generation for apps, resources, views and schemas.
"""

from .layout import app_dir, database_dir
from .project import generate_app
from .render import Renderer, create_environment
from .resource import generate_resource
from .routes import RouteInfo, find_main_go, inject_route
from .schema import generate_schema
from .tracker import ResourceEntry, read_resources, register_resource
from .types import (
    GenerationResult,
    ResourceData,
    display_field,
    pluralize,
    singularize,
    to_camel_case,
)
from .view import generate_view

__all__ = [
    "app_dir",
    "database_dir",
    "generate_app",
    "Renderer",
    "create_environment",
    "generate_resource",
    "RouteInfo",
    "find_main_go",
    "inject_route",
    "generate_schema",
    "ResourceEntry",
    "read_resources",
    "register_resource",
    "GenerationResult",
    "ResourceData",
    "display_field",
    "pluralize",
    "singularize",
    "to_camel_case",
    "generate_view",
]
