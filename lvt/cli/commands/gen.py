"""``lvt gen`` - resources, views, schemas and deployment stacks."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import click

from ... import __version__
from ...generator import generate_resource, generate_schema, generate_view
from ...generator.types import GenerationResult
from ...parser import parse_fields_with_inference
from ...stack import StackConfig, generate_stack
from ..utils.colors import _CHECK, file_written, kv, next_steps, success, warning
from ..utils.workspace import project_context, require_project_root


def _report(result: GenerationResult, root: Path, verbose: bool) -> None:
    for path in result.files:
        try:
            label = str(Path(path).resolve().relative_to(root.resolve()))
        except ValueError:
            label = path
        file_written(label, verbose=verbose, path=path)
    for route in result.routes:
        kv("Route", route)
    for message in result.warnings:
        warning(f"  ! {message}")


def cmd_gen_resource(
    name: str,
    field_tokens: Sequence[str],
    *,
    pagination: str = "infinite",
    page_size: int = 20,
    edit_mode: str = "modal",
    verbose: bool = False,
) -> GenerationResult:
    root, module, config = project_context()
    fields = parse_fields_with_inference(field_tokens)
    result = generate_resource(
        root,
        module,
        name,
        fields,
        kit=config.get_kit(),
        pagination_mode=pagination,
        page_size=page_size,
        edit_mode=edit_mode,
    )
    _report(result, root, verbose)
    click.echo()
    success(f"  {_CHECK} Generated resource '{name}'")
    click.echo()
    next_steps(["lvt migration up", f"lvt seed {name} --count 20"])
    return result


def cmd_gen_view(name: str, *, verbose: bool = False) -> GenerationResult:
    root, module, config = project_context()
    result = generate_view(root, module, name, kit=config.get_kit())
    _report(result, root, verbose)
    click.echo()
    success(f"  {_CHECK} Generated view '{name}'")
    return result


def cmd_gen_schema(table: str, field_tokens: Sequence[str], *, verbose: bool = False) -> GenerationResult:
    root, module, _ = project_context()
    result = generate_schema(root, module, table, parse_fields_with_inference(field_tokens))
    _report(result, root, verbose)
    click.echo()
    success(f"  {_CHECK} Generated schema for '{table}'")
    click.echo()
    next_steps(["lvt migration up"])
    return result


def cmd_gen_stack(config: StackConfig, *, force: bool = False, verbose: bool = False) -> None:
    root = require_project_root()
    config.apply_defaults().validate()

    click.echo(f"Generating {config.provider} deployment stack...")
    for key, value in config.to_dict().items():
        if value not in ("none", "", False):
            kv(key.replace("_", " ").title(), "enabled" if value is True else value)
    click.echo()

    tracking = generate_stack(root, config, force=force, generator_version=__version__)
    for tracked in tracking.files:
        file_written(tracked.path, verbose=verbose, path=str(root / tracked.path))
    click.echo()
    success(f"  {_CHECK} Stack generated; tracking written to .lvtstack")
    click.echo()
    next_steps(["Review deploy/README.md", "lvt stack validate"])
