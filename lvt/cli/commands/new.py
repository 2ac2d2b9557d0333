"""``lvt new`` - create an app."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from ...generator import generate_app
from ..utils.colors import _CHECK, file_written, kv, next_steps, success


def cmd_new(
    name: str,
    *,
    kit: str = "multi",
    module: Optional[str] = None,
    dev_mode: bool = True,
    verbose: bool = False,
) -> Path:
    result = generate_app(name, module_name=module, kit=kit, dev_mode=dev_mode)
    root = Path(name.strip().lower())

    for path in result.files:
        file_written(str(Path(path).relative_to(root)), verbose=verbose, path=path)
    click.echo()
    success(f"  {_CHECK} Created app '{root.name}'")
    kv("Kit", kit)
    kv("Module", module or root.name)
    click.echo()
    if kit == "simple":
        next_steps([f"cd {root.name}", "go run ."])
    else:
        next_steps([
            f"cd {root.name}",
            "lvt gen resource posts title content published:bool",
            "lvt migration up",
            f"go run ./cmd/{root.name}",
        ])
    return root
