"""``lvt stack`` - inspect a generated deployment stack."""

from __future__ import annotations

from typing import List

import click

from ...stack import TRACKING_FILE, read_tracking_file, required_secrets
from ..utils.colors import _CHECK, bullet, kv, section, success, warning
from ..utils.workspace import require_project_root


def cmd_stack_validate() -> List[str]:
    root = require_project_root()
    tracking = read_tracking_file(root / TRACKING_FILE)
    modified = tracking.check_modifications(root)
    if not modified:
        success(f"  {_CHECK} All {len(tracking.files)} generated file(s) match .lvtstack")
        return modified
    warning(f"  {len(modified)} file(s) modified since generation:")
    for path in modified:
        bullet(path)
    return modified


def cmd_stack_info() -> None:
    root = require_project_root()
    tracking = read_tracking_file(root / TRACKING_FILE)
    modified = set(tracking.check_modifications(root))

    section("Stack")
    kv("Provider", tracking.provider)
    kv("Generated at", tracking.generated_at)
    if tracking.generator_version:
        kv("Generator", tracking.generator_version)
    click.echo()
    section("Configuration")
    for key, value in tracking.configuration.items():
        kv(key, value)
    click.echo()
    section("Required secrets")
    for secret in required_secrets(tracking.config):
        bullet(secret)
    click.echo()
    section("Files")
    for tracked in tracking.files:
        bullet(f"{tracked.path}{'  (modified)' if tracked.path in modified else ''}")
