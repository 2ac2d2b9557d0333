"""
Project discovery for commands that must run inside an lvt app.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

from ...config.project import ProjectConfig, find_project_root, load_project_config, read_module_name
from ...faults.domains import ConfigFault


def require_project_root(start: Optional[Path] = None) -> Path:
    """
    Raises:
        ConfigFault: Outside an lvt project (no ``.lvtrc`` or ``go.mod``).
    """
    root = find_project_root(start)
    if root is None:
        raise ConfigFault(
            code="NOT_IN_PROJECT",
            message="not in an lvt project (no .lvtrc or go.mod found). Run 'lvt new <app>' first",
        )
    return root


def project_context(start: Optional[Path] = None) -> Tuple[Path, str, ProjectConfig]:
    """Root, Go module path and config for the enclosing project."""
    root = require_project_root(start)
    return root, read_module_name(root), load_project_config(root)
