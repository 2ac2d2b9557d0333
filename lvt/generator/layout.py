"""
Project layout lookups shared by the generators.
"""

from __future__ import annotations

from pathlib import Path
from typing import Tuple, Union


def database_dir(base_path: Union[str, Path]) -> Path:
    """``internal/database`` when present, otherwise ``database``."""
    base = Path(base_path)
    internal = base / "internal" / "database"
    return internal if internal.is_dir() else base / "database"


def app_dir(base_path: Union[str, Path]) -> Tuple[Path, str]:
    """
    Directory for handler packages and its import sub-path.

    ``internal/app`` when present, otherwise ``app``.
    """
    base = Path(base_path)
    internal = base / "internal" / "app"
    if internal.is_dir():
        return internal, "internal/app"
    return base / "app", "app"
