"""
Project configuration (``.lvtrc``).

Loads with precedence (later overrides earlier):
    1. defaults (kit=multi, dev_mode=true)
    2. ``.lvtrc`` in the project root
    3. ``.env`` in the project root (loaded into the environment)
    4. ``LVT_KIT`` / ``LVT_DEV_MODE`` environment variables
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import dotenv_values, load_dotenv

from ..faults.domains import ConfigFault, ConfigInvalidFault

logger = logging.getLogger("lvt.config")

PROJECT_CONFIG_FILE = ".lvtrc"
VALID_KITS = ("multi", "single", "simple")
DEFAULT_KIT = "multi"

_TRUTHY = {"1", "true", "yes", "on"}


def _as_bool(value: str) -> bool:
    return value.strip().lower() in _TRUTHY


@dataclass
class ProjectConfig:
    module: str = ""
    kit: str = DEFAULT_KIT
    dev_mode: bool = True

    def get_kit(self) -> str:
        return self.kit or DEFAULT_KIT

    def validate(self) -> None:
        if self.get_kit() not in VALID_KITS:
            raise ConfigInvalidFault(
                "kit", f"{self.kit} (valid: {', '.join(VALID_KITS)})"
            )

    def to_lines(self) -> str:
        lines = []
        if self.module:
            lines.append(f'module="{self.module}"')
        if self.kit:
            lines.append(f"kit={self.kit}")
        lines.append(f"dev_mode={'true' if self.dev_mode else 'false'}")
        return "\n".join(lines) + "\n"


def load_project_config(
    base_path: Union[str, Path] = ".",
    *,
    use_env: bool = True,
) -> ProjectConfig:
    """
    Load ``.lvtrc`` from ``base_path``.

    A missing file yields the defaults. Unknown keys are ignored.
    """
    base = Path(base_path)
    config = ProjectConfig()

    path = base / PROJECT_CONFIG_FILE
    if path.is_file():
        try:
            values = dotenv_values(path)
        except OSError as exc:
            raise ConfigFault(
                code="CONFIG_READ_FAILED",
                message=f"failed to read project config {path}: {exc}",
            ) from exc
        if values.get("module"):
            config.module = values["module"]
        if values.get("kit"):
            config.kit = values["kit"]
        if values.get("dev_mode") is not None:
            config.dev_mode = _as_bool(values["dev_mode"])
        logger.debug("Loaded %s: %s", path, config)

    if use_env:
        env_file = base / ".env"
        if env_file.is_file():
            load_dotenv(env_file, override=False)
        if os.environ.get("LVT_KIT"):
            config.kit = os.environ["LVT_KIT"]
        if os.environ.get("LVT_DEV_MODE"):
            config.dev_mode = _as_bool(os.environ["LVT_DEV_MODE"])

    return config


def save_project_config(base_path: Union[str, Path], config: ProjectConfig) -> Path:
    path = Path(base_path) / PROJECT_CONFIG_FILE
    try:
        path.write_text(config.to_lines(), encoding="utf-8")
    except OSError as exc:
        raise ConfigFault(
            code="CONFIG_WRITE_FAILED",
            message=f"failed to write project config: {exc}",
        ) from exc
    return path


def find_project_root(start: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """Nearest ancestor holding ``.lvtrc`` or ``go.mod``."""
    current = Path(start or os.getcwd()).resolve()
    while True:
        if (current / PROJECT_CONFIG_FILE).is_file() or (current / "go.mod").is_file():
            return current
        if current.parent == current:
            return None
        current = current.parent


def read_module_name(base_path: Union[str, Path] = ".") -> str:
    """
    Module path from ``go.mod``, falling back to ``.lvtrc``.

    Raises:
        ConfigFault: If neither declares one.
    """
    go_mod = Path(base_path) / "go.mod"
    if go_mod.is_file():
        for line in go_mod.read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if line.startswith("module "):
                return line[len("module"):].strip()

    module = load_project_config(base_path, use_env=False).module
    if module:
        return module

    raise ConfigFault(
        code="MODULE_NOT_FOUND",
        message="module name not found in go.mod. Run this command from your project root.",
    )
