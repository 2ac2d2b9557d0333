"""
Project configuration for lvt.
"""

from .project import (
    DEFAULT_KIT,
    PROJECT_CONFIG_FILE,
    VALID_KITS,
    ProjectConfig,
    find_project_root,
    load_project_config,
    read_module_name,
    save_project_config,
)

__all__ = [
    "DEFAULT_KIT",
    "PROJECT_CONFIG_FILE",
    "VALID_KITS",
    "ProjectConfig",
    "find_project_root",
    "load_project_config",
    "read_module_name",
    "save_project_config",
]
