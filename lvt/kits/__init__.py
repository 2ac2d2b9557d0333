"""
Kits: app layouts paired with a CSS framework.
"""

from .helpers import FRAMEWORKS, CSSHelpers, helpers_for
from .loader import SYSTEM_KITS, KitInfo, KitLoader, KitManifest, parse_manifest

__all__ = [
    "FRAMEWORKS",
    "CSSHelpers",
    "helpers_for",
    "SYSTEM_KITS",
    "KitInfo",
    "KitLoader",
    "KitManifest",
    "parse_manifest",
]
