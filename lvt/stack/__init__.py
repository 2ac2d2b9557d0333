"""Deployment stack generation and ``.lvtstack`` tracking."""

from .generators import (
    GENERATORS,
    CIGenerator,
    DigitalOceanGenerator,
    DockerGenerator,
    FlyGenerator,
    KubernetesGenerator,
    StackGenerator,
    generate_stack,
    render_stack,
    required_secrets,
)
from .tracking import TRACKING_FILE, TrackedFile, TrackingFile, file_checksum, read_tracking_file
from .types import PROVIDERS, StackConfig

__all__ = [
    "GENERATORS",
    "CIGenerator",
    "DigitalOceanGenerator",
    "DockerGenerator",
    "FlyGenerator",
    "KubernetesGenerator",
    "StackGenerator",
    "generate_stack",
    "render_stack",
    "required_secrets",
    "TRACKING_FILE",
    "TrackedFile",
    "TrackingFile",
    "file_checksum",
    "read_tracking_file",
    "PROVIDERS",
    "StackConfig",
]
