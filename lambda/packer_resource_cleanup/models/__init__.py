"""Data models for packer resource cleanup."""

from .cleanup_report import CleanupReport
from .config import RunConfig
from .packer_instance import (
    ClassifiedInstances,
    InstanceRef,
    PackerInstance,
    SecurityGroup,
)

__all__ = [
    "CleanupReport",
    "RunConfig",
    "ClassifiedInstances",
    "InstanceRef",
    "PackerInstance",
    "SecurityGroup",
]
