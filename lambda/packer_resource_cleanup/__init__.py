"""Cleanup of resources left behind by failed packer builds."""

from .handler import (
    cleanup_packer_resources,
    execute_cleanup,
    lambda_handler,
    plan_cleanup,
)

__version__ = "1.0.0"
__description__ = "Remove stale packer build instances, key pairs and security groups"

__all__ = [
    "cleanup_packer_resources",
    "execute_cleanup",
    "lambda_handler",
    "plan_cleanup",
]
