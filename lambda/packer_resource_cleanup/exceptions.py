"""Error taxonomy for a cleanup run.

Discovery, termination and configuration errors abort the run. Deletion
errors are raised per resource and handled by the caller so the remaining
resources are still processed.
"""

from __future__ import annotations
from typing import Iterable


class CleanupError(Exception):
    """Base class for all cleanup errors."""


class ConfigurationError(CleanupError):
    """Required run settings are missing or invalid."""

    def __init__(self, message: str, missing: Iterable[str] = ()):
        super().__init__(message)
        self.missing = list(missing)


class DiscoveryError(CleanupError):
    """Listing instances, key pairs or security groups failed."""


class InstanceAssociationError(DiscoveryError):
    """A discovered instance has no security group or key pair."""

    def __init__(self, instance_id: str, missing: str):
        super().__init__(f"Instance {instance_id} has no {missing} associated")
        self.instance_id = instance_id
        self.missing = missing


class TerminationError(CleanupError):
    """Terminating instances or querying their state failed."""


class TerminationTimeoutError(TerminationError):
    """Instances did not reach 'terminated' within the poll budget."""

    def __init__(self, pending_ids: Iterable[str], attempts: int):
        self.pending_ids = list(pending_ids)
        self.attempts = attempts
        super().__init__(
            f"Unable to confirm termination of instances {self.pending_ids} "
            f"after {attempts} attempts"
        )


class ResourceDeletionError(CleanupError):
    """Deleting a single key pair or security group failed."""

    def __init__(self, resource_id: str, message: str):
        super().__init__(f"Failed to delete {resource_id}: {message}")
        self.resource_id = resource_id
