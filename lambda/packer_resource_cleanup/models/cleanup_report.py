"""CleanupReport data class."""

from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Any


@dataclass
class CleanupReport:
    """Outcome of a single cleanup run."""

    region: str
    dry_run: bool
    instances_to_terminate: list[str] = field(default_factory=list)
    instances_retained: list[str] = field(default_factory=list)
    key_pairs_to_delete: list[str] = field(default_factory=list)
    security_groups_to_delete: list[str] = field(default_factory=list)
    terminated_instances: list[str] = field(default_factory=list)
    deleted_key_pairs: list[str] = field(default_factory=list)
    deleted_security_groups: list[str] = field(default_factory=list)
    failures: dict[str, str] = field(default_factory=dict)
    termination_polls: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    def summary_lines(self) -> list[str]:
        """Counts of resources to act on."""
        return [
            f"Found {len(self.instances_to_terminate)} instances to terminate",
            f"Found {len(self.security_groups_to_delete)} security groups to delete",
            f"Found {len(self.key_pairs_to_delete)} key pairs to delete",
        ]

    def dry_run_lines(self) -> list[str]:
        """One line per action that a live run would take."""
        lines = [
            f"Terminating instance {instance_id} - DRYRUN"
            for instance_id in self.instances_to_terminate
        ]
        lines += [
            f"Deleting key pair {name} - DRYRUN" for name in self.key_pairs_to_delete
        ]
        lines += [
            f"Deleting security group {group_id} - DRYRUN"
            for group_id in self.security_groups_to_delete
        ]
        return lines

    def failure_lines(self) -> list[str]:
        return [
            f"Failed to delete {resource_id}: {error}"
            for resource_id, error in self.failures.items()
        ]
