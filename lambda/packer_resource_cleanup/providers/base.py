"""Capability interfaces the cleanup core depends on."""

from __future__ import annotations
from typing import Protocol, Sequence

from ..models import PackerInstance, SecurityGroup


class DiscoveryProvider(Protocol):
    """Read-only access to compute resources.

    Implementations raise DiscoveryError when a listing fails.
    """

    def list_instances(
        self, tag_key: str, tag_value: str, states: Sequence[str]
    ) -> list[PackerInstance]: ...

    def list_key_pairs(self) -> list[str]: ...

    def list_security_groups(self) -> list[SecurityGroup]: ...


class MutationProvider(Protocol):
    """Destructive operations.

    delete_* raise ResourceDeletionError; terminate_instances and
    query_instance_state raise TerminationError.
    """

    def delete_key_pair(self, name: str) -> None: ...

    def delete_security_group(self, group_id: str) -> None: ...

    def terminate_instances(self, instance_ids: Sequence[str]) -> dict[str, str]: ...

    def query_instance_state(self, instance_ids: Sequence[str]) -> dict[str, str]: ...


class CloudProvider(DiscoveryProvider, MutationProvider, Protocol):
    """Discovery and mutation for a single region."""
