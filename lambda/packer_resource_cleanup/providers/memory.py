"""In-memory provider for tests and local dry runs."""

from __future__ import annotations
import datetime
from typing import Sequence

from ..exceptions import DiscoveryError, ResourceDeletionError, TerminationError
from ..models import PackerInstance, SecurityGroup
from ..models.config import TERMINATED_STATE


class InMemoryProvider:
    """Dict-backed stand-in for a region's compute API.

    Terminated instances move to 'shutting-down' and report 'terminated'
    once they have been queried ``polls_until_terminated`` times. Ids listed
    in ``never_terminate`` stay in 'shutting-down' forever. Names in
    ``failing_deletes`` raise ResourceDeletionError. Set ``discovery_error``
    or ``termination_error`` to make the matching calls fail.
    """

    def __init__(
        self,
        polls_until_terminated: int = 1,
        never_terminate: Sequence[str] = (),
        failing_deletes: Sequence[str] = (),
    ):
        self.instances: dict[str, PackerInstance] = {}
        self.instance_states: dict[str, str] = {}
        self.key_pairs: list[str] = []
        self.security_groups: dict[str, SecurityGroup] = {}
        self.polls_until_terminated = polls_until_terminated
        self.never_terminate = set(never_terminate)
        self.failing_deletes = set(failing_deletes)
        self.discovery_error: str | None = None
        self.termination_error: str | None = None
        self.calls: list[tuple[str, tuple[str, ...]]] = []
        self._polls_seen: dict[str, int] = {}

    def add_instance(
        self,
        instance_id: str,
        launch_time: datetime.datetime,
        security_group_id: str | None = None,
        key_name: str | None = None,
        state: str = "running",
        tags: dict[str, str] | None = None,
    ) -> PackerInstance:
        instance = PackerInstance(
            instance_id=instance_id,
            launch_time=launch_time,
            security_group_id=security_group_id,
            key_name=key_name,
            state=state,
            tags=dict(tags or {}),
        )
        self.instances[instance_id] = instance
        self.instance_states[instance_id] = state
        return instance

    def add_key_pair(self, name: str) -> None:
        self.key_pairs.append(name)

    def add_security_group(self, group_id: str, group_name: str) -> None:
        self.security_groups[group_id] = SecurityGroup(group_id, group_name)

    def list_instances(
        self, tag_key: str, tag_value: str, states: Sequence[str]
    ) -> list[PackerInstance]:
        self._check_discovery()
        return [
            instance
            for instance_id, instance in self.instances.items()
            if instance.tags.get(tag_key) == tag_value
            and self.instance_states[instance_id] in states
        ]

    def list_key_pairs(self) -> list[str]:
        self._check_discovery()
        return list(self.key_pairs)

    def list_security_groups(self) -> list[SecurityGroup]:
        self._check_discovery()
        return list(self.security_groups.values())

    def delete_key_pair(self, name: str) -> None:
        self.calls.append(("delete_key_pair", (name,)))
        if name in self.failing_deletes:
            raise ResourceDeletionError(name, "simulated failure")
        if name in self.key_pairs:
            self.key_pairs.remove(name)

    def delete_security_group(self, group_id: str) -> None:
        self.calls.append(("delete_security_group", (group_id,)))
        if group_id in self.failing_deletes:
            raise ResourceDeletionError(group_id, "simulated failure")
        self.security_groups.pop(group_id, None)

    def terminate_instances(self, instance_ids: Sequence[str]) -> dict[str, str]:
        self.calls.append(("terminate_instances", tuple(instance_ids)))
        if self.termination_error:
            raise TerminationError(self.termination_error)
        for instance_id in instance_ids:
            if instance_id not in self.instances:
                raise TerminationError(f"Unknown instance {instance_id}")
            self.instance_states[instance_id] = "shutting-down"
            self._polls_seen[instance_id] = 0
        return {instance_id: self.instance_states[instance_id] for instance_id in instance_ids}

    def query_instance_state(self, instance_ids: Sequence[str]) -> dict[str, str]:
        self.calls.append(("query_instance_state", tuple(instance_ids)))
        if self.termination_error:
            raise TerminationError(self.termination_error)
        states = {}
        for instance_id in instance_ids:
            if instance_id not in self.instance_states:
                continue
            if self.instance_states[instance_id] == "shutting-down":
                self._polls_seen[instance_id] += 1
                if (
                    instance_id not in self.never_terminate
                    and self._polls_seen[instance_id] >= self.polls_until_terminated
                ):
                    self.instance_states[instance_id] = TERMINATED_STATE
            states[instance_id] = self.instance_states[instance_id]
        return states

    def _check_discovery(self) -> None:
        if self.discovery_error:
            raise DiscoveryError(self.discovery_error)
