"""Instance snapshots and their retention classification."""

from __future__ import annotations
import datetime
from dataclasses import dataclass, field


@dataclass(frozen=True)
class PackerInstance:
    """Read-only view of a tagged instance at discovery time."""

    instance_id: str
    launch_time: datetime.datetime
    security_group_id: str | None = None
    key_name: str | None = None
    state: str = "running"
    tags: dict[str, str] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class InstanceRef:
    """Instance id plus the auxiliary resources it holds."""

    instance_id: str
    security_group_id: str
    key_name: str


@dataclass(frozen=True)
class ClassifiedInstances:
    """Instances split by age into kill and save sets."""

    to_kill: tuple[InstanceRef, ...] = ()
    to_save: tuple[InstanceRef, ...] = ()

    @property
    def kill_ids(self) -> list[str]:
        return [ref.instance_id for ref in self.to_kill]

    @property
    def saved_key_pairs(self) -> list[str]:
        return [ref.key_name for ref in self.to_save]

    @property
    def saved_security_groups(self) -> list[str]:
        return [ref.security_group_id for ref in self.to_save]


@dataclass(frozen=True)
class SecurityGroup:
    """Security group id and name as listed by the provider."""

    group_id: str
    group_name: str
