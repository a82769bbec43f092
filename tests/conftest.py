"""Pytest configuration and shared fixtures for packer resource cleanup tests."""

from __future__ import annotations
import datetime
import pytest
from typing import Any

from packer_resource_cleanup.models import PackerInstance, RunConfig
from packer_resource_cleanup.providers import InMemoryProvider


class InstanceBuilder:
    """Builder for describe_instances entries as returned by boto3."""

    def __init__(self):
        self._instance = {
            "InstanceId": "i-test123456",
            "State": {"Name": "running"},
            "LaunchTime": datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc),
            "KeyName": "packer_test",
            "SecurityGroups": [{"GroupId": "sg-test", "GroupName": "packer_test"}],
            "Tags": [],
        }

    def with_instance_id(self, instance_id: str) -> InstanceBuilder:
        """Set instance ID."""
        self._instance["InstanceId"] = instance_id
        return self

    def with_state(self, state: str) -> InstanceBuilder:
        """Set instance state (running, pending)."""
        self._instance["State"]["Name"] = state
        return self

    def with_launch_time(self, launch_time: datetime.datetime) -> InstanceBuilder:
        """Set launch time."""
        self._instance["LaunchTime"] = launch_time
        return self

    def with_key_name(self, key_name: str | None) -> InstanceBuilder:
        """Set key pair name, None removes it."""
        if key_name is None:
            self._instance.pop("KeyName", None)
        else:
            self._instance["KeyName"] = key_name
        return self

    def with_security_groups(self, *group_ids: str) -> InstanceBuilder:
        """Replace attached security groups."""
        self._instance["SecurityGroups"] = [
            {"GroupId": group_id, "GroupName": f"packer_{group_id}"}
            for group_id in group_ids
        ]
        return self

    def with_tag(self, key: str, value: str) -> InstanceBuilder:
        """Add custom tag."""
        self._instance["Tags"].append({"Key": key, "Value": value})
        return self

    def build(self) -> dict[str, Any]:
        """Build and return the instance dictionary."""
        return self._instance


@pytest.fixture
def instance_builder():
    """Fixture that returns a new InstanceBuilder."""
    return InstanceBuilder()


@pytest.fixture
def now():
    """Fixed 'now' for retention decisions."""
    return datetime.datetime(2024, 6, 1, 12, 0, tzinfo=datetime.timezone.utc)


@pytest.fixture
def make_instance(now):
    """Factory fixture for PackerInstance snapshots.

    Example:
        instance = make_instance("i-1", minutes_old=50)
        orphan = make_instance("i-2", key_name=None)
    """

    def _make(
        instance_id: str = "i-test",
        minutes_old: float = 0,
        security_group_id: str | None = "sg-test",
        key_name: str | None = "packer_test",
        state: str = "running",
    ) -> PackerInstance:
        return PackerInstance(
            instance_id=instance_id,
            launch_time=now - datetime.timedelta(minutes=minutes_old),
            security_group_id=security_group_id,
            key_name=key_name,
            state=state,
        )

    return _make


@pytest.fixture
def run_config():
    """Live-mode config with no sleeping between termination polls."""
    return RunConfig(
        tag_key="Builder",
        tag_value="packer",
        region="us-east-1",
        dry_run=False,
        retention_minutes=45,
        max_attempts=20,
        poll_interval=0,
    )


@pytest.fixture
def packer_provider(now):
    """In-memory region with one stale build, one active build and leftovers.

    - i-old: launched 50 minutes ago, packer_old / sg-old
    - i-new: launched 10 minutes ago, packer_new / sg-new
    - packer_orphan / sg-orphan: not attached to any instance
    - default key pair and security group outside the packer convention
    """
    provider = InMemoryProvider()
    tags = {"Builder": "packer"}

    provider.add_instance(
        "i-old",
        now - datetime.timedelta(minutes=50),
        security_group_id="sg-old",
        key_name="packer_old",
        tags=tags,
    )
    provider.add_instance(
        "i-new",
        now - datetime.timedelta(minutes=10),
        security_group_id="sg-new",
        key_name="packer_new",
        tags=tags,
    )

    for name in ("packer_old", "packer_new", "packer_orphan", "deploy-key"):
        provider.add_key_pair(name)

    provider.add_security_group("sg-old", "packer_5f1a")
    provider.add_security_group("sg-new", "packer_5f1b")
    provider.add_security_group("sg-orphan", "packer_5f1c")
    provider.add_security_group("sg-default", "default")

    return provider
