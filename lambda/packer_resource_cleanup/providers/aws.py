"""EC2 provider backed by boto3."""

from __future__ import annotations
from typing import Any, Sequence

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import DiscoveryError, ResourceDeletionError, TerminationError
from ..models import PackerInstance, SecurityGroup
from ..utils import convert_tags_to_dict, get_logger

logger = get_logger()


def _error_code(error: Exception) -> str:
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Code", "Unknown")
    return type(error).__name__


def instance_from_response(instance: dict[str, Any]) -> PackerInstance:
    """Build a PackerInstance from a describe_instances entry."""
    security_groups = instance.get("SecurityGroups") or []
    if len(security_groups) > 1:
        logger.warning(
            "Instance has more than one security group, using the first",
            extra={
                "instance_id": instance["InstanceId"],
                "security_groups": [sg["GroupId"] for sg in security_groups],
            },
        )

    return PackerInstance(
        instance_id=instance["InstanceId"],
        launch_time=instance["LaunchTime"],
        security_group_id=security_groups[0]["GroupId"] if security_groups else None,
        key_name=instance.get("KeyName"),
        state=instance.get("State", {}).get("Name", ""),
        tags=convert_tags_to_dict(instance.get("Tags", [])),
    )


class Ec2Provider:
    """EC2 discovery and mutation for one region."""

    def __init__(self, region: str, client: Any = None):
        self.region = region
        self.ec2 = client or boto3.client("ec2", region_name=region)

    def list_instances(
        self, tag_key: str, tag_value: str, states: Sequence[str]
    ) -> list[PackerInstance]:
        filters = [
            {"Name": f"tag:{tag_key}", "Values": [tag_value]},
            {"Name": "instance-state-name", "Values": list(states)},
        ]
        try:
            paginator = self.ec2.get_paginator("describe_instances")
            instances = []
            for page in paginator.paginate(Filters=filters):
                for reservation in page["Reservations"]:
                    for instance in reservation["Instances"]:
                        instances.append(instance_from_response(instance))
        except (ClientError, BotoCoreError) as e:
            logger.error(
                "Failed to describe instances",
                extra={"region": self.region, "error_code": _error_code(e)},
            )
            raise DiscoveryError(f"Unable to list instances in {self.region}: {e}") from e

        return instances

    def list_key_pairs(self) -> list[str]:
        try:
            response = self.ec2.describe_key_pairs()
        except (ClientError, BotoCoreError) as e:
            logger.error(
                "Failed to describe key pairs",
                extra={"region": self.region, "error_code": _error_code(e)},
            )
            raise DiscoveryError(f"Unable to list key pairs in {self.region}: {e}") from e

        return [key["KeyName"] for key in response.get("KeyPairs", [])]

    def list_security_groups(self) -> list[SecurityGroup]:
        try:
            paginator = self.ec2.get_paginator("describe_security_groups")
            groups = []
            for page in paginator.paginate():
                for sg in page["SecurityGroups"]:
                    groups.append(
                        SecurityGroup(group_id=sg["GroupId"], group_name=sg["GroupName"])
                    )
        except (ClientError, BotoCoreError) as e:
            logger.error(
                "Failed to describe security groups",
                extra={"region": self.region, "error_code": _error_code(e)},
            )
            raise DiscoveryError(
                f"Unable to list security groups in {self.region}: {e}"
            ) from e

        return groups

    def delete_key_pair(self, name: str) -> None:
        try:
            self.ec2.delete_key_pair(KeyName=name)
        except (ClientError, BotoCoreError) as e:
            raise ResourceDeletionError(name, f"{_error_code(e)} - {e}") from e

    def delete_security_group(self, group_id: str) -> None:
        try:
            self.ec2.delete_security_group(GroupId=group_id)
        except (ClientError, BotoCoreError) as e:
            raise ResourceDeletionError(group_id, f"{_error_code(e)} - {e}") from e

    def terminate_instances(self, instance_ids: Sequence[str]) -> dict[str, str]:
        try:
            response = self.ec2.terminate_instances(InstanceIds=list(instance_ids))
        except (ClientError, BotoCoreError) as e:
            raise TerminationError(
                f"Unable to terminate instances {list(instance_ids)}: {e}"
            ) from e

        return {
            item["InstanceId"]: item["CurrentState"]["Name"]
            for item in response.get("TerminatingInstances", [])
        }

    def query_instance_state(self, instance_ids: Sequence[str]) -> dict[str, str]:
        try:
            response = self.ec2.describe_instance_status(
                InstanceIds=list(instance_ids), IncludeAllInstances=True
            )
        except (ClientError, BotoCoreError) as e:
            raise TerminationError(
                f"Unable to query state of instances {list(instance_ids)}: {e}"
            ) from e

        return {
            status["InstanceId"]: status["InstanceState"]["Name"]
            for status in response.get("InstanceStatuses", [])
        }
