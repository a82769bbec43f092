"""Age-based retention policy for packer build instances."""

from __future__ import annotations
import datetime
from typing import Iterable

from ..exceptions import InstanceAssociationError
from ..models import ClassifiedInstances, InstanceRef, PackerInstance
from ..models.config import RETENTION_THRESHOLD_MINUTES
from ..utils import get_logger

logger = get_logger()

RETENTION_THRESHOLD = datetime.timedelta(minutes=RETENTION_THRESHOLD_MINUTES)


def instance_ref(instance: PackerInstance) -> InstanceRef:
    """Return the instance's id, security group and key pair.

    Every packer build instance carries one security group and one key
    pair; a missing one aborts the run.
    """
    if not instance.security_group_id:
        raise InstanceAssociationError(instance.instance_id, "security group")
    if not instance.key_name:
        raise InstanceAssociationError(instance.instance_id, "key pair")

    return InstanceRef(
        instance_id=instance.instance_id,
        security_group_id=instance.security_group_id,
        key_name=instance.key_name,
    )


def classify_instances(
    instances: Iterable[PackerInstance],
    now: datetime.datetime | None = None,
    threshold: datetime.timedelta | None = None,
) -> ClassifiedInstances:
    """
    Split instances into kill and save sets by age.

    Instances older than the threshold are killed. An instance exactly at
    the threshold is saved.
    """
    if now is None:
        now = datetime.datetime.now(datetime.timezone.utc)
    if threshold is None:
        threshold = RETENTION_THRESHOLD

    to_kill = []
    to_save = []

    for instance in instances:
        ref = instance_ref(instance)
        age = now - instance.launch_time

        if age > threshold:
            to_kill.append(ref)
        else:
            to_save.append(ref)
            logger.debug(
                "Instance retained",
                extra={
                    "instance_id": ref.instance_id,
                    "age_minutes": round(age.total_seconds() / 60, 1),
                    "threshold_minutes": threshold.total_seconds() / 60,
                },
            )

    return ClassifiedInstances(to_kill=tuple(to_kill), to_save=tuple(to_save))
