"""Packer security group discovery and deletion."""

from __future__ import annotations
from typing import Sequence

from ..exceptions import ResourceDeletionError
from ..models.config import SECURITY_GROUP_PREFIX
from ..providers import DiscoveryProvider, MutationProvider
from ..utils import get_logger

logger = get_logger()


def get_packer_security_groups(provider: DiscoveryProvider) -> list[str]:
    """Return ids of all security groups whose name starts with 'packer'."""
    return [
        sg.group_id
        for sg in provider.list_security_groups()
        if sg.group_name.startswith(SECURITY_GROUP_PREFIX)
    ]


def delete_security_groups(
    provider: MutationProvider,
    group_ids: Sequence[str],
    dry_run: bool,
    failures: dict[str, str] | None = None,
) -> list[str]:
    """Delete security groups, continuing past individual failures."""
    deleted = []
    for group_id in group_ids:
        if dry_run:
            logger.info(
                "Would DELETE security group",
                extra={"dry_run": True, "group_id": group_id},
            )
            deleted.append(group_id)
            continue

        logger.info("DELETE security group", extra={"group_id": group_id})
        try:
            provider.delete_security_group(group_id)
        except ResourceDeletionError as e:
            # Usually DependencyViolation while an instance still holds the group
            logger.error(
                "Failed to delete security group",
                extra={"group_id": group_id, "error": str(e)},
            )
            if failures is not None:
                failures[group_id] = str(e)
            continue
        deleted.append(group_id)

    return deleted
