"""Main entry points for packer build resource cleanup."""

from __future__ import annotations
import datetime
import json
import time
from typing import Any

from .ec2 import (
    classify_instances,
    delete_key_pairs,
    delete_security_groups,
    get_packer_key_pairs,
    get_packer_security_groups,
    terminate_packer_instances,
)
from .exceptions import CleanupError
from .models import CleanupReport, RunConfig
from .providers import CloudProvider, Ec2Provider
from .utils import get_logger, symmetric_difference

logger = get_logger()


def unretained(retained: list[str], candidates: list[str]) -> list[str]:
    """
    Names from candidates that no retained instance references.

    The symmetric difference can also yield names held by retained
    instances that fall outside the packer naming convention; those are
    never deleted.
    """
    candidate_set = set(candidates)
    deletable = []
    for name in symmetric_difference(retained, candidates):
        if name in candidate_set:
            deletable.append(name)
        else:
            logger.warning(
                "Skipping resource outside packer naming convention",
                extra={"resource_id": name},
            )
    return deletable


def plan_cleanup(
    provider: CloudProvider,
    config: RunConfig,
    now: datetime.datetime | None = None,
) -> CleanupReport:
    """
    Discover packer resources and decide what to remove.

    Nothing is mutated; the returned report lists the instances to
    terminate and the key pairs and security groups to delete.
    """
    logger.info(
        "Starting packer resource cleanup",
        extra={
            "region": config.region,
            "tag_key": config.tag_key,
            "tag_value": config.tag_value,
            "dry_run": config.dry_run,
        },
    )

    instances = provider.list_instances(
        config.tag_key, config.tag_value, config.instance_states
    )
    classified = classify_instances(
        instances,
        now=now,
        threshold=datetime.timedelta(minutes=config.retention_minutes),
    )

    all_key_pairs = get_packer_key_pairs(provider)
    all_security_groups = get_packer_security_groups(provider)

    report = CleanupReport(
        region=config.region,
        dry_run=config.dry_run,
        instances_to_terminate=classified.kill_ids,
        instances_retained=[ref.instance_id for ref in classified.to_save],
        security_groups_to_delete=unretained(
            classified.saved_security_groups, all_security_groups
        ),
        key_pairs_to_delete=unretained(classified.saved_key_pairs, all_key_pairs),
    )

    logger.info(
        f"Scan for {config.region}: {len(instances)} instances, "
        f"{len(report.instances_to_terminate)} to terminate, "
        f"{len(report.instances_retained)} retained, "
        f"{len(report.security_groups_to_delete)} security groups, "
        f"{len(report.key_pairs_to_delete)} key pairs"
    )
    return report


def execute_cleanup(
    provider: CloudProvider, config: RunConfig, report: CleanupReport
) -> CleanupReport:
    """
    Act on a planned report: log it in dry-run mode, otherwise terminate
    and delete.

    Termination errors propagate before any key pair or security group is
    touched. Delete failures are recorded in the report.
    """
    start_time = time.time()

    if config.dry_run:
        for instance_id in report.instances_to_terminate:
            logger.info(
                "Would TERMINATE instance",
                extra={"dry_run": True, "instance_id": instance_id},
            )
        delete_key_pairs(provider, report.key_pairs_to_delete, dry_run=True)
        delete_security_groups(
            provider, report.security_groups_to_delete, dry_run=True
        )
        return report

    if report.instances_to_terminate:
        report.termination_polls = terminate_packer_instances(
            provider,
            report.instances_to_terminate,
            max_attempts=config.max_attempts,
            poll_interval=config.poll_interval,
        )
        report.terminated_instances = list(report.instances_to_terminate)

    report.deleted_key_pairs = delete_key_pairs(
        provider, report.key_pairs_to_delete, dry_run=False, failures=report.failures
    )
    report.deleted_security_groups = delete_security_groups(
        provider,
        report.security_groups_to_delete,
        dry_run=False,
        failures=report.failures,
    )

    duration = time.time() - start_time
    logger.info(
        f"Completed {config.region} in {duration:.1f}s: "
        f"{len(report.terminated_instances)} instances terminated, "
        f"{len(report.deleted_key_pairs)} key pairs, "
        f"{len(report.deleted_security_groups)} security groups deleted, "
        f"{len(report.failures)} failures"
    )
    return report


def cleanup_packer_resources(
    provider: CloudProvider,
    config: RunConfig,
    now: datetime.datetime | None = None,
) -> CleanupReport:
    """
    Run one cleanup pass against a single region.

    Discovery and termination errors propagate and abort the run. Key pair
    and security group delete failures are recorded in the report.
    """
    report = plan_cleanup(provider, config, now=now)
    return execute_cleanup(provider, config, report)


def config_from_event(event: dict[str, Any] | None) -> RunConfig:
    """Environment config, overridden by keys present in the event."""
    config = RunConfig.from_env()
    event = event or {}

    for key in ("tag_key", "tag_value", "region"):
        if event.get(key):
            setattr(config, key, event[key])
    if "dry_run" in event:
        dry_run = event["dry_run"]
        config.dry_run = (
            dry_run.lower() == "true" if isinstance(dry_run, str) else bool(dry_run)
        )
    return config.validate()


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Main Lambda handler."""
    try:
        config = config_from_event(event)
        provider = Ec2Provider(config.region)
        report = cleanup_packer_resources(provider, config)

        return {
            "statusCode": 200,
            "body": json.dumps(report.to_dict()),
        }

    except CleanupError as e:
        logger.error(f"Packer resource cleanup failed: {e}")
        raise
