"""Packer instance termination and confirmation."""

from __future__ import annotations
import time
from typing import Sequence

from ..exceptions import TerminationTimeoutError
from ..models.config import (
    TERMINATED_STATE,
    TERMINATION_MAX_ATTEMPTS,
    TERMINATION_POLL_INTERVAL_SECONDS,
)
from ..providers import MutationProvider
from ..utils import get_logger, unique

logger = get_logger()


def confirm_termination(
    provider: MutationProvider,
    instance_ids: Sequence[str],
    max_attempts: int = TERMINATION_MAX_ATTEMPTS,
    poll_interval: int = TERMINATION_POLL_INTERVAL_SECONDS,
) -> int:
    """
    Poll until every instance reports 'terminated'.

    Each round queries only the ids still pending and rebuilds the pending
    list from the answer. Query errors propagate immediately.

    Returns:
        Number of polls it took to confirm all instances

    Raises:
        TerminationTimeoutError: ids still pending after max_attempts polls
    """
    pending = unique(instance_ids)

    for attempt in range(1, max_attempts + 1):
        logger.info(
            "Polling AWS to confirm instance termination...",
            extra={"attempt": attempt, "pending": len(pending)},
        )
        states = provider.query_instance_state(pending)
        pending = [
            instance_id
            for instance_id in pending
            if states.get(instance_id) != TERMINATED_STATE
        ]

        if not pending:
            logger.info("All instances terminated", extra={"attempts": attempt})
            return attempt

        if attempt < max_attempts:
            time.sleep(poll_interval)

    logger.error(
        "Instance termination not confirmed",
        extra={"pending_instances": pending, "attempts": max_attempts},
    )
    raise TerminationTimeoutError(pending, max_attempts)


def terminate_packer_instances(
    provider: MutationProvider,
    instance_ids: Sequence[str],
    max_attempts: int = TERMINATION_MAX_ATTEMPTS,
    poll_interval: int = TERMINATION_POLL_INTERVAL_SECONDS,
) -> int:
    """Terminate instances and wait for the termination to complete."""
    if not instance_ids:
        return 0

    states = provider.terminate_instances(instance_ids)
    for instance_id, state in states.items():
        logger.info(
            f"Instance {instance_id} is now in state {state}",
            extra={"instance_id": instance_id, "state": state},
        )

    return confirm_termination(provider, instance_ids, max_attempts, poll_interval)
