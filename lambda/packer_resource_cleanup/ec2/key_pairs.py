"""Packer key pair discovery and deletion."""

from __future__ import annotations
from typing import Sequence

from ..exceptions import ResourceDeletionError
from ..models.config import KEY_PAIR_PREFIX
from ..providers import DiscoveryProvider, MutationProvider
from ..utils import filter_by_prefix, get_logger

logger = get_logger()


def get_packer_key_pairs(provider: DiscoveryProvider) -> list[str]:
    """Return names of all key pairs starting with 'packer_'."""
    return filter_by_prefix(provider.list_key_pairs(), KEY_PAIR_PREFIX)


def delete_key_pairs(
    provider: MutationProvider,
    names: Sequence[str],
    dry_run: bool,
    failures: dict[str, str] | None = None,
) -> list[str]:
    """
    Delete key pairs one by one.

    A failed delete is logged and recorded in ``failures``; the remaining
    key pairs are still processed.

    Returns:
        Names that were deleted (or would be, in dry-run mode)
    """
    deleted = []
    for name in names:
        if dry_run:
            logger.info(
                "Would DELETE key pair", extra={"dry_run": True, "key_name": name}
            )
            deleted.append(name)
            continue

        logger.info("DELETE key pair", extra={"key_name": name})
        try:
            provider.delete_key_pair(name)
        except ResourceDeletionError as e:
            logger.error(
                "Failed to delete key pair", extra={"key_name": name, "error": str(e)}
            )
            if failures is not None:
                failures[name] = str(e)
            continue
        deleted.append(name)

    return deleted
