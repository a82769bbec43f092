"""Command line interface."""

from __future__ import annotations
import argparse
import sys

from . import __version__
from .exceptions import CleanupError, ConfigurationError
from .handler import execute_cleanup, plan_cleanup
from .models import RunConfig
from .models.config import RETENTION_THRESHOLD_MINUTES, TAG_KEY, TAG_VALUE, TARGET_REGION
from .providers import Ec2Provider
from .utils import get_logger

logger = get_logger()

# Command line flag for each required RunConfig setting
SETTING_FLAGS = {
    "tag_key": "--tag-key",
    "tag_value": "--tag-value",
    "region": "--region",
}


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="packer-resource-cleanup",
        description="Terminate stale packer build instances and delete their "
        "key pairs and security groups.",
    )
    parser.add_argument(
        "--region", default=TARGET_REGION, help="region to connect to (required)"
    )
    parser.add_argument(
        "--tag-key",
        default=TAG_KEY,
        help="tag key associated to packer builds (required)",
    )
    parser.add_argument(
        "--tag-value",
        default=TAG_VALUE,
        help="tag value associated to packer builds (required)",
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="report actions without executing them"
    )
    parser.add_argument(
        "--retention-minutes",
        type=int,
        default=RETENTION_THRESHOLD_MINUTES,
        help="keep instances younger than this (default: %(default)s)",
    )
    parser.add_argument(
        "--version", action="store_true", help="print version and exit"
    )

    return parser, parser.parse_args(argv)


def main(argv=None, provider=None) -> int:
    parser, args = parse_args(argv)

    if args.version:
        print(f"packer-resource-cleanup version {__version__}")
        return 0

    config = RunConfig(
        tag_key=args.tag_key,
        tag_value=args.tag_value,
        region=args.region,
        dry_run=args.dry_run,
        retention_minutes=args.retention_minutes,
    )
    try:
        config.validate()
    except ConfigurationError as e:
        parser.print_help(sys.stderr)
        if e.missing:
            flags = ", ".join(SETTING_FLAGS.get(name, name) for name in e.missing)
            print(f"\nerror: missing required arguments: {flags}", file=sys.stderr)
        else:
            print(f"\nerror: {e}", file=sys.stderr)
        return 2

    try:
        provider = provider or Ec2Provider(config.region)
        report = plan_cleanup(provider, config)
        for line in report.summary_lines():
            print(line, flush=True)
        execute_cleanup(provider, config, report)
    except CleanupError as e:
        logger.error(f"Cleanup aborted: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 1

    if config.dry_run:
        for line in report.dry_run_lines():
            print(line)
        print("DryRun completed successfully")
        return 0

    for line in report.failure_lines():
        print(line, file=sys.stderr)
    print("Cleanup completed successfully")
    return 0
