"""Configuration from environment variables."""

from __future__ import annotations
import os
from dataclasses import dataclass, field

from ..exceptions import ConfigurationError

# Configuration from environment variables
DRY_RUN = os.environ.get("DRY_RUN", "true").lower() == "true"
TAG_KEY = os.environ.get("TAG_KEY", "")
TAG_VALUE = os.environ.get("TAG_VALUE", "")
TARGET_REGION = (
    os.environ.get("TARGET_REGION")
    or os.environ.get("AWS_REGION")
    or os.environ.get("AWS_DEFAULT_REGION", "")
)

# Instances launched more recently than this are still building
RETENTION_THRESHOLD_MINUTES = int(os.environ.get("RETENTION_THRESHOLD_MINUTES", "45"))

# Fixed termination confirmation budget: 20 x 30s = 10 minutes worst case
TERMINATION_MAX_ATTEMPTS = 20
TERMINATION_POLL_INTERVAL_SECONDS = 30

# Naming convention used by packer for its temporary resources
KEY_PAIR_PREFIX = "packer_"
SECURITY_GROUP_PREFIX = "packer"

INSTANCE_STATES = ("running", "pending")
TERMINATED_STATE = "terminated"


@dataclass
class RunConfig:
    """Settings for one cleanup run."""

    tag_key: str = ""
    tag_value: str = ""
    region: str = ""
    dry_run: bool = False
    retention_minutes: int = RETENTION_THRESHOLD_MINUTES
    max_attempts: int = TERMINATION_MAX_ATTEMPTS
    poll_interval: int = TERMINATION_POLL_INTERVAL_SECONDS
    instance_states: tuple[str, ...] = field(default=INSTANCE_STATES)

    @classmethod
    def from_env(cls) -> RunConfig:
        """Build config from module-level environment settings."""
        return cls(
            tag_key=TAG_KEY,
            tag_value=TAG_VALUE,
            region=TARGET_REGION,
            dry_run=DRY_RUN,
        )

    def validate(self) -> RunConfig:
        """Raise ConfigurationError if a required setting is missing."""
        missing = [
            name
            for name, value in (
                ("tag_key", self.tag_key),
                ("tag_value", self.tag_value),
                ("region", self.region),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required settings: {', '.join(missing)}", missing
            )
        if self.retention_minutes < 0:
            raise ConfigurationError("retention_minutes must not be negative")
        if self.max_attempts < 1:
            raise ConfigurationError("max_attempts must be at least 1")
        return self
