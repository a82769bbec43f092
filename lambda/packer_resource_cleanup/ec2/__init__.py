"""EC2 retention policy, termination and auxiliary resource cleanup."""

from .instances import confirm_termination, terminate_packer_instances
from .key_pairs import delete_key_pairs, get_packer_key_pairs
from .policies import RETENTION_THRESHOLD, classify_instances, instance_ref
from .security_groups import delete_security_groups, get_packer_security_groups

__all__ = [
    "confirm_termination",
    "terminate_packer_instances",
    "delete_key_pairs",
    "get_packer_key_pairs",
    "RETENTION_THRESHOLD",
    "classify_instances",
    "instance_ref",
    "delete_security_groups",
    "get_packer_security_groups",
]
