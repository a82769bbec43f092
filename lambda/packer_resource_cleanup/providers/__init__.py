"""Compute providers for packer resource cleanup."""

from .aws import Ec2Provider
from .base import CloudProvider, DiscoveryProvider, MutationProvider
from .memory import InMemoryProvider

__all__ = [
    "CloudProvider",
    "DiscoveryProvider",
    "MutationProvider",
    "Ec2Provider",
    "InMemoryProvider",
]
