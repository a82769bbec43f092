"""Utility functions for packer resource cleanup."""

from .aws_helpers import (
    convert_tags_to_dict,
    filter_by_prefix,
    symmetric_difference,
    unique,
)
from .logging_config import get_logger

__all__ = [
    "convert_tags_to_dict",
    "filter_by_prefix",
    "symmetric_difference",
    "unique",
    "get_logger",
]
