"""AWS helper functions."""

from __future__ import annotations
from typing import Iterable


def convert_tags_to_dict(tags: list[dict[str, str]] | None) -> dict[str, str]:
    """Convert AWS tag list to dictionary."""
    return {tag["Key"]: tag["Value"] for tag in tags} if tags else {}


def unique(values: Iterable[str]) -> list[str]:
    """Drop repeated values, keeping first-seen order."""
    seen: set[str] = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


def symmetric_difference(a: Iterable[str], b: Iterable[str]) -> list[str]:
    """
    Return every name that appears in exactly one of the two inputs.

    Duplicates inside either input count once. Names only in ``a`` come
    first in their original order, followed by names only in ``b``.
    """
    first = unique(a)
    second = unique(b)
    first_set = set(first)
    second_set = set(second)

    return [name for name in first if name not in second_set] + [
        name for name in second if name not in first_set
    ]


def filter_by_prefix(names: Iterable[str], prefix: str) -> list[str]:
    """Keep names starting with prefix (case-sensitive)."""
    return [name for name in names if name.startswith(prefix)]
