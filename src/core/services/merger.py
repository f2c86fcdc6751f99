"""Merge of the stored banned-password list with new entries.

Eviction on overflow keeps the first `max_size` values in ordinal order.
Callers that need "keep newest" semantics have to pre-filter their input.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from core.domain.models import PasswordList
from core.domain.policy import MAX_LIST_SIZE


@dataclass
class MergeReport:
    """Merged list plus what changed relative to the existing list."""

    password_list: PasswordList
    added: list[str] = field(default_factory=list)
    evicted: list[str] = field(default_factory=list)


def merge_with_report(
    existing: PasswordList,
    incoming: Iterable[str],
    max_size: int = MAX_LIST_SIZE,
) -> MergeReport:
    if max_size < 0:
        raise ValueError(f"max_size must be >= 0, got {max_size}")

    union = sorted({*existing.values, *incoming})
    kept, evicted = union[:max_size], union[max_size:]

    already = set(existing.values)
    added = [value for value in kept if value not in already]

    return MergeReport(
        password_list=PasswordList.of(kept),
        added=added,
        evicted=evicted,
    )


def merge_password_lists(
    existing: PasswordList,
    incoming: Iterable[str],
    max_size: int = MAX_LIST_SIZE,
) -> PasswordList:
    """Union, ordinal sort, and truncation to `max_size`."""

    return merge_with_report(existing, incoming, max_size).password_list
