"""Candidate entry validation.

Entries are trimmed and checked against the inclusive length bounds of the
directory. Rejections are returned, never raised, so a single bad row does
not abort the run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from core.domain.models import ValidationRejected
from core.domain.policy import MAX_LEN, MIN_LEN


@dataclass
class ValidationOutcome:
    """Accepted values (trimmed, input order) and collected rejections."""

    accepted: list[str] = field(default_factory=list)
    rejected: list[ValidationRejected] = field(default_factory=list)


def validate_entry(
    raw: str,
    *,
    legacy_untrimmed_length: bool = False,
    min_len: int = MIN_LEN,
    max_len: int = MAX_LEN,
) -> str | ValidationRejected:
    """Return the trimmed value, or a `ValidationRejected` describing why not.

    With `legacy_untrimmed_length` the bounds are checked on the raw value
    and the trimmed value is kept, so `"  ab  "` is accepted as `"ab"`.
    """

    value = raw.strip()
    measured = len(raw) if legacy_untrimmed_length else len(value)
    if not value or not (min_len <= measured <= max_len):
        return ValidationRejected(value=raw, reason="length", length=measured)
    return value


def validate_entries(
    raws: Iterable[str],
    *,
    legacy_untrimmed_length: bool = False,
) -> ValidationOutcome:
    outcome = ValidationOutcome()
    for raw in raws:
        result = validate_entry(raw, legacy_untrimmed_length=legacy_untrimmed_length)
        if isinstance(result, ValidationRejected):
            outcome.rejected.append(result)
        else:
            outcome.accepted.append(result)
    return outcome
