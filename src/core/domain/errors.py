"""Error taxonomy for banlist-sync.

Validation rejections are *not* exceptions: they are collected as
`ValidationRejected` models and reported. Everything here is fatal to a run.
"""

from __future__ import annotations

from enum import Enum


class WriteOperation(str, Enum):
    """Remote write operations the reconciler can emit."""

    CREATE = "create"
    UPDATE = "update"


class BanlistSyncError(Exception):
    """Base class for every error surfaced to the CLI."""


class CandidateSourceError(BanlistSyncError):
    """The candidate file could not be read or has no password column."""


class EmptyInputError(BanlistSyncError):
    """No candidate survived validation; nothing to merge."""

    def __init__(self, rejected_count: int = 0) -> None:
        self.rejected_count = rejected_count
        super().__init__(
            f"No valid banned-password entries to sync ({rejected_count} rejected)."
        )


class DirectoryError(BanlistSyncError):
    """Any failure talking to the directory service."""


class DirectoryReadError(DirectoryError):
    """Lookup or fetch of a policy object failed."""


class DirectoryAuthError(DirectoryReadError):
    """Could not obtain an access token for the directory service."""


class DirectoryWriteError(DirectoryError):
    """Create or update of the policy object failed."""

    def __init__(self, operation: WriteOperation, cause: BaseException | str) -> None:
        self.operation = WriteOperation(operation)
        self.cause = cause
        super().__init__(f"Directory {self.operation.value} failed: {cause}")
