"""Banned-password sync orchestration.

This module wires validator, merger and reconciler to a `DirectoryClient`
and an optional `AuditExporter`. The CLI delegates the whole run here, which
keeps side-effects (printing, progress) out of the core logic and makes the
pipeline reusable from tests or batch jobs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Sequence

from core.domain.errors import DirectoryReadError, EmptyInputError
from core.domain.models import (
    PasswordList,
    PolicyObject,
    UpdateIntent,
    ValidationRejected,
    WriteIntent,
)
from core.domain.policy import (
    BANNED_PASSWORD_LIST_SETTING,
    BANNED_PASSWORD_TEMPLATE_ID,
    FIXED_SETTINGS,
    MAX_LEN,
    MAX_LIST_SIZE,
    MIN_LEN,
)
from core.interfaces.directory import DirectoryClient
from core.interfaces.exporter import AuditExporter
from core.services.merger import merge_with_report
from core.services.reconciler import (
    apply_write_intent,
    decode_password_list,
    existing_password_list,
    reconcile,
)
from core.services.validator import validate_entries

logger = logging.getLogger(__name__)


@dataclass
class SyncRequest:
    """Parameters that control a sync run."""

    candidates: Sequence[str]
    max_size: int = MAX_LIST_SIZE
    legacy_untrimmed_length: bool = False
    dry_run: bool = False
    export_path: Path | None = None


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (stages, warnings)."""

    warning: Callable[[str], None] | None = None
    stage: Callable[[str], None] | None = None


@dataclass
class SyncResult:
    """Output of a pipeline invocation."""

    merged: PasswordList
    intent: WriteIntent
    existing: PasswordList = field(default_factory=PasswordList)
    accepted: list[str] = field(default_factory=list)
    rejected: list[ValidationRejected] = field(default_factory=list)
    added: list[str] = field(default_factory=list)
    evicted: list[str] = field(default_factory=list)
    policy_id: str | None = None
    written: bool = False
    dry_run: bool = False
    export_path: Path | None = None
    warnings: list[str] = field(default_factory=list)


def _is_converged(lookup: PolicyObject | None, intent: WriteIntent) -> bool:
    if lookup is None or not isinstance(intent, UpdateIntent):
        return False
    current = [(s.name, s.value) for s in lookup.settings]
    desired = [(s.name, s.value) for s in intent.settings]
    return current == desired


def run_sync(
    *,
    client: DirectoryClient,
    request: SyncRequest,
    exporter: AuditExporter | None = None,
    hooks: PipelineHooks | None = None,
) -> SyncResult:
    hooks = hooks or PipelineHooks()
    warnings: list[str] = []

    def warn(message: str) -> None:
        logger.warning(message)
        warnings.append(message)
        if hooks.warning:
            hooks.warning(message)

    def stage(name: str) -> None:
        logger.debug("stage: %s", name)
        if hooks.stage:
            hooks.stage(name)

    stage("validate")
    outcome = validate_entries(
        request.candidates,
        legacy_untrimmed_length=request.legacy_untrimmed_length,
    )
    for rejected in outcome.rejected:
        logger.debug("Rejected entry %r: length %d", rejected.value, rejected.length)
    if outcome.rejected:
        warn(
            f"{len(outcome.rejected)} entries rejected: length outside {MIN_LEN}..{MAX_LEN} characters"
        )

    if not outcome.accepted:
        raise EmptyInputError(rejected_count=len(outcome.rejected))

    stage("lookup")
    lookup = client.lookup_policy_by_template(BANNED_PASSWORD_TEMPLATE_ID)
    existing = existing_password_list(lookup)
    logger.info(
        "Existing policy: %s (%d entries)",
        lookup.id if lookup else "none",
        len(existing),
    )

    stage("merge")
    report = merge_with_report(existing, outcome.accepted, request.max_size)
    if report.evicted:
        warn(
            f"List exceeds {request.max_size} entries; "
            f"{len(report.evicted)} entries dropped by sort order."
        )

    stage("reconcile")
    intent = reconcile(lookup, report.password_list, FIXED_SETTINGS)

    result = SyncResult(
        merged=report.password_list,
        intent=intent,
        existing=existing,
        accepted=outcome.accepted,
        rejected=outcome.rejected,
        added=report.added,
        evicted=report.evicted,
        policy_id=lookup.id if lookup else None,
        dry_run=request.dry_run,
        warnings=warnings,
    )

    if request.dry_run:
        logger.info("Dry run: %s intent not applied", intent.kind.value)
        return result

    stage("write")
    if _is_converged(lookup, intent):
        logger.info("Policy %s already converged; no write needed", result.policy_id)
    else:
        result.policy_id = apply_write_intent(client, intent)
        result.written = True

    if exporter is not None and request.export_path is not None and result.policy_id:
        stage("export")
        result.export_path = export_policy_list(
            client=client,
            exporter=exporter,
            policy_id=result.policy_id,
            destination=request.export_path,
        )

    return result


def fetch_current_list(client: DirectoryClient) -> tuple[PolicyObject | None, PasswordList]:
    """Read-only view of the tenant list (used by `show`)."""

    lookup = client.lookup_policy_by_template(BANNED_PASSWORD_TEMPLATE_ID)
    return lookup, existing_password_list(lookup)


def export_policy_list(
    *,
    client: DirectoryClient,
    exporter: AuditExporter,
    policy_id: str,
    destination: Path,
) -> Path:
    """Re-fetch the written policy and persist its list for review."""

    fetched = client.fetch_policy(policy_id)
    if fetched.setting_value(BANNED_PASSWORD_LIST_SETTING) is None:
        raise DirectoryReadError(
            f"Policy {policy_id} has no {BANNED_PASSWORD_LIST_SETTING} setting after write"
        )
    password_list = decode_password_list(fetched.setting_value(BANNED_PASSWORD_LIST_SETTING))
    return exporter.export(password_list, destination)
