"""Policy reconciliation: decide create vs update and build the payload.

The tab-delimited setting value is a serialization boundary; everything on
this side of it works with `PasswordList`.
"""

from __future__ import annotations

import logging
from typing import Mapping

from core.domain.errors import DirectoryWriteError, WriteOperation
from core.domain.models import (
    CreateIntent,
    PasswordList,
    PolicyObject,
    PolicySetting,
    UpdateIntent,
    WriteIntent,
)
from core.domain.policy import (
    BANNED_PASSWORD_LIST_SETTING,
    BANNED_PASSWORD_TEMPLATE_ID,
    FIXED_SETTINGS,
    LIST_SEPARATOR,
)
from core.interfaces.directory import DirectoryClient

logger = logging.getLogger(__name__)


def encode_password_list(password_list: PasswordList) -> str:
    return LIST_SEPARATOR.join(sorted(password_list.values))


def decode_password_list(value: str | None) -> PasswordList:
    if not value:
        return PasswordList()
    return PasswordList.of(part for part in value.split(LIST_SEPARATOR) if part)


def existing_password_list(policy: PolicyObject | None) -> PasswordList:
    """Stored list of a looked-up policy, empty when there is none."""

    if policy is None:
        return PasswordList()
    return decode_password_list(policy.setting_value(BANNED_PASSWORD_LIST_SETTING))


def reconcile(
    lookup: PolicyObject | None,
    merged: PasswordList,
    fixed_settings: Mapping[str, str] = FIXED_SETTINGS,
    *,
    template_id: str = BANNED_PASSWORD_TEMPLATE_ID,
) -> WriteIntent:
    """Build the write intent that converges the directory to `merged`."""

    encoded = encode_password_list(merged)

    if lookup is None or lookup.id is None:
        settings = [PolicySetting(name=name, value=value) for name, value in fixed_settings.items()]
        settings.append(PolicySetting(name=BANNED_PASSWORD_LIST_SETTING, value=encoded))
        return CreateIntent(template_id=template_id, settings=tuple(settings))

    # Copy in place: the directory expects the full collection, in its order.
    settings = []
    replaced = False
    for setting in lookup.settings:
        if setting.name == BANNED_PASSWORD_LIST_SETTING:
            settings.append(PolicySetting(name=setting.name, value=encoded))
            replaced = True
        else:
            settings.append(setting.model_copy())
    if not replaced:
        settings.append(PolicySetting(name=BANNED_PASSWORD_LIST_SETTING, value=encoded))

    return UpdateIntent(policy_id=lookup.id, settings=tuple(settings))


def apply_write_intent(
    client: DirectoryClient,
    intent: WriteIntent,
) -> str:
    """Perform the write and return the authoritative policy id.

    No retry here; failures surface as `DirectoryWriteError`.
    """

    if isinstance(intent, CreateIntent):
        operation = WriteOperation.CREATE
    else:
        operation = WriteOperation.UPDATE

    try:
        if isinstance(intent, CreateIntent):
            created = client.create_policy(intent.template_id, list(intent.settings))
            policy_id = created.id
        else:
            client.update_policy(intent.policy_id, list(intent.settings))
            policy_id = intent.policy_id
    except DirectoryWriteError:
        raise
    except Exception as exc:
        raise DirectoryWriteError(operation, exc) from exc

    if not policy_id:
        raise DirectoryWriteError(operation, "directory returned no policy id")

    logger.info("Policy %s (%s) written", policy_id, operation.value)
    return policy_id
