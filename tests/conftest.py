from __future__ import annotations

import itertools
from typing import Sequence

import pytest

from core.domain.errors import DirectoryWriteError, WriteOperation
from core.domain.models import PolicyObject, PolicySetting


class FakeDirectoryClient:
    """In-memory directory: one dict of groupSettings keyed by id."""

    def __init__(self, policies: Sequence[PolicyObject] = ()) -> None:
        self.policies: dict[str, PolicyObject] = {p.id: p for p in policies if p.id}
        self.calls: list[tuple[str, object]] = []
        self.fail_on: set[str] = set()
        self._ids = itertools.count(1)

    def __enter__(self) -> "FakeDirectoryClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None

    def lookup_policy_by_template(self, template_id: str) -> PolicyObject | None:
        self.calls.append(("lookup", template_id))
        for policy in self.policies.values():
            if policy.template_id == template_id:
                return policy.model_copy(deep=True)
        return None

    def create_policy(self, template_id: str, settings: Sequence[PolicySetting]) -> PolicyObject:
        self.calls.append(("create", template_id))
        if "create" in self.fail_on:
            raise DirectoryWriteError(WriteOperation.CREATE, "HTTP 403 Forbidden")
        policy = PolicyObject(
            id=f"policy-{next(self._ids)}",
            template_id=template_id,
            settings=[s.model_copy() for s in settings],
        )
        self.policies[policy.id] = policy
        return policy.model_copy(deep=True)

    def update_policy(self, policy_id: str, settings: Sequence[PolicySetting]) -> None:
        self.calls.append(("update", policy_id))
        if "update" in self.fail_on:
            raise RuntimeError("connection reset")
        current = self.policies[policy_id]
        self.policies[policy_id] = current.model_copy(
            update={"settings": [s.model_copy() for s in settings]}
        )

    def fetch_policy(self, policy_id: str) -> PolicyObject:
        self.calls.append(("fetch", policy_id))
        return self.policies[policy_id].model_copy(deep=True)

    def operations(self) -> list[str]:
        return [name for name, _ in self.calls]


@pytest.fixture
def fake_client() -> FakeDirectoryClient:
    return FakeDirectoryClient()


@pytest.fixture
def make_policy():
    def _make(
        values: Sequence[str],
        *,
        policy_id: str = "existing-1",
        extra: Sequence[tuple[str, str]] = (),
    ) -> PolicyObject:
        from core.domain.policy import BANNED_PASSWORD_TEMPLATE_ID

        settings = [
            PolicySetting(name="LockoutThreshold", value="5"),
            PolicySetting(name="BannedPasswordList", value="\t".join(values)),
            PolicySetting(name="EnableBannedPasswordCheck", value="True"),
        ]
        settings.extend(PolicySetting(name=n, value=v) for n, v in extra)
        return PolicyObject(
            id=policy_id,
            template_id=BANNED_PASSWORD_TEMPLATE_ID,
            display_name="Password Rule Settings",
            settings=settings,
        )

    return _make
