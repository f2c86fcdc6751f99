from __future__ import annotations

import pytest

from core.domain.errors import DirectoryWriteError, WriteOperation
from core.domain.models import CreateIntent, PasswordList, UpdateIntent
from core.domain.policy import BANNED_PASSWORD_TEMPLATE_ID, FIXED_SETTINGS
from core.services.reconciler import (
    apply_write_intent,
    decode_password_list,
    encode_password_list,
    existing_password_list,
    reconcile,
)


def test_scenario_absent_policy_emits_create_with_fixed_defaults():
    merged = PasswordList.of(["gamma", "alpha", "beta"])

    intent = reconcile(None, merged, FIXED_SETTINGS)

    assert isinstance(intent, CreateIntent)
    assert intent.template_id == BANNED_PASSWORD_TEMPLATE_ID
    settings = {s.name: s.value for s in intent.settings}
    assert settings == {
        "BannedPasswordCheck": "True",
        "EnableBannedPasswordCheck": "True",
        "EnableBannedPasswordCheckOnPremises": "False",
        "BannedPasswordCheckOnPremisesMode": "Enforce",
        "LockoutDurationInSeconds": "60",
        "LockoutThreshold": "10",
        "BannedPasswordList": "alpha\tbeta\tgamma",
    }


def test_present_policy_emits_update_preserving_other_settings(make_policy):
    policy = make_policy(["old1"], extra=[("Custom", "x")])

    intent = reconcile(policy, PasswordList.of(["new1", "old1"]), FIXED_SETTINGS)

    assert isinstance(intent, UpdateIntent)
    assert intent.policy_id == "existing-1"
    assert [(s.name, s.value) for s in intent.settings] == [
        ("LockoutThreshold", "5"),
        ("BannedPasswordList", "new1\told1"),
        ("EnableBannedPasswordCheck", "True"),
        ("Custom", "x"),
    ]


def test_update_does_not_mutate_the_looked_up_policy(make_policy):
    policy = make_policy(["old1"])

    reconcile(policy, PasswordList.of(["other"]), FIXED_SETTINGS)

    assert policy.setting_value("BannedPasswordList") == "old1"


def test_update_appends_missing_list_setting(make_policy):
    policy = make_policy([])
    policy.settings = [s for s in policy.settings if s.name != "BannedPasswordList"]

    intent = reconcile(policy, PasswordList.of(["abcd"]), FIXED_SETTINGS)

    assert intent.settings[-1].name == "BannedPasswordList"
    assert intent.settings[-1].value == "abcd"


def test_encoding_is_sorted_tab_delimited():
    assert encode_password_list(PasswordList.of(["b", "C", "a"])) == "C\ta\tb"
    assert encode_password_list(PasswordList()) == ""


def test_decode_drops_empty_fragments():
    assert decode_password_list("beta\t\talpha\t").values == ("alpha", "beta")
    assert decode_password_list(None) == PasswordList()
    assert decode_password_list("") == PasswordList()


def test_existing_list_of_absent_policy_is_empty():
    assert existing_password_list(None) == PasswordList()


def test_apply_create_returns_new_id(fake_client):
    intent = reconcile(None, PasswordList.of(["abcd"]))

    policy_id = apply_write_intent(fake_client, intent)

    assert policy_id == "policy-1"
    assert fake_client.operations() == ["create"]


def test_apply_update_wraps_unexpected_failures(fake_client, make_policy):
    policy = make_policy(["abcd"])
    fake_client.policies[policy.id] = policy
    fake_client.fail_on.add("update")
    intent = reconcile(policy, PasswordList.of(["abcd", "efgh"]))

    with pytest.raises(DirectoryWriteError) as excinfo:
        apply_write_intent(fake_client, intent)

    assert excinfo.value.operation is WriteOperation.UPDATE
    assert isinstance(excinfo.value.cause, RuntimeError)


def test_apply_create_passes_directory_errors_through(fake_client):
    fake_client.fail_on.add("create")

    with pytest.raises(DirectoryWriteError) as excinfo:
        apply_write_intent(fake_client, reconcile(None, PasswordList.of(["abcd"])))

    assert excinfo.value.operation is WriteOperation.CREATE
