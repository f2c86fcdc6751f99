from __future__ import annotations

import pytest
from typer.testing import CliRunner

from cli import main as cli_main

runner = CliRunner()


@pytest.fixture
def isolated(tmp_path, monkeypatch, fake_client):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setattr(cli_main, "build_directory_client", lambda settings: fake_client)
    return tmp_path


def _write_csv(path, rows):
    path.write_text("Password\n" + "".join(f"{row}\n" for row in rows), encoding="utf-8")
    return path


def test_sync_creates_policy_and_exports(isolated, fake_client):
    csv_path = _write_csv(isolated / "in.csv", ["contoso1", "abc", "fabrikam"])
    export = isolated / "audit.txt"
    report = isolated / "report.json"

    result = runner.invoke(
        cli_main.app,
        ["sync", str(csv_path), "--export", str(export), "--report", str(report)],
    )

    assert result.exit_code == 0, result.output
    assert "CREATE applied" in result.output
    assert export.read_text(encoding="utf-8") == "contoso1\nfabrikam\n"
    assert report.exists()
    assert fake_client.operations() == ["lookup", "create", "fetch"]


def test_sync_dry_run_writes_nothing(isolated, fake_client):
    csv_path = _write_csv(isolated / "in.csv", ["contoso1"])

    result = runner.invoke(cli_main.app, ["sync", str(csv_path), "--dry-run"])

    assert result.exit_code == 0, result.output
    assert "DRY RUN" in result.output
    assert fake_client.operations() == ["lookup"]


def test_sync_with_no_valid_entries_exits_with_error(isolated, fake_client):
    csv_path = _write_csv(isolated / "in.csv", ["abc", "x"])

    result = runner.invoke(cli_main.app, ["sync", str(csv_path)])

    assert result.exit_code == 1
    assert "No valid banned-password entries" in result.output
    assert fake_client.calls == []


def test_sync_with_wrong_column_exits_with_error(isolated):
    csv_path = isolated / "in.csv"
    csv_path.write_text("Name\ncontoso1\n", encoding="utf-8")

    result = runner.invoke(cli_main.app, ["sync", str(csv_path)])

    assert result.exit_code == 1
    assert "Password" in result.output


def test_show_prints_current_list(isolated, fake_client, make_policy):
    fake_client.policies["existing-1"] = make_policy(["zeta", "eta"])

    result = runner.invoke(cli_main.app, ["show"])

    assert result.exit_code == 0, result.output
    assert "eta" in result.output
    assert "zeta" in result.output


def test_show_without_policy(isolated):
    result = runner.invoke(cli_main.app, ["show"])

    assert result.exit_code == 0
    assert "No banned-password policy" in result.output


def test_setup_writes_user_env(isolated):
    result = runner.invoke(cli_main.app, ["setup"], input="tenant-1\napp-1\ns3cret\n")

    assert result.exit_code == 0, result.output
    env_file = isolated / "config" / "banlist-sync" / ".env"
    content = env_file.read_text(encoding="utf-8")
    assert "BANLIST_SYNC_TENANT_ID=tenant-1" in content
    assert "BANLIST_SYNC_CLIENT_SECRET=s3cret" in content


@pytest.mark.parametrize("command", [["sync", "in.csv"], ["show"]])
def test_invalid_env_config_exits_with_error(isolated, monkeypatch, fake_client, command):
    _write_csv(isolated / "in.csv", ["contoso1"])
    monkeypatch.setenv("BANLIST_SYNC_MAX_LIST_SIZE", "5000")

    result = runner.invoke(cli_main.app, command)

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "max_list_size" in result.output
    assert fake_client.calls == []
