"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from adapters.graph_client import GraphDirectoryClient
from core.config import AppSettings, get_user_env_file
from core.domain.errors import BanlistSyncError
from core.domain.policy import BANNED_PASSWORD_TEMPLATE_ID

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_graph(settings: AppSettings) -> tuple[bool, str]:
    try:
        with GraphDirectoryClient(settings) as client:
            policy = client.lookup_policy_by_template(BANNED_PASSWORD_TEMPLATE_ID)
    except BanlistSyncError as exc:
        return False, str(exc)
    if policy is None:
        return True, "Reachable; no banned-password policy yet"
    return True, f"Reachable; policy {policy.id}"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="banlist-sync Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "MISSING", str(env_file))

    if settings.access_token:
        table.add_row("Credentials", "OK", "Static access token")
    elif settings.has_credentials():
        table.add_row("Credentials", "OK", f"Client credentials for tenant {settings.tenant_id}")
    else:
        table.add_row("Credentials", "FAIL", "Run `banlist-sync setup`")

    table.add_row("Graph base_url", "OK", settings.graph_base_url)
    table.add_row("Max list size", "OK", str(settings.max_list_size))

    ok_graph = False
    if settings.has_credentials():
        ok_graph, detail_graph = _check_graph(settings)
        table.add_row("Graph access", "OK" if ok_graph else "FAIL", detail_graph)
    else:
        table.add_row("Graph access", "SKIPPED", "No credentials")

    _console.print(table)

    if not ok_graph:
        _console.print(
            "\n[yellow]Note:[/yellow] the app registration needs the "
            "Directory.ReadWrite.All application permission."
        )
