"""CLI de banlist-sync (Typer).

Por qué Typer:
- Tipado de opciones sin boilerplate de argparse.
- Sub-apps (`doctor`) montadas igual que comandos simples.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from adapters.audit_exporter import TextAuditExporter, export_sync_report_json
from adapters.csv_loader import load_candidates
from adapters.graph_client import GraphDirectoryClient
from cli import doctor
from cli.ui_components import (
    build_list_table,
    build_rejected_table,
    build_summary_panel,
    print_banner,
)
from core.config import AppSettings, write_user_env_vars
from core.domain.errors import BanlistSyncError
from core.domain.policy import MAX_LIST_SIZE
from core.services.sync_pipeline import PipelineHooks, SyncRequest, fetch_current_list, run_sync

app = typer.Typer(
    no_args_is_help=True,
    help="Sync a curated banned-password list into the tenant password policy.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    # httpx loguea cada request en INFO.
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


def build_directory_client(settings: AppSettings) -> GraphDirectoryClient:
    return GraphDirectoryClient(settings)


@app.command()
def sync(
    csv_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="CSV with candidate passwords."),
    export: Optional[Path] = typer.Option(None, "--export", "-o", help="Audit export path (one value per line)."),
    report: Optional[Path] = typer.Option(None, "--report", help="JSON run report path."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Compute the change without writing it."),
    max_size: Optional[int] = typer.Option(None, "--max-size", min=1, max=MAX_LIST_SIZE, help="List capacity."),
    column: Optional[str] = typer.Option(None, "--column", help="CSV column holding the passwords."),
    legacy_length: bool = typer.Option(
        False,
        "--legacy-length",
        help="Check length before trimming whitespace (historical behaviour).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Validate, merge and write the banned-password list."""

    _configure_logging(verbose)
    print_banner(_console)

    try:
        settings = AppSettings()
        if export is None and not dry_run:
            export = settings.export_dir / "banned_passwords.txt"
        candidates = load_candidates(csv_path, column=column or settings.password_column)
        request = SyncRequest(
            candidates=candidates,
            max_size=max_size or settings.max_list_size,
            legacy_untrimmed_length=legacy_length or settings.legacy_untrimmed_length,
            dry_run=dry_run,
            export_path=export,
        )
        hooks = PipelineHooks(stage=lambda name: _console.print(f"[dim]→ {name}[/dim]"))
        with build_directory_client(settings) as client:
            result = run_sync(
                client=client,
                request=request,
                exporter=TextAuditExporter(),
                hooks=hooks,
            )
    except (BanlistSyncError, ValidationError) as exc:
        _console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    if result.rejected:
        _console.print(build_rejected_table(result.rejected))
    _console.print(build_summary_panel(result))

    if report is not None:
        path = export_sync_report_json(result=result, output_path=report)
        _console.print(f"[green]Report saved to:[/green] {path}")


@app.command()
def show(verbose: bool = typer.Option(False, "--verbose", "-v")) -> None:
    """Print the banned-password list currently stored in the tenant."""

    _configure_logging(verbose)
    try:
        settings = AppSettings()
        with build_directory_client(settings) as client:
            policy, password_list = fetch_current_list(client)
    except (BanlistSyncError, ValidationError) as exc:
        _console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    if policy is None:
        _console.print("[yellow]No banned-password policy exists in this tenant yet.[/yellow]")
        return
    _console.print(build_list_table(password_list, title=f"Policy {policy.id}"))


@app.command()
def setup() -> None:
    """Interactive setup (stores credentials in the user config .env)."""

    tenant_id = typer.prompt("Tenant id").strip()
    client_id = typer.prompt("Client id").strip()
    client_secret = typer.prompt("Client secret", hide_input=True).strip()

    if not tenant_id or not client_id or not client_secret:
        raise typer.BadParameter("tenant id, client id and client secret are required")

    env_path = write_user_env_vars(
        {
            "BANLIST_SYNC_TENANT_ID": tenant_id,
            "BANLIST_SYNC_CLIENT_ID": client_id,
            "BANLIST_SYNC_CLIENT_SECRET": client_secret,
        }
    )
    _console.print(f"[green]Saved config to:[/green] {env_path}")


def run() -> None:
    app()
