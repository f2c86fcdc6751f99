"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `sync` y `show`.
"""

from __future__ import annotations

from typing import Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import PasswordList, ValidationRejected
from core.services.sync_pipeline import SyncResult


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("BANLIST-SYNC", style="bold cyan")
    subtitle = Text("Banned passwords • Entra ID • Graph", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_rejected_table(rejected: Sequence[ValidationRejected]) -> Table:
    table = Table(title="Rejected entries")
    table.add_column("Value", style="yellow")
    table.add_column("Reason", style="white", no_wrap=True)
    table.add_column("Length", style="red", justify="right")
    for item in rejected:
        table.add_row(repr(item.value), item.reason, str(item.length))
    return table


def build_list_table(password_list: PasswordList, *, title: str = "Banned passwords") -> Table:
    table = Table(title=f"{title} ({len(password_list)})")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Value", style="white")
    for index, value in enumerate(password_list.values, start=1):
        table.add_row(str(index), value)
    return table


def build_summary_panel(result: SyncResult) -> Panel:
    """Panel con el resultado de la reconciliación."""

    if result.dry_run:
        status = Text("DRY RUN (no changes written)", style="bold yellow")
    elif result.written:
        status = Text(f"{result.intent.kind.value.upper()} applied", style="bold green")
    else:
        status = Text("Already up to date", style="bold green")

    body = Text()
    body.append_text(status)
    body.append(f"\n\nPolicy id: {result.policy_id or '-'}")
    body.append(f"\nExisting entries: {len(result.existing)}")
    body.append(f"\nAccepted candidates: {len(result.accepted)}")
    body.append(f"\nRejected candidates: {len(result.rejected)}")
    body.append(f"\nAdded: {len(result.added)}")
    if result.evicted:
        body.append(f"\nDropped by capacity: {len(result.evicted)}", style="yellow")
    body.append(f"\nFinal list size: {len(result.merged)}")
    if result.export_path:
        body.append(f"\nAudit export: {result.export_path}", style="dim")

    return Panel(body, title="Sync result", border_style="green")
