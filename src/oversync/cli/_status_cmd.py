"""oversync status — one-shot engine status and recent activity."""

from __future__ import annotations

import asyncio
import json
import sys

import click
from rich.console import Console
from rich.table import Table

from oversync.core.config import OverSyncConfig
from oversync.core.exceptions import BackendError
from oversync.core.models import FileActivityEntry, SyncStatus
from oversync.core.status import StatusClient
from oversync.ui.state import format_size, humanize_ago, short_hash

console = Console()


async def _fetch(config: OverSyncConfig) -> tuple[SyncStatus, list[FileActivityEntry]]:
    from oversync.cli._common import close_backend, make_backend

    backend = make_backend(config)
    try:
        return await StatusClient(backend).snapshot()
    finally:
        await close_backend(backend)


def _as_dict(status: SyncStatus, activity: list[FileActivityEntry]) -> dict[str, object]:
    return {
        "is_syncing": status.is_syncing,
        "last_sync": status.last_sync.isoformat() if status.last_sync else None,
        "peers_connected": status.peers_connected,
        "recent_activity": [
            {
                "path": e.path,
                "size": e.size,
                "hash": e.content_hash.hex(),
                "last_modified": e.last_modified.isoformat(),
            }
            for e in activity
        ],
    }


@click.command("status")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def status_cmd(config: OverSyncConfig, as_json: bool) -> None:
    """Show sync engine status and recent activity."""
    try:
        status, activity = asyncio.run(_fetch(config))
    except BackendError as exc:
        if as_json:
            click.echo(json.dumps({"error": str(exc)}))
        else:
            console.print(f"[red]Sync engine unavailable:[/red] {exc}")
            console.print("[dim]Run `oversync` to set up this device.[/dim]")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(_as_dict(status, activity), indent=2))
        return

    console.print("[bold]OverSync[/bold]")
    console.print(f"  Engine:        {config.backend.url}")
    console.print(f"  State:         {'Syncing' if status.is_syncing else 'Idle'}")
    console.print(f"  Last sync:     {humanize_ago(status.last_sync)}")
    console.print(f"  Active peers:  {status.peers_connected}")
    console.print()

    if not activity:
        console.print("[dim]No recent activity.[/dim]")
        return

    table = Table(title="Recent Activity", show_lines=False)
    table.add_column("File", style="cyan")
    table.add_column("Size", justify="right")
    table.add_column("Hash")
    table.add_column("Modified")
    for entry in activity:
        table.add_row(
            entry.path,
            format_size(entry.size),
            short_hash(entry.content_hash),
            humanize_ago(entry.last_modified),
        )
    console.print(table)
