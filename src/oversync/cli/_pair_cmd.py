"""oversync pair — headless device pairing."""

from __future__ import annotations

import asyncio
import sys

import click
from rich.console import Console

from oversync.core.config import OverSyncConfig
from oversync.ui.pairing import PairingCoordinator

console = Console()


async def _issue_ticket(config: OverSyncConfig) -> tuple[str | None, str | None]:
    from oversync.cli._common import close_backend, make_backend

    backend = make_backend(config)
    try:
        session = await PairingCoordinator(backend).open()
        return session.local_ticket, session.last_error
    finally:
        await close_backend(backend)


async def _connect(config: OverSyncConfig, ticket: str) -> str | None:
    from oversync.cli._common import close_backend, make_backend

    backend = make_backend(config)
    try:
        coordinator = PairingCoordinator(backend)
        session = await coordinator.open(request_ticket=False)
        coordinator.set_remote_ticket(ticket)
        if await coordinator.connect():
            return None
        return session.last_error or "Connect failed"
    finally:
        await close_backend(backend)


@click.group("pair")
def pair_group() -> None:
    """Pair this device with another OverSync device."""


@pair_group.command("ticket")
@click.pass_obj
def pair_ticket_cmd(config: OverSyncConfig) -> None:
    """Print this device's pairing ticket."""
    ticket, error = asyncio.run(_issue_ticket(config))
    if ticket is None:
        console.print(f"[red]Failed to generate pairing ticket:[/red] {error}")
        sys.exit(1)
    click.echo(ticket)


@pair_group.command("connect")
@click.argument("ticket")
@click.pass_obj
def pair_connect_cmd(config: OverSyncConfig, ticket: str) -> None:
    """Connect to the device that issued TICKET."""
    if not ticket.strip():
        console.print("[red]Ticket must not be empty.[/red]")
        sys.exit(2)
    error = asyncio.run(_connect(config, ticket))
    if error is not None:
        console.print(f"[red]Pairing failed:[/red] {error}")
        sys.exit(1)
    console.print("[green]Paired.[/green] The new device will appear in `oversync status`.")
