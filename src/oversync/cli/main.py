"""oversync — command-line entry point."""

from __future__ import annotations

import sys

import click
from rich.console import Console

from oversync import __version__
from oversync.cli._config_cmd import config_group
from oversync.cli._pair_cmd import pair_group
from oversync.cli._status_cmd import status_cmd
from oversync.core.config import OverSyncConfig, load_config_or_default
from oversync.core.exceptions import ConfigError
from oversync.core.logging import configure_logging

console = Console()


@click.group(invoke_without_command=True)
@click.version_option(__version__, prog_name="oversync")
@click.option("--backend-url", default=None, help="Sync engine URL (overrides config)")
@click.pass_context
def cli(ctx: click.Context, backend_url: str | None) -> None:
    """OverSync — peer-to-peer vault sync."""
    try:
        config = load_config_or_default()
    except ConfigError as exc:
        if ctx.invoked_subcommand == "config":
            config = OverSyncConfig()
        else:
            console.print(f"[red]Config error:[/red] {exc}")
            sys.exit(2)
    if backend_url:
        config.backend.url = backend_url
    ctx.obj = config

    if ctx.invoked_subcommand not in (None, "ui"):
        configure_logging(config.logging.level)

    if ctx.invoked_subcommand is None:
        ctx.invoke(ui_cmd)


@cli.command("ui")
@click.option("--demo", is_flag=True, help="Run against an in-memory demo engine")
@click.pass_obj
def ui_cmd(config: OverSyncConfig, demo: bool = False) -> None:
    """Launch the interactive terminal UI."""
    from oversync.cli._common import make_backend
    from oversync.ui.app import run

    configure_logging(config.logging.level, config.log_path)
    run(
        make_backend(config, demo=demo),
        poll_interval=config.dashboard.poll_interval_seconds,
    )


cli.add_command(status_cmd)
cli.add_command(pair_group)
cli.add_command(config_group)
