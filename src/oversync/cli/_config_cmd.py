"""oversync config — inspect or create the config file."""

from __future__ import annotations

import sys

import click
import tomli_w
from rich.console import Console

from oversync.core.config import (
    OverSyncConfig,
    config_path,
    load_config,
    save_config,
)
from oversync.core.exceptions import ConfigError, ConfigNotFoundError

console = Console()


@click.group("config")
def config_group() -> None:
    """Configuration management."""


@config_group.command("path")
def config_path_cmd() -> None:
    """Print the config file location."""
    click.echo(str(config_path()))


@config_group.command("show")
def config_show_cmd() -> None:
    """Print the effective configuration (file + environment)."""
    try:
        cfg = load_config()
        source = str(config_path())
    except ConfigNotFoundError:
        from oversync.core.config import load_config_or_default

        cfg = load_config_or_default()
        source = "defaults"
    except ConfigError as exc:
        console.print(f"[red]Config error:[/red] {exc}")
        sys.exit(2)

    console.print(f"[dim]# source: {source}[/dim]")
    click.echo(tomli_w.dumps(cfg.to_dict()))


@config_group.command("init")
@click.option("--backend-url", default=None, help="Sync engine URL to record")
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
def config_init_cmd(backend_url: str | None, force: bool) -> None:
    """Write a config file with default values."""
    path = config_path()
    if path.exists() and not force:
        console.print(f"[yellow]Config already exists:[/yellow] {path} (use --force)")
        sys.exit(1)

    data = OverSyncConfig().to_dict()
    data.pop("config_version")
    if backend_url:
        data["backend"]["url"] = backend_url
    saved = save_config(data, path)
    console.print(f"[green]Wrote[/green] {saved}")
