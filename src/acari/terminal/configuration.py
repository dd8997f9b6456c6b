# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import click
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from acari import configuration
from acari.client.cached import clear_cache as clear_cache_dir
from acari.repository.configuration import CONFIGURATION_REPO
from acari.terminal.custom_typer import AliasedTyperGroup
from acari.terminal.util import handle_errors

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _mask(token: str) -> str:
    if len(token) <= 4:
        return "****"
    return f"{'*' * (len(token) - 4)}{token[-4:]}"


@app.command("view, v")
@handle_errors
def view() -> None:
    """Display the current configuration (tokens are masked)."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("config_path", escape(str(CONFIGURATION_REPO.path)))
    table.add_row("cache_path", escape(str(configuration.CACHE_PATH)))
    table.add_row("domain", escape(config["domain"]))
    table.add_row("token", _mask(config["token"]))
    table.add_row("client", config["client"])
    table.add_row("cache_ttl_minutes", str(config["cache_ttl_minutes"]))
    for name, profile in sorted((config.get("profiles") or {}).items()):
        table.add_row(
            f"profiles.{escape(name)}",
            f"{escape(profile['domain'])} ({profile.get('client', 'mite')}) "
            f"token {_mask(profile['token'])}",
        )

    console.print(table)


@app.command("set-ttl")
@handle_errors
def set_ttl(
    minutes: Annotated[int, typer.Argument(min=0, help="Cache ttl in minutes")],
) -> None:
    """Change how long customers, projects and services are cached."""
    CONFIGURATION_REPO.update_config(cache_ttl_minutes=minutes)
    CONFIGURATION_REPO.flush()
    typer.echo("Configuration updated")


@handle_errors
def init(
    domain: Annotated[
        str, typer.Option("--domain", "-d", prompt="Domain", help="Backend domain")
    ],
    token: Annotated[
        str,
        typer.Option(
            "--token", "-t", prompt="API token", hide_input=True, help="API token"
        ),
    ],
    client: Annotated[
        str,
        typer.Option(
            "--client",
            "-c",
            prompt="Client type",
            click_type=click.Choice(configuration.CLIENT_TYPES),
            help="Backend type",
        ),
    ] = "mite",
    profile: Annotated[
        Optional[str],
        typer.Option(
            "--name", "-n", help="Store as a named profile instead of the default"
        ),
    ] = None,
) -> None:
    """Initialize the connection to the time tracking backend."""
    CONFIGURATION_REPO.set_connection(
        domain.strip(),
        token.strip(),
        client,  # type: ignore[arg-type]
        profile,
    )
    CONFIGURATION_REPO.flush()
    typer.echo("Configuration updated")


@handle_errors
def clear_cache() -> None:
    """Remove all cached customers, projects and services."""
    clear_cache_dir(configuration.CACHE_PATH)
    typer.echo("Cache cleared")
