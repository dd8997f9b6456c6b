# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import click
import typer

from acari import state
from acari.logging_config import setup_logging
from acari.terminal import configuration, listing, time_entry, tracker
from acari.terminal.custom_typer import OrderedTyperGroup

app = typer.Typer(
    cls=OrderedTyperGroup,
    help="acari - time tracking from the command line",
    no_args_is_help=True,
)
app.add_typer(configuration.app, name="config")
app.command(name="init")(configuration.init)
app.command(name="check")(listing.check)
app.command(name="customers, c")(listing.customers)
app.command(name="projects, p")(listing.projects)
app.command(name="services, s")(listing.services)
app.command(name="entries, e")(time_entry.entries)
app.command(name="add, a")(time_entry.add)
app.command(name="set")(time_entry.set_entry)
app.command(name="start")(tracker.start)
app.command(name="stop")(tracker.stop)
app.command(name="tracking, t")(tracker.tracking)
app.command(name="clear-cache")(configuration.clear_cache)


@app.callback()
def main_callback(
    output: Annotated[
        str,
        typer.Option(
            "--output",
            "-o",
            click_type=click.Choice(["pretty", "json", "flat"]),
            help="Output format",
        ),
    ] = "pretty",
    profile: Annotated[
        Optional[str],
        typer.Option("--profile", "-p", help="Use a named connection profile"),
    ] = None,
    no_cache: Annotated[
        bool,
        typer.Option("--no-cache", help="Bypass the local cache"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log requests and cache usage"),
    ] = False,
) -> None:
    """
    acari - time tracking from the command line

    Global options that apply to all commands.
    """
    setup_logging(verbose)
    state.set_output_format(output)  # type: ignore[arg-type]
    state.set_profile(profile)
    state.set_use_cache(not no_cache)


def run() -> None:
    app()
