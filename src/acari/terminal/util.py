# SPDX-License-Identifier: MIT

import functools
from typing import Callable, ParamSpec, TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from acari import state
from acari.client.client import Client
from acari.client.factory import create_client
from acari.error import AcariError
from acari.repository.configuration import CONFIGURATION_REPO

err_console = Console(stderr=True)


def get_client() -> Client:
    """The client of the selected profile, cached unless --no-cache was given."""
    profile = CONFIGURATION_REPO.get_profile(state.get_profile())
    config = CONFIGURATION_REPO.get_config()
    return create_client(
        profile, config["cache_ttl_minutes"], cached=state.get_use_cache()
    )


P = ParamSpec("P")
R = TypeVar("R")


def handle_errors(command: Callable[P, R]) -> Callable[P, R]:
    """Report AcariErrors in red on stderr and exit with status 1."""

    @functools.wraps(command)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return command(*args, **kwargs)
        except AcariError as e:
            err_console.print(f"[red]{escape(str(e))}[/red]")
            raise typer.Exit(1)

    return wrapper
