# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from acari.service.tracker import get_tracking, start_tracking, stop_tracking
from acari.terminal.parse import parse_minutes_optional
from acari.terminal.time_entry import (
    CustomerArgument,
    NoteOption,
    ProjectArgument,
    ServiceArgument,
)
from acari.terminal.util import get_client, handle_errors
from acari.view.views.tracker import tracking_view


@handle_errors
def start(
    customer: CustomerArgument,
    project: ProjectArgument,
    service: ServiceArgument,
    offset: Annotated[
        Optional[int],
        typer.Argument(
            parser=parse_minutes_optional,
            help="Start a new entry at this many minutes or H:MM",
            metavar="[OFFSET]",
        ),
    ] = None,
    note: NoteOption = None,
) -> None:
    """Start tracking time on today's entry of a service."""
    client = get_client()
    entry, started = start_tracking(client, customer, project, service, offset, note)
    tracking_view(client.get_domain(), entry, started)


@handle_errors
def stop() -> None:
    """Stop the running tracker."""
    client = get_client()
    entry, stopped = stop_tracking(client)
    tracking_view(client.get_domain(), entry, stopped)


@handle_errors
def tracking() -> None:
    """Show what is being tracked right now."""
    client = get_client()
    entry, current = get_tracking(client)
    tracking_view(client.get_domain(), entry, current)
