# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from acari.service.lookup import find_customer, find_project, projects_of_customer
from acari.terminal.util import get_client, handle_errors
from acari.view.views.account import check_view
from acari.view.views.customer import customers_view
from acari.view.views.project import projects_view
from acari.view.views.service import services_view


@handle_errors
def check() -> None:
    """Check the connection and show account and user."""
    client = get_client()
    check_view(client.get_domain(), client.get_account(), client.get_myself())


@handle_errors
def customers() -> None:
    """List all customers."""
    client = get_client()
    customers_view(client.get_domain(), client.get_customers())


@handle_errors
def projects(
    customer: Annotated[
        Optional[str],
        typer.Argument(help="Only list the projects of this customer"),
    ] = None,
) -> None:
    """List projects, optionally of a single customer."""
    client = get_client()
    if customer is None:
        projects_view(client.get_domain(), client.get_projects())
    else:
        projects_view(client.get_domain(), projects_of_customer(client, customer))


@handle_errors
def services(
    customer: Annotated[str, typer.Argument(help="Customer name")],
    project: Annotated[str, typer.Argument(help="Project name")],
) -> None:
    """List the services that can be booked on a project."""
    client = get_client()
    found_customer = find_customer(client, customer)
    found_project = find_project(client, found_customer["id"], project)
    services_view(client.get_domain(), client.get_services(found_project["id"]))
