# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from acari import state
from acari.model.project import Project
from acari.view.util import archived_style, print_flat, print_json_entities, styled
from acari.view.views.header import header


def projects_view(domain: str, projects: list[Project]) -> None:
    projects = sorted(projects, key=lambda p: (p["customer_name"], p["name"]))

    match state.get_output_format():
        case "json":
            print_json_entities(projects)
        case "flat":
            for project in projects:
                if not project["archived"]:
                    print_flat(project["customer_name"], project["name"])
        case _:
            header(domain, "projects")
            table = Table(box=box.SIMPLE)
            table.add_column("Customer")
            table.add_column("Project")
            last_customer = None
            for project in projects:
                style = archived_style(project["archived"])
                # Customer name only on the first of its projects
                customer = (
                    project["customer_name"]
                    if project["customer_name"] != last_customer
                    else ""
                )
                last_customer = project["customer_name"]
                table.add_row(
                    styled(customer, "bold"), styled(project["name"], style)
                )
            Console().print(table)
