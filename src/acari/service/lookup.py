# SPDX-License-Identifier: MIT

from acari.client.client import Client
from acari.error import UserError
from acari.model.customer import Customer
from acari.model.entity_id import CustomerId, ProjectId
from acari.model.project import Project
from acari.model.service import Service


def find_customer(client: Client, customer_name: str) -> Customer:
    for customer in client.get_customers():
        if customer["name"] == customer_name:
            return customer
    raise UserError(f"No customer with name {customer_name}")


def find_project(
    client: Client, customer_id: CustomerId, project_name: str
) -> Project:
    for project in client.get_projects():
        if project["customer_id"] == customer_id and project["name"] == project_name:
            return project
    raise UserError(f"No project with name {project_name}")


def find_service(client: Client, project_id: ProjectId, service_name: str) -> Service:
    for service in client.get_services(project_id):
        if service["name"] == service_name:
            return service
    raise UserError(f"No service with name {service_name}")


def find_slot(
    client: Client, customer_name: str, project_name: str, service_name: str
) -> tuple[Customer, Project, Service]:
    """Resolve the names of a customer, one of its projects and a service."""
    customer = find_customer(client, customer_name)
    project = find_project(client, customer["id"], project_name)
    service = find_service(client, project["id"], service_name)
    return customer, project, service


def projects_of_customer(client: Client, customer_name: str) -> list[Project]:
    customer = find_customer(client, customer_name)
    return [
        project
        for project in client.get_projects()
        if project["customer_id"] == customer["id"]
    ]
