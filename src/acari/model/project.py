# SPDX-License-Identifier: MIT

from typing import TypedDict

import pendulum

from acari.model.entity_id import CustomerId, ProjectId


class Project(TypedDict):
    id: ProjectId
    name: str
    customer_id: CustomerId
    customer_name: str
    note: str
    archived: bool
    created_at: pendulum.DateTime
