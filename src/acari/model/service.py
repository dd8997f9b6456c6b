# SPDX-License-Identifier: MIT

from typing import TypedDict

import pendulum

from acari.model.entity_id import ServiceId


class Service(TypedDict):
    id: ServiceId
    name: str
    note: str
    billable: bool
    archived: bool
    created_at: pendulum.DateTime
