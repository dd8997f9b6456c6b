# SPDX-License-Identifier: MIT

from typing import TypedDict

import pendulum

from acari.model.entity_id import CustomerId


class Customer(TypedDict):
    id: CustomerId
    name: str
    note: str
    archived: bool
    created_at: pendulum.DateTime
