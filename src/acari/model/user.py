# SPDX-License-Identifier: MIT

from typing import TypedDict

import pendulum

from acari.model.entity_id import UserId


class User(TypedDict):
    id: UserId
    name: str
    email: str
    note: str
    role: str
    language: str
    archived: bool
    created_at: pendulum.DateTime
