# SPDX-License-Identifier: MIT

from typing import TypedDict

import pendulum

from acari.model.entity_id import AccountId


class Account(TypedDict):
    id: AccountId
    name: str
    title: str
    currency: str
    created_at: pendulum.DateTime
