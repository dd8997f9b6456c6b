# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from acari.model.entity_id import (
    CustomerId,
    ProjectId,
    ServiceId,
    TimeEntryId,
    UserId,
)
from acari.time import Minutes


class TimeEntry(TypedDict):
    id: TimeEntryId
    date_at: pendulum.Date
    minutes: Minutes
    # Names are denormalized so listings need no further lookups
    customer_id: CustomerId
    customer_name: str
    project_id: ProjectId
    project_name: str
    service_id: ServiceId
    service_name: str
    user_id: UserId
    user_name: str
    note: str
    billable: bool
    locked: bool
    created_at: pendulum.DateTime
    updated_at: Optional[pendulum.DateTime]
