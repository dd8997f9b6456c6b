# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from acari.model.time_entry import TimeEntry


class Tracker(TypedDict):
    """What, if anything, is being timed right now. Never stored."""

    since: Optional[pendulum.DateTime]
    tracking_time_entry: Optional[TimeEntry]
    stopped_time_entry: Optional[TimeEntry]


def empty_tracker() -> Tracker:
    return {"since": None, "tracking_time_entry": None, "stopped_time_entry": None}
