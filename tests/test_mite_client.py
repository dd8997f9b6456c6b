# SPDX-License-Identifier: MIT

import pendulum
import pytest
import requests

from acari.client.mite import MiteClient
from acari.client.requester import USER_AGENT
from acari.error import BackendError, InternalError, TransportError
from acari.model.entity_id import NumericId
from acari.model.query import date_span_from_str, day_of


def raw_entry(entry_id: int, minutes: int = 30, **overrides):
    raw = {
        "id": entry_id,
        "date_at": "2024-03-04",
        "minutes": minutes,
        "customer_id": 1,
        "customer_name": "acme",
        "project_id": 2,
        "project_name": "web",
        "service_id": 3,
        "service_name": "dev",
        "user_id": 4,
        "user_name": "Jane Doe",
        "note": "",
        "billable": True,
        "locked": False,
        "created_at": "2024-03-04T08:00:00+01:00",
        "updated_at": "2024-03-04T09:00:00+01:00",
    }
    raw.update(overrides)
    return raw


@pytest.fixture
def client(session) -> MiteClient:
    return MiteClient("demo.mite.yo.lk", "secret", session)


def test_account_and_headers(client, session) -> None:
    session.add(
        "GET",
        "/account.json",
        {
            "account": {
                "id": 1,
                "name": "demo",
                "title": "Demo Inc.",
                "currency": "EUR",
                "created_at": "2020-01-01T10:00:00+01:00",
            }
        },
    )

    account = client.get_account()

    assert account["id"] == NumericId(1)
    assert account["currency"] == "EUR"
    assert account["created_at"] == pendulum.datetime(2020, 1, 1, 9, tz="UTC")
    headers = session.requests[0]["headers"]
    assert headers["X-MiteApiKey"] == "secret"
    assert headers["User-Agent"] == USER_AGENT
    assert client.get_domain() == "demo.mite.yo.lk"


def test_unexpected_wrapper_is_a_backend_error(client, session) -> None:
    session.add("GET", "/account.json", {"user": {"id": 1}})

    with pytest.raises(BackendError) as exc_info:
        client.get_account()
    assert exc_info.value.status == 400


def test_missing_fields_are_internal_errors(client, session) -> None:
    session.add("GET", "/account.json", {"account": {"id": 1}})

    with pytest.raises(InternalError):
        client.get_account()


def test_lists_keep_only_the_requested_tag(client, session) -> None:
    session.add(
        "GET",
        "/customers.json",
        [
            {
                "customer": {
                    "id": 1,
                    "name": "acme",
                    "note": "",
                    "archived": False,
                    "created_at": "2020-01-01T10:00:00Z",
                }
            },
            {"project": {"id": 2, "name": "web"}},
        ],
    )

    customers = client.get_customers()

    assert [c["name"] for c in customers] == ["acme"]
    assert customers[0]["id"] == NumericId(1)


def test_error_envelope(client, session) -> None:
    session.add("GET", "/myself.json", {"error": "Access denied"}, 401, "Unauthorized")

    with pytest.raises(BackendError) as exc_info:
        client.get_myself()
    assert exc_info.value.status == 401
    assert exc_info.value.message == "Access denied"


def test_error_without_envelope(client, session) -> None:
    session.add(
        "GET", "/myself.json", status_code=500, reason="Server Error", body="<html>"
    )

    with pytest.raises(BackendError) as exc_info:
        client.get_myself()
    assert exc_info.value.status == 500
    assert exc_info.value.message == "500 Server Error"


def test_transport_error(client, session) -> None:
    session.add_error("GET", "/myself.json", requests.ConnectionError("refused"))

    with pytest.raises(TransportError):
        client.get_myself()


def test_services_ignore_the_project(client, session) -> None:
    session.add(
        "GET",
        "/services.json",
        [
            {
                "service": {
                    "id": 3,
                    "name": "dev",
                    "note": "",
                    "billable": False,
                    "archived": False,
                    "created_at": "2020-01-01T10:00:00Z",
                }
            }
        ],
    )

    services = client.get_services(NumericId(2))

    assert services[0]["billable"] is False
    assert session.requests[0]["uri"] == "/services.json"


def test_time_entries_use_symbolic_queries(client, session) -> None:
    session.add(
        "GET",
        "/time_entries.json?user=current&at=this_week",
        [{"time_entry": raw_entry(7)}],
    )

    entries = client.get_time_entries(date_span_from_str("this-week"))

    assert len(entries) == 1
    assert entries[0]["id"] == NumericId(7)
    assert entries[0]["date_at"] == pendulum.date(2024, 3, 4)
    assert entries[0]["updated_at"] == pendulum.datetime(2024, 3, 4, 8, tz="UTC")


def test_create_update_delete(client, session) -> None:
    session.add("POST", "/time_entries.json", {"time_entry": raw_entry(8, 90)})
    session.add("PATCH", "/time_entries/8.json")
    session.add("DELETE", "/time_entries/8.json")

    created = client.create_time_entry(
        day_of(pendulum.date(2024, 3, 4)), NumericId(2), NumericId(3), 90, None
    )
    client.update_time_entry(created["id"], 120, "review")
    client.delete_time_entry(created["id"])

    assert created["minutes"] == 90
    assert [r["json"] for r in session.requests] == [
        {
            "time_entry": {
                "date_at": "2024-03-04",
                "project_id": 2,
                "service_id": 3,
                "minutes": 90,
                "note": "",
            }
        },
        {"time_entry": {"minutes": 120, "note": "review"}},
        None,
    ]


def test_tracker_tracking_only(client, session) -> None:
    session.add(
        "GET",
        "/tracker.json",
        {
            "tracker": {
                "tracking_time_entry": {
                    "id": 7,
                    "minutes": 42,
                    "since": "2024-03-04T08:00:00Z",
                }
            }
        },
    )
    session.add("GET", "/time_entries/7.json", {"time_entry": raw_entry(7, 30)})

    tracker = client.get_tracker()

    assert tracker["tracking_time_entry"] is not None
    assert tracker["tracking_time_entry"]["id"] == NumericId(7)
    assert tracker["tracking_time_entry"]["minutes"] == 42
    assert tracker["tracking_time_entry"]["project_name"] == "web"
    assert tracker["stopped_time_entry"] is None
    assert tracker["since"] == pendulum.datetime(2024, 3, 4, 8, tz="UTC")


def test_tracker_stopped_only(client, session) -> None:
    session.add(
        "DELETE",
        "/tracker/7.json",
        {"tracker": {"stopped_time_entry": {"id": 7, "minutes": 45}}},
    )
    session.add("GET", "/time_entries/7.json", {"time_entry": raw_entry(7, 45)})

    tracker = client.delete_tracker(NumericId(7))

    assert tracker["tracking_time_entry"] is None
    assert tracker["stopped_time_entry"] is not None
    assert tracker["stopped_time_entry"]["minutes"] == 45
    assert tracker["since"] is None


def test_idle_tracker(client, session) -> None:
    session.add("GET", "/tracker.json", {"tracker": {}})

    tracker = client.get_tracker()

    assert tracker == {
        "since": None,
        "tracking_time_entry": None,
        "stopped_time_entry": None,
    }


@pytest.mark.parametrize(
    "raw_tracker",
    [
        {"tracking_time_entry": {"id": 7}},
        {"tracking_time_entry": "7"},
        {"stopped_time_entry": [7]},
        {"tracking_time_entry": {"id": 7, "minutes": 5, "since": "not a date"}},
    ],
)
def test_malformed_tracker_is_an_internal_error(client, session, raw_tracker) -> None:
    session.add("GET", "/tracker.json", {"tracker": raw_tracker})

    with pytest.raises(InternalError):
        client.get_tracker()

    assert [r["uri"] for r in session.requests] == ["/tracker.json"]
