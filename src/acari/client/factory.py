# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional

import pendulum
import requests

from acari import configuration
from acari.client.cached import CachedClient
from acari.client.client import Client
from acari.client.everhour import EverhourClient
from acari.client.mite import MiteClient
from acari.error import UserError


def create_client(
    profile: configuration.Profile,
    cache_ttl_minutes: int,
    cached: bool = True,
    cache_root: Optional[Path] = None,
    session: Optional[requests.Session] = None,
) -> Client:
    """
    Build the client for a connection profile. Unless disabled the client is
    wrapped in a CachedClient keeping its files below
    <cache root>/<domain>.
    """
    client: Client
    match profile["client"]:
        case "mite":
            client = MiteClient(profile["domain"], profile["token"], session)
        case "everhour":
            client = EverhourClient(profile["domain"], profile["token"], session)
        case other:
            raise UserError(
                f"Unknown client type {other!r}, expected one of "
                f"{', '.join(configuration.CLIENT_TYPES)}"
            )

    if not cached:
        return client

    root = cache_root if cache_root is not None else configuration.CACHE_PATH
    return CachedClient(
        client,
        root / profile["domain"],
        pendulum.duration(minutes=cache_ttl_minutes),
    )
