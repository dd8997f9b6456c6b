# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Literal, NotRequired, TypedDict

import platformdirs

APP_NAME = "acari"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

CACHE_PATH: Path = platformdirs.user_cache_path(APP_NAME)

DEFAULT_CACHE_TTL_MINUTES = 1440

ClientType = Literal["mite", "everhour"]
CLIENT_TYPES: tuple[ClientType, ...] = ("mite", "everhour")


class Profile(TypedDict):
    domain: str
    token: str
    client: ClientType


class Configuration(TypedDict):
    domain: str
    token: str
    client: ClientType
    cache_ttl_minutes: int
    profiles: NotRequired[dict[str, Profile]]
