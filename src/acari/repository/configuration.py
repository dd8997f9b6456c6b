# SPDX-License-Identifier: MIT

from copy import deepcopy
from pathlib import Path
from typing import Optional

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from acari import configuration
from acari.error import UserError


class ConfigurationRepository:
    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def path(self) -> Path:
        if self._path is None:
            return configuration.APP_CONFIG_PATH
        return self._path

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        if not self.path.is_file():
            raise UserError("Missing configuration, run init first")
        try:
            self._config = load(self.path.read_text(), Loader=Loader)
        except YAMLError as e:
            raise UserError(f"Invalid configuration file {self.path}: {e}")

        if not isinstance(self._config, dict):
            raise UserError(f"Invalid configuration file {self.path}")
        if "domain" not in self._config or "token" not in self._config:
            raise UserError(
                f"Configuration {self.path} needs a domain and a token, run init"
            )

        # Older configuration files only knew the numeric-id backend
        if "client" not in self._config:
            self._config["client"] = "mite"
        if "cache_ttl_minutes" not in self._config:
            self._config["cache_ttl_minutes"] = (
                configuration.DEFAULT_CACHE_TTL_MINUTES
            )
        if "profiles" not in self._config or self._config["profiles"] is None:
            self._config["profiles"] = {}

    def __save_data(self, config: configuration.Configuration) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(dump(dict(config), Dumper=Dumper))

    def flush(self) -> None:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def get_profile(self, profile_name: Optional[str]) -> configuration.Profile:
        """The top level connection or one of the named profiles."""
        config = self.config
        if profile_name is None:
            return {
                "domain": config["domain"],
                "token": config["token"],
                "client": config["client"],
            }
        profiles = config.get("profiles") or {}
        if profile_name not in profiles:
            raise UserError(f"No such profile: {profile_name}")
        profile = profiles[profile_name]
        return {
            "domain": profile["domain"],
            "token": profile["token"],
            "client": profile.get("client", "mite"),
        }

    def set_connection(
        self,
        domain: str,
        token: str,
        client: configuration.ClientType,
        profile_name: Optional[str] = None,
    ) -> None:
        """Write the connection settings, creating the configuration if needed."""
        self.is_dirty = True
        if self._config is None and not self.path.is_file():
            self._config = {
                "domain": domain,
                "token": token,
                "client": client,
                "cache_ttl_minutes": configuration.DEFAULT_CACHE_TTL_MINUTES,
                "profiles": {},
            }
            if profile_name is None:
                return

        config = self.config
        if profile_name is None:
            config["domain"] = domain
            config["token"] = token
            config["client"] = client
            return
        profiles = config.setdefault("profiles", {})
        profiles[profile_name] = {"domain": domain, "token": token, "client": client}

    def update_config(self, cache_ttl_minutes: Optional[int] = None) -> None:
        self.is_dirty = True

        if cache_ttl_minutes is not None:
            self.config["cache_ttl_minutes"] = cache_ttl_minutes


CONFIGURATION_REPO = ConfigurationRepository()
