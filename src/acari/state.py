# SPDX-License-Identifier: MIT

from contextvars import ContextVar
from typing import Literal, Optional, TypeAlias

OutputFormat: TypeAlias = Literal["pretty", "json", "flat"]

_output_format: ContextVar[OutputFormat] = ContextVar(
    "output_format", default="pretty"
)
_profile: ContextVar[Optional[str]] = ContextVar("profile", default=None)
_use_cache: ContextVar[bool] = ContextVar("use_cache", default=True)


def set_output_format(value: OutputFormat) -> None:
    _output_format.set(value)


def get_output_format() -> OutputFormat:
    return _output_format.get()


def set_profile(value: Optional[str]) -> None:
    _profile.set(value)


def get_profile() -> Optional[str]:
    return _profile.get()


def set_use_cache(value: bool) -> None:
    _use_cache.set(value)


def get_use_cache() -> bool:
    return _use_cache.get()
