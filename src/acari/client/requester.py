# SPDX-License-Identifier: MIT

import logging
from typing import Any, Callable, Optional, TypeAlias, TypeVar

import requests

from acari.error import BackendError, InternalError, TransportError

USER_AGENT = "acari (https://github.com/untoldwind/acari)"

logger = logging.getLogger(__name__)

ErrorDecoder: TypeAlias = Callable[[int, Any], Optional[BackendError]]


class Requester:
    """
    Thin wrapper around a requests session that knows the base url and the
    authentication header of one backend and turns HTTP failures into
    AcariErrors.
    """

    def __init__(
        self,
        domain: str,
        auth_header: str,
        token: str,
        error_decoder: ErrorDecoder,
        session: Optional[requests.Session] = None,
        scheme: str = "https",
    ) -> None:
        self.domain = domain
        self.base_url = f"{scheme}://{domain}"
        self._error_decoder = error_decoder
        self._session = session if session is not None else requests.Session()
        self._headers = {
            "User-Agent": USER_AGENT,
            "Host": domain,
            auth_header: token,
        }

    def request(self, method: str, uri: str, data: Optional[Any] = None) -> Any:
        url = f"{self.base_url}{uri}"
        logger.debug("%s %s", method, uri)
        try:
            response = self._session.request(
                method, url, headers=self._headers, json=data
            )
        except requests.RequestException as e:
            raise TransportError(f"{method} {url}: {e}") from e

        return self.__handle_response(response)

    def __handle_response(self, response: requests.Response) -> Any:
        if 200 <= response.status_code < 300:
            if not response.content:
                return None
            try:
                return response.json()
            except ValueError as e:
                raise BackendError(
                    response.status_code, f"Invalid response body: {e}"
                ) from e

        logger.debug("request failed with status %d", response.status_code)
        error: Optional[BackendError] = None
        try:
            error = self._error_decoder(response.status_code, response.json())
        except ValueError:
            error = None
        if error is None:
            error = BackendError(
                response.status_code, f"{response.status_code} {response.reason}"
            )
        raise error


T = TypeVar("T")


def convert_payload(converter: Callable[[Any], T], raw: Any) -> T:
    """Run a wire-to-model conversion, reporting payload mismatches as bugs."""
    try:
        return converter(raw)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise InternalError(f"Unexpected payload ({e!r}): {raw!r}") from e
