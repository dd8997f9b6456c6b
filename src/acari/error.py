# SPDX-License-Identifier: MIT


class AcariError(Exception):
    category = "Error"

    def __str__(self) -> str:
        return f"{self.category}: {super().__str__()}"


class UserError(AcariError):
    """Bad command line input, unknown names or missing configuration."""

    category = "User error"


class BackendError(AcariError):
    """Error reported by the remote time tracking service."""

    category = "Backend error"

    def __init__(self, status: int, message: str) -> None:
        super().__init__(f"({status}) {message}")
        self.status = status
        self.message = message


class TransportError(AcariError):
    category = "Transport error"


class InternalError(AcariError):
    """
    A backend payload or synthetic id did not look the way the provider
    translation expects. This is a bug, not a misconfiguration.
    """

    category = "Internal error"
