"""Waypost exception hierarchy.

Shared across the route table, dispatcher, and router so every module
raises and catches the same types.
"""

from dataclasses import dataclass
from http import HTTPStatus
from typing import Any


class WaypostError(Exception):
    """Base for all waypost-specific errors."""


class ConfigurationError(WaypostError):
    """Raised when routes or router configuration are invalid.

    Surfaced at registration time, before the router serves requests.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(WaypostError):
    """An error that maps directly to an HTTP status code.

    Raised inside the dispatcher and written to the response at the
    dispatch boundary as a JSON error body.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)

    @property
    def title(self) -> str:
        """Standard reason phrase for the status (``"Not Found"``)."""
        try:
            return HTTPStatus(self.status).phrase
        except ValueError:
            return "Error"

    def to_payload(self) -> dict[str, Any]:
        """The JSON body written for this error."""
        return {"error": self.title, "message": self.detail}


class Forbidden(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """403 — the request origin or method is not allowed by the CORS policy."""

    def __init__(self, detail: str = "Origin or method not allowed.") -> None:
        super().__init__(status=403, detail=detail)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "No route matches the provided URI.") -> None:
        super().__init__(status=404, detail=detail)


class HandlerError(HTTPError):
    """500 — the matched handler failed while being resolved or invoked.

    Carries the original failure's message as the detail; the original
    exception is chained as ``__cause__``.
    """

    def __init__(self, detail: str = "Internal Server Error") -> None:
        super().__init__(status=500, detail=detail)
