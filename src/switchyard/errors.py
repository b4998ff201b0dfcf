"""Switchyard exception hierarchy.

Shared across the router, the HTTP primitives, and middleware so every
module raises and catches the same types.

An unmatched route is not an exception: the router answers it with a 404
status and the optional not-found handler. Halting a request is not an
exception either; it is a flag on the request context.
"""

from dataclasses import dataclass


class SwitchyardError(Exception):
    """Base for all switchyard-specific errors."""


class ConfigurationError(SwitchyardError):
    """Raised when a route, middleware, or handler registration is invalid.

    Raised eagerly at registration time, before any request is served.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(SwitchyardError):
    """An error that maps directly to an HTTP status code.

    ``Router.serve`` catches the ones raised while resolving the request
    method and writes ``status`` instead of dispatching.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class PayloadTooLarge(HTTPError):  # noqa: N818
    """413: the request body exceeds the configured memory limit."""

    def __init__(self, limit: int, detail: str = "") -> None:
        super().__init__(
            status=413,
            detail=detail or f"Request body exceeds {limit} bytes",
        )


class MalformedForm(SwitchyardError, ValueError):  # noqa: N818
    """The request body claims a form content type but cannot be parsed."""
