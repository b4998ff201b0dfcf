"""Shared handler types used across switchyard modules."""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol, TypeAlias, runtime_checkable

if TYPE_CHECKING:
    from switchyard.http.request import Request
    from switchyard.http.response import ResponseWriter

# A plain handler: writes to the response writer, may be sync or async.
# Middleware and not-found handlers share the same shape.
HandlerFunc: TypeAlias = Callable[["ResponseWriter", "Request"], Any]


@runtime_checkable
class Servable(Protocol):
    """A capability object: anything with a ``serve(w, request)`` method.

    ``Router`` itself satisfies this protocol, so a router can be mounted
    inside another one with ``handle()``.
    """

    def serve(self, w: "ResponseWriter", request: "Request") -> Any: ...
