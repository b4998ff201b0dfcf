"""Route keys, endpoints, and match results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final

from switchyard._internal.types import HandlerFunc, Servable
from switchyard.errors import ConfigurationError

# Route.method for capability-object routes: the route accepts every method
ANY_METHOD: Final = None


@dataclass(frozen=True, slots=True)
class Route:
    """A route table key: the method and the pattern as registered.

    ``path`` is local to the router that owns the route; the router's base
    path is prepended at match time.
    """

    method: str | None
    path: str

    def accepts(self, method: str) -> bool:
        """True if a request with *method* may use this route."""
        if self.method is ANY_METHOD:
            return True
        return self.method == method


@dataclass(frozen=True, slots=True)
class Endpoint:
    """What a route dispatches to: a handler function or a capability object.

    Exactly one of ``fn`` and ``handler`` is set.
    """

    fn: HandlerFunc | None = None
    handler: Servable | None = None

    def __post_init__(self) -> None:
        if (self.fn is None) == (self.handler is None):
            msg = "An endpoint needs exactly one of a handler function or a serve() object."
            raise ConfigurationError(msg)
        if self.fn is not None and not callable(self.fn):
            msg = f"Handler {self.fn!r} is not callable."
            raise ConfigurationError(msg)
        if self.handler is not None and not callable(getattr(self.handler, "serve", None)):
            msg = f"{type(self.handler).__name__} has no callable serve(w, request) method."
            raise ConfigurationError(msg)

    @property
    def is_capability(self) -> bool:
        return self.handler is not None

    @property
    def target(self) -> Any:
        """The callable to invoke with ``(w, request)``."""
        if self.handler is not None:
            return self.handler.serve
        return self.fn


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    endpoint: Endpoint
    params: dict[str, str]
