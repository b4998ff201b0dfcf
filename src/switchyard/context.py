"""Request-scoped context.

Every request carries a ``Context``: the path parameters captured by the
router, arbitrary keyed values added by middleware, and the halt flag.

Contexts are immutable. Deriving one (``with_value``, ``with_params``,
``halt``) returns a new object, which ``bind_context()`` then rebinds onto
the request in place. Each request starts from its own empty root context,
so nothing leaks between requests.

Usage::

    from switchyard.context import bind_context, halt_request, param

    def load_account(w, request):
        account = accounts.get(param(request.context, "id"))
        if account is None:
            w.write_header(404)
            halt_request(request)
            return
        bind_context(request.context.with_value("account", account), request)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from switchyard.http.request import Request


@dataclass(frozen=True, slots=True)
class Context:
    """Immutable per-request state shared by middleware and the handler.

    ``halted`` is one-shot: once a context is halted, every context derived
    from it is halted too.
    """

    params: Mapping[str, str] = field(default_factory=dict)
    values: Mapping[Any, Any] = field(default_factory=dict)
    halted: bool = False

    def value(self, key: Any, default: Any = None) -> Any:
        """Return the value stored under *key*, or *default*."""
        return self.values.get(key, default)

    def with_value(self, key: Any, value: Any) -> Context:
        """Return a new context with *key* set to *value*."""
        return replace(self, values={**self.values, key: value})

    def with_params(self, params: Mapping[str, str]) -> Context:
        """Return a new context carrying *params* as the path parameters."""
        return replace(self, params=dict(params))

    def halt(self) -> Context:
        """Return a new, halted context."""
        return replace(self, halted=True)


def params(context: Context | None) -> dict[str, str]:
    """Return the path parameters captured for the request.

    Returns an empty dict when *context* is missing or not a ``Context``.
    The result is a copy; mutating it does not affect the request.
    """
    if not isinstance(context, Context):
        return {}
    return dict(context.params)


def param(context: Context | None, key: str) -> str:
    """Return one path parameter, or ``""`` if it was not captured."""
    return params(context).get(key, "")


def bind_context(context: Context, request: Request) -> None:
    """Replace the request's context in place.

    Later middleware and the handler see the new context.
    """
    request.context = context


def halt_request(request: Request) -> None:
    """Stop the middleware chain after the current step.

    Remaining middleware and the route handler are skipped. Anything
    already written to the response stands.
    """
    bind_context(request.context.halt(), request)
