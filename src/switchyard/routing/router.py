"""Router and sub-router tree.

A ``Router`` owns a base path, a route table, a pre-handler middleware
chain, an optional not-found handler, and any number of sub-routers. The
tree is append-only: sub-routers are created through their parent and are
never detached. Routes are registered during setup, before serving starts;
there is no locking around the table.

Usage::

    from switchyard import Router, param

    router = Router()

    @router.get("/users/:id")
    def show_user(w, request):
        w.write(f"user {param(request.context, 'id')}")

    admin = router.sub_router("/admin")
    admin.before(require_admin)
    admin.get("/stats", show_stats)   # matches GET /admin/stats

    # any ASGI server can host the router directly
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, overload

from switchyard._internal.asgi import Receive, Scope, Send
from switchyard._internal.invoke import describe, invoke
from switchyard._internal.types import HandlerFunc, Servable
from switchyard.config import RouterConfig
from switchyard.errors import ConfigurationError, HTTPError
from switchyard.http.override import resolve_method
from switchyard.http.request import Request
from switchyard.http.response import ResponseWriter
from switchyard.routing.chain import bind_params, run_chain
from switchyard.routing.pattern import compile_pattern, join_path
from switchyard.routing.route import ANY_METHOD, Endpoint, Route, RouteMatch

logger = logging.getLogger("switchyard.router")


def _normalize_base(path: str) -> str:
    if not path:
        return "/"
    if not path.startswith("/"):
        return "/" + path
    return path


class Router:
    """A request router with named/wildcard params and nested sub-routers.

    Routers are ASGI applications (``await router(scope, receive, send)``)
    and also capability objects (``serve(w, request)``), so one router can
    be mounted in another with ``handle()``.
    """

    __slots__ = ("_base_path", "_children", "_middleware", "_not_found", "_routes", "config")

    def __init__(self, base_path: str = "/", *, config: RouterConfig | None = None) -> None:
        self._base_path: str = _normalize_base(base_path)
        self._routes: dict[Route, Endpoint] = {}
        self._children: list[Router] = []
        self._middleware: list[HandlerFunc] = []
        self._not_found: HandlerFunc | None = None
        self.config: RouterConfig = config or RouterConfig()

    def __repr__(self) -> str:
        return f"Router({self._base_path!r}, routes={len(self._routes)}, sub_routers={len(self._children)})"

    # -- Introspection --

    @property
    def base_path(self) -> str:
        return self._base_path

    @property
    def routes(self) -> dict[Route, Endpoint]:
        """Snapshot of this router's own route table."""
        return dict(self._routes)

    @property
    def sub_routers(self) -> tuple[Router, ...]:
        return tuple(self._children)

    @property
    def middleware(self) -> tuple[HandlerFunc, ...]:
        return tuple(self._middleware)

    # -- Registration --

    def handle_func(self, method: str, pattern: str, fn: HandlerFunc) -> None:
        """Register *fn* for requests with *method* whose path matches *pattern*.

        Registering the same method and pattern again replaces the handler.
        """
        if not method:
            msg = "handle_func() needs a method; use handle() for method-agnostic routes."
            raise ConfigurationError(msg)
        self._bind_route(Route(method=method.upper(), path=pattern), Endpoint(fn=fn))

    def handle(self, pattern: str, handler: Servable) -> None:
        """Register a capability object for *pattern*, whatever the method.

        *handler* is anything with a ``serve(w, request)`` method, including
        another ``Router``.
        """
        self._bind_route(Route(method=ANY_METHOD, path=pattern), Endpoint(handler=handler))

    def _bind_route(self, route: Route, endpoint: Endpoint) -> None:
        compile_pattern(join_path(self._base_path, route.path))
        if route in self._routes:
            logger.debug("replacing handler for %s %s", route.method or "*", route.path)
        self._routes[route] = endpoint

    @overload
    def get(self, pattern: str) -> Callable[[HandlerFunc], HandlerFunc]: ...
    @overload
    def get(self, pattern: str, fn: HandlerFunc) -> HandlerFunc: ...
    def get(self, pattern: str, fn: HandlerFunc | None = None) -> Any:
        """Register a GET handler. Usable as ``@router.get(pattern)``."""
        return self._method_route("GET", pattern, fn)

    @overload
    def post(self, pattern: str) -> Callable[[HandlerFunc], HandlerFunc]: ...
    @overload
    def post(self, pattern: str, fn: HandlerFunc) -> HandlerFunc: ...
    def post(self, pattern: str, fn: HandlerFunc | None = None) -> Any:
        """Register a POST handler. Usable as ``@router.post(pattern)``."""
        return self._method_route("POST", pattern, fn)

    @overload
    def put(self, pattern: str) -> Callable[[HandlerFunc], HandlerFunc]: ...
    @overload
    def put(self, pattern: str, fn: HandlerFunc) -> HandlerFunc: ...
    def put(self, pattern: str, fn: HandlerFunc | None = None) -> Any:
        """Register a PUT handler. Usable as ``@router.put(pattern)``."""
        return self._method_route("PUT", pattern, fn)

    @overload
    def delete(self, pattern: str) -> Callable[[HandlerFunc], HandlerFunc]: ...
    @overload
    def delete(self, pattern: str, fn: HandlerFunc) -> HandlerFunc: ...
    def delete(self, pattern: str, fn: HandlerFunc | None = None) -> Any:
        """Register a DELETE handler. Usable as ``@router.delete(pattern)``."""
        return self._method_route("DELETE", pattern, fn)

    @overload
    def patch(self, pattern: str) -> Callable[[HandlerFunc], HandlerFunc]: ...
    @overload
    def patch(self, pattern: str, fn: HandlerFunc) -> HandlerFunc: ...
    def patch(self, pattern: str, fn: HandlerFunc | None = None) -> Any:
        """Register a PATCH handler. Usable as ``@router.patch(pattern)``."""
        return self._method_route("PATCH", pattern, fn)

    def _method_route(self, method: str, pattern: str, fn: HandlerFunc | None) -> Any:
        if fn is not None:
            self.handle_func(method, pattern, fn)
            return fn

        def decorator(func: HandlerFunc) -> HandlerFunc:
            self.handle_func(method, pattern, func)
            return func

        return decorator

    def before(self, *fns: HandlerFunc) -> None:
        """Append middleware that runs, in order, before every handler of this router."""
        for fn in fns:
            if not callable(fn):
                msg = f"Middleware {fn!r} is not callable."
                raise ConfigurationError(msg)
        self._middleware.extend(fns)

    def not_found(self, fn: HandlerFunc | None) -> HandlerFunc | None:
        """Set the handler run after a 404 is written. ``None`` clears it.

        Only the router whose ``serve`` receives the request consults its
        not-found handler; sub-routers' handlers are not used for requests
        dispatched through a parent.
        """
        if fn is not None and not callable(fn):
            msg = f"Not-found handler {fn!r} is not callable."
            raise ConfigurationError(msg)
        self._not_found = fn
        return fn

    def sub_router(self, path: str) -> Router:
        """Create a child router whose base path is this one's plus *path*."""
        if not path.startswith("/"):
            path = "/" + path
        prefix = "" if self._base_path == "/" else self._base_path
        child = Router(prefix + path, config=self.config)
        self._children.append(child)
        return child

    # -- Resolution --

    def find_owning_router(self, path: str) -> Router | None:
        """Return the deepest router responsible for *path*, or ``None``.

        Children are searched first, depth-first in creation order. A
        router claims a path when its base path is a string prefix of it,
        so ``/admin`` also claims ``/administrator``.
        """
        for child in self._children:
            owner = child.find_owning_router(path)
            if owner is not None:
                return owner
        if path.startswith(self._base_path):
            return self
        return None

    def match(self, method: str, path: str) -> RouteMatch | None:
        """Find a route of this router (not its children) for the request.

        Routes are tried in registration order. When several patterns could
        match the same path, which one wins is unspecified.
        """
        for route, endpoint in self._routes.items():
            if not route.accepts(method):
                continue
            params = compile_pattern(join_path(self._base_path, route.path)).match(path)
            if params is not None:
                return RouteMatch(route=route, endpoint=endpoint, params=params)
        return None

    # -- Dispatch --

    async def serve(self, w: ResponseWriter, request: Request) -> None:
        """Dispatch one request, writing the result to *w*."""
        try:
            method = await resolve_method(request, self.config)
        except HTTPError as exc:
            logger.warning("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
            for name, value in exc.headers:
                w.headers.set(name, value)
            w.write_header(exc.status)
            return

        owner = self.find_owning_router(request.path)
        match = owner.match(method, request.path) if owner is not None else None

        if match is None:
            logger.debug("404 %s %s", method, request.path)
            w.write_header(404)
            if self._not_found is not None:
                await invoke(self._not_found, w, request)
            return

        logger.debug(
            "%s %s -> %s %s (%s)",
            method,
            request.path,
            match.route.method or "*",
            match.route.path,
            describe(match.endpoint.target),
        )
        chain = (bind_params(match.params), *owner._middleware)
        await run_chain(chain, match.endpoint.target, w, request)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        from switchyard.server.handler import handle_lifespan, handle_request

        if scope["type"] == "lifespan":
            await handle_lifespan(receive, send)
            return

        await handle_request(self, scope, receive, send)


def new(base_path: str = "/", *, config: RouterConfig | None = None) -> Router:
    """Create a router. An empty *base_path* means ``/``."""
    return Router(base_path, config=config)
