"""Switchyard: an HTTP request router for ASGI.

Routes are keyed by method and path pattern. Patterns capture named
segments (``/users/:id``) and wildcards (``/static/*``). Routers nest into
sub-routers that own a path prefix and carry their own pre-handler
middleware.

Basic usage::

    from switchyard import Router, param

    router = Router()

    @router.get("/users/:id")
    def show_user(w, request):
        w.write(f"user {param(request.context, 'id')}")

    # uvicorn myapp:router
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "Context",
    "HTTPError",
    "MalformedForm",
    "PayloadTooLarge",
    "Request",
    "Response",
    "ResponseWriter",
    "Router",
    "RouterConfig",
    "SwitchyardError",
    "bind_context",
    "halt_request",
    "match_path",
    "new",
    "param",
    "params",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import switchyard`` fast while providing a clean top-level API.
    """
    if name in ("Router", "new"):
        from switchyard.routing import router as _router

        return getattr(_router, name)

    if name == "RouterConfig":
        from switchyard.config import RouterConfig

        return RouterConfig

    if name == "Request":
        from switchyard.http.request import Request

        return Request

    if name in ("Response", "ResponseWriter"):
        from switchyard.http import response as _resp

        return getattr(_resp, name)

    if name in ("Context", "params", "param", "bind_context", "halt_request"):
        from switchyard import context as _ctx

        return getattr(_ctx, name)

    if name == "match_path":
        from switchyard.routing.pattern import match_path

        return match_path

    if name in (
        "SwitchyardError",
        "ConfigurationError",
        "HTTPError",
        "MalformedForm",
        "PayloadTooLarge",
    ):
        from switchyard import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
