"""Invoke helpers: call sync or async handlers uniformly.

Handlers, middleware, and not-found handlers can be ``def`` or
``async def``; so can a capability object's ``serve`` method. Every call
site goes through ``invoke()`` so the sync/async check lives in exactly
one place.

Usage::

    from switchyard._internal.invoke import invoke

    await invoke(handler, w, request)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable.

    Works with both sync and async callables::

        def hello(w, request):
            w.write("hello")

        async def hello_later(w, request):
            await asyncio.sleep(0)
            w.write("hello")
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


def describe(handler: Any) -> str:
    """Return a readable name for a handler in log messages."""
    name = getattr(handler, "__qualname__", None) or getattr(handler, "__name__", None)
    if name is None:
        name = type(handler).__qualname__
    return name
