"""Header-setting middleware.

Sets response headers before the handler runs. The handler can still
overwrite them.

Usage::

    router.before(set_header("Cache-Control", "no-store"))
    router.before(set_headers({"X-Frame-Options": "DENY", "X-Content-Type-Options": "nosniff"}))
"""

from collections.abc import Mapping

from switchyard._internal.types import HandlerFunc
from switchyard.http.request import Request
from switchyard.http.response import ResponseWriter


def set_header(key: str, value: str) -> HandlerFunc:
    """Middleware that sets one response header."""

    def _set_header(w: ResponseWriter, request: Request) -> None:
        w.headers.set(key, value)

    return _set_header


def set_headers(values: Mapping[str, str]) -> HandlerFunc:
    """Middleware that sets every header in *values*."""
    pairs = tuple(values.items())

    def _set_headers(w: ResponseWriter, request: Request) -> None:
        for key, value in pairs:
            w.headers.set(key, value)

    return _set_headers
