"""Pre-handler middleware.

A middleware has the same shape as a handler::

    def mw(w: ResponseWriter, request: Request) -> None

It runs before the route's handler and may write to the response. Calling
``halt_request(request)`` stops the chain; the handler is then skipped.

Built-in middleware:
    set_header -- Set one response header
    set_headers -- Set several response headers
    basic_auth -- HTTP Basic authentication
"""

from switchyard.middleware.basic_auth import AuthFunc, basic_auth, parse_basic_credentials
from switchyard.middleware.headers import set_header, set_headers

__all__ = [
    "AuthFunc",
    "basic_auth",
    "parse_basic_credentials",
    "set_header",
    "set_headers",
]
