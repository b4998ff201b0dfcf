"""HTTP Basic authentication middleware.

Checks the ``Authorization: Basic ...`` header against a user-supplied
``auth(context, username, password)`` callable (sync or async). On any
failure the middleware writes the status and halts the request, so the
route handler never runs.

    missing header                 -> 401 + WWW-Authenticate
    undecodable or not user:pass   -> 400
    auth() returns false           -> 401

Usage::

    async def check(context, username, password):
        return await users.verify(username, password)

    admin = router.sub_router("/admin")
    admin.before(basic_auth(check, realm="admin"))
"""

import base64
import binascii
import logging
from collections.abc import Awaitable, Callable
from typing import TypeAlias

from switchyard._internal.invoke import invoke
from switchyard._internal.types import HandlerFunc
from switchyard.context import Context, halt_request
from switchyard.http.request import Request
from switchyard.http.response import ResponseWriter

logger = logging.getLogger("switchyard.security")

AuthFunc: TypeAlias = Callable[[Context, str, str], bool | Awaitable[bool]]

_SCHEME = "basic "


def parse_basic_credentials(header: str) -> tuple[str, str] | None:
    """Decode a Basic ``Authorization`` header into ``(username, password)``.

    Returns ``None`` if the scheme is not Basic, the payload is not valid
    base64/UTF-8, or it does not contain exactly one ``:``. Padding is
    optional.
    """
    if header[: len(_SCHEME)].lower() != _SCHEME:
        return None
    raw = header[len(_SCHEME) :].strip().rstrip("=")
    try:
        decoded = base64.b64decode(raw + "=" * (-len(raw) % 4), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    parts = decoded.split(":")
    if len(parts) != 2:
        return None
    return parts[0], parts[1]


def basic_auth(auth: AuthFunc | None, *, realm: str = "") -> HandlerFunc:
    """Middleware enforcing HTTP Basic authentication with *auth*."""
    challenge = f'Basic realm="{realm}"'

    def _reject(w: ResponseWriter, request: Request, status: int, reason: str) -> None:
        logger.info("basic auth rejected %s %s: %s", request.method, request.path, reason)
        w.write_header(status)
        halt_request(request)

    async def _basic_auth(w: ResponseWriter, request: Request) -> None:
        header = request.headers.get("authorization")
        if not header:
            w.headers.set("WWW-Authenticate", challenge)
            _reject(w, request, 401, "missing credentials")
            return

        credentials = parse_basic_credentials(header)
        if credentials is None:
            _reject(w, request, 400, "malformed credentials")
            return

        username, password = credentials
        if auth is None or not await invoke(auth, request.context, username, password):
            _reject(w, request, 401, "invalid credentials")

    return _basic_auth
