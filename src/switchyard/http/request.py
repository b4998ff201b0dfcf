"""HTTP request.

Frozen-by-convention metadata with async body access, plus the one field
that does change during dispatch: ``context``, rebound in place by
``bind_context()`` and ``halt_request()``.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
from urllib.parse import parse_qs

from switchyard._internal.asgi import Receive, Scope
from switchyard.context import Context
from switchyard.errors import PayloadTooLarge
from switchyard.http.headers import Headers

if TYPE_CHECKING:
    from switchyard.http.forms import FormData


@dataclass(slots=True)
class Request:
    """An HTTP request received through ASGI.

    Metadata (method, path, headers, etc.) is never modified after
    creation. The body is read asynchronously via ``.body()``, ``.text()``
    or ``.form()`` and cached, so middleware can inspect it without taking
    it away from the handler.

    ``method`` is always the transport method. The method used for route
    matching may differ when a form overrides it; see
    ``switchyard.http.override``.
    """

    method: str
    path: str
    headers: Headers
    query_string: bytes
    http_version: str
    server: tuple[str, int] | None
    client: tuple[str, int] | None

    # Rebound by bind_context() / halt_request(); a fresh root per request
    context: Context = field(default_factory=Context)

    # Private: ASGI receive callable for body streaming
    _receive: Receive | None = field(default=None, repr=False, compare=False)

    # Private: body and parsed form data, filled on first access
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    # -- Computed properties --

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def content_length(self) -> int | None:
        """The Content-Length header as int."""
        value = self.headers.get("content-length")
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None

    @property
    def query(self) -> dict[str, list[str]]:
        """Parsed query string: name -> all values."""
        if "_query" not in self._cache:
            self._cache["_query"] = parse_qs(
                self.query_string.decode("latin-1"), keep_blank_values=True
            )
        return self._cache["_query"]

    @property
    def url(self) -> str:
        """Request path plus query string."""
        if self.query_string:
            return f"{self.path}?{self.query_string.decode('latin-1')}"
        return self.path

    # -- Async body access --

    async def body(self, *, max_size: int | None = None) -> bytes:
        """Read the full request body.

        Result is cached: the ASGI receive is consumed once, then the same
        bytes are returned on subsequent calls.

        Raises:
            PayloadTooLarge: If *max_size* is given and the body (declared
                or actually received) exceeds it.
        """
        if "_body" in self._cache:
            body = self._cache["_body"]
            if max_size is not None and len(body) > max_size:
                raise PayloadTooLarge(max_size)
            return body

        if max_size is not None:
            declared = self.content_length
            if declared is not None and declared > max_size:
                raise PayloadTooLarge(max_size)

        chunks: list[bytes] = []
        received = 0
        async for chunk in self.stream():
            received += len(chunk)
            if max_size is not None and received > max_size:
                raise PayloadTooLarge(max_size)
            chunks.append(chunk)

        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        if self._receive is None:
            return
        while True:
            message = await self._receive()
            if message.get("type") == "http.disconnect":
                break
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def text(self) -> str:
        """Read the body as text (UTF-8)."""
        raw = await self.body()
        return raw.decode("utf-8")

    async def form(self, *, max_size: int | None = None) -> FormData:
        """Parse the body as form data (URL-encoded or multipart).

        Result is cached: the body is read and parsed once, then the same
        ``FormData`` is returned on subsequent calls.

        Raises:
            MalformedForm: If the Content-Type is not a form encoding or the
                body cannot be parsed.
            PayloadTooLarge: If the body exceeds *max_size*.
        """
        if "_form" in self._cache:
            return self._cache["_form"]

        from switchyard.http.forms import parse_form_data

        ct = self.content_type or "application/x-www-form-urlencoded"
        raw = await self.body(max_size=max_size)
        result = parse_form_data(raw, ct)
        self._cache["_form"] = result
        return result

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive | None = None) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query_string=scope.get("query_string", b""),
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
            _receive=receive,
        )
