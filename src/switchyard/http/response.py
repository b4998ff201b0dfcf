"""HTTP response writing.

Handlers and middleware share one ``ResponseWriter`` per request and write
to it imperatively: set headers, pick a status, append body bytes. Once
dispatch finishes, ``ResponseWriter.finish()`` freezes what was written
into a ``Response`` for the ASGI sender (and for tests).
"""

import logging
from dataclasses import dataclass

from switchyard.http.headers import MutableHeaders

logger = logging.getLogger("switchyard.server")


@dataclass(frozen=True, slots=True)
class Response:
    """A finished HTTP response. Immutable."""

    body: bytes = b""
    status: int = 200
    headers: tuple[tuple[str, str], ...] = ()

    def header(self, name: str, default: str | None = None) -> str | None:
        """Return the first value of header *name* (case-insensitive)."""
        lower = name.lower()
        for key, value in self.headers:
            if key.lower() == lower:
                return value
        return default

    @property
    def text(self) -> str:
        """Body as string."""
        return self.body.decode("utf-8")


class ResponseWriter:
    """Accumulates the response for one request.

    The first ``write_header()`` call fixes the status; later calls are
    ignored (and logged), so a middleware that writes ``401`` before
    halting keeps its status. ``write()`` without a prior
    ``write_header()`` implies ``200``.

    Usage::

        def show_user(w: ResponseWriter, request: Request) -> None:
            w.headers.set("Content-Type", "application/json")
            w.write_header(200)
            w.write(json.dumps({"id": param(request.context, "id")}))
    """

    __slots__ = ("_body", "_status", "headers")

    def __init__(self) -> None:
        self.headers = MutableHeaders()
        self._status: int | None = None
        self._body = bytearray()

    @property
    def status(self) -> int:
        """The status written so far (``200`` if none yet)."""
        return self._status if self._status is not None else 200

    @property
    def wrote_header(self) -> bool:
        """True once a status has been written, explicitly or by ``write()``."""
        return self._status is not None

    @property
    def body(self) -> bytes:
        """Body bytes written so far."""
        return bytes(self._body)

    def write_header(self, status: int) -> None:
        """Set the response status. Only the first call takes effect."""
        if self._status is not None:
            logger.debug("superfluous write_header(%d); status already %d", status, self._status)
            return
        self._status = status

    def write(self, data: str | bytes) -> int:
        """Append *data* to the body and return the number of bytes written."""
        if self._status is None:
            self._status = 200
        chunk = data.encode("utf-8") if isinstance(data, str) else data
        self._body.extend(chunk)
        return len(chunk)

    def finish(self) -> Response:
        """Freeze everything written so far into a ``Response``."""
        return Response(body=bytes(self._body), status=self.status, headers=self.headers.items())
