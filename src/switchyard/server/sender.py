"""ASGI response sending: translates a finished Response to ASGI messages."""

from switchyard._internal.asgi import Send
from switchyard.http.response import Response

DEFAULT_CONTENT_TYPE = "text/plain; charset=utf-8"


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


async def send_response(response: Response, send: Send) -> None:
    """Translate a Response into ASGI send() calls.

    Handlers set their own headers; a body without a ``Content-Type``
    is sent as UTF-8 plain text. ``Content-Length`` is always computed
    here and overrides anything a handler set.
    """
    body = response.body if _body_allowed(response.status) else b""

    raw_headers: list[tuple[bytes, bytes]] = [
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in response.headers
        if name.lower() != "content-length"
    ]
    if body and response.header("content-type") is None:
        raw_headers.insert(0, (b"content-type", DEFAULT_CONTENT_TYPE.encode("latin-1")))
    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": body,
        }
    )
