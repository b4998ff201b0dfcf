"""ASGI handler: translates ASGI scope/messages to switchyard types.

The only component that touches raw ASGI directly. Builds a ``Request``
and a ``ResponseWriter``, hands them to the router's ``serve``, and sends
whatever was written back through ASGI ``send()``.
"""

import logging

from switchyard._internal.asgi import Receive, Scope, Send
from switchyard._internal.invoke import invoke
from switchyard._internal.types import Servable
from switchyard.http.request import Request
from switchyard.http.response import Response, ResponseWriter
from switchyard.server.sender import send_response

logger = logging.getLogger("switchyard.server")


async def handle_request(app: Servable, scope: Scope, receive: Receive, send: Send) -> None:
    """Process a single HTTP request through *app*."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    w = ResponseWriter()

    try:
        await invoke(app.serve, w, request)
        response = w.finish()
    except Exception:
        logger.exception("500 %s %s", request.method, request.path)
        response = Response(body=b"Internal Server Error", status=500)

    await send_response(response, send)


async def handle_lifespan(receive: Receive, send: Send) -> None:
    """Acknowledge ASGI lifespan startup and shutdown.

    Routers hold no resources, so there is nothing to set up or tear down.
    """
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            await send({"type": "lifespan.shutdown.complete"})
            return
