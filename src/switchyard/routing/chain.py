"""Pre-handler middleware chain.

Middleware here runs *before* the handler, not around it: each function
gets the shared writer and request, may write to the response or rebind the
request context, and returns. After every step the request's context is
checked; once it is halted, nothing else in the chain runs.

    Pending -> Running(0) -> ... -> Running(n-1) -> Completed (handler runs)
                     \\-> Halted (handler and later middleware skipped)
"""

import logging
from collections.abc import Mapping, Sequence

from switchyard._internal.invoke import describe, invoke
from switchyard._internal.types import HandlerFunc
from switchyard.context import bind_context
from switchyard.http.request import Request
from switchyard.http.response import ResponseWriter

logger = logging.getLogger("switchyard.router")


def bind_params(params: Mapping[str, str]) -> HandlerFunc:
    """Build the step that stores matched path params in the request context.

    The router puts it first in the chain, so every middleware and the
    handler can read the params with ``param(request.context, name)``.
    """

    def _bind(w: ResponseWriter, request: Request) -> None:
        bind_context(request.context.with_params(params), request)

    return _bind


async def run_chain(
    middleware: Sequence[HandlerFunc],
    handler: HandlerFunc,
    w: ResponseWriter,
    request: Request,
) -> bool:
    """Run *middleware* in order, then *handler* unless one of them halted.

    Returns True if the handler ran.
    """
    for fn in middleware:
        await invoke(fn, w, request)
        if request.context.halted:
            logger.debug("%s %s halted by %s", request.method, request.path, describe(fn))
            return False
    await invoke(handler, w, request)
    return True
