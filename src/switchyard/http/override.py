"""HTTP method override for HTML forms.

Browsers can only submit forms as GET or POST. A POSTed form carrying a
``_method`` field (``<input type="hidden" name="_method" value="patch">``)
is routed as if it had been sent with that method instead.

The body is read only when the request is a POST with a form content type;
any other body is left untouched for the handler.
"""

import logging

from switchyard.config import RouterConfig
from switchyard.errors import MalformedForm
from switchyard.http.forms import FORM_CONTENT_TYPES, media_type
from switchyard.http.request import Request

logger = logging.getLogger("switchyard.router")


def is_form_request(request: Request) -> bool:
    """True if the request body is declared as a form encoding."""
    return media_type(request.content_type) in FORM_CONTENT_TYPES


async def resolve_method(request: Request, config: RouterConfig) -> str:
    """Return the method to use for route matching.

    Falls back to the transport method when overriding is disabled, the
    request is not a form POST, the field is absent or empty, or the form
    does not parse. A field in the body wins over one in the query string.

    Raises:
        PayloadTooLarge: If the form body exceeds ``config.max_form_memory``.
    """
    method = request.method
    if not config.method_override or method != "POST" or not is_form_request(request):
        return method

    try:
        form = await request.form(max_size=config.max_form_memory)
    except MalformedForm as exc:
        logger.debug("method override skipped for %s %s: %s", method, request.path, exc)
        return method

    field = config.method_override_field
    override = form.get(field) or request.query.get(field, [""])[0]
    if not override:
        return method

    effective = override.upper()
    logger.debug("method override %s -> %s for %s", method, effective, request.path)
    return effective
