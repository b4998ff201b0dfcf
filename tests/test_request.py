"""Tests for switchyard.http.request: ASGI request with cached body access."""

import pytest

from switchyard.context import Context
from switchyard.errors import MalformedForm, PayloadTooLarge
from switchyard.http.request import Request


def _make_scope(**overrides: object) -> dict[str, object]:
    """Build a minimal valid ASGI HTTP scope."""
    base: dict[str, object] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/",
        "raw_path": b"/",
        "query_string": b"",
        "root_path": "",
        "headers": [],
        "server": ("localhost", 8000),
        "client": ("127.0.0.1", 54321),
    }
    base.update(overrides)
    return base


def _make_receive(*bodies: bytes):
    """Create an ASGI receive callable that yields bodies."""
    messages = []
    for i, body in enumerate(bodies):
        is_last = i == len(bodies) - 1
        messages.append({"type": "http.request", "body": body, "more_body": not is_last})
    if not messages:
        messages.append({"type": "http.request", "body": b"", "more_body": False})
    it = iter(messages)

    async def receive():
        return next(it)

    return receive


class TestRequestFromASGI:
    def test_basic_fields(self) -> None:
        scope = _make_scope(method="POST", path="/users")
        req = Request.from_asgi(scope, _make_receive())

        assert req.method == "POST"
        assert req.path == "/users"
        assert req.http_version == "1.1"
        assert req.server == ("localhost", 8000)
        assert req.client == ("127.0.0.1", 54321)

    def test_fresh_context(self) -> None:
        req = Request.from_asgi(_make_scope())
        assert req.context == Context()
        assert not req.context.halted

    def test_headers(self) -> None:
        scope = _make_scope(
            headers=[(b"content-type", b"application/json"), (b"x-custom", b"value")]
        )
        req = Request.from_asgi(scope)
        assert req.headers["Content-Type"] == "application/json"
        assert req.content_type == "application/json"
        assert req.headers.get("x-custom") == "value"

    def test_content_length(self) -> None:
        req = Request.from_asgi(_make_scope(headers=[(b"content-length", b"42")]))
        assert req.content_length == 42

    def test_bad_content_length(self) -> None:
        req = Request.from_asgi(_make_scope(headers=[(b"content-length", b"many")]))
        assert req.content_length is None

    def test_query(self) -> None:
        req = Request.from_asgi(_make_scope(query_string=b"page=2&tag=a&tag=b&empty="))
        assert req.query == {"page": ["2"], "tag": ["a", "b"], "empty": [""]}

    def test_url(self) -> None:
        req = Request.from_asgi(_make_scope(path="/search", query_string=b"q=x"))
        assert req.url == "/search?q=x"
        assert Request.from_asgi(_make_scope(path="/a")).url == "/a"


class TestRequestBody:
    @pytest.mark.asyncio
    async def test_body(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive(b"hello"))
        assert await req.body() == b"hello"

    @pytest.mark.asyncio
    async def test_chunked_body(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive(b"hel", b"lo"))
        assert await req.body() == b"hello"

    @pytest.mark.asyncio
    async def test_body_cached(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive(b"once"))
        assert await req.body() == b"once"
        assert await req.body() == b"once"

    @pytest.mark.asyncio
    async def test_text(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive("héllo".encode()))
        assert await req.text() == "héllo"

    @pytest.mark.asyncio
    async def test_no_receive(self) -> None:
        req = Request.from_asgi(_make_scope())
        assert await req.body() == b""

    @pytest.mark.asyncio
    async def test_disconnect_ends_body(self) -> None:
        messages = iter([{"type": "http.disconnect"}])

        async def receive():
            return next(messages)

        req = Request.from_asgi(_make_scope(), receive)
        assert await req.body() == b""

    @pytest.mark.asyncio
    async def test_declared_length_over_limit(self) -> None:
        scope = _make_scope(headers=[(b"content-length", b"100")])
        req = Request.from_asgi(scope, _make_receive(b"x" * 100))
        with pytest.raises(PayloadTooLarge) as exc_info:
            await req.body(max_size=10)
        assert exc_info.value.status == 413

    @pytest.mark.asyncio
    async def test_streamed_length_over_limit(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive(b"x" * 6, b"x" * 6))
        with pytest.raises(PayloadTooLarge):
            await req.body(max_size=10)


class TestRequestForm:
    @pytest.mark.asyncio
    async def test_urlencoded(self) -> None:
        scope = _make_scope(
            method="POST",
            headers=[(b"content-type", b"application/x-www-form-urlencoded")],
        )
        req = Request.from_asgi(scope, _make_receive(b"name=John&tag=a&tag=b"))
        form = await req.form()
        assert form["name"] == "John"
        assert form.get_list("tag") == ["a", "b"]

    @pytest.mark.asyncio
    async def test_form_cached(self) -> None:
        scope = _make_scope(
            method="POST",
            headers=[(b"content-type", b"application/x-www-form-urlencoded")],
        )
        req = Request.from_asgi(scope, _make_receive(b"a=1"))
        assert await req.form() is await req.form()

    @pytest.mark.asyncio
    async def test_non_form_content_type(self) -> None:
        scope = _make_scope(method="POST", headers=[(b"content-type", b"application/json")])
        req = Request.from_asgi(scope, _make_receive(b"{}"))
        with pytest.raises(MalformedForm):
            await req.form()
