"""Tests for switchyard.middleware: header setting and Basic auth."""

import pytest

from switchyard.context import param
from switchyard.middleware import basic_auth, parse_basic_credentials, set_header, set_headers
from switchyard.routing.router import Router
from switchyard.testing import TestClient


def _ok(w, request) -> None:
    w.write("ok")


class TestSetHeader:
    @pytest.mark.asyncio
    async def test_sets_header(self) -> None:
        router = Router()
        router.before(set_header("foo", "bar"))
        router.get("/", _ok)

        response = await TestClient(router).get("/")
        assert response.header("foo") == "bar"

    @pytest.mark.asyncio
    async def test_sets_many(self) -> None:
        router = Router()
        router.before(set_headers({"foo": "bar", "baz": "qux"}))
        router.get("/", _ok)

        response = await TestClient(router).get("/")
        assert response.header("foo") == "bar"
        assert response.header("baz") == "qux"

    @pytest.mark.asyncio
    async def test_handler_can_override(self) -> None:
        def handler(w, request) -> None:
            w.headers.set("Cache-Control", "max-age=60")

        router = Router()
        router.before(set_header("Cache-Control", "no-store"))
        router.get("/", handler)

        response = await TestClient(router).get("/")
        assert response.header("cache-control") == "max-age=60"


class TestParseBasicCredentials:
    @pytest.mark.parametrize(
        ("header", "expected"),
        [
            ("Basic Zm9vOmJhcg==", ("foo", "bar")),
            ("basic Zm9vOmJhcg==", ("foo", "bar")),
            ("Basic Zm9vOmJhcg", ("foo", "bar")),
            ("Basic Zm9vOmJhcgZZZ", None),
            ("Basic invalid_creds", None),
            ("Basic Zm9v", None),
            ("Bearer Zm9vOmJhcg==", None),
            ("invalid_creds", None),
        ],
    )
    def test_parse(self, header: str, expected: tuple[str, str] | None) -> None:
        assert parse_basic_credentials(header) == expected


def _protected(auth) -> Router:
    router = Router()
    router.before(basic_auth(auth, realm="test"))
    router.get("/", _ok)
    return router


class TestBasicAuth:
    @pytest.mark.asyncio
    async def test_missing_header(self) -> None:
        response = await TestClient(_protected(lambda ctx, u, p: True)).get("/")
        assert response.status == 401
        assert response.header("www-authenticate") == 'Basic realm="test"'
        assert response.body == b""

    @pytest.mark.asyncio
    async def test_rejected_credentials(self) -> None:
        client = TestClient(_protected(lambda ctx, u, p: False))
        response = await client.get("/", headers={"Authorization": "Basic Zm9vOmJhcg=="})
        assert response.status == 401
        assert response.header("www-authenticate") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("header", ["Basic Zm9vOmJhcgZZZ", "invalid_creds"])
    async def test_malformed_credentials(self, header: str) -> None:
        client = TestClient(_protected(lambda ctx, u, p: True))
        response = await client.get("/", headers={"Authorization": header})
        assert response.status == 400
        assert response.header("www-authenticate") is None

    @pytest.mark.asyncio
    async def test_valid_credentials(self) -> None:
        seen: list[tuple[str, str]] = []

        def check(context, username: str, password: str) -> bool:
            seen.append((username, password))
            return True

        client = TestClient(_protected(check))
        response = await client.get("/", headers={"Authorization": "Basic Zm9vOmJhcg=="})
        assert response.status == 200
        assert response.text == "ok"
        assert seen == [("foo", "bar")]

    @pytest.mark.asyncio
    async def test_async_auth(self) -> None:
        async def check(context, username: str, password: str) -> bool:
            return username == "foo"

        client = TestClient(_protected(check))
        response = await client.get("/", headers={"Authorization": "Basic Zm9vOmJhcg=="})
        assert response.status == 200

    @pytest.mark.asyncio
    async def test_no_auth_function(self) -> None:
        client = TestClient(_protected(None))
        response = await client.get("/", headers={"Authorization": "Basic Zm9vOmJhcg=="})
        assert response.status == 401

    @pytest.mark.asyncio
    async def test_auth_sees_route_params(self) -> None:
        def check(context, username: str, password: str) -> bool:
            return param(context, "owner") == username

        router = Router()
        router.before(basic_auth(check))
        router.get("/files/:owner", _ok)
        client = TestClient(router)
        headers = {"Authorization": "Basic Zm9vOmJhcg=="}

        assert (await client.get("/files/foo", headers=headers)).status == 200
        assert (await client.get("/files/bob", headers=headers)).status == 401
