"""Tests for switchyard.routing.route: route keys and endpoints."""

import pytest

from switchyard.errors import ConfigurationError
from switchyard.routing.route import ANY_METHOD, Endpoint, Route


def _handler(w, request) -> None:
    w.write("ok")


class _Capability:
    def serve(self, w, request) -> None:
        w.write("served")


class TestRoute:
    def test_equal_keys(self) -> None:
        assert Route("GET", "/foo") == Route("GET", "/foo")
        assert hash(Route("GET", "/foo")) == hash(Route("GET", "/foo"))

    def test_method_is_part_of_key(self) -> None:
        assert Route("GET", "/foo") != Route("POST", "/foo")
        assert Route(ANY_METHOD, "/foo") != Route("GET", "/foo")

    def test_accepts_own_method(self) -> None:
        route = Route("GET", "/foo")
        assert route.accepts("GET")
        assert not route.accepts("POST")

    def test_any_method_accepts_all(self) -> None:
        route = Route(ANY_METHOD, "/foo")
        assert route.accepts("GET")
        assert route.accepts("PATCH")


class TestEndpoint:
    def test_function_target(self) -> None:
        endpoint = Endpoint(fn=_handler)
        assert endpoint.target is _handler
        assert not endpoint.is_capability

    def test_capability_target(self) -> None:
        obj = _Capability()
        endpoint = Endpoint(handler=obj)
        assert endpoint.is_capability
        assert endpoint.target == obj.serve

    def test_requires_exactly_one(self) -> None:
        with pytest.raises(ConfigurationError):
            Endpoint()
        with pytest.raises(ConfigurationError):
            Endpoint(fn=_handler, handler=_Capability())

    def test_rejects_non_callable(self) -> None:
        with pytest.raises(ConfigurationError, match="not callable"):
            Endpoint(fn="nope")  # type: ignore[arg-type]

    def test_rejects_object_without_serve(self) -> None:
        with pytest.raises(ConfigurationError, match="serve"):
            Endpoint(handler=object())  # type: ignore[arg-type]
