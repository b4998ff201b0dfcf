"""Tests for switchyard.errors and switchyard.config."""

import dataclasses

import pytest

from switchyard.config import RouterConfig
from switchyard.errors import (
    ConfigurationError,
    HTTPError,
    MalformedForm,
    PayloadTooLarge,
    SwitchyardError,
)


class TestErrors:
    def test_hierarchy(self) -> None:
        assert issubclass(ConfigurationError, SwitchyardError)
        assert issubclass(HTTPError, SwitchyardError)
        assert issubclass(PayloadTooLarge, HTTPError)
        assert issubclass(MalformedForm, ValueError)

    def test_http_error_str(self) -> None:
        assert str(HTTPError(status=418)) == "418"
        assert str(HTTPError(status=418, detail="teapot")) == "418: teapot"

    def test_payload_too_large(self) -> None:
        exc = PayloadTooLarge(1024)
        assert exc.status == 413
        assert "1024" in exc.detail
        with pytest.raises(HTTPError):
            raise exc


class TestRouterConfig:
    def test_defaults(self) -> None:
        config = RouterConfig()
        assert config.method_override is True
        assert config.method_override_field == "_method"
        assert config.max_form_memory == 10 * 1024 * 1024

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            RouterConfig().method_override = False  # type: ignore[misc]
