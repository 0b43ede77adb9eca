"""Tests for soffit.errors — exception hierarchy and error messages."""

import pytest

from soffit.errors import (
    ConfigurationError,
    DecodeFailure,
    DispatchError,
    HTTPError,
    MalformedPayload,
    MethodNotAllowed,
    MissingTypeIdentifier,
    NoMatchingView,
    NotFound,
    SoffitError,
)


class TestHierarchy:
    def test_http_error_is_soffit_error(self) -> None:
        assert issubclass(HTTPError, SoffitError)

    def test_configuration_error_is_soffit_error(self) -> None:
        assert issubclass(ConfigurationError, SoffitError)

    @pytest.mark.parametrize(
        "cls", [MissingTypeIdentifier, DecodeFailure, MalformedPayload, NoMatchingView]
    )
    def test_dispatch_errors(self, cls: type) -> None:
        assert issubclass(cls, DispatchError)
        assert issubclass(cls, HTTPError)


class TestHTTPError:
    def test_str_with_detail(self) -> None:
        assert str(HTTPError(status=400, detail="Bad request body")) == "400: Bad request body"

    def test_str_without_detail(self) -> None:
        assert str(HTTPError(status=500)) == "500"

    def test_frozen(self) -> None:
        err = HTTPError(status=400)
        with pytest.raises(AttributeError):
            err.status = 500  # type: ignore[misc]

    def test_not_found(self) -> None:
        assert NotFound().status == 404

    def test_method_not_allowed_header(self) -> None:
        err = MethodNotAllowed(frozenset({"POST"}))
        assert err.status == 405
        assert err.headers == (("Allow", "POST"),)


class TestDispatchErrors:
    def test_missing_type_identifier(self) -> None:
        err = MissingTypeIdentifier()
        assert err.status == 400
        assert err.header == "X-Soffit-PayloadClass"
        assert "X-Soffit-PayloadClass" in str(err)

    def test_decode_failure_keeps_cause(self) -> None:
        cause = ValueError("boom")
        err = DecodeFailure("a.B", "bad body", cause)
        assert err.status == 400
        assert err.type_identifier == "a.B"
        assert err.cause is cause

    def test_malformed_payload(self) -> None:
        err = MalformedPayload("mode")
        assert err.status == 500
        assert err.facet == "mode"
        assert "mode" in err.detail

    def test_no_matching_view_message(self) -> None:
        err = NoMatchingView("soffit/weather/", "edit", "maximized")
        assert err.status == 500
        assert "soffit/weather/" in err.detail
        assert "edit" in err.detail
        assert "maximized" in err.detail

    def test_can_be_raised_and_caught_as_http_error(self) -> None:
        with pytest.raises(HTTPError):
            raise NoMatchingView("m/", "view", "normal")
