"""Tests for the response-v2 envelope helpers."""

import json

import pytest

from toolkit_mcp.core.context import request_context
from toolkit_mcp.core.responses import (
    RESPONSE_VERSION,
    ErrorCode,
    ErrorType,
    backend_error,
    error_response,
    internal_error,
    not_found_error,
    sanitize_error_message,
    success_response,
    timeout_error,
    validation_error,
)


class TestSuccessResponse:
    def test_envelope(self):
        response = success_response({"a": 1}, b=2)
        assert response.to_dict() == {
            "success": True,
            "data": {"a": 1, "b": 2},
            "error": None,
            "meta": {"version": RESPONSE_VERSION},
        }

    def test_text_is_not_in_envelope(self):
        response = success_response({"text": "hi"}, text="hi")
        assert response.text == "hi"
        assert "text" not in response.to_dict()

    def test_request_id_from_context(self):
        with request_context(correlation_id="req_fixed") as ctx:
            response = success_response()
        assert response.meta["request_id"] == ctx.correlation_id

    def test_telemetry_and_warnings(self):
        response = success_response(warnings=["partial"], telemetry={"duration_ms": 1.5})
        assert response.meta["warnings"] == ["partial"]
        assert response.meta["telemetry"] == {"duration_ms": 1.5}

    def test_to_json_is_minified(self):
        encoded = success_response({"a": 1}).to_json()
        assert " " not in encoded
        assert json.loads(encoded)["data"] == {"a": 1}


class TestErrorResponses:
    def test_defaults_to_internal(self):
        response = error_response("boom")
        assert response.success is False
        assert response.error == "boom"
        assert response.data["error_code"] == "INTERNAL_ERROR"
        assert response.data["error_type"] == "internal"

    def test_validation(self):
        response = validation_error("bad", field="text", remediation="fix it")
        assert response.data["error_code"] == ErrorCode.VALIDATION_ERROR.value
        assert response.data["error_type"] == ErrorType.VALIDATION.value
        assert response.data["details"] == {"field": "text"}
        assert response.data["remediation"] == "fix it"

    def test_not_found(self):
        response = not_found_error("Resource", "toolkit://nope")
        assert response.error == "Resource 'toolkit://nope' not found"
        assert response.data["resource_id"] == "toolkit://nope"
        assert response.data["remediation"] == "Verify the resource name exists."

    def test_backend_message_verbatim(self):
        response = backend_error("OpenWeatherMap API error: HTTP 404", tool_name="get_weather")
        assert response.error == "OpenWeatherMap API error: HTTP 404"
        assert response.data["tool"] == "get_weather"

    def test_timeout(self):
        response = timeout_error("web_search", 1000)
        assert response.data["error_type"] == "timeout"
        assert response.data["timeout_ms"] == 1000

    def test_internal_reference(self):
        response = internal_error(request_id="req_abc")
        assert response.data["remediation"].endswith("Reference: req_abc")
        assert response.meta["request_id"] == "req_abc"


class TestSanitize:
    @pytest.mark.parametrize(
        "exc,expected",
        [
            (json.JSONDecodeError("x", "doc", 0), "Invalid JSON format"),
            (ValueError("secret"), "Invalid value provided"),
            (KeyError("secret"), "Required key not found"),
            (ConnectionRefusedError("secret"), "Connection failed - service may be unavailable"),
            (FileNotFoundError("/secret/path"), "System I/O error occurred"),
            (RuntimeError("secret"), "An internal error occurred"),
        ],
    )
    def test_messages_hide_details(self, exc, expected):
        message = sanitize_error_message(exc)
        assert message == expected
        assert "secret" not in message

    def test_include_type(self):
        assert sanitize_error_message(RuntimeError(), include_type=True) == (
            "An internal error occurred (RuntimeError)"
        )
