"""
Standard response contracts for MCP tool operations.

Response Schema Contract
========================

Every tool call dispatched by the server produces a ``ToolResponse``:

    {
        "success": bool,       # Required: operation success/failure
        "data": {...},         # Required: structured payload (error context on failure)
        "error": str | null,   # Required: error message or null on success
        "meta": {              # Required: response metadata
            "version": "response-v2",
            "request_id": "req_abc123"?,
            "telemetry": { ... }?
        }
    }

Error responses always carry ``data.error_code`` and ``data.error_type`` so
clients can tell the four failure families apart:

* ``validation``  - malformed or missing input; the handler never ran.
* ``not_found``   - the requested tool is not in the catalog.
* ``backend``     - a provider or client callback reported a failure.
* ``internal``    - an unexpected exception escaped a handler.
* ``timeout``     - the handler exceeded the configured per-call timeout.

Key Principle:
    - ``success=True`` means the operation executed correctly, even when the
      outcome is empty or the user declined an interactive request.
    - ``success=False`` means the operation failed to execute; include
      actionable error details.
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from toolkit_mcp.core.context import get_correlation_id

logger = logging.getLogger(__name__)

RESPONSE_VERSION = "response-v2"


class ErrorCode(str, Enum):
    """Machine-readable error codes for MCP tool responses."""

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Resource errors
    NOT_FOUND = "NOT_FOUND"
    TOOL_NOT_FOUND = "TOOL_NOT_FOUND"

    # Backend errors
    BACKEND_ERROR = "BACKEND_ERROR"

    # System errors
    TIMEOUT = "TIMEOUT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorType(str, Enum):
    """Error categories for routing and client-side handling.

    Each type corresponds to an HTTP status code analog.
    """

    VALIDATION = "validation"  # 400 - No retry, fix input
    NOT_FOUND = "not_found"  # 404 - No retry
    BACKEND = "backend"  # 502 - Maybe retry, upstream failure
    TIMEOUT = "timeout"  # 504 - Yes, with backoff
    INTERNAL = "internal"  # 500 - Yes, with backoff


@dataclass
class ToolResponse:
    """
    Standard response structure for MCP tool operations.

    Attributes:
        success: Whether the operation completed successfully
        data: The primary payload (operation-specific structured data)
        error: Error message if success is False, None otherwise
        meta: Response metadata including version identifier
        text: Optional plain-text rendering of the payload; when unset the
            payload is rendered as JSON
    """

    success: bool
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=lambda: {"version": RESPONSE_VERSION})
    text: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Envelope form, without the text rendering."""
        return {
            "success": self.success,
            "data": self.data,
            "error": self.error,
            "meta": self.meta,
        }

    def to_json(self) -> str:
        """Minified JSON envelope."""
        return json.dumps(self.to_dict(), separators=(",", ":"), default=str)


def _build_meta(
    *,
    request_id: Optional[str] = None,
    warnings: Optional[Sequence[str]] = None,
    telemetry: Optional[Mapping[str, Any]] = None,
    extra: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Construct a metadata payload that always includes the response version.

    The request_id defaults to the correlation ID of the current request
    context.
    """
    meta: Dict[str, Any] = {"version": RESPONSE_VERSION}

    effective_request_id = request_id or get_correlation_id() or None
    if effective_request_id:
        meta["request_id"] = effective_request_id
    if warnings:
        meta["warnings"] = list(warnings)
    if telemetry:
        meta["telemetry"] = dict(telemetry)
    if extra:
        meta.update(dict(extra))

    return meta


def success_response(
    data: Optional[Mapping[str, Any]] = None,
    *,
    text: Optional[str] = None,
    warnings: Optional[Sequence[str]] = None,
    telemetry: Optional[Mapping[str, Any]] = None,
    request_id: Optional[str] = None,
    meta: Optional[Mapping[str, Any]] = None,
    **fields: Any,
) -> ToolResponse:
    """Create a standardized success response.

    Args:
        data: Optional mapping used as the base payload.
        text: Plain-text rendering for text-only tools.
        warnings: Non-fatal issues to surface in ``meta.warnings``.
        telemetry: Timing/performance metadata.
        request_id: Correlation identifier propagated through logs.
        meta: Arbitrary extra metadata to merge into ``meta``.
        **fields: Additional payload fields (shorthand for ``data.update``).
    """
    payload: Dict[str, Any] = {}
    if data:
        payload.update(dict(data))
    if fields:
        payload.update(fields)

    meta_payload = _build_meta(
        request_id=request_id,
        warnings=warnings,
        telemetry=telemetry,
        extra=meta,
    )

    return ToolResponse(
        success=True, data=payload, error=None, meta=meta_payload, text=text
    )


def error_response(
    message: str,
    *,
    data: Optional[Mapping[str, Any]] = None,
    error_code: Optional[Union[ErrorCode, str]] = None,
    error_type: Optional[Union[ErrorType, str]] = None,
    remediation: Optional[str] = None,
    details: Optional[Mapping[str, Any]] = None,
    request_id: Optional[str] = None,
    telemetry: Optional[Mapping[str, Any]] = None,
    meta: Optional[Mapping[str, Any]] = None,
) -> ToolResponse:
    """Create a standardized error response.

    Args:
        message: Human-readable description of the failure.
        data: Optional mapping with additional machine-readable context.
        error_code: Canonical error code (``ErrorCode`` or string).
        error_type: Error category for routing (``ErrorType`` or string).
        remediation: User-facing guidance on how to fix the issue.
        details: Nested structure describing validation failures or metadata.
        request_id: Correlation identifier propagated through logs.
        telemetry: Timing/performance metadata captured before failure.
        meta: Arbitrary extra metadata to merge into ``meta``.

    Example:
        >>> error_response(
        ...     "Validation failed: text is required",
        ...     error_code=ErrorCode.VALIDATION_ERROR,
        ...     error_type=ErrorType.VALIDATION,
        ...     remediation="Provide a non-empty text parameter",
        ... )
    """
    payload: Dict[str, Any] = {}
    if data:
        payload.update(dict(data))

    effective_error_code: Union[ErrorCode, str] = (
        error_code if error_code is not None else ErrorCode.INTERNAL_ERROR
    )
    effective_error_type: Union[ErrorType, str] = (
        error_type if error_type is not None else ErrorType.INTERNAL
    )

    if "error_code" not in payload:
        payload["error_code"] = (
            effective_error_code.value
            if isinstance(effective_error_code, Enum)
            else effective_error_code
        )
    if "error_type" not in payload:
        payload["error_type"] = (
            effective_error_type.value
            if isinstance(effective_error_type, Enum)
            else effective_error_type
        )
    if remediation is not None and "remediation" not in payload:
        payload["remediation"] = remediation
    if details and "details" not in payload:
        payload["details"] = dict(details)

    meta_payload = _build_meta(
        request_id=request_id,
        telemetry=telemetry,
        extra=meta,
    )

    return ToolResponse(success=False, data=payload, error=message, meta=meta_payload)


# ---------------------------------------------------------------------------
# Specialized Error Helpers
# ---------------------------------------------------------------------------


def validation_error(
    message: str,
    *,
    field: Optional[str] = None,
    details: Optional[Mapping[str, Any]] = None,
    remediation: Optional[str] = None,
    request_id: Optional[str] = None,
) -> ToolResponse:
    """Create a validation error response (HTTP 400 analog).

    Example:
        >>> validation_error(
        ...     "maxResults must be between 1 and 20",
        ...     field="maxResults",
        ... )
    """
    error_details = dict(details) if details else {}
    if field and "field" not in error_details:
        error_details["field"] = field

    return error_response(
        message,
        error_code=ErrorCode.VALIDATION_ERROR,
        error_type=ErrorType.VALIDATION,
        details=error_details if error_details else None,
        remediation=remediation,
        request_id=request_id,
    )


def not_found_error(
    resource_type: str,
    resource_id: str,
    *,
    error_code: ErrorCode = ErrorCode.NOT_FOUND,
    data: Optional[Mapping[str, Any]] = None,
    remediation: Optional[str] = None,
    request_id: Optional[str] = None,
) -> ToolResponse:
    """Create a not found error response (HTTP 404 analog).

    Example:
        >>> not_found_error("Tool", "translate", error_code=ErrorCode.TOOL_NOT_FOUND)
    """
    payload: Dict[str, Any] = {
        "resource_type": resource_type,
        "resource_id": resource_id,
    }
    if data:
        payload.update(dict(data))

    return error_response(
        f"{resource_type} '{resource_id}' not found",
        error_code=error_code,
        error_type=ErrorType.NOT_FOUND,
        data=payload,
        remediation=remediation or f"Verify the {resource_type.lower()} name exists.",
        request_id=request_id,
    )


def backend_error(
    message: str,
    *,
    tool_name: Optional[str] = None,
    request_id: Optional[str] = None,
) -> ToolResponse:
    """Create a backend failure response (HTTP 502 analog).

    The message is passed through verbatim so that transport, HTTP-status and
    parse failures stay distinguishable to the caller.
    """
    data: Dict[str, Any] = {}
    if tool_name:
        data["tool"] = tool_name

    return error_response(
        message,
        error_code=ErrorCode.BACKEND_ERROR,
        error_type=ErrorType.BACKEND,
        data=data if data else None,
        remediation="Check provider configuration and connectivity, then retry.",
        request_id=request_id,
    )


def timeout_error(
    tool_name: str,
    timeout_ms: int,
    *,
    request_id: Optional[str] = None,
) -> ToolResponse:
    """Create a timeout error response (HTTP 504 analog)."""
    return error_response(
        f"Tool '{tool_name}' timed out after {timeout_ms}ms",
        error_code=ErrorCode.TIMEOUT,
        error_type=ErrorType.TIMEOUT,
        data={"tool": tool_name, "timeout_ms": timeout_ms},
        remediation="Retry later or raise MCP_TOOL_TIMEOUT_MS.",
        request_id=request_id,
    )


def internal_error(
    message: str = "An internal error occurred",
    *,
    request_id: Optional[str] = None,
) -> ToolResponse:
    """Create an internal error response (HTTP 500 analog).

    Example:
        >>> internal_error(request_id="req_abc123")
    """
    remediation = "Please try again. If the problem persists, check the server logs."
    if request_id:
        remediation += f" Reference: {request_id}"

    return error_response(
        message,
        error_code=ErrorCode.INTERNAL_ERROR,
        error_type=ErrorType.INTERNAL,
        remediation=remediation,
        request_id=request_id,
    )


# ---------------------------------------------------------------------------
# Error Message Sanitization
# ---------------------------------------------------------------------------


def sanitize_error_message(
    exc: Exception,
    context: str = "",
    include_type: bool = False,
) -> str:
    """
    Convert exception to user-safe message without internal details.

    The full exception is logged server-side; the returned message never
    contains a stack trace or internal state.

    Args:
        exc: The exception to sanitize
        context: Optional context for logging (e.g., "tool summarize")
        include_type: Whether to include exception type name in message
    """
    if context:
        logger.debug(f"Error in {context}: {exc}", exc_info=True)
    else:
        logger.debug(f"Error: {exc}", exc_info=True)

    type_name = type(exc).__name__

    if isinstance(exc, json.JSONDecodeError):
        return "Invalid JSON format"
    if isinstance(exc, ValueError):
        suffix = f" ({type_name})" if include_type else ""
        return f"Invalid value provided{suffix}"
    if isinstance(exc, KeyError):
        return "Required key not found"
    if isinstance(exc, ConnectionError):
        return "Connection failed - service may be unavailable"
    if isinstance(exc, OSError):
        return "System I/O error occurred"

    suffix = f" ({type_name})" if include_type else ""
    return f"An internal error occurred{suffix}"
