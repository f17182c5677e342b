"""
Tool dispatch: lookup, validation, invocation and response normalisation.

``Dispatcher.dispatch`` is the single boundary between raw client requests and
tool handlers. Whatever happens inside a handler, it returns a
``ToolResponse``:

    unknown tool name        -> TOOL_NOT_FOUND   (handler never runs)
    invalid arguments        -> VALIDATION_ERROR (handler never runs)
    handler returned Err     -> BACKEND_ERROR    (message verbatim)
    handler exceeded timeout -> TIMEOUT          (not applied to callback tools)
    handler raised           -> INTERNAL_ERROR   (sanitised, traceback logged)
    handler returned Ok      -> success
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from toolkit_mcp.core.callbacks import ClientChannel, UnavailableClientChannel
from toolkit_mcp.core.concurrency import ConcurrencyLimiter, TimeoutException
from toolkit_mcp.core.context import request_context
from toolkit_mcp.core.responses import (
    ErrorCode,
    ToolResponse,
    backend_error,
    internal_error,
    not_found_error,
    sanitize_error_message,
    success_response,
    timeout_error,
    validation_error,
)
from toolkit_mcp.core.result import Err, Ok, Result
from toolkit_mcp.providers.base import ProviderSet
from toolkit_mcp.tools.registry import ToolCatalog, ToolDependencies, ToolDescriptor

logger = logging.getLogger(__name__)


def _field_path(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "arguments"


def _validation_details(exc: ValidationError) -> List[Dict[str, Any]]:
    return [
        {
            "field": _field_path(error.get("loc", ())),
            "message": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]


class Dispatcher:
    """
    Routes named tool calls to their handlers.

    The provider set is bound once and shared by every call; a client channel
    is supplied per call because it belongs to the calling session.
    """

    def __init__(
        self,
        catalog: ToolCatalog,
        providers: ProviderSet,
        limiter: Optional[ConcurrencyLimiter] = None,
    ):
        self._catalog = catalog
        self._providers = providers
        self._limiter = limiter

    @property
    def catalog(self) -> ToolCatalog:
        return self._catalog

    @property
    def providers(self) -> ProviderSet:
        return self._providers

    @property
    def limiter(self) -> Optional[ConcurrencyLimiter]:
        return self._limiter

    def list_tools(self) -> List[ToolDescriptor]:
        return self._catalog.list_tools()

    def get_descriptor(self, name: str) -> Optional[ToolDescriptor]:
        return self._catalog.get(name)

    async def dispatch(
        self,
        name: str,
        arguments: Optional[Mapping[str, Any]] = None,
        channel: Optional[ClientChannel] = None,
    ) -> ToolResponse:
        """Run one tool call end to end. Never raises for handler failures."""
        with request_context(tool_name=name) as ctx:
            descriptor = self._catalog.get(name)
            if descriptor is None:
                available = self._catalog.names()
                logger.warning("Unknown tool requested: %s", name)
                return not_found_error(
                    "Tool",
                    name,
                    error_code=ErrorCode.TOOL_NOT_FOUND,
                    data={"available_tools": available},
                    remediation=f"Use one of: {', '.join(available)}",
                )

            try:
                params = descriptor.input_model.model_validate(
                    arguments if arguments is not None else {}
                )
            except ValidationError as exc:
                details = _validation_details(exc)
                summary = "; ".join(f"{d['field']}: {d['message']}" for d in details)
                logger.info("Rejected arguments for %s: %s", name, summary)
                return validation_error(
                    f"Invalid arguments for tool '{name}': {summary}",
                    field=details[0]["field"] if details else None,
                    details={"errors": details},
                    remediation="Check the tool's input schema and retry.",
                )

            deps = ToolDependencies(
                providers=self._providers,
                channel=channel or UnavailableClientChannel(),
            )

            logger.debug("Dispatching %s", name)
            try:
                result = await self._invoke(descriptor, params, deps)
            except TimeoutException as exc:
                timeout_ms = int(round((exc.timeout_seconds or 0) * 1000))
                logger.warning("Tool %s timed out after %sms", name, timeout_ms)
                return timeout_error(name, timeout_ms)
            except Exception as exc:
                logger.exception("Tool %s raised an unexpected error", name)
                return internal_error(
                    sanitize_error_message(exc, context=f"tool {name}"),
                    request_id=ctx.correlation_id,
                )

            telemetry = {"duration_ms": round(ctx.elapsed_ms, 2)}

            if isinstance(result, Err):
                logger.info("Tool %s failed: %s", name, result.error)
                return backend_error(str(result.error), tool_name=name)

            if isinstance(result, Ok):
                logger.info(
                    "Tool %s completed",
                    name,
                    extra={"duration_ms": telemetry["duration_ms"]},
                )
                return self._success(result.value, telemetry)

            logger.error("Tool %s returned %r instead of a Result", name, result)
            return internal_error(request_id=ctx.correlation_id)

    async def _invoke(
        self,
        descriptor: ToolDescriptor,
        params: Any,
        deps: ToolDependencies,
    ) -> Result[Any, str]:
        call = descriptor.handler(params, deps)
        if self._limiter is None:
            return await call
        # A person may be answering; only the concurrency slot applies
        if descriptor.awaits_client:
            return await self._limiter.run(call, timeout=0)
        return await self._limiter.run(call)

    @staticmethod
    def _success(value: Any, telemetry: Dict[str, Any]) -> ToolResponse:
        if isinstance(value, str):
            return success_response({"text": value}, text=value, telemetry=telemetry)
        payload = dict(value) if isinstance(value, Mapping) else {"result": value}
        return success_response(
            payload,
            text=json.dumps(value, indent=2, default=str),
            telemetry=telemetry,
        )
