"""Request context propagation for tool dispatch.

Each inbound tool call runs inside a request context carrying a correlation
ID and the tool name. Values live in ``contextvars`` so concurrent calls on
the same event loop never observe each other's context.

Usage:
    from toolkit_mcp.core.context import request_context, get_correlation_id

    with request_context(tool_name="summarize") as ctx:
        logger.info("Dispatching %s", ctx.correlation_id)
"""

from __future__ import annotations

import secrets
import time
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Generator, Optional

__all__ = [
    "correlation_id_var",
    "tool_name_var",
    "start_time_var",
    "RequestContext",
    "generate_correlation_id",
    "request_context",
    "get_correlation_id",
    "get_tool_name",
    "get_start_time",
]

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")
"""Request correlation ID for tracing a call across components."""

tool_name_var: ContextVar[str] = ContextVar("tool_name", default="")
"""Name of the tool being dispatched."""

start_time_var: ContextVar[float] = ContextVar("start_time", default=0.0)
"""Request start time as Unix timestamp."""


def generate_correlation_id(prefix: str = "req") -> str:
    """Generate a unique correlation ID.

    Format: {prefix}_{12_hex_chars}
    Example: "req_a1b2c3d4e5f6"
    """
    return f"{prefix}_{secrets.token_hex(6)}"


@dataclass
class RequestContext:
    """Snapshot of the current request context.

    Attributes:
        correlation_id: Unique request identifier
        tool_name: Tool being dispatched (empty outside a tool call)
        start_time: Request start timestamp
    """

    correlation_id: str = ""
    tool_name: str = ""
    start_time: float = field(default_factory=time.time)

    @property
    def elapsed_ms(self) -> float:
        """Milliseconds since the request started."""
        if self.start_time <= 0:
            return 0.0
        return (time.time() - self.start_time) * 1000


@contextmanager
def request_context(
    *,
    correlation_id: Optional[str] = None,
    tool_name: str = "",
) -> Generator[RequestContext, None, None]:
    """Bind request context variables for the duration of the block.

    Works from both sync and async code; ``contextvars`` are task-local.

    Args:
        correlation_id: Request ID (auto-generated if None)
        tool_name: Tool being dispatched
    """
    corr_id = correlation_id or generate_correlation_id()
    start = time.time()

    token_corr = correlation_id_var.set(corr_id)
    token_tool = tool_name_var.set(tool_name)
    token_start = start_time_var.set(start)

    try:
        yield RequestContext(
            correlation_id=corr_id,
            tool_name=tool_name,
            start_time=start,
        )
    finally:
        correlation_id_var.reset(token_corr)
        tool_name_var.reset(token_tool)
        start_time_var.reset(token_start)


def get_correlation_id() -> str:
    """Current correlation ID, or empty string outside a request."""
    return correlation_id_var.get()


def get_tool_name() -> str:
    return tool_name_var.get()


def get_start_time() -> float:
    return start_time_var.get()
