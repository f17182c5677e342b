"""Structured logging configuration with automatic context injection.

Log records emitted during a tool call carry the call's correlation ID and
tool name, so a single request can be followed through dispatcher, handler
and provider logs.

All output goes to stderr: under the stdio transport, stdout carries the
protocol stream.

Usage:
    from toolkit_mcp.core.logging_config import configure_logging

    configure_logging(level="DEBUG", format="human")
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO, Union

from toolkit_mcp.core.context import (
    get_correlation_id,
    get_start_time,
    get_tool_name,
)

__all__ = [
    "ContextFilter",
    "StructuredFormatter",
    "HumanReadableFormatter",
    "configure_logging",
]

ROOT_LOGGER_NAME = "toolkit_mcp"


class ContextFilter(logging.Filter):
    """Logging filter that injects request context into log records.

    Adds ``correlation_id``, ``tool_name`` and ``elapsed_ms`` to every record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        record.tool_name = get_tool_name() or "-"

        start_time = get_start_time()
        if start_time > 0:
            import time

            record.elapsed_ms = round((time.time() - start_time) * 1000, 2)
        else:
            record.elapsed_ms = 0.0

        return True


class StructuredFormatter(logging.Formatter):
    """JSON-structured log formatter for machine-readable output.

    Example output:
        {"timestamp":"2024-01-15T10:30:45.123+00:00","level":"INFO",
         "logger":"toolkit_mcp.core.dispatcher","message":"Dispatching summarize",
         "correlation_id":"req_a1b2c3d4e5f6","tool_name":"summarize",
         "elapsed_ms":0.4}
    """

    def __init__(self, *, include_extra: bool = True):
        super().__init__()
        self.include_extra = include_extra

        # Standard attributes to exclude from "extra"
        self._standard_attrs = {
            "name",
            "msg",
            "args",
            "levelname",
            "levelno",
            "pathname",
            "filename",
            "module",
            "lineno",
            "funcName",
            "created",
            "msecs",
            "relativeCreated",
            "thread",
            "threadName",
            "processName",
            "process",
            "taskName",
            "message",
            "exc_info",
            "exc_text",
            "stack_info",
            "correlation_id",
            "tool_name",
            "elapsed_ms",
        }

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": getattr(record, "correlation_id", "-"),
            "tool_name": getattr(record, "tool_name", "-"),
            "elapsed_ms": getattr(record, "elapsed_ms", 0.0),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        if self.include_extra:
            extra = {}
            for key, value in record.__dict__.items():
                if key not in self._standard_attrs:
                    try:
                        json.dumps(value)
                        extra[key] = value
                    except (TypeError, ValueError):
                        extra[key] = str(value)
            if extra:
                log_entry["extra"] = extra

        return json.dumps(log_entry, default=str)


class HumanReadableFormatter(logging.Formatter):
    """Human-readable formatter with context prefix.

    Produces logs in format:
        2024-01-15 10:30:45 [INFO] [req_a1b2c3] core.dispatcher: message
    """

    def format(self, record: logging.LogRecord) -> str:
        parts = [
            datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S"),
            f"[{record.levelname}]",
        ]

        corr_id = getattr(record, "correlation_id", "-")
        if corr_id and corr_id != "-":
            parts.append(f"[{corr_id}]")

        logger_name = record.name
        if logger_name.startswith(f"{ROOT_LOGGER_NAME}."):
            logger_name = logger_name[len(ROOT_LOGGER_NAME) + 1 :]
        parts.append(f"{logger_name}:")
        parts.append(record.getMessage())

        result = " ".join(parts)
        if record.exc_info:
            result += "\n" + self.formatException(record.exc_info)
        return result


def configure_logging(
    *,
    level: Union[int, str] = logging.INFO,
    format: str = "structured",
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Configure the root ``toolkit_mcp`` logger.

    Replaces any handlers previously installed on it, so calling this twice
    does not duplicate output.

    Args:
        level: Log level name or number
        format: "structured" for JSON, "human" for readable lines
        stream: Output stream (default: stderr)

    Returns:
        The configured root logger for toolkit_mcp
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    if format == "structured":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(HumanReadableFormatter())
    handler.addFilter(ContextFilter())

    logger.addHandler(handler)
    return logger
