"""Dispatch core for mcp-toolkit-server: results, responses, callbacks and limits."""

from toolkit_mcp.core.result import Err, Ok, Result, fail, ok

__all__ = ["Err", "Ok", "Result", "fail", "ok"]
