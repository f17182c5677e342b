"""Concurrency limiting for tool dispatch.

The dispatcher runs each tool call through a ``ConcurrencyLimiter`` so the
configured ``MCP_MAX_CONCURRENT`` and ``MCP_TOOL_TIMEOUT_MS`` values are
enforced rather than advisory.

Example:
    >>> limiter = ConcurrencyLimiter(max_concurrent=5, timeout=30.0)
    >>> result = await limiter.run(handler(params, deps))
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Coroutine, Dict, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TimeoutException(Exception):
    """An operation run through the limiter exceeded its timeout.

    Raised only by the limiter itself; a ``TimeoutError`` raised inside the
    operation propagates unchanged.

    Attributes:
        timeout_seconds: The timeout duration that was exceeded.
        operation: Name of the limiter that enforced it.
    """

    def __init__(
        self,
        message: str,
        timeout_seconds: Optional[float] = None,
        operation: Optional[str] = None,
    ):
        super().__init__(message)
        self.timeout_seconds = timeout_seconds
        self.operation = operation


@dataclass
class ConcurrencyConfig:
    """Configuration for a concurrency limiter.

    Attributes:
        max_concurrent: Maximum number of concurrent operations
        name: Optional name for logging and identification
        timeout: Optional timeout per operation in seconds
    """

    max_concurrent: int = 5
    name: str = ""
    timeout: Optional[float] = None


class ConcurrencyLimiter:
    """Limit concurrent async operations using a semaphore.

    Calls beyond ``max_concurrent`` wait for a free slot; time spent waiting
    does not count against the per-operation timeout.
    """

    def __init__(
        self,
        max_concurrent: int = 5,
        *,
        name: str = "",
        timeout: Optional[float] = None,
    ):
        if max_concurrent < 1:
            raise ValueError(f"max_concurrent must be >= 1, got {max_concurrent}")

        self.config = ConcurrencyConfig(
            max_concurrent=max_concurrent,
            name=name,
            timeout=timeout,
        )
        self._semaphore = asyncio.Semaphore(max_concurrent)
        self._active_count = 0
        self._total_count = 0

    @property
    def max_concurrent(self) -> int:
        return self.config.max_concurrent

    @property
    def timeout(self) -> Optional[float]:
        return self.config.timeout

    @property
    def active_count(self) -> int:
        """Current number of operations holding a slot."""
        return self._active_count

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[None]:
        """Hold a slot for the duration of the block."""
        async with self._semaphore:
            self._active_count += 1
            self._total_count += 1
            try:
                yield
            finally:
                self._active_count -= 1

    async def run(
        self,
        coro: Coroutine[Any, Any, T],
        *,
        timeout: Optional[float] = None,
    ) -> T:
        """Run a coroutine with concurrency limiting.

        Args:
            coro: The coroutine to run
            timeout: Optional timeout override (uses limiter default if not
                provided; ``0`` runs this call without a timeout)

        Raises:
            TimeoutException: If the operation times out
        """
        effective_timeout = timeout if timeout is not None else self.config.timeout

        async with self.acquire():
            if not effective_timeout:
                return await coro
            return await self._run_with_timeout(coro, effective_timeout)

    async def _run_with_timeout(
        self, coro: Coroutine[Any, Any, T], timeout: float
    ) -> T:
        task = asyncio.ensure_future(coro)
        try:
            done, _ = await asyncio.wait({task}, timeout=timeout)
        except asyncio.CancelledError:
            task.cancel()
            raise

        if task in done:
            return task.result()

        task.cancel()
        await asyncio.wait({task})
        logger.warning(
            "Operation in limiter %r exceeded %.3fs", self.config.name, timeout
        )
        raise TimeoutException(
            f"Operation timed out after {timeout}s",
            timeout_seconds=timeout,
            operation=self.config.name,
        )

    def stats(self) -> Dict[str, Any]:
        return {
            "name": self.config.name,
            "max_concurrent": self.config.max_concurrent,
            "timeout": self.config.timeout,
            "active": self._active_count,
            "total": self._total_count,
        }
