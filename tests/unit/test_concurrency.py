"""Tests for ConcurrencyLimiter."""

import asyncio

import pytest

from toolkit_mcp.core.concurrency import ConcurrencyLimiter, TimeoutException


class TestConcurrencyLimiter:
    def test_rejects_non_positive_limit(self):
        with pytest.raises(ValueError):
            ConcurrencyLimiter(0)

    @pytest.mark.asyncio
    async def test_run_returns_value(self):
        async def work():
            return 42

        limiter = ConcurrencyLimiter(1, name="tools")
        assert await limiter.run(work()) == 42
        assert limiter.stats() == {
            "name": "tools",
            "max_concurrent": 1,
            "timeout": None,
            "active": 0,
            "total": 1,
        }

    @pytest.mark.asyncio
    async def test_timeout_raises(self):
        limiter = ConcurrencyLimiter(1, timeout=0.01, name="tools")
        with pytest.raises(TimeoutException) as excinfo:
            await limiter.run(asyncio.sleep(1))
        assert excinfo.value.timeout_seconds == 0.01
        assert excinfo.value.operation == "tools"
        assert limiter.active_count == 0

    @pytest.mark.asyncio
    async def test_per_call_timeout_override(self):
        limiter = ConcurrencyLimiter(1, timeout=10)
        with pytest.raises(TimeoutException):
            await limiter.run(asyncio.sleep(1), timeout=0.01)

    @pytest.mark.asyncio
    async def test_zero_timeout_disables_limit(self):
        limiter = ConcurrencyLimiter(1, timeout=0.01)

        async def slow():
            await asyncio.sleep(0.05)
            return "finished"

        assert await limiter.run(slow(), timeout=0) == "finished"

    @pytest.mark.asyncio
    async def test_inner_timeout_error_propagates_unchanged(self):
        limiter = ConcurrencyLimiter(1, timeout=5)

        async def upstream_timeout():
            raise TimeoutError("upstream read timed out")

        with pytest.raises(TimeoutError, match="upstream read") as excinfo:
            await limiter.run(upstream_timeout())
        assert not isinstance(excinfo.value, TimeoutException)
        assert limiter.active_count == 0

    @pytest.mark.asyncio
    async def test_waiting_is_bounded_by_limit(self):
        limiter = ConcurrencyLimiter(3)
        peak = 0

        async def work():
            nonlocal peak
            peak = max(peak, limiter.active_count)
            await asyncio.sleep(0.01)

        await asyncio.gather(*(limiter.run(work()) for _ in range(10)))
        assert peak == 3
        assert limiter.stats()["total"] == 10

    @pytest.mark.asyncio
    async def test_exception_releases_slot(self):
        limiter = ConcurrencyLimiter(1)

        async def broken():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            await limiter.run(broken())
        assert limiter.active_count == 0
