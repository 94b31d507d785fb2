"""Tests for concurrent dashboard input fetching."""

import asyncio

import pytest

from jobboard_analytics.dashboard.fetch import gather_inputs


async def _value(value: object, delay: float = 0.0) -> object:
    await asyncio.sleep(delay)
    return value


async def _fail() -> None:
    msg = "upstream unavailable"
    raise RuntimeError(msg)


class TestGatherInputs:
    async def test_results_keyed_by_name(self) -> None:
        data = await gather_inputs(users=_value([1, 2]), jobs=_value([3], delay=0.01))
        assert data == {"users": [1, 2], "jobs": [3]}

    async def test_runs_concurrently(self) -> None:
        order: list[str] = []

        async def record(name: str, delay: float) -> str:
            await asyncio.sleep(delay)
            order.append(name)
            return name

        await gather_inputs(slow=record("slow", 0.05), fast=record("fast", 0.0))
        assert order == ["fast", "slow"]

    async def test_no_fetches(self) -> None:
        assert await gather_inputs() == {}

    async def test_failure_propagates(self) -> None:
        with pytest.raises(RuntimeError, match="upstream unavailable"):
            await gather_inputs(users=_value([]), jobs=_fail())
