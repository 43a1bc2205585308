import asyncio

import pytest

from quartz_monitor.core.exceptions import NetworkError, RequestCancelledError, ServerError
from quartz_monitor.viewmodels.loader import load_all, load_settled


def returning(value, delay=0.0):
    async def _load():
        await asyncio.sleep(delay)
        return value

    return _load


def failing(error, delay=0.0):
    async def _load():
        await asyncio.sleep(delay)
        raise error

    return _load


class TestLoadAll:
    @pytest.mark.asyncio
    async def test_returns_results_by_name(self):
        result = await load_all({"a": returning(1), "b": returning(2, delay=0.01)})

        assert result == {"a": 1, "b": 2}

    @pytest.mark.asyncio
    async def test_runs_loaders_concurrently(self):
        started = []

        def tracking(name):
            async def _load():
                started.append(name)
                await asyncio.sleep(0.01)
                return name

            return _load

        await load_all({"a": tracking("a"), "b": tracking("b"), "c": tracking("c")})

        assert sorted(started) == ["a", "b", "c"]

    @pytest.mark.asyncio
    async def test_first_failure_cancels_the_rest(self):
        slow_finished = asyncio.Event()
        slow_cancelled = asyncio.Event()

        async def slow():
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                slow_cancelled.set()
                raise
            slow_finished.set()

        with pytest.raises(NetworkError):
            await load_all({"slow": slow, "broken": failing(NetworkError())})

        assert slow_cancelled.is_set()
        assert not slow_finished.is_set()

    @pytest.mark.asyncio
    async def test_cancelling_caller_cancels_loaders(self):
        cancelled = asyncio.Event()

        async def slow():
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.set()
                raise

        task = asyncio.ensure_future(load_all({"slow": slow}))
        await asyncio.sleep(0.01)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert cancelled.is_set()


class TestLoadSettled:
    @pytest.mark.asyncio
    async def test_failures_fall_back_to_defaults(self):
        result = await load_settled(
            {
                "performance": returning({"cpu": 10}),
                "insights": failing(ServerError()),
                "waits": failing(NetworkError()),
                "recommendations": returning([1, 2]),
            },
            defaults={"insights": []},
        )

        assert result == {
            "performance": {"cpu": 10},
            "insights": [],
            "waits": None,
            "recommendations": [1, 2],
        }

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        async def cancelled():
            raise asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            await load_settled({"a": returning(1), "b": cancelled})

    @pytest.mark.asyncio
    async def test_transport_cancellation_propagates(self):
        with pytest.raises(RequestCancelledError):
            await load_settled(
                {
                    "performance": returning({"cpu": 10}),
                    "insights": failing(RequestCancelledError()),
                },
                defaults={"insights": []},
            )
