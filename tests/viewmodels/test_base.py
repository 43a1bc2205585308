import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from quartz_monitor.core.exceptions import (
    NetworkError,
    RequestCancelledError,
    ServerError,
)
from quartz_monitor.core.logging import current_correlation
from quartz_monitor.viewmodels import DashboardViewModel
from quartz_monitor.viewmodels.base import LoadState, ViewModel
from tests.factories import DashboardSummaryFactory


class ItemsViewModel(ViewModel):
    def __init__(self, fetch):
        super().__init__()
        self.fetch = fetch
        self.items = None

    async def _fetch(self):
        return await self.fetch()

    def _apply(self, items):
        self.items = items


class TestInitialLoad:
    @pytest.mark.asyncio
    async def test_success(self):
        vm = ItemsViewModel(AsyncMock(return_value=[1, 2]))
        states = []
        vm.subscribe(lambda model: states.append(model.state))

        await vm.load_if_needed()

        assert vm.state == LoadState.LOADED
        assert vm.items == [1, 2]
        assert vm.error is None
        assert states == [LoadState.LOADING, LoadState.LOADED]

    @pytest.mark.asyncio
    async def test_failure_sets_error(self):
        error = NetworkError()
        vm = ItemsViewModel(AsyncMock(side_effect=error))

        await vm.load_if_needed()

        assert vm.state == LoadState.FAILED
        assert vm.error is error
        assert vm.items is None
        assert not vm.is_loading

    @pytest.mark.asyncio
    async def test_retry_after_failure(self):
        fetch = AsyncMock(side_effect=[NetworkError(), [3]])
        vm = ItemsViewModel(fetch)

        await vm.load_if_needed()
        await vm.load_if_needed()

        assert vm.state == LoadState.LOADED
        assert vm.error is None
        assert vm.items == [3]

    @pytest.mark.asyncio
    async def test_load_if_needed_skips_once_loaded(self):
        fetch = AsyncMock(return_value=[1])
        vm = ItemsViewModel(fetch)

        await vm.load_if_needed()
        await vm.load_if_needed()

        assert fetch.await_count == 1

    @pytest.mark.asyncio
    async def test_load_if_needed_skips_while_loading(self):
        release = asyncio.Event()
        calls = []

        async def fetch():
            calls.append(1)
            await release.wait()
            return [1]

        vm = ItemsViewModel(fetch)
        first = asyncio.ensure_future(vm.load_if_needed())
        await asyncio.sleep(0)

        await vm.load_if_needed()
        release.set()
        await first

        assert len(calls) == 1
        assert vm.state == LoadState.LOADED


class TestRefresh:
    @pytest.mark.asyncio
    async def test_refresh_failure_keeps_loaded_data(self):
        error = ServerError()
        vm = ItemsViewModel(AsyncMock(side_effect=[[1, 2], error]))
        await vm.load_if_needed()

        await vm.refresh()

        assert vm.state == LoadState.LOADED
        assert vm.items == [1, 2]
        assert vm.error is None
        assert vm.refresh_error is error
        assert not vm.is_refreshing

    @pytest.mark.asyncio
    async def test_refresh_replaces_data(self):
        vm = ItemsViewModel(AsyncMock(side_effect=[[1], [1, 2]]))
        await vm.load_if_needed()

        await vm.refresh()

        assert vm.items == [1, 2]
        assert vm.refresh_error is None

    @pytest.mark.asyncio
    async def test_refresh_is_not_an_initial_load(self):
        release = asyncio.Event()
        results = iter([[1], [2]])

        async def fetch():
            value = next(results)
            if value == [2]:
                await release.wait()
            return value

        vm = ItemsViewModel(fetch)
        await vm.load_if_needed()

        refreshing = asyncio.ensure_future(vm.refresh())
        await asyncio.sleep(0)
        assert vm.is_refreshing
        assert not vm.is_loading

        release.set()
        await refreshing
        assert not vm.is_refreshing

    @pytest.mark.asyncio
    async def test_dismiss_refresh_error(self):
        vm = ItemsViewModel(AsyncMock(side_effect=[[1], ServerError()]))
        await vm.load_if_needed()
        await vm.refresh()

        vm.dismiss_refresh_error()

        assert vm.refresh_error is None


class TestCancellation:
    @pytest.mark.asyncio
    async def test_cancelled_initial_load_resets_without_error(self):
        async def fetch():
            await asyncio.sleep(10)

        vm = ItemsViewModel(fetch)
        task = asyncio.ensure_future(vm.load_if_needed())
        await asyncio.sleep(0)
        assert vm.is_loading

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert vm.state == LoadState.NOT_LOADED
        assert vm.error is None

    @pytest.mark.asyncio
    async def test_transport_cancellation_is_silent(self):
        vm = ItemsViewModel(AsyncMock(side_effect=RequestCancelledError()))

        await vm.load_if_needed()

        assert vm.state == LoadState.NOT_LOADED
        assert vm.error is None

    @pytest.mark.asyncio
    async def test_cancelled_refresh_keeps_data(self):
        vm = ItemsViewModel(AsyncMock(side_effect=[[1], RequestCancelledError()]))
        await vm.load_if_needed()

        await vm.refresh()

        assert vm.state == LoadState.LOADED
        assert vm.items == [1]
        assert vm.refresh_error is None
        assert not vm.is_refreshing


@pytest.mark.asyncio
async def test_fetch_runs_under_the_view_model_name():
    seen = []

    async def fetch():
        seen.append(current_correlation())
        return [1]

    await ItemsViewModel(fetch).load_if_needed()

    assert seen == [{"view_model": "ItemsViewModel"}]
    assert current_correlation() == {}


def test_unsubscribe_stops_notifications():
    vm = ItemsViewModel(AsyncMock())
    listener = MagicMock()
    unsubscribe = vm.subscribe(listener)

    unsubscribe()
    vm.dismiss_refresh_error()

    listener.assert_not_called()


class ApplyFailsViewModel(ItemsViewModel):
    def __init__(self, fetch, fail_on):
        super().__init__(fetch)
        self.fail_on = fail_on

    def _apply(self, items):
        if items == self.fail_on:
            raise PermissionError("read-only data directory")
        super()._apply(items)


class TestApplyFailure:
    @pytest.mark.asyncio
    async def test_initial_apply_failure_moves_to_failed(self):
        fetch = AsyncMock(side_effect=[[1], [2]])
        vm = ApplyFailsViewModel(fetch, fail_on=[1])

        await vm.load_if_needed()

        assert vm.state == LoadState.FAILED
        assert isinstance(vm.error, PermissionError)

        await vm.load_if_needed()

        assert fetch.await_count == 2
        assert vm.state == LoadState.LOADED
        assert vm.items == [2]

    @pytest.mark.asyncio
    async def test_refresh_apply_failure_sets_refresh_error(self):
        vm = ApplyFailsViewModel(AsyncMock(side_effect=[[1], [2]]), fail_on=[2])
        await vm.load_if_needed()

        await vm.refresh()

        assert vm.state == LoadState.LOADED
        assert vm.items == [1]
        assert isinstance(vm.refresh_error, PermissionError)
        assert not vm.is_refreshing

    @pytest.mark.asyncio
    async def test_widget_mirror_failure_does_not_hang_dashboard(self):
        repository = MagicMock()
        repository.fetch_summary = AsyncMock(return_value=DashboardSummaryFactory())
        widgets = MagicMock()
        widgets.update_from_dashboard_summary.side_effect = PermissionError()
        vm = DashboardViewModel(repository, widgets=widgets)

        await vm.load_if_needed()
        assert vm.state == LoadState.FAILED

        widgets.update_from_dashboard_summary.side_effect = None
        await vm.load_if_needed()

        assert repository.fetch_summary.await_count == 2
        assert vm.state == LoadState.LOADED
