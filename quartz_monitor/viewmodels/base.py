import asyncio
from enum import Enum
from typing import Any, Callable, List

from quartz_monitor.core.exceptions import RequestCancelledError
from quartz_monitor.core.logging import LogContext, correlation

logger = LogContext(__name__)


class LoadState(str, Enum):
    NOT_LOADED = "not_loaded"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class ViewModel:
    """
    Load-state machine shared by every screen model

    ``NOT_LOADED -> LOADING -> LOADED | FAILED``. The initial load and a
    refresh are tracked apart: an initial failure sets ``error`` and moves
    to FAILED, while a failed refresh keeps the loaded data and only sets
    ``refresh_error``. Cancellation resets the loading flags without
    recording an error.

    Subclasses implement ``_fetch`` (network work, no state changes) and
    ``_apply`` (publish a fetched result).
    """

    def __init__(self):
        self.state = LoadState.NOT_LOADED
        self.is_refreshing = False
        self.error: Exception | None = None
        self.refresh_error: Exception | None = None
        self._listeners: List[Callable[["ViewModel"], None]] = []

    @property
    def is_loading(self) -> bool:
        """True during the initial load only"""
        return self.state == LoadState.LOADING

    @property
    def has_loaded(self) -> bool:
        return self.state == LoadState.LOADED

    def subscribe(self, listener: Callable[["ViewModel"], None]) -> Callable[[], None]:
        """Register a listener called on every state change; returns an unsubscribe"""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    async def load_if_needed(self) -> None:
        if self.state in (LoadState.LOADING, LoadState.LOADED) or self.is_refreshing:
            return
        await self._load()

    async def refresh(self) -> None:
        await self._load()

    def dismiss_refresh_error(self) -> None:
        self.refresh_error = None
        self._notify()

    async def _fetch(self) -> Any:
        raise NotImplementedError

    def _apply(self, result: Any) -> None:
        raise NotImplementedError

    async def _load(self) -> None:
        initial = self.state != LoadState.LOADED
        if initial:
            self.state = LoadState.LOADING
            self.error = None
        else:
            self.is_refreshing = True
        self.refresh_error = None
        self._notify()

        try:
            with correlation(view_model=self.__class__.__name__):
                self._apply(await self._fetch())
        except asyncio.CancelledError:
            self._cancelled(initial)
            raise
        except RequestCancelledError:
            self._cancelled(initial)
            return
        except Exception as e:
            logger.error(
                "Failed to load view data",
                extra={
                    "view_model": self.__class__.__name__,
                    "initial_load": initial,
                    "error": str(e),
                    "error_type": e.__class__.__name__,
                },
            )
            if initial:
                self.state = LoadState.FAILED
                self.error = e
            else:
                self.refresh_error = e
            self.is_refreshing = False
            self._notify()
            return

        self.state = LoadState.LOADED
        self.error = None
        self.is_refreshing = False
        self._notify()

    def _cancelled(self, initial: bool) -> None:
        logger.debug(
            "View data load cancelled",
            extra={"view_model": self.__class__.__name__, "initial_load": initial},
        )
        if initial:
            self.state = LoadState.NOT_LOADED
        self.is_refreshing = False
        self._notify()
