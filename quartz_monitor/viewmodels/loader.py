import asyncio
from typing import Any, Awaitable, Callable, Dict, Mapping

from quartz_monitor.core.exceptions import RequestCancelledError
from quartz_monitor.core.logging import LogContext

logger = LogContext(__name__)

Loader = Callable[[], Awaitable[Any]]


async def load_all(loaders: Mapping[str, Loader]) -> Dict[str, Any]:
    """
    Run every loader concurrently and return their results by name

    All-or-nothing: the first failure cancels the loaders still running and
    is re-raised, so no partial result ever reaches the caller. Cancelling
    the caller cancels every loader.
    """
    tasks = {name: asyncio.ensure_future(loader()) for name, loader in loaders.items()}
    try:
        await asyncio.gather(*tasks.values())
    except BaseException:
        for task in tasks.values():
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks.values(), return_exceptions=True)
        raise
    return {name: task.result() for name, task in tasks.items()}


async def load_settled(
    loaders: Mapping[str, Loader], defaults: Mapping[str, Any] | None = None
) -> Dict[str, Any]:
    """
    Run every loader concurrently and wait until all of them have settled

    Best-effort: a failing loader is logged and its result replaced by its
    default (None unless given), the others are unaffected. Cancellation,
    of the caller or reported by a loader, propagates.
    """
    defaults = defaults or {}
    names = list(loaders)
    results = await asyncio.gather(
        *(loaders[name]() for name in names), return_exceptions=True
    )

    settled: Dict[str, Any] = {}
    for name, result in zip(names, results):
        if isinstance(result, RequestCancelledError):
            raise result
        if isinstance(result, BaseException) and not isinstance(result, Exception):
            raise result
        if isinstance(result, Exception):
            logger.warning(
                "Optional data failed to load",
                extra={
                    "sub_resource": name,
                    "error": str(result),
                    "error_type": result.__class__.__name__,
                },
            )
            settled[name] = defaults.get(name)
        else:
            settled[name] = result
    return settled
