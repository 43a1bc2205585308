from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar

from quartz_monitor.core.config import settings
from quartz_monitor.core.logging import LogContext, PerformanceLogger
from quartz_monitor.models.pagination import PagedRequest, PageResult

logger = LogContext(__name__)

T = TypeVar("T")

PageFetcher = Callable[[PagedRequest], Awaitable[PageResult[T]]]
ProgressCallback = Callable[[int, int], None]


async def fetch_all_pages(
    fetch_page: PageFetcher,
    filter: Dict[str, Any] | None = None,
    page_size: int | None = None,
    max_pages: int | None = None,
    on_progress: Optional[ProgressCallback] = None,
) -> List[T]:
    """
    Drive a paged endpoint until the whole collection has been read

    Pages are requested one at a time in increasing order, starting at 1.
    Fetching stops at the first of: the reported page count is reached,
    a page comes back empty, a page holds fewer items than ``page_size``,
    or ``max_pages`` requests have been made.

    Args:
        fetch_page: Coroutine function fetching the page a request describes
        filter: Resource filter passed unchanged with every request
        page_size: Items asked for per page, fixed for the whole fetch
        max_pages: Hard ceiling on the number of page requests
        on_progress: Called with (page, total_pages) when the total is known

    Returns:
        Items of all pages, in page order and then in-page order

    Raises:
        MonitorAPIError: The first page failure; no partial result is returned
    """
    request = PagedRequest(
        filter=filter or {},
        page_size=page_size or settings.PAGE_SIZE,
    )
    max_pages = max_pages or settings.MAX_PAGES
    items: List[T] = []

    with PerformanceLogger(logger, "fetch_all_pages"):
        while True:
            page = await fetch_page(request)
            items.extend(page.items)

            if on_progress is not None and page.total_pages is not None:
                on_progress(request.page, page.total_pages)

            if not page.items or len(page.items) < request.page_size:
                break
            if page.total_pages is not None and request.page >= page.total_pages:
                break

            if request.page >= max_pages:
                logger.warning(
                    "Pagination ceiling reached, collection may be incomplete",
                    extra={
                        "max_pages": max_pages,
                        "page_size": request.page_size,
                        "reported_total_pages": page.total_pages,
                        "item_count": len(items),
                    },
                )
                break

            request = request.next()

    return items
