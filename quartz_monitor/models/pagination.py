from typing import Optional, List, TypeVar, Generic, Dict, Any
from pydantic import BaseModel, Field


T = TypeVar("T")


class PaginationMeta(BaseModel):
    """
    Pagination metadata returned alongside paged list responses

    Attributes:
        page: The 1-based page this response holds
        per_page: Page size the server applied
        total: Total number of items across all pages
        total_pages: Number of pages the server reports
    """

    page: int
    per_page: int
    total: int
    total_pages: int


class PagedRequest(BaseModel):
    """
    One request of a paginated full-collection fetch

    Attributes:
        filter: Resource filter applied to every page (e.g. tenant, date range)
        page: 1-based page number, increases by one per request
        page_size: Fixed number of items asked for per page
    """

    filter: Dict[str, Any] = Field(default_factory=dict)
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=100, ge=1)

    def next(self) -> "PagedRequest":
        return self.model_copy(update={"page": self.page + 1})


class PageResult(BaseModel, Generic[T]):
    """
    Items of a single page plus the server-reported page count, if any
    """

    items: List[T]
    total_pages: Optional[int] = None
