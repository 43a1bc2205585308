from .aggregation import (
    above_threshold,
    average,
    average_of,
    count_by,
    filter_items,
    matches_search,
)
from .pagination import fetch_all_pages

__all__ = [
    "above_threshold",
    "average",
    "average_of",
    "count_by",
    "filter_items",
    "matches_search",
    "fetch_all_pages",
]
