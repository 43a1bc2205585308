from collections import defaultdict
from decimal import Decimal
from operator import attrgetter
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, TypeVar
from uuid import UUID

from pydantic import BaseModel

from quartz_monitor.core.config import settings
from quartz_monitor.models.alert import Alert, AlertSeverity, AlertStatus
from quartz_monitor.models.azure import AzureCostRecord, AzureResourceMetricRecord

T = TypeVar("T")
K = TypeVar("K")

Metric = Callable[[T], Optional[float]]


def matches_search(text: str | None, search_text: str | None) -> bool:
    """Case-insensitive substring match; an empty search matches everything"""
    if not search_text:
        return True
    return search_text.casefold() in (text or "").casefold()


def filter_items(
    items: Iterable[T],
    search_text: str | None = None,
    name_of: Callable[[T], str | None] = attrgetter("name"),
    **facets: Any,
) -> List[T]:
    """
    Keep the items whose name contains ``search_text`` and whose attributes
    equal every given facet value

    A facet that is None or an empty string is not applied.
    """
    active = {name: value for name, value in facets.items() if value not in (None, "")}
    return [
        item
        for item in items
        if matches_search(name_of(item), search_text)
        and all(getattr(item, name) == value for name, value in active.items())
    ]


def average(values: Iterable[Optional[float]]) -> float:
    """Mean of the reported values; missing values are skipped, no values gives 0"""
    reported = [value for value in values if value is not None]
    if not reported:
        return 0.0
    return sum(reported) / len(reported)


def average_of(items: Iterable[T], metric: Metric) -> float:
    return average(metric(item) for item in items)


def integer_average(values: Iterable[Optional[int]]) -> int:
    reported = [value for value in values if value is not None]
    if not reported:
        return 0
    return sum(reported) // len(reported)


def above_threshold(
    items: Iterable[T], metric: Metric, threshold: float | None = None
) -> List[T]:
    """Items whose metric is strictly above the threshold; unreported counts as 0"""
    limit = settings.HIGH_UTILIZATION_THRESHOLD if threshold is None else threshold
    return [item for item in items if (metric(item) or 0) > limit]


def count_by(items: Iterable[T], key_of: Callable[[T], K]) -> Dict[K, int]:
    counts: Dict[K, int] = defaultdict(int)
    for item in items:
        counts[key_of(item)] += 1
    return dict(counts)


# Costs


class TenantCost(BaseModel):
    tenant_id: UUID
    cost: Decimal


class DailyCost(BaseModel):
    date: str
    cost: Decimal


class GroupedCost(BaseModel):
    name: str
    cost: Decimal


class CostSummary(BaseModel):
    total_cost: Decimal
    currency: str
    period_from: str
    period_to: str
    by_tenant: List[TenantCost]


def _sum_by(
    records: Iterable[AzureCostRecord], key_of: Callable[[AzureCostRecord], Any]
) -> Dict[Any, Decimal]:
    totals: Dict[Any, Decimal] = defaultdict(Decimal)
    for record in records:
        totals[key_of(record)] += record.cost_amount
    return dict(totals)


def cost_summary(records: Sequence[AzureCostRecord]) -> CostSummary:
    dates = sorted(record.usage_date for record in records)
    return CostSummary(
        total_cost=sum((record.cost_amount for record in records), Decimal(0)),
        currency=records[0].currency if records else "USD",
        period_from=dates[0] if dates else "",
        period_to=dates[-1] if dates else "",
        by_tenant=[
            TenantCost(tenant_id=tenant_id, cost=cost)
            for tenant_id, cost in _sum_by(records, attrgetter("azure_tenant_id")).items()
        ],
    )


def daily_costs(records: Iterable[AzureCostRecord]) -> List[DailyCost]:
    totals = _sum_by(records, attrgetter("usage_date"))
    return [DailyCost(date=day, cost=totals[day]) for day in sorted(totals)]


def _ranked(totals: Dict[str, Decimal]) -> List[GroupedCost]:
    return sorted(
        (GroupedCost(name=name, cost=cost) for name, cost in totals.items()),
        key=attrgetter("cost"),
        reverse=True,
    )


def costs_by_resource_group(records: Iterable[AzureCostRecord]) -> List[GroupedCost]:
    return _ranked(_sum_by(records, attrgetter("resource_group")))


def costs_by_category(records: Iterable[AzureCostRecord]) -> List[GroupedCost]:
    return _ranked(_sum_by(records, lambda record: record.meter_category or "Unknown"))


# Metrics and alerts


def latest_metrics(
    records: Iterable[AzureResourceMetricRecord],
) -> Dict[str, AzureResourceMetricRecord]:
    """
    Latest sample per metric name. A sample replaces the current one only
    when both carry a timestamp and the new one is later.
    """
    latest: Dict[str, AzureResourceMetricRecord] = {}
    for record in records:
        if record.metric_name is None:
            continue
        current = latest.get(record.metric_name)
        if current is None:
            latest[record.metric_name] = record
        elif (
            record.timestamp_utc is not None
            and current.timestamp_utc is not None
            and record.timestamp_utc > current.timestamp_utc
        ):
            latest[record.metric_name] = record
    return latest


def severity_counts(alerts: Iterable[Alert]) -> Dict[AlertSeverity, int]:
    """Active alerts per severity, every severity present"""
    counts = {severity: 0 for severity in AlertSeverity}
    for alert in alerts:
        if alert.status == AlertStatus.ACTIVE:
            counts[alert.severity] += 1
    return counts
