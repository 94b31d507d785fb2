"""Growth and ratio percentages with explicit zero-denominator policy.

growth_rate: previous == 0 means "from nothing", so any current value is 100%.
ratio_percent: denominator == 0 means "no rate", so the result is 0.
"""

from collections.abc import Callable, Iterable
from datetime import date, datetime
from typing import TypeVar

from jobboard_analytics.core.rounding import round_half_up, round_int
from jobboard_analytics.core.schemas import GrowthMetric
from jobboard_analytics.pipeline.time_buckets import count_between, month_start

T = TypeVar("T")


def growth_rate(current: int, previous: int) -> int:
    """Integer percent change from previous to current."""
    if previous > 0:
        return round_int((current - previous) / previous * 100)
    return 100 if current > 0 else 0


def growth_metric(current: int, previous: int) -> GrowthMetric:
    return GrowthMetric(
        current=current,
        previous=previous,
        rate_percent=growth_rate(current, previous),
    )


def ratio_percent(numerator: float, denominator: float) -> int:
    """Integer percent numerator/denominator, 0 when the denominator is 0."""
    if denominator > 0:
        return round_int(numerator / denominator * 100)
    return 0


def safe_average(total: float, count: int, ndigits: int = 0) -> float:
    """Average rounded to ``ndigits``; 0 when there is nothing to average."""
    if count <= 0:
        return 0
    value = round_half_up(total / count, ndigits)
    return int(value) if ndigits == 0 else value


def month_over_month(
    records: Iterable[T],
    timestamp_of: Callable[[T], date | datetime | None],
    today: date,
) -> GrowthMetric:
    """Compare record counts of the current calendar month and the previous one."""
    items = list(records)
    this_month = month_start(today)
    last_month = month_start(today, 1)
    next_month = month_start(today, -1)
    current = count_between(items, timestamp_of, this_month, next_month)
    previous = count_between(items, timestamp_of, last_month, this_month)
    return growth_metric(current, previous)
