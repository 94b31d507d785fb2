"""Grouped counts with share-of-total percentages.

Used for status, industry, location, experience-level and role breakdowns.
"""

from collections import Counter
from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

from jobboard_analytics.core.schemas import BreakdownItem
from jobboard_analytics.pipeline.rates import ratio_percent

T = TypeVar("T")


def count_by(
    records: Iterable[T],
    key: Callable[[T], str | None],
    default: str | None = None,
) -> Counter[str]:
    """Count records per key. Records with no key use ``default`` or are skipped."""
    counts: Counter[str] = Counter()
    for record in records:
        label = key(record) or default
        if label:
            counts[label] += 1
    return counts


def breakdown(
    counts: Counter[str] | dict[str, int],
    total: int | None = None,
    sort: bool = True,
) -> list[BreakdownItem]:
    """Turn label counts into items with percentage of ``total``.

    ``total`` defaults to the sum of counts. With ``sort`` the largest
    category comes first; ties keep insertion order.
    """
    if total is None:
        total = sum(counts.values())
    items = [
        BreakdownItem(label=label, count=count, percentage=ratio_percent(count, total))
        for label, count in counts.items()
    ]
    if sort:
        items.sort(key=lambda item: item.count, reverse=True)
    return items


def fixed_breakdown(
    counts: Counter[str] | dict[str, int],
    labels: Sequence[str],
    total: int | None = None,
) -> list[BreakdownItem]:
    """Breakdown over a fixed label order, zero-filling missing labels."""
    ordered = {label: counts.get(label, 0) for label in labels}
    if total is None:
        total = sum(counts.values())
    return breakdown(ordered, total=total, sort=False)
