"""Time bucketing for trend charts.

Buckets use UTC day boundaries [00:00, 24:00). Naive datetimes are taken as
UTC, aware datetimes are converted, and plain dates are used as-is.
"""

import logging
from collections.abc import Callable, Iterable
from datetime import date, datetime, timedelta, timezone
from typing import TypeVar

from jobboard_analytics.core.schemas import TimeSeriesPoint

logger = logging.getLogger(__name__)

T = TypeVar("T")


def to_utc_day(value: date | datetime) -> date:
    """Return the UTC calendar day a timestamp falls on."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def bucket_by_day(
    start_date: date,
    end_date: date,
    records: Iterable[T],
    timestamp_of: Callable[[T], date | datetime | None],
    width_days: int = 1,
) -> list[TimeSeriesPoint]:
    """Count records per bucket over the closed range [start_date, end_date].

    Args:
        start_date: First day of the range.
        end_date: Last day of the range (inclusive).
        records: Timestamped items.
        timestamp_of: Accessor returning each record's timestamp.
        width_days: Bucket width; the last bucket is clipped to end_date.

    Returns:
        One point per bucket, ascending, zero-count buckets included.
        Empty if start_date is after end_date.
    """
    if width_days < 1:
        msg = f"width_days must be at least 1, got {width_days}"
        raise ValueError(msg)
    if start_date > end_date:
        return []

    total_days = (end_date - start_date).days + 1
    n_buckets = -(-total_days // width_days)
    counts = [0] * n_buckets

    skipped = 0
    for record in records:
        ts = timestamp_of(record)
        if ts is None:
            skipped += 1
            continue
        day = to_utc_day(ts)
        if start_date <= day <= end_date:
            counts[(day - start_date).days // width_days] += 1
    if skipped:
        logger.debug("bucket_by_day: skipped %d records without timestamp", skipped)

    return [
        TimeSeriesPoint(date=start_date + timedelta(days=i * width_days), count=count)
        for i, count in enumerate(counts)
    ]


def trailing_window(today: date, days: int) -> tuple[date, date]:
    """Return (start, end) of the ``days``-day window ending today."""
    return today - timedelta(days=days - 1), today


def bucket_trailing_days(
    today: date,
    days: int,
    records: Iterable[T],
    timestamp_of: Callable[[T], date | datetime | None],
) -> list[TimeSeriesPoint]:
    """Daily counts for the last ``days`` days, today included."""
    start, end = trailing_window(today, days)
    return bucket_by_day(start, end, records, timestamp_of)


def month_start(day: date, months_back: int = 0) -> date:
    """First day of the month ``months_back`` months before ``day``'s month."""
    index = day.year * 12 + (day.month - 1) - months_back
    return date(index // 12, index % 12 + 1, 1)


def bucket_by_month(
    today: date,
    months: int,
    records: Iterable[T],
    timestamp_of: Callable[[T], date | datetime | None],
) -> list[TimeSeriesPoint]:
    """Monthly counts for the trailing ``months`` calendar months, oldest first.

    Each point's date is the first day of its month.
    """
    if months < 1:
        return []
    starts = [month_start(today, back) for back in range(months - 1, -1, -1)]
    counts = dict.fromkeys(starts, 0)
    for record in records:
        ts = timestamp_of(record)
        if ts is None:
            continue
        key = month_start(to_utc_day(ts))
        if key in counts:
            counts[key] += 1
    return [TimeSeriesPoint(date=start, count=counts[start]) for start in starts]


def count_between(
    records: Iterable[T],
    timestamp_of: Callable[[T], date | datetime | None],
    start: date,
    end: date,
) -> int:
    """Count records whose UTC day falls in the half-open range [start, end)."""
    total = 0
    for record in records:
        ts = timestamp_of(record)
        if ts is not None and start <= to_utc_day(ts) < end:
            total += 1
    return total


def count_since(
    records: Iterable[T],
    timestamp_of: Callable[[T], date | datetime | None],
    since: date,
) -> int:
    """Count records on or after ``since`` (UTC day)."""
    total = 0
    for record in records:
        ts = timestamp_of(record)
        if ts is not None and to_utc_day(ts) >= since:
            total += 1
    return total
