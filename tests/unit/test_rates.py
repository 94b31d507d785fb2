"""Tests for growth/ratio percentages and rounding."""

from datetime import date, datetime

import pytest

from jobboard_analytics.core.rounding import round_half_up, round_int
from jobboard_analytics.pipeline.rates import (
    growth_metric,
    growth_rate,
    month_over_month,
    ratio_percent,
    safe_average,
)


class TestRounding:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0.5, 1), (1.5, 2), (2.5, 3), (-2.5, -3), (2.4999, 2)],
    )
    def test_half_away_from_zero(self, value: float, expected: int) -> None:
        assert round_int(value) == expected

    def test_one_decimal(self) -> None:
        assert round_half_up(0.15, 1) == 0.2
        assert round_half_up(3 / 20, 1) == 0.2
        assert round_half_up(2 / 3, 1) == 0.7


class TestGrowthRate:
    def test_both_zero(self) -> None:
        assert growth_rate(0, 0) == 0

    def test_from_zero_is_hundred(self) -> None:
        assert growth_rate(5, 0) == 100

    def test_decline(self) -> None:
        assert growth_rate(10, 20) == -50

    def test_increase(self) -> None:
        assert growth_rate(15, 10) == 50

    def test_rounded_to_integer(self) -> None:
        assert growth_rate(4, 3) == 33
        assert growth_rate(5, 3) == 67

    def test_drop_to_zero(self) -> None:
        assert growth_rate(0, 8) == -100

    def test_metric_carries_inputs(self) -> None:
        metric = growth_metric(15, 10)
        assert (metric.current, metric.previous, metric.rate_percent) == (15, 10, 50)


class TestRatioPercent:
    @pytest.mark.parametrize("numerator", [0, 1, 42])
    def test_zero_denominator_is_zero(self, numerator: int) -> None:
        assert ratio_percent(numerator, 0) == 0

    def test_zero_numerator(self) -> None:
        assert ratio_percent(0, 10) == 0

    def test_half(self) -> None:
        assert ratio_percent(5, 10) == 50

    def test_rounds_half_up(self) -> None:
        assert ratio_percent(1, 8) == 13

    def test_can_exceed_hundred(self) -> None:
        assert ratio_percent(3, 2) == 150


class TestSafeAverage:
    def test_empty_is_zero(self) -> None:
        assert safe_average(10, 0) == 0

    def test_integer_average(self) -> None:
        assert safe_average(7, 2) == 4

    def test_decimal_average(self) -> None:
        assert safe_average(10, 3, ndigits=2) == 3.33


class TestMonthOverMonth:
    def test_counts_calendar_months(self) -> None:
        records = [
            datetime(2026, 2, 3),
            datetime(2026, 2, 20),
            datetime(2026, 3, 1),
            datetime(2026, 3, 9),
            datetime(2026, 3, 10),
            datetime(2026, 1, 31),
        ]
        metric = month_over_month(records, lambda r: r, date(2026, 3, 15))
        assert metric.current == 3
        assert metric.previous == 2
        assert metric.rate_percent == 50

    def test_no_history(self) -> None:
        metric = month_over_month([datetime(2026, 3, 2)], lambda r: r, date(2026, 3, 15))
        assert metric.rate_percent == 100
