from datetime import datetime, timedelta

import pytest

from models.category import ExpenseCategory
from models.stats import StatsRange, TimeBucket
from services.stats_service import (
    StatsService, build_reports, category_breakdown, currency_totals,
    filter_in_range, monthly_trend, range_start, store_breakdown,
    time_of_day_breakdown, weekly_trend,
)
from utils.constants import OTHER_SLICE_KEY
from tests.conftest import NOW, make_record


class TestWindow:
    @pytest.mark.parametrize("stats_range, expected", [
        (StatsRange.LAST_7, datetime(2026, 3, 11, 15, 30)),
        (StatsRange.LAST_30, datetime(2026, 2, 16, 15, 30)),
        (StatsRange.LAST_365, datetime(2025, 3, 18, 15, 30)),
        (StatsRange.THIS_WEEK, datetime(2026, 3, 16)),
        (StatsRange.THIS_MONTH, datetime(2026, 3, 1)),
        (StatsRange.THIS_YEAR, datetime(2026, 1, 1)),
    ])
    def test_range_start(self, stats_range, expected):
        assert range_start(stats_range, NOW) == expected

    def test_filter_is_inclusive_and_newest_first(self):
        start = datetime(2026, 3, 16)
        inside = [make_record(date=start), make_record(date=NOW), make_record(date=datetime(2026, 3, 17))]
        outside = [make_record(date=start - timedelta(seconds=1)), make_record(date=NOW + timedelta(minutes=1))]
        result = filter_in_range(inside + outside, StatsRange.THIS_WEEK, NOW)
        assert [r.date for r in result] == [NOW, datetime(2026, 3, 17), start]


class TestCurrencyTotals:
    def test_totals_and_counts_per_currency(self):
        records = [
            make_record(amount=5, currency="USD"),
            make_record(amount=7.5, currency="USD"),
            make_record(amount=100, currency="INR"),
        ]
        totals = currency_totals(records)
        assert list(totals) == ["INR", "USD"]
        assert totals["USD"].total == 12.5
        assert totals["USD"].count == 2
        assert totals["INR"].count == 1


class TestStoreBreakdown:
    def test_more_than_eight_stores_collapse_into_other(self):
        records = [make_record(amount=float(i), store=f"S{i:02d}") for i in range(1, 11)]
        slices = store_breakdown(records)
        assert len(slices) == 9
        assert [s.label for s in slices[:8]] == [f"S{i:02d}" for i in range(10, 2, -1)]
        assert slices[8].label == "Other"
        assert slices[8].key == OTHER_SLICE_KEY
        assert slices[8].value == 3.0

    def test_eight_stores_are_not_truncated(self):
        records = [make_record(amount=float(i), store=f"S{i}") for i in range(1, 9)]
        slices = store_breakdown(records)
        assert len(slices) == 8
        assert all(s.key != OTHER_SLICE_KEY for s in slices)

    def test_amounts_summed_per_store(self):
        records = [make_record(amount=2, store="Uber"), make_record(amount=3, store="Uber"),
                   make_record(amount=4, store="Lyft")]
        slices = store_breakdown(records)
        assert [(s.label, s.value) for s in slices] == [("Uber", 5), ("Lyft", 4)]

    def test_equal_sums_ordered_by_label(self):
        records = [make_record(amount=1, store=s) for s in ("Target", "Apple", "Lyft")]
        assert [s.label for s in store_breakdown(records)] == ["Apple", "Lyft", "Target"]


class TestCategoryBreakdown:
    def test_sorted_descending_with_emoji_labels(self):
        records = [
            make_record(amount=5, category=ExpenseCategory.HEALTH),
            make_record(amount=20, category=ExpenseCategory.FOOD),
            make_record(amount=1, category=ExpenseCategory.HEALTH),
        ]
        slices = category_breakdown(records)
        assert [(s.key, s.value) for s in slices] == [("Food", 20), ("Health", 6)]
        assert slices[0].label == f"{ExpenseCategory.FOOD.emoji} Food"


class TestTimeOfDayBreakdown:
    def test_buckets_in_fixed_order_skipping_empty(self):
        day = datetime(2026, 3, 18)
        records = [
            make_record(amount=1, date=day.replace(hour=21)),
            make_record(amount=2, date=day.replace(hour=3)),
            make_record(amount=3, date=day.replace(hour=11)),
            make_record(amount=4, date=day.replace(hour=14)),
        ]
        slices = time_of_day_breakdown(records)
        assert [(s.key, s.value) for s in slices] == [
            (TimeBucket.LATE_NIGHT.value, 2),
            (TimeBucket.AFTERNOON.value, 7),
            (TimeBucket.NIGHT.value, 1),
        ]

    def test_bucket_summing_to_zero_is_omitted(self):
        day = datetime(2026, 3, 18, 8)
        records = [make_record(amount=10, date=day), make_record(amount=-10, date=day)]
        assert time_of_day_breakdown(records) == []

    @pytest.mark.parametrize("hour, bucket", [
        (0, TimeBucket.LATE_NIGHT), (4, TimeBucket.LATE_NIGHT), (5, TimeBucket.MORNING),
        (10, TimeBucket.MORNING), (15, TimeBucket.EVENING), (20, TimeBucket.EVENING),
        (23, TimeBucket.NIGHT),
    ])
    def test_hour_boundaries(self, hour, bucket):
        assert TimeBucket.for_hour(hour) is bucket


class TestTrends:
    def test_monthly_trend_has_twelve_points_when_empty(self):
        points = monthly_trend([], NOW)
        assert len(points) == 12
        assert points[0].start == datetime(2025, 4, 1)
        assert points[-1].start == datetime(2026, 3, 1)
        assert points[-1].label == "Mar"
        assert all(p.total == 0 for p in points)

    def test_monthly_trend_buckets_by_calendar_month(self):
        records = [
            make_record(amount=5, date=datetime(2026, 3, 2)),
            make_record(amount=6, date=datetime(2026, 3, 31, 23)),   # future, same month
            make_record(amount=7, date=datetime(2025, 4, 1)),
            make_record(amount=100, date=datetime(2025, 3, 31)),     # before window
            make_record(amount=100, date=datetime(2026, 4, 1)),      # next month
        ]
        points = monthly_trend(records, NOW)
        assert len(points) == 12
        assert points[-1].total == 11
        assert points[0].total == 7
        assert sum(p.total for p in points) == 18

    def test_weekly_trend_uses_monday_weeks(self):
        records = [
            make_record(amount=3, date=datetime(2026, 3, 16)),       # Monday this week
            make_record(amount=4, date=datetime(2026, 3, 15, 23)),   # Sunday last week
            make_record(amount=9, date=datetime(2025, 12, 28)),      # before first week
        ]
        points = weekly_trend(records, NOW)
        assert len(points) == 12
        assert points[0].start == datetime(2025, 12, 29)
        assert points[0].label == "Dec 29"
        assert points[-1].total == 3
        assert points[-2].total == 4
        assert sum(p.total for p in points) == 7


class TestReports:
    def test_trends_ignore_selected_window(self):
        recent = make_record(amount=10, date=NOW - timedelta(days=1))
        older = make_record(amount=50, date=NOW - timedelta(days=200))
        [report] = build_reports([recent, older], StatsRange.LAST_7, NOW)
        assert report.currency == "USD"
        assert report.summary.count == 1
        assert report.summary.total == 10
        assert report.monthly_total == 60
        assert report.weekly_total == 10
        assert [s.value for s in report.by_store] == [10]

    def test_currency_outside_window_has_no_report(self):
        records = [
            make_record(currency="USD", date=NOW),
            make_record(currency="GBP", date=NOW - timedelta(days=40)),
        ]
        reports = build_reports(records, StatsRange.LAST_30, NOW)
        assert [r.currency for r in reports] == ["USD"]

    def test_reports_ordered_by_currency_code(self):
        records = [
            make_record(currency="USD", date=NOW),
            make_record(currency="INR", date=NOW),
            make_record(currency="GBP", date=NOW),
        ]
        reports = build_reports(records, StatsRange.LAST_7, NOW)
        assert [r.currency for r in reports] == ["GBP", "INR", "USD"]

    def test_service_uses_injected_clock(self, service):
        service.add_record(make_record(amount=4, currency="THB", date=NOW))
        stats = StatsService(service, clock=lambda: NOW)
        assert stats.get_window(StatsRange.THIS_MONTH) == (datetime(2026, 3, 1), NOW)
        [report] = stats.get_reports(StatsRange.THIS_MONTH)
        assert report.summary.total == 4
