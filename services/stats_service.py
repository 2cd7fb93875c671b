"""Aggregations behind the Stats tab.

Everything here is a pure function of a record list and a reference time.
Breakdowns honour the selected window; the monthly and weekly trends always
cover the trailing TREND_POINTS months/weeks regardless of the window.
"""
from collections import defaultdict
from datetime import datetime, timedelta
from typing import Callable, Iterable

from models.expense import ExpenseRecord
from models.stats import (
    CurrencyReport, CurrencySummary, PieSlice, StatsRange, TimeBucket, TrendPoint,
)
from services.expense_service import ExpenseService
from utils.constants import OTHER_SLICE_KEY, OTHER_SLICE_LABEL, TOP_STORES, TREND_POINTS
from utils.date_helpers import (
    add_months, add_weeks, month_label, now, start_of_iso_week, start_of_month,
    start_of_year, week_label,
)

_ROLLING_DAYS = {
    StatsRange.LAST_7: 7,
    StatsRange.LAST_30: 30,
    StatsRange.LAST_365: 365,
}


# ── Window ───────────────────────────────────────────────────────────────────

def range_start(stats_range: StatsRange, ref: datetime) -> datetime:
    if stats_range in _ROLLING_DAYS:
        return ref - timedelta(days=_ROLLING_DAYS[stats_range])
    if stats_range == StatsRange.THIS_WEEK:
        return start_of_iso_week(ref)
    if stats_range == StatsRange.THIS_MONTH:
        return start_of_month(ref)
    if stats_range == StatsRange.THIS_YEAR:
        return start_of_year(ref)
    raise ValueError(f"Unknown range: {stats_range!r}")


def filter_in_range(
    records: Iterable[ExpenseRecord], stats_range: StatsRange, ref: datetime
) -> list[ExpenseRecord]:
    """Records dated within [range start, ref], newest first."""
    start = range_start(stats_range, ref)
    hits = [r for r in records if start <= r.date <= ref]
    return sorted(hits, key=lambda r: r.date, reverse=True)


def currencies_in(records: Iterable[ExpenseRecord]) -> list[str]:
    return sorted({r.currency for r in records})


def currency_totals(records: Iterable[ExpenseRecord]) -> dict[str, CurrencySummary]:
    totals: dict[str, CurrencySummary] = {}
    for r in records:
        s = totals.setdefault(r.currency, CurrencySummary(r.currency))
        s.total += r.amount
        s.count += 1
    return dict(sorted(totals.items()))


# ── Breakdowns ───────────────────────────────────────────────────────────────

def _sum_by(records: Iterable[ExpenseRecord], key: Callable) -> dict:
    sums: dict = defaultdict(float)
    for r in records:
        sums[key(r)] += r.amount
    return sums


def _ranked(slices: list[PieSlice]) -> list[PieSlice]:
    # Largest first; equal sums fall back to label so the order is deterministic.
    return sorted(slices, key=lambda s: (-s.value, s.label))


def store_breakdown(records: Iterable[ExpenseRecord], top_n: int = TOP_STORES) -> list[PieSlice]:
    sums = _sum_by(records, lambda r: r.store)
    ranked = _ranked([PieSlice(key=k, label=k, value=v) for k, v in sums.items()])
    if len(ranked) <= top_n:
        return ranked
    rest = sum(s.value for s in ranked[top_n:])
    return ranked[:top_n] + [PieSlice(OTHER_SLICE_KEY, OTHER_SLICE_LABEL, rest)]


def category_breakdown(records: Iterable[ExpenseRecord]) -> list[PieSlice]:
    sums = _sum_by(records, lambda r: r.category)
    return _ranked([PieSlice(key=c.value, label=c.label, value=v) for c, v in sums.items()])


def time_of_day_breakdown(records: Iterable[ExpenseRecord]) -> list[PieSlice]:
    """Fixed bucket order; buckets that sum to zero are left out."""
    sums = _sum_by(records, lambda r: TimeBucket.for_hour(r.date.hour))
    return [
        PieSlice(key=b.value, label=b.value, value=sums[b])
        for b in TimeBucket
        if sums.get(b, 0.0) != 0
    ]


# ── Trends ───────────────────────────────────────────────────────────────────

def _trend(
    records: Iterable[ExpenseRecord],
    current_start: datetime,
    points: int,
    bucket_of: Callable[[datetime], datetime],
    step: Callable[[datetime, int], datetime],
    label_of: Callable[[datetime], str],
) -> list[TrendPoint]:
    first = step(current_start, -(points - 1))
    starts = [step(first, i) for i in range(points)]
    totals = dict.fromkeys(starts, 0.0)
    for r in records:
        b = bucket_of(r.date)
        if b in totals:
            totals[b] += r.amount
    return [TrendPoint(start=s, label=label_of(s), total=totals[s]) for s in starts]


def monthly_trend(
    records: Iterable[ExpenseRecord], ref: datetime, months: int = TREND_POINTS
) -> list[TrendPoint]:
    return _trend(records, start_of_month(ref), months, start_of_month, add_months, month_label)


def weekly_trend(
    records: Iterable[ExpenseRecord], ref: datetime, weeks: int = TREND_POINTS
) -> list[TrendPoint]:
    return _trend(records, start_of_iso_week(ref), weeks, start_of_iso_week, add_weeks, week_label)


# ── Report ───────────────────────────────────────────────────────────────────

def build_reports(
    records: Iterable[ExpenseRecord], stats_range: StatsRange, ref: datetime
) -> list[CurrencyReport]:
    """One report per currency that has records inside the window."""
    records = list(records)
    in_range = filter_in_range(records, stats_range, ref)
    reports = []
    totals = currency_totals(in_range)
    for code in currencies_in(in_range):
        summary = totals[code]
        windowed = [r for r in in_range if r.currency == code]
        all_time = [r for r in records if r.currency == code]
        reports.append(CurrencyReport(
            summary=summary,
            monthly=monthly_trend(all_time, ref),
            weekly=weekly_trend(all_time, ref),
            by_store=store_breakdown(windowed),
            by_category=category_breakdown(windowed),
            by_time=time_of_day_breakdown(windowed),
        ))
    return reports


class StatsService:
    def __init__(self, expense_service: ExpenseService, clock: Callable[[], datetime] = now):
        self._expense_svc = expense_service
        self._clock = clock

    def get_window(self, stats_range: StatsRange) -> tuple[datetime, datetime]:
        ref = self._clock()
        return range_start(stats_range, ref), ref

    def get_reports(self, stats_range: StatsRange) -> list[CurrencyReport]:
        return build_reports(self._expense_svc.records, stats_range, self._clock())
