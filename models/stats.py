from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class StatsRange(str, Enum):
    LAST_7 = "Last 7 days"
    LAST_30 = "Last 30 days"
    LAST_365 = "Last 365 days"
    THIS_WEEK = "This week"
    THIS_MONTH = "This month"
    THIS_YEAR = "This year"


DEFAULT_RANGE = StatsRange.LAST_30


class TimeBucket(str, Enum):
    LATE_NIGHT = "Late Night (12–4)"
    MORNING = "Morning (5–10)"
    AFTERNOON = "Afternoon (11–2)"
    EVENING = "Evening (3–8)"
    NIGHT = "Night (9–11)"

    @classmethod
    def for_hour(cls, hour: int) -> "TimeBucket":
        if 0 <= hour <= 4:
            return cls.LATE_NIGHT
        if hour <= 10:
            return cls.MORNING
        if hour <= 14:
            return cls.AFTERNOON
        if hour <= 20:
            return cls.EVENING
        return cls.NIGHT


@dataclass(frozen=True)
class PieSlice:
    key: str        # stable identity; label may repeat
    label: str
    value: float


@dataclass(frozen=True)
class TrendPoint:
    start: datetime
    label: str
    total: float


@dataclass
class CurrencySummary:
    currency: str
    total: float = 0.0
    count: int = 0


@dataclass
class CurrencyReport:
    summary: CurrencySummary
    monthly: list[TrendPoint] = field(default_factory=list)
    weekly: list[TrendPoint] = field(default_factory=list)
    by_store: list[PieSlice] = field(default_factory=list)
    by_category: list[PieSlice] = field(default_factory=list)
    by_time: list[PieSlice] = field(default_factory=list)

    @property
    def currency(self) -> str:
        return self.summary.currency

    @property
    def monthly_total(self) -> float:
        return sum(p.total for p in self.monthly)

    @property
    def weekly_total(self) -> float:
        return sum(p.total for p in self.weekly)
