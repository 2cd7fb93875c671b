from datetime import date, datetime, timedelta
import calendar

# ── Display date format options ───────────────────────────────────────────────

_STRFTIME_MAP = {
    "MM/DD/YYYY": "%m/%d/%Y",
    "DD/MM/YYYY": "%d/%m/%Y",
    "YYYY-MM-DD": "%Y-%m-%d",
    "DD.MM.YYYY": "%d.%m.%Y",
    "MM-DD-YYYY": "%m-%d-%Y",
}


def now() -> datetime:
    """Current local time, naive, truncated to whole seconds."""
    return datetime.now().replace(microsecond=0)


# ── Calendar boundaries (ISO weeks start on Monday) ──────────────────────────

def start_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_iso_week(dt: datetime) -> datetime:
    return start_of_day(dt) - timedelta(days=dt.isoweekday() - 1)


def start_of_month(dt: datetime) -> datetime:
    return start_of_day(dt).replace(day=1)


def start_of_year(dt: datetime) -> datetime:
    return start_of_day(dt).replace(month=1, day=1)


def clamp_day_to_month(year: int, month: int, day: int) -> int:
    """Clamp day to valid range for the given year/month."""
    max_day = calendar.monthrange(year, month)[1]
    return min(day, max_day)


def add_months(d, n: int):
    """Add n months to a date or datetime, clamping day to month end."""
    month = d.month - 1 + n
    year = d.year + month // 12
    month = month % 12 + 1
    day = clamp_day_to_month(year, month, d.day)
    return d.replace(year=year, month=month, day=day)


def add_weeks(dt: datetime, n: int) -> datetime:
    return dt + timedelta(weeks=n)


# ── Labels ───────────────────────────────────────────────────────────────────

def month_label(dt: datetime) -> str:
    """Localized short month name, e.g. 'Mar'."""
    return dt.strftime("%b")


def week_label(dt: datetime) -> str:
    """Localized short month and day, e.g. 'Mar 4'."""
    return f"{dt.strftime('%b')} {dt.day}"


def format_time(dt: datetime) -> str:
    return dt.strftime("%I:%M %p").lstrip("0")


def format_long_date(dt: datetime) -> str:
    return f"{dt.strftime('%b')} {dt.day}, {dt.year}"


def format_list_date(dt: datetime, ref: datetime | None = None) -> str:
    """Subtitle date for the expense list.

    Today shows only the time, this year shows month and day, anything
    older also carries the year.
    """
    ref = ref or now()
    if dt.date() == ref.date():
        return format_time(dt)
    if dt.year == ref.year:
        return week_label(dt)
    return format_long_date(dt)


def format_range_caption(start: datetime, end: datetime) -> str:
    return f"Showing expenses from {format_long_date(start)} to {format_long_date(end)}."


# ── Storage / display conversion for the date picker ─────────────────────────

def parse_date(date_str: str) -> date | None:
    """Parse a date string in YYYY-MM-DD format, returning None on failure."""
    if not date_str:
        return None
    for fmt in ("%Y-%m-%d", "%Y/%m/%d", "%Y.%m.%d"):
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue
    return None


def format_date(d: date) -> str:
    return d.strftime("%Y-%m-%d")


def format_display_date(date_str: str, fmt_key: str = "MM/DD/YYYY") -> str:
    """Convert a YYYY-MM-DD storage string to the user-facing display format."""
    if not date_str:
        return date_str
    d = parse_date(date_str)
    if d is None:
        return date_str
    return d.strftime(_STRFTIME_MAP.get(fmt_key, "%m/%d/%Y"))


def parse_display_date(display_str: str, fmt_key: str) -> date | None:
    """Parse a date in the given display format. Returns None on failure.

    Falls back to ISO 8601 parse if the display format doesn't match.
    """
    if not display_str:
        return None
    fmt = _STRFTIME_MAP.get(fmt_key, "%m/%d/%Y")
    try:
        return datetime.strptime(display_str.strip(), fmt).date()
    except ValueError:
        return parse_date(display_str)


def parse_time(time_str: str) -> tuple[int, int] | None:
    """Parse 'HH:MM' (24h) into (hour, minute); None on failure."""
    try:
        t = datetime.strptime((time_str or "").strip(), "%H:%M")
    except ValueError:
        return None
    return t.hour, t.minute
