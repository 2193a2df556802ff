from __future__ import annotations

from datetime import date, datetime, time, timedelta

from ..core.exceptions import ValidationError

# Inclusive upper bound of a local calendar day, millisecond precision.
END_OF_DAY = time(23, 59, 59, 999000)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def day_window(day: date | datetime) -> tuple[datetime, datetime]:
    """Closed interval [00:00:00.000, 23:59:59.999] of the given local day."""
    if isinstance(day, datetime):
        day = day.date()
    return datetime.combine(day, time.min), datetime.combine(day, END_OF_DAY)


def month_window(year: int, month: int) -> tuple[datetime, datetime]:
    start = date(year, month, 1)
    next_month = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    last_day = next_month - timedelta(days=1)
    return datetime.combine(start, time.min), datetime.combine(last_day, END_OF_DAY)


def year_window(year: int) -> tuple[datetime, datetime]:
    return datetime.combine(date(year, 1, 1), time.min), datetime.combine(date(year, 12, 31), END_OF_DAY)


def parse_period(filter_type: str, value: str) -> tuple[datetime, datetime]:
    """Translate a date/month/year filter value into a closed datetime window."""
    v = (value or "").strip()
    try:
        if filter_type == "date":
            return day_window(parse_iso_date(v))
        if filter_type == "month":
            parsed = datetime.strptime(v[:7], "%Y-%m")
            return month_window(parsed.year, parsed.month)
        if filter_type == "year":
            return year_window(int(v[:4]))
    except ValueError:
        raise ValidationError(f"Invalid {filter_type} value: {value!r}")
    raise ValidationError(f"Unsupported filter type: {filter_type!r}")
