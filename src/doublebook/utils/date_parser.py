"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

PERIOD_UNITS = ("month", "quarter", "year")


def _period_start(unit: str, day: date) -> date:
    """Return the first day of the month, quarter or year containing ``day``."""
    if unit == "month":
        return day.replace(day=1)
    if unit == "quarter":
        return day.replace(month=3 * ((day.month - 1) // 3) + 1, day=1)
    return day.replace(month=1, day=1)


def _period_length(unit: str) -> relativedelta:
    if unit == "month":
        return relativedelta(months=1)
    if unit == "quarter":
        return relativedelta(months=3)
    return relativedelta(years=1)


def period_bounds(unit: str, offset: int = 0, today: date | None = None) -> tuple[date, date]:
    """Return the first and last day of a whole calendar period.

    Args:
        unit: "month", "quarter" or "year"
        offset: 0 for the current period, -1 for the previous one, and so on
        today: Reference date (defaults to today)

    Returns:
        Tuple of (first_day, last_day)
    """
    if unit not in PERIOD_UNITS:
        raise ValueError(f"Unknown period unit: '{unit}'")
    today = today or date.today()
    start = _period_start(unit, today) + _period_length(unit) * offset
    end = start + _period_length(unit) - timedelta(days=1)
    return start, end


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative days: "today", "yesterday", "tomorrow"
    - Period boundaries: "start of this month", "end of last quarter",
      "end of last year", "this year" (same as "start of this year")

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = " ".join(date_str.strip().lower().split())
    today = date.today()

    relative_days = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if text in relative_days:
        return relative_days[text]

    boundary = "start"
    for prefix in ("start of ", "end of "):
        if text.startswith(prefix):
            boundary = prefix.split()[0]
            text = text[len(prefix):]
            break

    words = text.split()
    if len(words) == 2 and words[0] in ("this", "last", "next") and words[1] in PERIOD_UNITS:
        offset = {"this": 0, "last": -1, "next": 1}[words[0]]
        start, end = period_bounds(words[1], offset, today)
        return start if boundary == "start" else end

    # Try parsing as absolute date
    try:
        dt = date_parser.parse(text)
        return dt.date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a reporting period.

    "this-*" periods run from the first day of the current period through
    today; "last-*" periods cover the whole previous period.

    Args:
        period: this-month, this-quarter, this-year, last-month, last-quarter
            or last-year

    Returns:
        Tuple of (start_date, end_date) for the specified period

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower().replace("_", "-")
    today = date.today()
    which, _, unit = period.partition("-")

    if unit in PERIOD_UNITS and which == "this":
        start_date, _ = period_bounds(unit, 0, today)
        return (start_date, today)

    if unit in PERIOD_UNITS and which == "last":
        return period_bounds(unit, -1, today)

    raise ValueError(
        f"Unknown period: '{period}'. Supported periods: this-month, this-quarter, "
        "this-year, last-month, last-quarter, last-year"
    )
