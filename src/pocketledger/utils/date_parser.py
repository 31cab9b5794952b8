"""Date and month-key parsing utilities."""

import re
from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

MONTH_KEY_RE = re.compile(r"^(\d{4})-(\d{2})$")


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024", ...) and the
    relative forms "today", "yesterday" and "tomorrow".

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def month_key(day: date) -> str:
    """Return the "YYYY-MM" key of the month containing ``day``."""
    return f"{day.year:04d}-{day.month:02d}"


def parse_month(month_str: str) -> str:
    """Validate and normalize a "YYYY-MM" month key.

    Raises:
        ValueError: If the string is not a valid month key
    """
    match = MONTH_KEY_RE.match(month_str.strip())
    if match is None:
        raise ValueError(f"Invalid month '{month_str}', expected YYYY-MM")
    month = int(match.group(2))
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month '{month_str}', month must be 01-12")
    return match.group(0)


def month_bounds(month_str: str) -> tuple[date, date]:
    """Return the first and last day of a "YYYY-MM" month."""
    key = parse_month(month_str)
    start = date(int(key[:4]), int(key[5:]), 1)
    end = start + relativedelta(months=1) - timedelta(days=1)
    return start, end
