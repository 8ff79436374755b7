"""
Date helpers for the DD/MM/YYYY strings used throughout the dashboard.
"""

import math
import re
from datetime import datetime, timedelta
from typing import Iterable, Optional, Tuple

from errors import InvalidArgument

DATE_FORMAT = '%d/%m/%Y'
DATE_PATTERN = re.compile(r'^\d{2}/\d{2}/\d{4}$')


def parse_date(date_string) -> Optional[datetime]:
    """Parse a strict DD/MM/YYYY string, returning None when it is not a real date."""
    if not isinstance(date_string, str) or not DATE_PATTERN.match(date_string):
        return None
    try:
        return datetime.strptime(date_string, DATE_FORMAT)
    except ValueError:
        return None


def format_date(date: datetime) -> str:
    """Format a date as DD/MM/YYYY."""
    # strftime does not zero-pad years below 1000 on every platform
    return f"{date.day:02d}/{date.month:02d}/{date.year:04d}"


def is_valid_date_string(date_string) -> bool:
    """Check that a string is a real calendar date in DD/MM/YYYY layout."""
    return parse_date(date_string) is not None


def week_number(date: datetime) -> int:
    """
    Approximate week of the year used for weekly chart buckets.

    Computed as ceil((day_of_year + weekday of 1 January) / 7) with Sunday as
    weekday 0. This is not the ISO-8601 week and can differ from it by one
    around the start and end of a year.
    """
    first_day = datetime(date.year, 1, 1)
    day_of_year = (date - first_day).days + 1
    first_weekday = (first_day.weekday() + 1) % 7  # Monday=0 -> Sunday=0
    return math.ceil((day_of_year + first_weekday) / 7)


def get_date_range_for_period(period_days: Optional[int], base_date: Optional[datetime] = None) -> Tuple[str, str]:
    """
    Get the (from_date, to_date) strings for a preset ending on base_date.

    The range is inclusive, so a one-day period starts and ends on base_date.
    Custom periods have no day count and their dates come from the operator.
    """
    if period_days is None:
        raise InvalidArgument("Custom time periods have no preset date range")
    if period_days < 1:
        raise InvalidArgument(f"Invalid period length: {period_days}")

    to_date = base_date or datetime.now()
    from_date = to_date - timedelta(days=period_days - 1)
    return format_date(from_date), format_date(to_date)


def date_span_days(dates: Iterable[datetime]) -> int:
    """Whole days between the earliest and latest date, 0 for no dates."""
    dates = list(dates)
    if not dates:
        return 0
    return (max(dates) - min(dates)).days
