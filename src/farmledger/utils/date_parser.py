"""Date parsing utilities."""

from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

PERIODS = (
    "this-week",
    "this-month",
    "this-year",
    "last-week",
    "last-month",
    "last-year",
)


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports ISO and free-form absolute dates ("2024-01-15", "Jan 15 2024")
    and relative forms: "today", "yesterday", "tomorrow",
    "last/this/next week|month|year" and "last <weekday>".

    Args:
        date_str: Date string
        today: Reference day for relative forms (defaults to date.today())

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = today or date.today()

    fixed = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if text in fixed:
        return fixed[text]

    prefix, _, period = text.partition(" ")
    if prefix in ("last", "this", "next") and period:
        step = {"last": -1, "this": 0, "next": 1}[prefix]
        if period == "week":
            monday = today - timedelta(days=today.weekday())
            return monday + timedelta(weeks=step)
        if period == "month":
            return today.replace(day=1) + relativedelta(months=step)
        if period == "year":
            return today.replace(month=1, day=1) + relativedelta(years=step)
        if prefix == "last" and period in WEEKDAYS:
            days_ago = (today.weekday() - WEEKDAYS.index(period)) % 7 or 7
            return today - timedelta(days=days_ago)

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get start and end dates for a named period.

    "this-*" periods end today; "last-*" periods cover the whole previous
    week (Monday to Sunday), month or year.

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = today or date.today()

    if period == "this-week":
        return today - timedelta(days=today.weekday()), today
    if period == "this-month":
        return today.replace(day=1), today
    if period == "this-year":
        return today.replace(month=1, day=1), today
    if period == "last-week":
        start = today - timedelta(days=today.weekday() + 7)
        return start, start + timedelta(days=6)
    if period == "last-month":
        this_month = today.replace(day=1)
        return this_month - relativedelta(months=1), this_month - timedelta(days=1)
    if period == "last-year":
        this_year = today.replace(month=1, day=1)
        return this_year - relativedelta(years=1), this_year - timedelta(days=1)

    raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")
