"""
Date-only helpers used by the business day calculator.

All values are ``datetime.date`` instances; no time of day is ever involved.
"""

import re
from datetime import date, timedelta
from typing import AbstractSet, Set

from business_day_calculator.core.exceptions import ValidationError

ISO_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

SATURDAY = 5
SUNDAY = 6
DEFAULT_WEEKEND_DAYS = frozenset({SATURDAY, SUNDAY})

# Threshold above which the threshold heuristic also fetches the next year
NEXT_YEAR_THRESHOLD = 200


def parse_iso_date(value: str) -> date:
    """
    Parse a strict YYYY-MM-DD string.

    Args:
        value: Date text.

    Returns:
        The parsed date.

    Raises:
        ValidationError: If the text is missing, malformed or not a real date.
    """
    if not value or not isinstance(value, str):
        raise ValidationError("Start date must be a valid string in YYYY-MM-DD format")

    if not ISO_DATE_PATTERN.fullmatch(value):
        raise ValidationError("Start date must be in YYYY-MM-DD format")

    year, month, day = (int(part) for part in value.split("-"))
    try:
        return date(year, month, day)
    except ValueError as e:
        raise ValidationError(f"Start date is not a valid calendar date: {value} ({e})")


def add_one_day(value: date) -> date:
    """Return the day after ``value``."""
    return value + timedelta(days=1)


def is_weekend(value: date, weekend_days: AbstractSet[int] = DEFAULT_WEEKEND_DAYS) -> bool:
    """Check whether a date falls on a configured weekend weekday."""
    return value.weekday() in weekend_days


def is_holiday(value: date, holidays: AbstractSet[date]) -> bool:
    """Check whether a date is in the holiday set."""
    return value in holidays


def is_business_day(
    value: date,
    holidays: AbstractSet[date],
    weekend_days: AbstractSet[int] = DEFAULT_WEEKEND_DAYS,
) -> bool:
    """Check whether a date is neither a weekend day nor a holiday."""
    return not is_weekend(value, weekend_days) and not is_holiday(value, holidays)


def years_by_threshold(
    start: date, business_days: int, threshold: int = NEXT_YEAR_THRESHOLD
) -> Set[int]:
    """
    Select years using the fixed next-year threshold.

    Only the start year is selected, plus the following year when
    ``business_days`` exceeds ``threshold``. Long horizons that start late in
    the year can reach a second following year that is never fetched.

    Args:
        start: Start date.
        business_days: Number of business days to add.
        threshold: Count above which the next year is included.

    Returns:
        Set of years to fetch holidays for.
    """
    years = {start.year}
    if business_days > threshold:
        years.add(start.year + 1)
    return years


def years_by_span(
    start: date,
    business_days: int,
    weekend_days: AbstractSet[int] = DEFAULT_WEEKEND_DAYS,
) -> Set[int]:
    """
    Select every year the forward walk can possibly reach.

    The horizon assumes one weekday per week may be lost to holidays and adds
    one week of slack, so the selection is an upper bound on the walk.

    Args:
        start: Start date.
        business_days: Number of business days to add.
        weekend_days: Weekdays that are never business days.

    Returns:
        Set of years to fetch holidays for.
    """
    per_week = max(1, 6 - len(weekend_days))
    weeks = -(-business_days // per_week) + 1
    try:
        horizon = start + timedelta(weeks=weeks)
    except OverflowError:
        horizon = date.max
    return set(range(start.year, horizon.year + 1))


def earliest_end_date(
    start: date,
    business_days: int,
    weekend_days: AbstractSet[int] = DEFAULT_WEEKEND_DAYS,
) -> date:
    """
    Lower bound for the end date, assuming no holidays at all.

    Every seven consecutive days hold at most ``7 - len(weekend_days)``
    business days, so the walk cannot end before this date.

    Args:
        start: Start date.
        business_days: Number of business days to add.
        weekend_days: Weekdays that are never business days.

    Returns:
        Earliest possible end date.

    Raises:
        OverflowError: If even the lower bound lies past ``date.max``.
    """
    per_week = 7 - len(weekend_days)
    weeks = -(-business_days // per_week) - 1
    return start + timedelta(weeks=weeks)
