"""Swiss working-day calendar engine.

Pure functions over (year, month) pairs:
- easter_sunday: anonymous Gregorian Computus
- swiss_holidays: fixed federal holidays plus the Easter-derived movable feasts
- is_weekend / is_holiday / is_working_day: day predicates
- working_days_in_month / last_working_day_of_month / weeks_of_month

Months are 1-based everywhere (see lumpsum.domain.Month).
"""
import calendar
import logging
from datetime import date, timedelta
from functools import lru_cache
from typing import List, Optional

from lumpsum.domain.HolidaySet import HolidaySet
from lumpsum.domain.Month import Month
from lumpsum.domain.MonthlyResult import WeekSpan
from lumpsum.utilities.constants import (
    MAX_YEAR,
    MIN_YEAR,
    SWISS_EASTER_HOLIDAYS,
    SWISS_FIXED_HOLIDAYS,
    WEEKEND_DAYS,
)

logger = logging.getLogger(__name__)

MAX_MONTH_DAYS = 31


def _check_year(year) -> int:
    if isinstance(year, bool) or not isinstance(year, int):
        raise ValueError(f"Year must be an integer, got {year!r}")
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValueError(f"Year out of supported range {MIN_YEAR}-{MAX_YEAR}: {year}")
    return year


def month_bounds(year: int, month) -> tuple[date, date]:
    """Return (first day, last day) of the month."""
    year = _check_year(year)
    month = Month.coerce(month)
    days_in_month = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, days_in_month)


def easter_sunday(year: int) -> date:
    """Easter Sunday of a Gregorian year (anonymous Gregorian algorithm)."""
    year = _check_year(year)
    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month, day = divmod(h + l - 7 * m + 114, 31)
    return date(year, month, day + 1)


@lru_cache(maxsize=64)
def swiss_holidays(year: int) -> HolidaySet:
    """Swiss federal holidays of the year: 5 fixed dates and 4 relative to Easter."""
    year = _check_year(year)
    holidays = {date(year, m, d): name for m, d, name in SWISS_FIXED_HOLIDAYS}
    easter = easter_sunday(year)
    for offset, name in SWISS_EASTER_HOLIDAYS:
        holidays[easter + timedelta(days=offset)] = name
    return HolidaySet(year, holidays)


def is_weekend(d: date) -> bool:
    return d.weekday() in WEEKEND_DAYS


def is_holiday(d: date, holidays: Optional[HolidaySet] = None) -> bool:
    """True if d is in the holiday set of its own year.

    A set built for another year never matches.
    """
    if holidays is None:
        holidays = swiss_holidays(d.year)
    return holidays.year == d.year and d in holidays


def is_working_day(d: date, holidays: Optional[HolidaySet] = None) -> bool:
    return not is_weekend(d) and not is_holiday(d, holidays)


def working_days_in_month(year: int, month) -> int:
    """Count the days of the month that are neither weekend nor Swiss holiday."""
    first, last = month_bounds(year, month)
    holidays = swiss_holidays(year)
    count = 0
    current = first
    while current <= last:
        if is_working_day(current, holidays):
            count += 1
        current += timedelta(days=1)
    return count


def last_working_day_of_month(year: int, month) -> date:
    """Latest working day of the month (the milestone / payment date).

    Scans backward from the last calendar day, at most 31 steps. If the scan
    finds nothing, which cannot happen with the Swiss calendar, the last
    calendar day is returned so the function always yields a date.
    """
    first, last = month_bounds(year, month)
    holidays = swiss_holidays(year)
    current = last
    for _ in range(MAX_MONTH_DAYS):
        if current < first:
            break
        if is_working_day(current, holidays):
            return current
        current -= timedelta(days=1)
    logger.warning("No working day found in %s-%02d, falling back to %s", year, int(month), last)
    return last


def weeks_of_month(year: int, month) -> List[WeekSpan]:
    """Monday-based weeks overlapping the month, clipped to it, with working-day counts."""
    first, last = month_bounds(year, month)
    holidays = swiss_holidays(year)
    weeks: List[WeekSpan] = []
    start = first
    index = 1
    while start <= last:
        end = min(start + timedelta(days=6 - start.weekday()), last)
        working = sum(
            1 for n in range((end - start).days + 1)
            if is_working_day(start + timedelta(days=n), holidays)
        )
        weeks.append(WeekSpan(index=index, start=start, end=end, working_days=working))
        start = end + timedelta(days=1)
        index += 1
    return weeks


__all__ = [
    "easter_sunday", "swiss_holidays", "is_weekend", "is_holiday", "is_working_day",
    "working_days_in_month", "last_working_day_of_month", "weeks_of_month", "month_bounds",
]
