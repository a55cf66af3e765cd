"""Schedule building: loops the calendar engine over consecutive months.

Moved out of the web layer so the HTML form, the JSON API and the tests
share the same loop.
"""
import logging
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from lumpsum.domain.Month import Month
from lumpsum.domain.MonthlyResult import MonthlyResult
from lumpsum.domain.Schedule import Schedule
from lumpsum.logic.calendar.engine import (
    last_working_day_of_month,
    weeks_of_month,
    working_days_in_month,
)
from lumpsum.logic.formatting.labels import DEFAULT_FORMATTER, DateFormatter

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def _to_rate(rate: Union[Decimal, float, int, str]) -> Decimal:
    try:
        value = Decimal(str(rate))
    except InvalidOperation:
        raise ValueError(f"Invalid rate: {rate!r}") from None
    if not value.is_finite() or value <= 0:
        raise ValueError("Rate must be a positive number")
    return value


def build_month(year: int, month, rate: Decimal,
                formatter: DateFormatter = DEFAULT_FORMATTER) -> MonthlyResult:
    """Engine facts for one month wrapped in a MonthlyResult (user fields empty)."""
    month = Month.coerce(month)
    working_days = working_days_in_month(year, month)
    return MonthlyResult(
        year=year,
        month=month,
        month_label=formatter.month_label(year, month),
        working_days=working_days,
        lump_sum=(rate * working_days).quantize(CENT),
        milestone_date=last_working_day_of_month(year, month),
        weeks=weeks_of_month(year, month),
    )


def build_schedule(rate, start_year: int, start_month, duration: int,
                   formatter: Optional[DateFormatter] = None) -> Schedule:
    """Build the schedule of `duration` consecutive months starting at start_year/start_month."""
    rate = _to_rate(rate)
    start_month = Month.coerce(start_month)
    if isinstance(duration, bool) or not isinstance(duration, int) or duration < 1:
        raise ValueError("Duration must be a positive number of months")
    formatter = formatter or DEFAULT_FORMATTER

    results = []
    for i in range(duration):
        year, month = start_month.shift(start_year, i)
        results.append(build_month(year, month, rate, formatter))

    schedule = Schedule(rate=rate, start_year=start_year, start_month=start_month, results=results)
    logger.info("Built schedule %s", schedule)
    return schedule


__all__ = ["build_schedule", "build_month"]
