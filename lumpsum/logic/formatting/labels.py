"""Date, month and currency labels.

The calendar engine never formats anything itself; callers go through a
DateFormatter so that another language or date style can be plugged in
without touching the engine. The module-level helpers use the default
English formatter.
"""
from datetime import date
from decimal import Decimal
from typing import Sequence, Union

from lumpsum.domain.Month import Month
from lumpsum.domain.MonthlyResult import WeekSpan
from lumpsum.utilities.config import CURRENCY
from lumpsum.utilities.constants import DATE_FORMAT, MONTH_NAMES_EN, SHORT_DATE_FORMAT


class DateFormatter:
    def __init__(self, month_names: Sequence[str] = MONTH_NAMES_EN, date_format: str = DATE_FORMAT,
                 short_date_format: str = SHORT_DATE_FORMAT, week_word: str = "Week"):
        if len(month_names) != 12:
            raise ValueError("month_names must contain exactly 12 names")
        self.month_names = tuple(month_names)
        self.date_format = date_format
        self.short_date_format = short_date_format
        self.week_word = week_word

    def month_label(self, year: int, month) -> str:
        '''"March 2025" style label.'''
        return f"{self.month_names[Month.coerce(month) - 1]} {year}"

    def date_label(self, d: date) -> str:
        return d.strftime(self.date_format)

    def week_label(self, week: WeekSpan) -> str:
        '''"Week 2 (10.03 - 14.03.2025)" style label.'''
        return (f"{self.week_word} {week.index} "
                f"({week.start.strftime(self.short_date_format)} - {self.date_label(week.end)})")


DEFAULT_FORMATTER = DateFormatter()


def format_month_label(year: int, month) -> str:
    return DEFAULT_FORMATTER.month_label(year, month)


def format_date_dmy(d: date) -> str:
    return DEFAULT_FORMATTER.date_label(d)


def format_week_label(week: WeekSpan) -> str:
    return DEFAULT_FORMATTER.week_label(week)


def format_currency(amount: Union[Decimal, float, int], currency: str = CURRENCY) -> str:
    """Format an amount as 'CHF 12,345.00'."""
    return f"{currency} {Decimal(str(amount)):,.2f}"


__all__ = ["DateFormatter", "DEFAULT_FORMATTER", "format_month_label", "format_date_dmy",
           "format_week_label", "format_currency"]
