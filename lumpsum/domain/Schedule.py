"""Schedule aggregate: ordered monthly results of one calculation run plus totals."""
from decimal import Decimal
from typing import List, Optional

from lumpsum.domain.MonthlyResult import MonthlyResult


class Schedule:
    def __init__(self, rate: Decimal, start_year: int, start_month: int,
                 results: Optional[List[MonthlyResult]] = None):
        self.rate = rate
        self.start_year = start_year
        self.start_month = start_month
        self.results = results[:] if results else []

    @property
    def duration(self) -> int:
        return len(self.results)

    @property
    def total_working_days(self) -> int:
        return sum(r.working_days for r in self.results)

    @property
    def total_lump_sum(self) -> Decimal:
        return sum((r.lump_sum for r in self.results), Decimal("0"))

    def month_at(self, index: int) -> MonthlyResult:
        '''Returns the result at a 0-based position; raises IndexError if out of range.'''
        if not 0 <= index < len(self.results):
            raise IndexError(f"Schedule has no month at position {index}")
        return self.results[index]

    def __str__(self) -> str:
        return (f"Schedule {self.start_year}-{int(self.start_month):02d} x {self.duration} months - "
                f"{self.total_working_days} days - {self.total_lump_sum}")

    __repr__ = __str__

    def to_dict(self):
        return {
            "rate": float(self.rate),
            "start_year": self.start_year,
            "start_month": int(self.start_month),
            "duration": self.duration,
            "months": [r.to_dict() for r in self.results],
            "totals": {
                "working_days": self.total_working_days,
                "lump_sum": float(self.total_lump_sum),
            },
        }
