"""MonthlyResult domain entity: engine facts for one month plus user-entered deliverables and work plan."""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional

from lumpsum.utilities.constants import DATE_FORMAT


class Activity(str, Enum):
    SUPPLIER = "supplier"
    CLIENT = "client"

    @classmethod
    def coerce(cls, value) -> "Activity":
        try:
            return cls(value)
        except ValueError:
            raise ValueError(
                f"Unknown activity type {value!r}; expected one of {[a.value for a in cls]}"
            ) from None


@dataclass(frozen=True)
class WeekSpan:
    """Monday-based week clipped to the month it belongs to."""

    index: int
    start: date
    end: date
    working_days: int

    def to_dict(self):
        return {
            "index": self.index,
            "start": self.start.strftime(DATE_FORMAT),
            "end": self.end.strftime(DATE_FORMAT),
            "working_days": self.working_days,
        }


class MonthlyResult:
    def __init__(self, year: int, month: int, month_label: str, working_days: int,
                 lump_sum: Decimal, milestone_date: date, weeks: Optional[List[WeekSpan]] = None,
                 deliverables: str = "", work_plan: Optional[Dict[int, Dict[str, str]]] = None):
        if working_days < 0:
            raise ValueError("working_days cannot be negative")
        self.year = year
        self.month = month
        self.month_label = month_label
        self.working_days = working_days
        self.lump_sum = lump_sum
        self.milestone_date = milestone_date
        self.weeks = weeks[:] if weeks else []
        self.deliverables = deliverables
        # Avoid sharing the caller's dicts
        self.work_plan: Dict[int, Dict[str, str]] = {
            w.index: {Activity.SUPPLIER.value: "", Activity.CLIENT.value: ""} for w in self.weeks
        }
        for week_index, entries in (work_plan or {}).items():
            for activity, text in entries.items():
                self.set_work_plan_entry(week_index, activity, text)

    def set_deliverables(self, text: Optional[str]):
        '''Replaces the deliverables text for this month.'''
        self.deliverables = text or ""

    def set_work_plan_entry(self, week_index: int, activity, text: Optional[str]):
        '''Sets the supplier or client text of one week of this month.'''
        if week_index not in self.work_plan:
            raise ValueError(f"{self.month_label} has no week {week_index}")
        self.work_plan[week_index][Activity.coerce(activity).value] = text or ""

    def week(self, week_index: int) -> WeekSpan:
        for w in self.weeks:
            if w.index == week_index:
                return w
        raise ValueError(f"{self.month_label} has no week {week_index}")

    def __str__(self) -> str:
        return (f"{self.month_label} - {self.working_days} working days - {self.lump_sum} - "
                f"Milestone: {self.milestone_date.strftime(DATE_FORMAT)}")

    __repr__ = __str__

    def to_dict(self):
        '''Converts the MonthlyResult to a JSON-friendly dictionary.'''
        return {
            "year": self.year,
            "month": int(self.month),
            "month_label": self.month_label,
            "working_days": self.working_days,
            "lump_sum": float(self.lump_sum),
            "milestone_date": self.milestone_date.strftime(DATE_FORMAT),
            "weeks": [w.to_dict() for w in self.weeks],
            "deliverables": self.deliverables,
            "work_plan": {str(k): dict(v) for k, v in self.work_plan.items()},
        }
