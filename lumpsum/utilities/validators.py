"""
Input validation schemas using Pydantic for the form and the JSON API.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from lumpsum.domain.MonthlyResult import Activity
from lumpsum.utilities.config import MAX_DURATION_MONTHS
from lumpsum.utilities.constants import MAX_YEAR, MIN_YEAR, MONTH_INPUT_FORMAT


class ScheduleRequest(BaseModel):
    """Schema for a schedule calculation."""
    rate: Decimal = Field(..., gt=0, le=1_000_000, decimal_places=2)
    start_month: str = Field(..., pattern=r'^\d{4}-\d{2}$', description="YYYY-MM")
    duration: int = Field(..., ge=1, le=MAX_DURATION_MONTHS)
    session_id: Optional[str] = Field(None, max_length=64)

    @field_validator('start_month')
    @classmethod
    def validate_start_month(cls, v):
        """Month must be 01-12 and the year inside the supported calendar range."""
        try:
            parsed = datetime.strptime(v, MONTH_INPUT_FORMAT)
        except ValueError:
            raise ValueError('start_month must be a valid YYYY-MM month')
        if not MIN_YEAR <= parsed.year <= MAX_YEAR:
            raise ValueError(f'start_month year must be between {MIN_YEAR} and {MAX_YEAR}')
        return v

    @property
    def start_year_month(self) -> tuple[int, int]:
        parsed = datetime.strptime(self.start_month, MONTH_INPUT_FORMAT)
        return parsed.year, parsed.month


class DeliverablesUpdate(BaseModel):
    """Schema for the deliverables text of one month."""
    text: str = Field("", max_length=5000)


class WorkPlanUpdate(BaseModel):
    """Schema for one work-plan cell (week x activity)."""
    activity: Activity
    text: str = Field("", max_length=5000)

    @field_validator('text')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        return v.strip()
