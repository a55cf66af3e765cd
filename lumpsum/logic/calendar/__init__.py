from .engine import (
    easter_sunday,
    is_holiday,
    is_weekend,
    is_working_day,
    last_working_day_of_month,
    swiss_holidays,
    weeks_of_month,
    working_days_in_month,
)
