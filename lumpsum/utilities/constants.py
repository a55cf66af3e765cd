from typing import Final

DATE_FORMAT: Final[str] = "%d.%m.%Y"
SHORT_DATE_FORMAT: Final[str] = "%d.%m"
MONTH_INPUT_FORMAT: Final[str] = "%Y-%m"

# Proleptic Gregorian range the engine accepts
MIN_YEAR: Final[int] = 1583
MAX_YEAR: Final[int] = 9999

MONTH_NAMES_EN: Final[tuple[str, ...]] = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

# (month, day, name), months are 1-based
SWISS_FIXED_HOLIDAYS: Final[tuple[tuple[int, int, str], ...]] = (
    (1, 1, "New Year's Day"),
    (1, 2, "Berchtold's Day"),
    (8, 1, "Swiss National Day"),
    (12, 25, "Christmas Day"),
    (12, 26, "St. Stephen's Day"),
)

# (offset in days from Easter Sunday, name)
SWISS_EASTER_HOLIDAYS: Final[tuple[tuple[int, str], ...]] = (
    (-2, "Good Friday"),
    (1, "Easter Monday"),
    (39, "Ascension Day"),
    (50, "Whit Monday"),
)

WEEKEND_DAYS: Final[frozenset[int]] = frozenset({5, 6})  # date.weekday(): Saturday, Sunday

WEEKDAY_NAMES_EN: Final[tuple[str, ...]] = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)
