"""Month value type: explicit 1-based month contract used by the whole code base."""
from enum import IntEnum


class Month(IntEnum):
    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12

    @classmethod
    def coerce(cls, value) -> "Month":
        '''Validates an int (1-12) or Month and returns the Month member.

        Raises ValueError for anything else, including bools and 0-based indexes
        like 0, so that an off-by-one at the caller fails loudly.
        '''
        if isinstance(value, cls):
            return value
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Month must be an integer 1-12, got {value!r}")
        if not 1 <= value <= 12:
            raise ValueError(f"Month out of range 1-12: {value}")
        return cls(value)

    def shift(self, year: int, months: int) -> tuple[int, "Month"]:
        '''Returns (year, month) moved by the given number of months.'''
        index = (self.value - 1) + months
        return year + index // 12, Month(index % 12 + 1)
