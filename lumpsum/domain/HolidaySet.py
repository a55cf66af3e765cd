"""HolidaySet value object: the public holidays of a single year, with their names."""
from datetime import date
from typing import Dict, Iterator, Mapping
from lumpsum.utilities.constants import WEEKDAY_NAMES_EN


class HolidaySet:
    def __init__(self, year: int, holidays: Mapping[date, str]):
        for d in holidays:
            if d.year != year:
                raise ValueError(f"Holiday {d.isoformat()} does not belong to year {year}")
        self._year = year
        self._names: Dict[date, str] = dict(sorted(holidays.items()))
        self._dates = frozenset(self._names)

    @property
    def year(self) -> int:
        return self._year

    @property
    def dates(self) -> frozenset:
        return self._dates

    @property
    def names(self) -> Dict[date, str]:
        '''Copy of the date -> holiday name mapping, in date order.'''
        return dict(self._names)

    def name_of(self, d: date) -> str:
        return self._names.get(d, "")

    def __contains__(self, d) -> bool:
        return d in self._dates

    def __len__(self) -> int:
        return len(self._dates)

    def __iter__(self) -> Iterator[date]:
        return iter(self._names)

    def __eq__(self, other) -> bool:
        if not isinstance(other, HolidaySet):
            return NotImplemented
        return self._year == other._year and self._dates == other._dates

    def __hash__(self) -> int:
        return hash((self._year, self._dates))

    def __str__(self) -> str:
        return f"HolidaySet {self._year}: " + ", ".join(
            f"{d.isoformat()} {name}" for d, name in self._names.items())

    __repr__ = __str__

    def to_list(self):
        '''Serializable list of {date, name, weekday} entries in date order.'''
        return [
            {"date": d.isoformat(), "name": name, "weekday": WEEKDAY_NAMES_EN[d.weekday()]}
            for d, name in self._names.items()
        ]
