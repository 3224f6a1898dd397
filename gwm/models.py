"""
Data model (Reading, CityListStats)
===================================

Each data line of the weather CSV is converted into a `Reading` object.
We keep it immutable (`frozen=True`) so that:
- readings cannot be accidentally modified after loading, and
- queries return the same objects the dataset owns, with no copies needed.

Identity is the *reduced* key (country, state, city, year, month, day):
region and temperature are not part of equality or hashing. Two readings
for the same place and date compare equal even if their temperatures differ.
"""

from __future__ import annotations
from dataclasses import dataclass
from functools import total_ordering
from typing import Optional, Tuple

# Literal used by the source format for "no measurement"
MISSING_TEMPERATURE = -99.0

@total_ordering
@dataclass(frozen=True, eq=False)
class Reading:
    """One weather observation: locality + calendar date + average temperature.

    `avg_temperature` is None when the measurement is missing. The loader maps
    the -99.0 sentinel to None; readings built by hand may still carry -99.0,
    which `has_temperature` also treats as missing.
    """
    region: str
    country: str
    state: str
    city: str
    month: int
    day: int
    year: int
    avg_temperature: Optional[float]

    def identity_key(self) -> Tuple[str, str, str, int, int, int]:
        """Key used for equality and hashing."""
        return (self.country, self.state, self.city, self.year, self.month, self.day)

    def sort_key(self) -> Tuple[str, str, str, int, int, int]:
        """Lexicographic ordering key: locality first, then date (year, month, day).

        Same fields as `identity_key`, so ordering agrees with equality.
        """
        return self.identity_key()

    @property
    def has_temperature(self) -> bool:
        return self.avg_temperature is not None and self.avg_temperature != MISSING_TEMPERATURE

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Reading):
            return NotImplemented
        return self.identity_key() == other.identity_key()

    def __hash__(self) -> int:
        return hash(self.identity_key())

    def __lt__(self, other: "Reading") -> bool:
        if not isinstance(other, Reading):
            return NotImplemented
        return self.sort_key() < other.sort_key()


@dataclass(frozen=True)
class CityListStats:
    """Where a city's rows live in the dataset and which years they cover.

    `count` is the window length from the first to the last matching row,
    and `years` holds the distinct years seen in that window (any order).
    """
    starting_index: int
    count: int
    years: Tuple[int, ...]
