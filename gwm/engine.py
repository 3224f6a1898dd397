"""
Core engine (GWM)
=================

This is the heart of the project. GWM works like a tiny offline query engine:

1) Load dataset -> tuple of Reading records (immutable, in file order)
2) Answer positional queries (reading / readings) and iterate in order
3) Filter a slice by calendar day, keeping one reading per year
4) Locate a city's run of rows (CityListStats)
5) Estimate temperature trends with an OLS slope

Thread-safety: the manager never changes after construction. It can be
shared between threads for reading without any locking.

Locality contiguity: rows for one (country, state, city) are expected to sit
in one contiguous run. `city_list_stats` reports the window between the first
and the last match; if the input is not grouped by city that window also
covers unrelated rows, and both `count` and `years` include them.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Set, Tuple
import pandas as pd
from .loader import ErrorSink, load_readings
from .models import CityListStats, MISSING_TEMPERATURE, Reading
from .regression import linear_regression_slope, temperature_slope

FIELDS = ["region", "country", "state", "city", "month", "day", "year", "avg_temperature"]

@dataclass(frozen=True)
class GlobalWeatherManager:
    """Global Weather Manager (GWM).

    The manager stores:
    - rows: every Reading that parsed, in source order
    - dataset_path: where they came from (None for in-memory data)
    """
    rows: Tuple[Reading, ...]
    dataset_path: Optional[str] = None

    @classmethod
    def from_file(cls, path: str, on_error: Optional[ErrorSink] = None) -> "GlobalWeatherManager":
        """Load a manager from a CSV file.

        Raises SourceUnavailableError if the file cannot be opened. Malformed
        lines go to `on_error` (default: standard error) and are skipped.
        """
        return cls(rows=tuple(load_readings(path, on_error=on_error)), dataset_path=str(path))

    @classmethod
    def from_readings(cls, readings: Sequence[Reading]) -> "GlobalWeatherManager":
        return cls(rows=tuple(readings))

    # ---------------- Positional access ----------------
    def reading_count(self) -> int:
        return len(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Reading]:
        return iter(self.rows)

    def reading(self, index: int) -> Reading:
        """Return the reading at `index` (0-based). Negative indices are out of range."""
        if index < 0 or index >= len(self.rows):
            raise IndexError(f"Reading index {index} out of range (count={len(self.rows)}).")
        return self.rows[index]

    def readings(self, index: int, count: int) -> List[Reading]:
        """Return `count` readings starting at `index`."""
        self._check_window(index, count)
        return list(self.rows[index:index + count])

    def _check_window(self, index: int, count: int) -> None:
        if index < 0 or count < 1 or index + count > len(self.rows):
            raise ValueError("Invalid index and/or count.")

    # ---------------- Date filter ----------------
    def readings_on(self, index: int, count: int, month: int, day: int) -> List[Reading]:
        """Readings in [index, index+count) that fall on month/day, one per year.

        For each year only the first (lowest-index) match is kept. Years are
        de-duplicated regardless of locality.
        """
        self._check_window(index, count)
        if month < 1 or month > 12:
            raise ValueError("Invalid month value. Month must be between 1 and 12.")
        if day < 1 or day > 31:
            raise ValueError("Invalid day value. Day must be between 1 and 31.")

        out: List[Reading] = []
        seen_years: Set[int] = set()
        for r in self.rows[index:index + count]:
            if r.month == month and r.day == day and r.year not in seen_years:
                seen_years.add(r.year)
                out.append(r)
        return out

    # ---------------- City stats ----------------
    def city_list_stats(self, country: Optional[str], state: Optional[str], city: Optional[str]) -> Optional[CityListStats]:
        """Locate the rows of one city.

        - country is compared exactly (None means "")
        - state and city are stripped first (None means "")
        - an empty state matches any state
        Returns None when no row matches.
        """
        search_country = country if country is not None else ""
        search_state = state.strip() if state is not None else ""
        search_city = city.strip() if city is not None else ""

        first = -1
        last = -1
        for i, r in enumerate(self.rows):
            if (r.country == search_country
                    and (not search_state or r.state == search_state)
                    and r.city == search_city):
                if first == -1:
                    first = i
                last = i

        if first == -1:
            return None

        # years come from the whole window, not only from matching rows
        years = {r.year for r in self.rows[first:last + 1]}
        return CityListStats(starting_index=first, count=last - first + 1, years=tuple(years))

    # ---------------- Regression ----------------
    def temperature_slope(self, readings: Sequence[Reading]) -> float:
        """Slope of avg temperature vs year; missing temperatures are ignored."""
        return temperature_slope(readings)

    def linear_regression_slope(self, xs: Sequence[float], ys: Sequence[float]) -> float:
        return linear_regression_slope(xs, ys)

    # ---------------- Output operations ----------------
    def _scope(self, readings: Optional[Sequence[Reading]]) -> Sequence[Reading]:
        return self.rows if readings is None else readings

    def to_frame(self, readings: Optional[Sequence[Reading]] = None):
        """Return the readings as a pandas DataFrame (missing temperature -> NaN)."""
        records = [
            (r.region, r.country, r.state, r.city, r.month, r.day, r.year,
             r.avg_temperature if r.has_temperature else None)
            for r in self._scope(readings)
        ]
        df = pd.DataFrame.from_records(records, columns=FIELDS)
        df["avg_temperature"] = df["avg_temperature"].astype("float64")
        return df

    def yearly_mean_temperatures(self, readings: Optional[Sequence[Reading]] = None):
        """pandas Series: year -> mean of the temperatures present that year."""
        df = self.to_frame(readings).dropna(subset=["avg_temperature"])
        return df.groupby("year")["avg_temperature"].mean().sort_index()

    def export_csv(self, path: str, readings: Optional[Sequence[Reading]] = None) -> None:
        """Write readings in the source format (header + eight columns).

        Missing temperatures are written back as -99.0 so the file reloads.
        """
        import csv
        with open(path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f, lineterminator="\n")
            w.writerow(["Region", "Country", "State", "City", "Month", "Day", "Year", "AvgTemperature"])
            for r in self._scope(readings):
                temp = r.avg_temperature if r.has_temperature else MISSING_TEMPERATURE
                w.writerow([r.region, r.country, r.state, r.city, r.month, r.day, r.year, temp])

    def export_json(self, path: str, readings: Optional[Sequence[Reading]] = None) -> None:
        """Export readings to a JSON list of objects (missing temperature -> null)."""
        import json
        payload = [
            {
                "region": r.region,
                "country": r.country,
                "state": r.state,
                "city": r.city,
                "month": r.month,
                "day": r.day,
                "year": r.year,
                "avg_temperature": r.avg_temperature if r.has_temperature else None,
            }
            for r in self._scope(readings)
        ]
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
