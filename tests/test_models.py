"""Reading identity, hashing and ordering."""

from __future__ import annotations

import dataclasses

import pytest

from gwm.models import CityListStats, MISSING_TEMPERATURE, Reading


def make(country="US", state="Maine", city="Caribou", month=1, day=2, year=2000,
         temp=10.0, region="North America") -> Reading:
    return Reading(region, country, state, city, month, day, year, temp)


def test_equality_ignores_region_and_temperature() -> None:
    a = make(region="A", temp=1.0)
    b = make(region="B", temp=99.0)

    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1


def test_equality_uses_locality_and_date() -> None:
    base = make()
    assert base != make(state="")
    assert base != make(city="Portland")
    assert base != make(year=2001)
    assert base != make(month=2)
    assert base != make(day=3)


def test_ordering_is_locality_then_year_month_day() -> None:
    readings = [
        make(year=2001, month=1, day=1),
        make(year=2000, month=12, day=31),
        make(country="CA", year=2020),
        make(year=2000, month=1, day=5),
    ]

    ordered = sorted(readings)

    assert ordered[0].country == "CA"
    assert [(r.year, r.month, r.day) for r in ordered[1:]] == [
        (2000, 1, 5),
        (2000, 12, 31),
        (2001, 1, 1),
    ]
    assert make(year=2000) <= make(year=2000, temp=5.0)
    assert make(year=2001) > make(year=2000)


def test_compare_with_other_types() -> None:
    assert make() != ("US", "Maine", "Caribou", 2000, 1, 2)
    with pytest.raises(TypeError):
        make() < 3


def test_missing_temperature_flags() -> None:
    assert make(temp=10.0).has_temperature
    assert not make(temp=None).has_temperature
    assert not make(temp=MISSING_TEMPERATURE).has_temperature


def test_reading_is_immutable() -> None:
    r = make()
    with pytest.raises(dataclasses.FrozenInstanceError):
        r.year = 1999  # type: ignore[misc]


def test_city_list_stats_value() -> None:
    stats = CityListStats(starting_index=0, count=1, years=(2020,))
    assert stats == CityListStats(0, 1, (2020,))
