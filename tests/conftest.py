"""Shared fixtures: small city temperature CSV files written to tmp_path."""

from __future__ import annotations

import pytest

from gwm.engine import GlobalWeatherManager

HEADER = "Region,Country,State,City,Month,Day,Year,AvgTemperature\n"

SAMPLE = (
    HEADER
    + "Region1,Country1,State1,City1,1,15,2020,15.0\n"
    + "Region2,Country2,,City2,2,16,2021,-99.0\n"
)


@pytest.fixture
def write_csv(tmp_path):
    """Return a helper that writes text to a fresh CSV file and returns its path."""
    counter = {"n": 0}

    def _write(text: str) -> str:
        counter["n"] += 1
        path = tmp_path / f"readings_{counter['n']}.csv"
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def errors():
    """Collects diagnostic lines instead of printing them."""
    return []


@pytest.fixture
def manager(write_csv, errors):
    return GlobalWeatherManager.from_file(write_csv(SAMPLE), on_error=errors.append)
