"""REPL command handling."""

from __future__ import annotations

import json

import pytest

from gwm.cli import Session, handle, main
from gwm.engine import GlobalWeatherManager
from gwm.models import Reading


@pytest.fixture
def session() -> Session:
    rows = [
        Reading("NA", "US", "Maine", "Caribou", 1, 2, 2000, 10.0),
        Reading("NA", "US", "Maine", "Caribou", 1, 2, 2001, 12.0),
        Reading("NA", "US", "Maine", "Caribou", 1, 3, 2001, 11.0),
        Reading("NA", "US", "Ohio", "Akron", 1, 2, 2002, -99.0),
    ]
    return Session(manager=GlobalWeatherManager.from_readings(rows))


def test_count(session, capsys) -> None:
    handle(session, "count")
    assert "Total reading count: 4" in capsys.readouterr().out


def test_at(session, capsys) -> None:
    handle(session, "at 3")
    out = capsys.readouterr().out
    assert out.startswith("Reading at index 3:")
    assert "avg=missing" in out


def test_slice_sets_current_selection(session, capsys) -> None:
    handle(session, "slice 1 2")
    assert [r.day for r in session.current] == [2, 3]
    assert "2 readings from index 1" in capsys.readouterr().out


def test_on_defaults_to_whole_dataset(session, capsys) -> None:
    handle(session, "on 1 2")
    assert [r.year for r in session.current] == [2000, 2001, 2002]
    assert "Readings on 1/2 from different years: 3" in capsys.readouterr().out


def test_city_prints_stats(session, capsys) -> None:
    handle(session, 'city "US" "" "Caribou"')
    out = capsys.readouterr().out
    assert "Starting Index: 0" in out
    assert "Count of Readings: 3" in out
    assert "Years: 2000, 2001" in out
    assert len(session.current) == 3


def test_city_not_found(session, capsys) -> None:
    handle(session, 'city "US" "Maine" "Bangor"')
    assert "City data is not available." in capsys.readouterr().out


def test_slope_uses_current_selection(session, capsys) -> None:
    handle(session, "slice 0 2")
    capsys.readouterr()
    handle(session, "slope")
    assert capsys.readouterr().out.strip() == "Temperature Linear Regression Slope: 2.0"


def test_regress(session, capsys) -> None:
    handle(session, "regress 2000,2001,2002,2003 32.5,33.0,33.5,34.0")
    assert "Linear Regression Slope for provided data: 0.5" in capsys.readouterr().out


def test_export_json_full(session, tmp_path, capsys) -> None:
    out = tmp_path / "all.json"
    handle(session, f'export json "{out}" full')
    assert len(json.loads(out.read_text(encoding="utf-8"))) == 4
    assert "Exported JSON" in capsys.readouterr().out


def test_invalid_arguments_raise(session) -> None:
    with pytest.raises(ValueError):
        handle(session, "on 13 1")
    with pytest.raises(IndexError):
        handle(session, "at 4")


def test_unknown_command(session, capsys) -> None:
    handle(session, "frobnicate")
    assert "Unknown command" in capsys.readouterr().out


def test_main_reports_errors_and_exits(tmp_path, monkeypatch, capsys) -> None:
    path = tmp_path / "data.csv"
    path.write_text("Region,Country,State,City,Month,Day,Year,AvgTemperature\nR,US,,X,1,1,2000,1.0\n", encoding="utf-8")
    commands = iter(["count", "at 9", "quit"])
    monkeypatch.setattr("builtins.input", lambda _prompt: next(commands))

    assert main(["--csv", str(path)]) == 0

    out = capsys.readouterr().out
    assert "Loaded 1 readings." in out
    assert "Total reading count: 1" in out
    assert "Error: Reading index 9 out of range" in out


def test_main_missing_file(tmp_path, capsys) -> None:
    assert main(["--csv", str(tmp_path / "missing.csv")]) == 1
    assert "Exiting" in capsys.readouterr().out
