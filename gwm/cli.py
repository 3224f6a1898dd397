"""
GWM Command Line Interface (CLI)
================================

This file provides the interactive terminal program you run like:

    python -m gwm.cli --csv "path/to/city_temperature.csv"

It demonstrates:
- Argument parsing (argparse)
- A REPL loop (Read-Eval-Print Loop) for commands
- Mapping user commands to engine methods (slices, date filter, city stats, slope)

The CLI DOES NOT modify the dataset file. It loads it once and keeps the
result of the last query as the "current" selection for export/report.
"""

from __future__ import annotations
import argparse, shlex
from dataclasses import dataclass, field
from typing import List, Optional
from .errors import SourceUnavailableError
from .engine import GlobalWeatherManager
from .models import Reading

HELP = """
Commands:
  help
  stats
  count

  show [n]                           first n readings (default 10)
  at <i>                             reading at index i
  slice <i> <n>                      n readings starting at i
  on <month> <day> [i n]             one reading per year on month/day
  city "<country>" "<state>" "<city>"
                                     state may be "" to match any state
  slope [i n]                        temperature trend of current/all/window
  regress <x1,x2,...> <y1,y2,...>    OLS slope of given numbers

  export csv|json "<path>" [current|full]
  report "<path.docx>" [current|full]
  quit

slice, on and city set the current selection used by export/report/slope.
"""

@dataclass
class Session:
    """REPL state: the loaded manager plus the last query result."""
    manager: GlobalWeatherManager
    current: Optional[List[Reading]] = None
    command_log: List[str] = field(default_factory=list)

    def scope(self, name: str) -> List[Reading]:
        if name not in ("current", "full"):
            raise ValueError("scope must be: current | full")
        if name == "full" or self.current is None:
            return list(self.manager)
        return self.current


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the GWM CLI.

    1) Load dataset
    2) Start an interactive REPL
    """
    ap = argparse.ArgumentParser(prog="gwm", description="Global Weather Manager")
    ap.add_argument("--csv", required=True, help="Path to the city temperature CSV")
    args = ap.parse_args(argv)

    print("Loading dataset...")
    try:
        manager = GlobalWeatherManager.from_file(args.csv)
    except SourceUnavailableError as e:
        print(f"{e}. Exiting...")
        return 1

    session = Session(manager=manager)
    print(f"Loaded {manager.reading_count()} readings. Type 'help' for commands.")
    while True:
        try:
            line = input("gwm> ")
        except EOFError:
            break
        stripped = line.strip()
        if not stripped:
            continue
        if stripped.lower() in ("quit", "exit"):
            break
        # Keep a lightweight log of commands for the report (reproducibility).
        if stripped.split()[0].lower() not in ("help", "show", "stats", "count"):
            session.command_log.append(stripped)
        try:
            handle(session, stripped)
        except Exception as e:
            print(f"Error: {e}")
    return 0

def handle(session: Session, line: str) -> None:
    """Handle one CLI command line.

    This parses the command and calls the appropriate engine method.
    """
    manager = session.manager
    parts = shlex.split(line)
    cmd = parts[0].lower()

    if cmd == "help":
        print(HELP)
        return

    if cmd == "count":
        print(f"Total reading count: {manager.reading_count()}")
        return

    if cmd == "stats":
        current = "none" if session.current is None else str(len(session.current))
        print(f"Readings: {manager.reading_count()} | Current selection: {current}")
        if manager.dataset_path:
            print(f"Dataset: {manager.dataset_path}")
        return

    if cmd == "show":
        n = int(parts[1]) if len(parts) >= 2 else 10
        n = min(n, manager.reading_count())
        if n < 1:
            print("No readings.")
            return
        _print_rows(manager.readings(0, n))
        return

    if cmd == "at":
        i = int(parts[1])
        print(f"Reading at index {i}: {_format(manager.reading(i))}")
        return

    if cmd == "slice":
        i, n = int(parts[1]), int(parts[2])
        session.current = manager.readings(i, n)
        print(f"{len(session.current)} readings from index {i}:")
        _print_rows(session.current)
        return

    if cmd == "on":
        month, day = int(parts[1]), int(parts[2])
        if len(parts) >= 5:
            i, n = int(parts[3]), int(parts[4])
        else:
            i, n = 0, manager.reading_count()
        session.current = manager.readings_on(i, n, month, day)
        print(f"Readings on {month}/{day} from different years: {len(session.current)}")
        _print_rows(session.current)
        return

    if cmd == "city":
        if len(parts) != 4:
            raise ValueError('usage: city "<country>" "<state>" "<city>"')
        country, state, city = parts[1], parts[2], parts[3]
        stats = manager.city_list_stats(country, state, city)
        print(f"Stats for {city}, {state}, {country}:")
        if stats is None:
            print("City data is not available.")
            return
        print(f"Starting Index: {stats.starting_index}")
        print(f"Count of Readings: {stats.count}")
        print("Years: " + ", ".join(str(y) for y in sorted(stats.years)))
        session.current = manager.readings(stats.starting_index, stats.count)
        return

    if cmd == "slope":
        if len(parts) >= 3:
            readings = manager.readings(int(parts[1]), int(parts[2]))
        else:
            readings = session.scope("current")
        print(f"Temperature Linear Regression Slope: {manager.temperature_slope(readings)}")
        return

    if cmd == "regress":
        if len(parts) != 3:
            raise ValueError("usage: regress <x1,x2,...> <y1,y2,...>")
        xs = [float(v) for v in parts[1].split(",")]
        ys = [float(v) for v in parts[2].split(",")]
        print(f"Linear Regression Slope for provided data: {manager.linear_regression_slope(xs, ys)}")
        return

    if cmd == "export":
        # export <csv|json> "<path>" [current|full]
        if len(parts) < 3:
            print('Usage: export csv "out.csv"  OR  export json "out.json"')
            return
        fmt = parts[1].lower()
        out_path = parts[2]
        readings = session.scope(parts[3].lower() if len(parts) >= 4 else "current")
        if not readings:
            print("Nothing to export: selection is empty.")
            return
        if fmt == "csv":
            manager.export_csv(out_path, readings)
            print(f"Exported CSV to {out_path}")
            return
        if fmt == "json":
            manager.export_json(out_path, readings)
            print(f"Exported JSON to {out_path}")
            return
        print("Unknown export format. Use: csv or json")
        return

    if cmd == "report":
        # report "<path.docx>" [current|full]
        from .report import generate_docx_report, ReportConfig
        path = parts[1]
        scope = parts[2].lower() if len(parts) >= 3 else "current"
        readings = session.scope(scope)
        label = "Full Dataset" if scope == "full" or session.current is None else "Current Selection"
        cfg = ReportConfig(
            dataset_file=manager.dataset_path,
            command_log=list(session.command_log),
        )
        generate_docx_report(readings, path, config=cfg, scope_label=label)
        print(f"Report written to {path}")
        return

    print("Unknown command. Type 'help'.")

def _format(r: Reading) -> str:
    temp = f"{r.avg_temperature:.1f}" if r.has_temperature else "missing"
    state = r.state or "-"
    return f"{r.region} | {r.country} | {state} | {r.city} | {r.year}-{r.month:02d}-{r.day:02d} | avg={temp}"

def _print_rows(rows: List[Reading]) -> None:
    for r in rows:
        print(_format(r))

if __name__ == "__main__":
    raise SystemExit(main())
