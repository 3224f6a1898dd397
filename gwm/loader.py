"""
Dataset loader (CSV text -> Reading list)
=========================================

This module reads the city temperature CSV and converts each data line into
a `Reading` object.

Key ideas:
- The format is plain comma-separated text: no quoting, no escapes.
- The first line is a header and is always discarded.
- Each record has exactly eight fields:
  region, country, state, city, month, day, year, avg_temperature
- A malformed line is reported to the `on_error` sink and skipped; only a
  source that cannot be opened is fatal.
- Source order is preserved exactly; the loader never sorts.
"""

from __future__ import annotations
import re
import sys
from typing import Callable, List, Optional
from .errors import SourceUnavailableError
from .models import MISSING_TEMPERATURE, Reading

FIELD_COUNT = 8

ErrorSink = Callable[[str], None]

# Plain decimal forms only: no surrounding whitespace, no digit separators
_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?|NaN|[+-]?Infinity")

def print_to_stderr(message: str) -> None:
    """Default diagnostic sink: one human-readable line on standard error."""
    print(message, file=sys.stderr)

def _to_int(x: str) -> int:
    if not _INT_RE.fullmatch(x):
        raise ValueError(f"not an integer: {x!r}")
    return int(x)

def _to_temperature(x: str) -> Optional[float]:
    """Parse the temperature field, mapping the -99.0 sentinel to None."""
    if not _FLOAT_RE.fullmatch(x):
        raise ValueError(f"not a number: {x!r}")
    value = float(x)
    if value == MISSING_TEMPERATURE:
        return None
    return value

def parse_line(line: str) -> Reading:
    """Convert one data line into a Reading.

    Raises ValueError on a wrong field count or a non-numeric date/temperature.
    Text fields are stored exactly as split (no trimming).
    """
    parts = line.split(",")
    if len(parts) != FIELD_COUNT:
        raise ValueError(f"expected {FIELD_COUNT} fields, got {len(parts)}")
    region, country, state, city = parts[0], parts[1], parts[2], parts[3]
    return Reading(
        region=region,
        country=country,
        state=state,
        city=city,
        month=_to_int(parts[4]),
        day=_to_int(parts[5]),
        year=_to_int(parts[6]),
        avg_temperature=_to_temperature(parts[7]),
    )

def parse_lines(lines, on_error: Optional[ErrorSink] = None) -> List[Reading]:
    """Parse an iterable of lines (header first) into readings.

    Lines may be str or UTF-8 bytes. A bytes line that does not decode is
    reported and skipped like any other malformed line.
    """
    report = on_error or print_to_stderr
    readings: List[Reading] = []
    it = iter(lines)
    # header is dropped unconditionally, even if it looks like data
    next(it, None)
    for raw in it:
        if isinstance(raw, bytes):
            raw_line = raw.rstrip(b"\r\n")
        else:
            raw_line = raw.rstrip("\r\n")
        try:
            # UnicodeDecodeError is a ValueError
            line = raw_line.decode("utf-8") if isinstance(raw_line, bytes) else raw_line
            readings.append(parse_line(line))
        except ValueError:
            shown = raw_line.decode("utf-8", errors="replace") if isinstance(raw_line, bytes) else raw_line
            report(f"Error parsing line: {shown}")
    return readings

def load_readings(path: str, on_error: Optional[ErrorSink] = None) -> List[Reading]:
    """
    Load every parseable reading from `path`, in file order.

    The file is read as bytes and decoded line by line, so one undecodable
    line does not abort the load. Raises SourceUnavailableError if the file
    cannot be opened.
    """
    try:
        f = open(path, "rb")
    except OSError as e:
        raise SourceUnavailableError(str(path), e.strerror or type(e).__name__) from e
    with f:
        return parse_lines(f, on_error=on_error)
