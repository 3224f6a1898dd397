"""
Regression primitive
====================

Ordinary least-squares slope over paired numeric vectors:

    slope = (n*Sxy - Sx*Sy) / (n*Sxx - Sx^2)

The sums are naive (no centering). When the denominator is zero (fewer than
two points, or all x identical) the result is non-finite instead of an
exception: nan for 0/0, +/-inf otherwise.
"""

from __future__ import annotations
import math
from typing import Iterable, List, Sequence, Tuple
from .models import Reading

def _divide(numerator: float, denominator: float) -> float:
    """IEEE-style division: never raises ZeroDivisionError."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator

def _sums(xs: Sequence[float], ys: Sequence[float]) -> Tuple[int, float, float, float, float]:
    if len(xs) != len(ys):
        raise ValueError("xs and ys must have the same length")
    n = len(xs)
    sum_x = sum_y = sum_xy = sum_x2 = 0.0
    for x, y in zip(xs, ys):
        fx, fy = float(x), float(y)
        sum_x += fx
        sum_y += fy
        sum_xy += fx * fy
        sum_x2 += fx * fx
    return n, sum_x, sum_y, sum_xy, sum_x2

def linear_regression_slope(xs: Sequence[float], ys: Sequence[float]) -> float:
    """OLS slope of ys against xs. Non-finite when undefined."""
    n, sum_x, sum_y, sum_xy, sum_x2 = _sums(xs, ys)
    return _divide(n * sum_xy - sum_x * sum_y, n * sum_x2 - sum_x * sum_x)

def fit_line(xs: Sequence[float], ys: Sequence[float]) -> Tuple[float, float]:
    """Return (slope, intercept) of the OLS line. Both may be non-finite."""
    n, sum_x, sum_y, sum_xy, sum_x2 = _sums(xs, ys)
    slope = _divide(n * sum_xy - sum_x * sum_y, n * sum_x2 - sum_x * sum_x)
    intercept = _divide(sum_y - slope * sum_x, float(n))
    return slope, intercept

def temperature_series(readings: Iterable[Reading]) -> Tuple[List[int], List[float]]:
    """Parallel (years, temperatures) vectors, skipping missing temperatures."""
    years: List[int] = []
    temps: List[float] = []
    for r in readings:
        if r.has_temperature:
            years.append(r.year)
            temps.append(r.avg_temperature)
    return years, temps

def temperature_slope(readings: Iterable[Reading]) -> float:
    """Trend of average temperature per year across `readings`."""
    years, temps = temperature_series(readings)
    return linear_regression_slope(years, temps)
