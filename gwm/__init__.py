"""
GWM package
===========

This package contains the Global Weather Manager (GWM).

- The CLI entry point is in `gwm/cli.py`.
- The core engine (positional access, date filter, city stats) is in `gwm/engine.py`.
- Dataset loading is in `gwm/loader.py`.
- The regression primitive is in `gwm/regression.py`.
"""

from .errors import SourceUnavailableError
from .models import CityListStats, MISSING_TEMPERATURE, Reading
from .engine import GlobalWeatherManager
from .regression import linear_regression_slope, temperature_slope

__version__ = '0.1.0'

__all__ = [
    "CityListStats",
    "GlobalWeatherManager",
    "MISSING_TEMPERATURE",
    "Reading",
    "SourceUnavailableError",
    "linear_regression_slope",
    "temperature_slope",
]
