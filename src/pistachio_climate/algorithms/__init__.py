"""
Calculation algorithms for pistachio climate analysis.

Provides evapotranspiration, thermal indices, per-year statistics and the
daily metric deriver that combines them.
"""

from .evapotranspiration import EvapotranspirationCalculator, EvapotranspirationComponents
from .calculator import DailyMetricDeriver
from . import stats, thermal

__all__ = [
    "EvapotranspirationCalculator",
    "EvapotranspirationComponents",
    "DailyMetricDeriver",
    "stats",
    "thermal",
]
