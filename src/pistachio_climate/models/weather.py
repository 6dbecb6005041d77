"""
Weather data models.

Contains DTOs for daily and hourly weather observations.
"""

from dataclasses import dataclass, asdict, field
from datetime import date as date_type
from typing import Any, Dict, Optional


@dataclass
class DailyWeatherRecord:
    """
    One day of weather for a point, in the strict shape the core consumes.

    Thermal indices and ET may arrive pre-populated; ``eto``/``etc`` equal to 0
    mean "not provided". ``precomputed`` marks GDD/chill/frost values already
    derived upstream from sub-daily data.
    """

    date: str  # ISO date (YYYY-MM-DD)
    temperature_max: float = 0.0  # °C
    temperature_min: float = 0.0  # °C
    temperature_avg: float = 0.0  # °C
    humidity: float = 0.0  # %
    precipitation: float = 0.0  # mm/day
    wind_speed: float = 0.0  # m/s
    solar_radiation: float = 0.0  # MJ m⁻² day⁻¹
    eto: float = 0.0  # mm/day
    etc: float = 0.0  # mm/day
    frost_hours: float = 0.0  # h
    chill_hours: float = 0.0  # h
    gdd: float = 0.0  # °C·day
    precomputed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class EnrichedDailyRecord(DailyWeatherRecord):
    """Daily record with guaranteed non-negative derived metrics."""

    kc: float = 0.0
    day: Optional[date_type] = field(default=None, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data.pop("day", None)
        return data


@dataclass
class HourlyObservation:
    """Single hourly observation."""

    datetime: str  # ISO timestamp (YYYY-MM-DDTHH:MM[:SS][offset])
    temperature: float  # °C
    humidity: float = 0.0  # %
    wind_speed: float = 0.0  # m/s
    precipitation: float = 0.0  # mm
    solar_radiation: float = 0.0  # W/m²
