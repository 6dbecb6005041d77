"""
Seasonal summary and site suitability models.
"""

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List


@dataclass
class SeasonalSummary:
    """
    Aggregate of enriched daily records.

    When ``years_count > 1`` (``is_annualized``), every accumulated value is a
    mean of per-year sums (per winter campaign for chill hours).
    """

    total_days: int
    avg_temperature: float  # °C
    total_gdd: float  # Apr–Oct
    total_chill_hours: float  # Nov–Feb
    total_frost_hours: float
    frost_days: float
    total_eto: float  # mm
    total_etc: float  # mm
    total_precipitation: float  # mm
    water_deficit: float  # mm, max(0, ETc - precipitation)
    years_count: int = 1
    is_annualized: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SuitabilityResult:
    """Site-level verdict: score plus advisory text."""

    score: int
    recommendations: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ClimateStability:
    """Inter-annual variability of temperature and precipitation."""

    temperature_variability: float = 0.0  # coefficient of variation, %
    precipitation_variability: float = 0.0  # coefficient of variation, %
    stability_score: float = 50.0


@dataclass
class HistoricalTrends:
    """
    Per-year trends across a multi-year series (slopes per year).

    The chill trend is fitted on winter campaigns, the rest on calendar years.
    """

    temperature_trend: float = 0.0  # °C/year
    precipitation_trend: float = 0.0  # mm/year
    chill_hours_trend: float = 0.0  # h/year
    frost_days_trend: float = 0.0  # days/year
    total_years: int = 0
    yearly_summaries: Dict[int, SeasonalSummary] = field(default_factory=dict)
    chill_by_campaign: Dict[int, float] = field(default_factory=dict)  # complete winters only
    climate_stability: ClimateStability = field(default_factory=ClimateStability)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class IrrigationPeriod:
    period: str
    frequency: str
    amount: str
    notes: str


@dataclass
class IrrigationPlan:
    """Irrigation advice derived from trends and the seasonal summary."""

    recommendations: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    schedule: List[IrrigationPeriod] = field(default_factory=list)
    annual_need: float = 0.0  # mm, ETc
    natural_supply: float = 0.0  # mm, precipitation
    irrigation_need: float = 0.0  # mm, deficit

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
