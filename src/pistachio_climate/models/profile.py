"""
Climate profile models for cultivar matching.
"""

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List, Optional


@dataclass
class CampaignBreakdown:
    """Per-year values behind each percentile of a ClimateProfile."""

    years: List[int] = field(default_factory=list)
    chill_by_campaign: Dict[int, float] = field(default_factory=dict)
    gdd_by_year: Dict[int, float] = field(default_factory=dict)
    spring_frost_days_by_year: Dict[int, int] = field(default_factory=dict)
    spring_frost_hours_by_year: Dict[int, float] = field(default_factory=dict)
    heat_stress_days_by_year: Dict[int, int] = field(default_factory=dict)
    extreme_cold_days_by_campaign: Dict[int, int] = field(default_factory=dict)
    water_deficit_by_year: Dict[int, float] = field(default_factory=dict)
    precipitation_by_year: Dict[int, float] = field(default_factory=dict)


@dataclass
class ClimateProfile:
    """
    Conservative ("unfavourable year") climate summary.

    Favourable quantities (chill, GDD) hold their P10 across years, adverse
    ones (frost, heat stress, extreme cold, water deficit) their P90.
    """

    avg_temperature: float = 0.0
    min_temperature: float = 0.0
    max_temperature: float = 0.0

    total_chill_hours: float = 0.0  # P10 per winter campaign (Nov–Feb)
    total_gdd: float = 0.0  # P10 per year (Apr–Oct)
    frost_days: float = 0.0  # P90 per year (Mar–Apr)
    total_frost_hours: float = 0.0  # P90 per year (Mar–Apr)
    total_precipitation: float = 0.0  # median annual
    water_deficit: float = 0.0  # P90 per year (Apr–Oct)
    heat_stress_days: float = 0.0  # P90 per year (Jun–Aug, Tmax > 40 °C)
    extreme_cold_days: float = 0.0  # P90 per campaign (Nov–Feb, Tmin < -5 °C)

    total_days: int = 0
    is_sufficient: bool = True
    data_warning: Optional[str] = None
    campaigns: CampaignBreakdown = field(default_factory=CampaignBreakdown)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
