"""
Cultivar and recommendation models.

PistachioVariety is static reference data; everything else is computed fresh
for each request.
"""

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List, Tuple


@dataclass(frozen=True)
class PistachioVariety:
    """Pistachio cultivar with its climatic requirements."""

    id: str
    name: str
    origin: str
    type: str  # "female" | "male"

    # Climatic requirements
    chill_hours_min: float
    chill_hours_max: float
    heat_tolerance: int  # 1-10
    drought_tolerance: int  # 1-10
    frost_tolerance: int  # 1-10

    # Critical temperatures (°C)
    min_winter_temp: float
    max_summer_temp: float
    optimal_temp_range: Tuple[float, float]

    # Water
    annual_water_need: float  # mm
    critical_water_periods: Tuple[str, ...] = ()

    # Agronomy (years)
    production_start: int = 5
    peak_production: int = 10
    lifespan: int = 80

    # Compatible pollinizer ids (references into the catalog)
    pollinizers: Tuple[str, ...] = ()

    description: str = ""

    @property
    def is_female(self) -> bool:
        return self.type == "female"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float


@dataclass
class VarietyRecommendation:
    """A cultivar scored against a climate profile."""

    variety: PistachioVariety
    score: float
    matching_factors: List[str] = field(default_factory=list)
    concerns: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    pollinizers: List[PistachioVariety] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class RiskAssessment:
    level: str  # "Bajo" | "Moderado" | "Alto" | "Muy Alto" | "Indeterminado"
    score: int = 0
    factors: List[str] = field(default_factory=list)
    mitigation: List[str] = field(default_factory=list)


@dataclass
class PlantingStrategy:
    primary_variety: str
    pollinizers: List[str] = field(default_factory=list)
    planting_ratio: str = "N/A"
    planting_density: str = "N/A"
    expected_production: str = "N/A"
    timeline: List[str] = field(default_factory=list)


@dataclass
class ReportSummary:
    total_varieties_evaluated: int
    suitable_count: int
    marginal_count: int
    unsuitable_count: int
    best_variety: str
    best_score: float


@dataclass
class DetailedReport:
    """Aggregate report for the cultivar UI."""

    summary: ReportSummary
    top_recommendations: List[VarietyRecommendation]
    suitable_varieties: List[VarietyRecommendation]
    marginal_varieties: List[VarietyRecommendation]
    general_recommendations: List[str]
    risk_assessment: RiskAssessment
    planting_strategy: PlantingStrategy

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
