"""
Data models for the pistachio climate analysis system.

Contains DTOs for weather records, summaries, climate profiles and cultivars.
"""

from .crop import CropParameters
from .weather import DailyWeatherRecord, EnrichedDailyRecord, HourlyObservation
from .summary import (
    SeasonalSummary,
    SuitabilityResult,
    ClimateStability,
    HistoricalTrends,
    IrrigationPeriod,
    IrrigationPlan,
)
from .profile import ClimateProfile, CampaignBreakdown
from .variety import (
    PistachioVariety,
    Location,
    VarietyRecommendation,
    RiskAssessment,
    PlantingStrategy,
    ReportSummary,
    DetailedReport,
)

__all__ = [
    "CropParameters",
    "DailyWeatherRecord",
    "EnrichedDailyRecord",
    "HourlyObservation",
    "SeasonalSummary",
    "SuitabilityResult",
    "ClimateStability",
    "HistoricalTrends",
    "IrrigationPeriod",
    "IrrigationPlan",
    "ClimateProfile",
    "CampaignBreakdown",
    "PistachioVariety",
    "Location",
    "VarietyRecommendation",
    "RiskAssessment",
    "PlantingStrategy",
    "ReportSummary",
    "DetailedReport",
]
