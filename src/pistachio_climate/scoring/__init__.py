"""
Scoring and recommendation for pistachio climate analysis.

Site suitability, conservative climate profiles, cultivar ranking, detailed
reports and historical trends.
"""

from .suitability import SuitabilityScorer
from .profile import ClimateProfileBuilder
from .ranking import VarietyRankingEngine
from .report import generate_detailed_report
from .trends import HistoricalTrendAnalyzer

__all__ = [
    "SuitabilityScorer",
    "ClimateProfileBuilder",
    "VarietyRankingEngine",
    "generate_detailed_report",
    "HistoricalTrendAnalyzer",
]
