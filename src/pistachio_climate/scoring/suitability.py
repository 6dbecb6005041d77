"""
Site-level pistachio suitability scoring.

Scores a SeasonalSummary from 0 to 100 and attaches Spanish advisory text.
Works the same for a single season and for an annualized multi-year summary.
"""

import logging
import math
from typing import Optional

from ..models.summary import SeasonalSummary, SuitabilityResult

# Chill requirement band (h, Nov–Feb)
CHILL_MIN = 600
CHILL_MAX = 1500

# Heat accumulation (°C·day, Apr–Oct)
GDD_MIN = 1500
GDD_HIGH_WARNING = 3200
GDD_EXCESS = 3400

FROST_DAYS_LIMIT = 10
DEFICIT_IRRIGATION_NOTE = 300  # mm
DEFICIT_PENALTY_START = 500  # mm

CHILL_PENALTY = 30
GDD_LOW_PENALTY = 25
GDD_EXCESS_PENALTY = 8
FROST_DAY_PENALTY = 2
MAX_DEFICIT_PENALTY = 25
DEFICIT_PENALTY_STEP = 40  # mm per point


def format_number(value: float) -> str:
    """Render 301.0 as '301' and 301.5 as '301.5'."""
    return str(int(value)) if float(value).is_integer() else str(value)


class SuitabilityScorer:
    """Score a seasonal summary for pistachio cultivation."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize suitability scorer.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def score(self, summary: SeasonalSummary) -> SuitabilityResult:
        """
        Score a seasonal summary.

        Args:
            summary: Single-season or annualized summary

        Returns:
            SuitabilityResult with an integer score in [0, 100]
        """
        recommendations = []
        warnings = []

        if summary.total_chill_hours < CHILL_MIN:
            warnings.append("Insuficientes horas frío para una buena producción de pistacho")
        elif summary.total_chill_hours > CHILL_MAX:
            warnings.append("Exceso de horas frío puede retrasar la brotación")
        else:
            recommendations.append("Horas frío adecuadas para el cultivo de pistacho")

        if summary.total_gdd < GDD_MIN:
            warnings.append("Insuficientes grados día (Abr–Oct) para completar el ciclo del pistacho")
        elif summary.total_gdd > GDD_HIGH_WARNING:
            warnings.append("Calor acumulado alto (Abr–Oct): vigilar estrés térmico y riego en verano")
        else:
            recommendations.append("Acumulación térmica adecuada (Abr–Oct)")

        if summary.frost_days > FROST_DAYS_LIMIT:
            warnings.append(f"{summary.frost_days:.0f} días de helada pueden dañar la floración")

        if summary.water_deficit > DEFICIT_IRRIGATION_NOTE:
            recommendations.append(
                f"Déficit hídrico de {format_number(summary.water_deficit)}mm: requiere riego suplementario"
            )

        if summary.is_annualized:
            recommendations.append(f"Índices anualizados sobre {summary.years_count} años/campañas")

        score = self.calculate_score(summary)
        self.logger.info(f"Suitability score: {score}/100 ({len(warnings)} warnings)")

        return SuitabilityResult(score=score, recommendations=recommendations, warnings=warnings)

    @staticmethod
    def calculate_score(summary: SeasonalSummary) -> int:
        """
        Penalty-based score.

        Starts at 100 and subtracts fixed penalties for chill outside the
        band and short heat accumulation, a mild one for excess heat, two
        points per frost day beyond the limit, and up to 25 points for a
        large water deficit.
        """
        score = 100.0

        if summary.total_chill_hours < CHILL_MIN or summary.total_chill_hours > CHILL_MAX:
            score -= CHILL_PENALTY
        if summary.total_gdd < GDD_MIN:
            score -= GDD_LOW_PENALTY
        if summary.total_gdd > GDD_EXCESS:
            score -= GDD_EXCESS_PENALTY
        if summary.frost_days > FROST_DAYS_LIMIT:
            score -= summary.frost_days * FROST_DAY_PENALTY
        if summary.water_deficit > DEFICIT_PENALTY_START:
            score -= min(
                MAX_DEFICIT_PENALTY,
                (summary.water_deficit - DEFICIT_PENALTY_START) / DEFICIT_PENALTY_STEP
            )

        # Half-up rounding
        return int(max(0, min(100, math.floor(score + 0.5))))
