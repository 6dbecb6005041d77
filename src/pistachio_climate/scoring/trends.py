"""
Historical trend analysis and irrigation planning.

Fits least-squares slopes to per-year summaries, rates inter-annual climate
stability and turns both, together with the seasonal water balance, into
irrigation advice.
"""

import logging
import math
from typing import List, Optional, Sequence

from ..algorithms import stats
from ..models.summary import (
    ClimateStability,
    HistoricalTrends,
    IrrigationPeriod,
    IrrigationPlan,
    SeasonalSummary,
)
from ..models.weather import EnrichedDailyRecord
from ..processing.aggregator import SeasonalAggregator
from .suitability import format_number

MIN_STABILITY_YEARS = 3
UNSTABLE_SCORE = 60

WARMING_TREND = 0.1  # °C/year
DRYING_TREND = -5  # mm/year
WETTING_TREND = 5  # mm/year
CHILL_LOSS_TREND = -10  # h/year

IRRIGATION_DEFICIT = 300  # mm
MM_PER_IRRIGATION = 25


class HistoricalTrendAnalyzer:
    """Analyze multi-year trends and derive an irrigation plan."""

    def __init__(
        self,
        aggregator: Optional[SeasonalAggregator] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize trend analyzer.

        Args:
            aggregator: Aggregator used for the per-year summaries
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.aggregator = aggregator or SeasonalAggregator(logger=self.logger)

    def analyze(self, records: Sequence[EnrichedDailyRecord]) -> HistoricalTrends:
        """
        Per-year summaries and their trends.

        Args:
            records: Enriched daily records

        Returns:
            HistoricalTrends; slopes are 0 with fewer than two years
        """
        yearly = self.aggregator.summarize_by_year(records)
        campaigns = self.aggregator.chill_by_campaign(records)

        if len(yearly) < 2:
            self.logger.info(f"Not enough years for trends ({len(yearly)})")
            return HistoricalTrends(total_years=len(yearly), yearly_summaries=yearly, chill_by_campaign=campaigns)

        summaries = list(yearly.values())
        temperatures = [s.avg_temperature for s in summaries]
        precipitation = [s.total_precipitation for s in summaries]

        trends = HistoricalTrends(
            temperature_trend=round(stats.linear_trend(temperatures), 3),
            precipitation_trend=round(stats.linear_trend(precipitation), 3),
            chill_hours_trend=round(stats.linear_trend(list(campaigns.values())), 3),
            frost_days_trend=round(stats.linear_trend([float(s.frost_days) for s in summaries]), 3),
            total_years=len(yearly),
            yearly_summaries=yearly,
            chill_by_campaign=campaigns,
            climate_stability=self.assess_stability(temperatures, precipitation),
        )

        self.logger.info(
            f"Trends over {trends.total_years} years: "
            f"{trends.temperature_trend:+.3f} °C/year, {trends.precipitation_trend:+.3f} mm/year, "
            f"stability {trends.climate_stability.stability_score}"
        )
        return trends

    @staticmethod
    def assess_stability(
        temperatures: Sequence[float],
        precipitation: Sequence[float]
    ) -> ClimateStability:
        """
        Stability score from the coefficients of variation.

        ``max(0, 100 - 10 * (cv_temperature + cv_precipitation))``; needs at
        least three years, otherwise neutral (50).
        """
        if len(temperatures) < MIN_STABILITY_YEARS:
            return ClimateStability()

        temp_cv = stats.coefficient_of_variation(temperatures)
        precip_cv = stats.coefficient_of_variation(precipitation)

        return ClimateStability(
            temperature_variability=round(temp_cv, 2),
            precipitation_variability=round(precip_cv, 2),
            stability_score=round(max(0.0, 100 - (temp_cv + precip_cv) * 10), 1),
        )

    def irrigation_plan(self, trends: HistoricalTrends, summary: SeasonalSummary) -> IrrigationPlan:
        """
        Irrigation recommendations, warnings and seasonal schedule.

        Args:
            trends: Historical trends for the site
            summary: Current (possibly annualized) seasonal summary

        Returns:
            IrrigationPlan
        """
        recommendations = []
        warnings = []

        temp_trend = trends.temperature_trend
        if temp_trend > WARMING_TREND:
            recommendations.append(
                f"Tendencia al calentamiento (+{format_number(temp_trend)}°C/año): "
                f"Considerar variedades más resistentes al calor"
            )
            recommendations.append("Aumentar frecuencia de riego en verano debido al incremento de temperaturas")
        elif temp_trend < -WARMING_TREND:
            recommendations.append(
                f"Tendencia al enfriamiento ({format_number(temp_trend)}°C/año): Protección contra heladas tardías"
            )

        precip_trend = trends.precipitation_trend
        if precip_trend < DRYING_TREND:
            warnings.append(
                f"Tendencia a menor precipitación ({format_number(precip_trend)}mm/año): "
                f"Planificar sistemas de riego más eficientes"
            )
            recommendations.append("Implementar riego por goteo y mulching para conservar humedad")
        elif precip_trend > WETTING_TREND:
            recommendations.append(
                f"Tendencia a mayor precipitación (+{format_number(precip_trend)}mm/año): Mejorar drenaje del suelo"
            )

        if trends.chill_hours_trend < CHILL_LOSS_TREND:
            warnings.append(
                f"Reducción de horas frío ({format_number(trends.chill_hours_trend)} horas/año): "
                f"Puede afectar la floración"
            )
            recommendations.append("Considerar variedades de pistacho con menores requerimientos de frío")

        if trends.climate_stability.stability_score < UNSTABLE_SCORE:
            warnings.append("Alta variabilidad climática detectada: Implementar estrategias de manejo adaptativo")
            recommendations.append("Diversificar variedades y fechas de plantación para reducir riesgos")

        if summary.water_deficit > IRRIGATION_DEFICIT:
            irrigations = math.ceil(summary.water_deficit / MM_PER_IRRIGATION)
            recommendations.append(
                f"Déficit hídrico de {format_number(summary.water_deficit)}mm requiere aproximadamente "
                f"{irrigations} riegos suplementarios"
            )
            recommendations.append(
                "Programar riegos durante floración (abril-mayo) y desarrollo del fruto (junio-agosto)"
            )

        return IrrigationPlan(
            recommendations=recommendations,
            warnings=warnings,
            schedule=self.irrigation_schedule(trends),
            annual_need=summary.total_etc,
            natural_supply=summary.total_precipitation,
            irrigation_need=max(0.0, summary.water_deficit),
        )

    @staticmethod
    def irrigation_schedule(trends: HistoricalTrends) -> List[IrrigationPeriod]:
        summer_amount = "35-40mm" if trends.temperature_trend > WARMING_TREND else "30-35mm"
        return [
            IrrigationPeriod(
                period="Primavera (Marzo-Mayo)",
                frequency="Cada 10-15 días",
                amount="25-30mm por riego",
                notes="Crítico durante floración y cuajado del fruto",
            ),
            IrrigationPeriod(
                period="Verano (Junio-Agosto)",
                frequency="Cada 7-10 días",
                amount=f"{summer_amount} por riego",
                notes="Período de máxima demanda hídrica",
            ),
            IrrigationPeriod(
                period="Otoño (Septiembre-Octubre)",
                frequency="Cada 15-20 días",
                amount="20-25mm por riego",
                notes="Reducir gradualmente hasta la cosecha",
            ),
        ]
