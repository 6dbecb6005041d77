"""
Detailed cultivar report.

Summarizes a ranked recommendation list: suitability counts, overall climate
risk, a planting strategy for the best cultivar and general site advice.
"""

import logging
from typing import List, Sequence

from ..models.profile import ClimateProfile
from ..models.variety import (
    DetailedReport,
    Location,
    PlantingStrategy,
    ReportSummary,
    RiskAssessment,
    VarietyRecommendation,
)

SUITABLE_SCORE = 70
MARGINAL_SCORE = 50
TOP_COUNT = 3
UNDETERMINED_RISK = "Indeterminado"

logger = logging.getLogger(__name__)


def generate_detailed_report(
    recommendations: Sequence[VarietyRecommendation],
    profile: ClimateProfile,
    location: Location
) -> DetailedReport:
    """
    Build the detailed report for a ranked recommendation list.

    Args:
        recommendations: Recommendations sorted by descending score
        profile: Climate profile the ranking was computed from
        location: Site coordinates

    Returns:
        DetailedReport
    """
    if not profile.is_sufficient:
        return insufficient_data_report(recommendations, profile)

    top = list(recommendations[:TOP_COUNT])
    suitable = [r for r in recommendations if r.score >= SUITABLE_SCORE]
    marginal = [r for r in recommendations if MARGINAL_SCORE <= r.score < SUITABLE_SCORE]
    unsuitable = [r for r in recommendations if r.score < MARGINAL_SCORE]

    summary = ReportSummary(
        total_varieties_evaluated=len(recommendations),
        suitable_count=len(suitable),
        marginal_count=len(marginal),
        unsuitable_count=len(unsuitable),
        best_variety=top[0].variety.name if top else "Ninguna",
        best_score=top[0].score if top else 0,
    )

    risk = assess_overall_risk(profile)
    logger.info(
        f"Report: {summary.suitable_count} suitable, {summary.marginal_count} marginal, "
        f"risk {risk.level} ({risk.score})"
    )

    return DetailedReport(
        summary=summary,
        top_recommendations=top,
        suitable_varieties=suitable,
        marginal_varieties=marginal,
        general_recommendations=general_recommendations(profile, location),
        risk_assessment=risk,
        planting_strategy=planting_strategy(top),
    )


def insufficient_data_report(
    recommendations: Sequence[VarietyRecommendation],
    profile: ClimateProfile
) -> DetailedReport:
    """
    Report for a profile built from too little data.

    No cultivar is put forward, the risk level is "Indeterminado" and the
    only advice is to extend the series.
    """
    logger.warning(f"Report without recommendation: only {profile.total_days} days of data")
    message = profile.data_warning or "Datos insuficientes para recomendar variedades."

    return DetailedReport(
        summary=ReportSummary(
            total_varieties_evaluated=len(recommendations),
            suitable_count=0,
            marginal_count=0,
            unsuitable_count=len(recommendations),
            best_variety="Ninguna",
            best_score=0,
        ),
        top_recommendations=[],
        suitable_varieties=[],
        marginal_varieties=[],
        general_recommendations=[
            "Ampliar la serie climática a al menos una campaña completa antes de elegir variedad"
        ],
        risk_assessment=RiskAssessment(level=UNDETERMINED_RISK, score=0, factors=[message]),
        planting_strategy=PlantingStrategy(
            primary_variety="No recomendada",
            timeline=[message],
        ),
    )


def general_recommendations(profile: ClimateProfile, location: Location) -> List[str]:
    recommendations = []

    if profile.water_deficit > 400:
        recommendations.append(
            "Priorizar eficiencia hídrica: riego por goteo, mulching, variedades resistentes a sequía"
        )
    if profile.frost_days > 10:
        recommendations.append("Seleccionar sitios con buen drenaje de aire frío y considerar protección activa")
    if profile.heat_stress_days > 20:
        recommendations.append("Implementar estrategias de mitigación del calor: sombreado, riego de enfriamiento")
    if profile.total_chill_hours < 800:
        recommendations.append("Priorizar variedades de bajo requerimiento de frío como Sirora o Larnaka")

    latitude = abs(location.latitude)
    if latitude > 40:
        recommendations.append("Zona de latitud alta: priorizar variedades resistentes al frío")
    elif latitude < 30:
        recommendations.append("Zona tropical/subtropical: seleccionar variedades de bajo requerimiento de frío")

    return recommendations


def assess_overall_risk(profile: ClimateProfile) -> RiskAssessment:
    """
    Additive risk score mapped to a level.

    Bajo up to 20, Moderado up to 40, Alto up to 60, Muy Alto above.
    """
    score = 0
    factors = []
    mitigation = []

    if profile.frost_days > 15:
        score += 25
        factors.append("Alto riesgo de heladas en floración (Mar–Abr)")
        mitigation.append("Sistema de protección contra heladas")

    if profile.heat_stress_days > 25:
        score += 20
        factors.append("Estrés térmico frecuente (verano)")
        mitigation.append("Sombreado y riego de enfriamiento")

    if profile.water_deficit > 500:
        score += 20
        factors.append("Alto déficit hídrico en temporada (Abr–Oct)")
        mitigation.append("Sistema de riego eficiente")

    if profile.extreme_cold_days > 5:
        score += 15
        factors.append("Riesgo de frío extremo en invierno (Nov–Feb)")
        mitigation.append("Selección de portainjertos resistentes")

    if score <= 20:
        level = "Bajo"
    elif score <= 40:
        level = "Moderado"
    elif score <= 60:
        level = "Alto"
    else:
        level = "Muy Alto"

    return RiskAssessment(level=level, score=score, factors=factors, mitigation=mitigation)


def planting_strategy(top: Sequence[VarietyRecommendation]) -> PlantingStrategy:
    if not top:
        return PlantingStrategy(
            primary_variety="No recomendada",
            timeline=["Condiciones climáticas no adecuadas para pistacho"],
        )

    variety = top[0].variety
    return PlantingStrategy(
        primary_variety=variety.name,
        pollinizers=[p.name for p in top[0].pollinizers],
        planting_ratio="8-10 hembras : 1-2 machos",
        planting_density="200-250 árboles/hectárea (6x8m o 7x7m)",
        expected_production=(
            f"Primera cosecha: año {variety.production_start}, "
            f"Producción plena: año {variety.peak_production}"
        ),
        timeline=[
            f"Año 1-{variety.production_start - 1}: Establecimiento y crecimiento vegetativo",
            f"Año {variety.production_start}-{variety.peak_production - 1}: "
            f"Inicio de producción (0.5-2 kg/árbol)",
            f"Año {variety.peak_production}+: Producción plena (3-8 kg/árbol)",
            f"Vida productiva: {variety.lifespan} años",
        ],
    )
