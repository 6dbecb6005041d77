"""
Cultivar ranking engine.

Scores every female cultivar against a ClimateProfile with six sub-scores
combined by sequential blending, checks that at least one pollinizer can
cope with the site's winters, and sorts the result best first.
"""

import logging
from typing import List, Optional, Sequence

from .. import catalog as catalog_module
from ..models.profile import ClimateProfile
from ..models.variety import Location, PistachioVariety, VarietyRecommendation
from .suitability import format_number

# Sub-score weights, applied in this order
CHILL_WEIGHT = 0.25
HEAT_WEIGHT = 0.20
COLD_WEIGHT = 0.15
WATER_WEIGHT = 0.20
THERMAL_WEIGHT = 0.10
RISK_WEIGHT = 0.10

POLLINIZER_PENALTY = 15

GDD_RANGE = (1500, 3000)

MORE_DATA_RECOMMENDATION = "Amplía el rango de fechas (ideal 5–10 campañas)."
POLLINATION_RISK = (
    "Polinización en riesgo: los polinizadores sugeridos no alcanzan el mínimo "
    "de horas frío en un año desfavorable."
)


class VarietyRankingEngine:
    """Rank pistachio cultivars for a climate profile."""

    def __init__(
        self,
        catalog: Optional[Sequence[PistachioVariety]] = None,
        validate_pollinizers: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize ranking engine.

        Args:
            catalog: Cultivars used to resolve pollinizer ids (built-in catalog when None)
            validate_pollinizers: Apply the pollination-risk penalty
            logger: Logger instance
        """
        self.catalog = tuple(catalog) if catalog is not None else catalog_module.VARIETIES
        self.validate_pollinizers = validate_pollinizers
        self.logger = logger or logging.getLogger(__name__)

    def rank(
        self,
        varieties: Sequence[PistachioVariety],
        profile: ClimateProfile,
        location: Location
    ) -> List[VarietyRecommendation]:
        """
        Score and sort the female cultivars among ``varieties``.

        Args:
            varieties: Candidate cultivars (males are ignored)
            profile: Conservative climate profile
            location: Site coordinates

        Returns:
            Recommendations sorted by descending score
        """
        females = [v for v in varieties if v.is_female]

        if not profile.is_sufficient:
            self.logger.warning("Climate profile is insufficient; every cultivar scores 0")
            return [
                VarietyRecommendation(
                    variety=v,
                    score=0.0,
                    concerns=[profile.data_warning or "Datos insuficientes"],
                    recommendations=[MORE_DATA_RECOMMENDATION],
                )
                for v in females
            ]

        self.logger.info(
            f"Ranking {len(females)} cultivars at ({location.latitude}, {location.longitude})"
        )
        ranked = sorted(
            (self.evaluate(v, profile) for v in females),
            key=lambda r: r.score,
            reverse=True,
        )
        for r in ranked:
            self.logger.debug(f"{r.variety.id}: {r.score}")
        return ranked

    def evaluate(self, variety: PistachioVariety, profile: ClimateProfile) -> VarietyRecommendation:
        """Score one cultivar against the profile."""
        matching: List[str] = []
        concerns: List[str] = []

        steps: List[tuple] = [
            (self.chill_score, CHILL_WEIGHT),
            (self.heat_score, HEAT_WEIGHT),
            (self.cold_score, COLD_WEIGHT),
            (self.water_score, WATER_WEIGHT),
            (self.thermal_score, THERMAL_WEIGHT),
            (self.risk_score, RISK_WEIGHT),
        ]

        score = 100.0
        for scorer, weight in steps:
            sub_score = scorer(variety, profile, matching, concerns)
            score = score * (1 - weight) + sub_score * weight

        recommendations = self.specific_recommendations(variety, profile)

        pollinizers = list(catalog_module.pollinizers_for(variety, self.catalog))
        if self.validate_pollinizers and pollinizers:
            viable = [p for p in pollinizers if profile.total_chill_hours >= p.chill_hours_min]
            if not viable:
                concerns.append(POLLINATION_RISK)
                score -= POLLINIZER_PENALTY

        return VarietyRecommendation(
            variety=variety,
            score=round(max(0.0, min(100.0, score)), 1),
            matching_factors=matching,
            concerns=concerns,
            recommendations=recommendations,
            pollinizers=pollinizers,
        )

    # =========================================================================
    # SECTION 1: Sub-scores
    # =========================================================================

    @staticmethod
    def chill_score(variety, profile, matching, concerns) -> float:
        chill = profile.total_chill_hours

        if variety.chill_hours_min <= chill <= variety.chill_hours_max:
            matching.append(f"Horas frío adecuadas (P10 invierno: {chill:.0f} h)")
            return 100.0
        if chill < variety.chill_hours_min:
            deficit = variety.chill_hours_min - chill
            concerns.append(
                f"Déficit de horas frío (año desfavorable): {deficit:.0f} h por debajo del mínimo"
            )
            return max(0.0, 100 - deficit / variety.chill_hours_min * 100)

        excess = chill - variety.chill_hours_max
        concerns.append(f"Exceso de horas frío: {excess:.0f} h por encima del máximo")
        return max(50.0, 100 - excess / variety.chill_hours_max * 50)

    @staticmethod
    def heat_score(variety, profile, matching, concerns) -> float:
        t_max = format_number(profile.max_temperature)

        if profile.max_temperature <= variety.max_summer_temp:
            matching.append(f"Buena tolerancia al calor (máx. registrada {t_max}°C)")
            return 100.0

        excess = profile.max_temperature - variety.max_summer_temp
        if excess <= 3:
            concerns.append(f"Temperaturas ocasionalmente altas ({t_max}°C)")
            return 80.0

        concerns.append(
            f"Temperaturas excesivas ({t_max}°C vs máx. {format_number(variety.max_summer_temp)}°C)"
        )
        return max(20.0, 100 - excess * 10)

    @staticmethod
    def cold_score(variety, profile, matching, concerns) -> float:
        t_min = format_number(profile.min_temperature)

        if profile.min_temperature >= variety.min_winter_temp:
            matching.append(f"Buena tolerancia al frío (mín. registrada {t_min}°C)")
            return 100.0

        deficit = variety.min_winter_temp - profile.min_temperature
        if deficit <= 2:
            concerns.append(f"Heladas ocasionales severas ({t_min}°C)")
            return 70.0

        concerns.append(
            f"Temperaturas demasiado bajas ({t_min}°C vs mín. {format_number(variety.min_winter_temp)}°C)"
        )
        return max(10.0, 100 - deficit * 15)

    @staticmethod
    def water_score(variety, profile, matching, concerns) -> float:
        deficit = profile.water_deficit or 0
        ratio = deficit / variety.annual_water_need

        if ratio <= 0.3:
            matching.append("Requerimientos hídricos bien cubiertos (déficit bajo en temporada)")
            return 100.0
        if ratio <= 0.6:
            concerns.append(f"Déficit hídrico moderado en temporada (P90: {format_number(deficit)} mm)")
            return 80.0

        concerns.append(
            f"Déficit hídrico significativo (P90: {format_number(deficit)} mm "
            f"vs {format_number(variety.annual_water_need)} mm)"
        )
        return max(30.0, 100 - ratio * 50)

    @staticmethod
    def thermal_score(variety, profile, matching, concerns) -> float:
        gdd = profile.total_gdd
        low, high = GDD_RANGE

        if low <= gdd <= high:
            matching.append(f"Acumulación térmica adecuada (P10 temporada: {gdd:.0f} GDD)")
            return 100.0
        if gdd < low:
            concerns.append(f"Insuficiente acumulación térmica (año desfavorable): {gdd:.0f} GDD")
            return max(20.0, gdd / low * 100)

        concerns.append(f"Exceso de calor acumulado: {gdd:.0f} GDD")
        return max(60.0, 100 - (gdd - high) / 1000 * 20)

    @staticmethod
    def risk_score(variety, profile, matching, concerns) -> float:
        score = 100.0
        frost = format_number(profile.frost_days)
        heat = format_number(profile.heat_stress_days)

        if profile.frost_days > 15:
            concerns.append(f"Alto riesgo de heladas en floración (P90: {frost} días Mar–Abr)")
            score -= 30
        elif profile.frost_days > 5:
            concerns.append(f"Riesgo moderado de heladas en floración (P90: {frost} días Mar–Abr)")
            score -= 15
        else:
            matching.append(f"Riesgo bajo de heladas en floración (P90: {frost} días Mar–Abr)")

        if profile.heat_stress_days > 30:
            concerns.append(f"Alto estrés térmico (P90: {heat} días >40°C en verano)")
            score -= 25
        elif profile.heat_stress_days > 10:
            concerns.append(f"Estrés térmico moderado (P90: {heat} días >40°C en verano)")
            score -= 10
        else:
            matching.append(f"Estrés térmico bajo (P90: {heat} días >40°C en verano)")

        return max(0.0, score)

    # =========================================================================
    # SECTION 2: Cultivar-specific advice
    # =========================================================================

    @staticmethod
    def specific_recommendations(variety: PistachioVariety, profile: ClimateProfile) -> List[str]:
        recommendations = []

        if profile.water_deficit > variety.annual_water_need * 0.4:
            recommendations.append("Implementar sistema de riego por goteo de alta eficiencia")
            recommendations.append(
                "Programar riegos durante períodos críticos: " + ", ".join(variety.critical_water_periods)
            )

        if profile.frost_days > 5:
            recommendations.append("Instalar sistema de protección contra heladas (aspersores, calentadores)")
            recommendations.append("Evitar plantación en zonas bajas propensas a heladas")

        if profile.heat_stress_days > 15:
            recommendations.append("Considerar sombreado parcial durante verano")
            recommendations.append("Aumentar frecuencia de riego en días de calor extremo")

        if variety.pollinizers:
            recommendations.append(f"Plantar polinizadores: {', '.join(variety.pollinizers)} (ratio 1:8-10)")

        if variety.id == "kerman" and profile.min_temperature < -8:
            recommendations.append("Considerar portainjertos resistentes al frío")

        if variety.id == "sirora" and profile.total_chill_hours < 600:
            recommendations.append("Variedad ideal para zonas con pocas horas frío (año desfavorable)")

        return recommendations
