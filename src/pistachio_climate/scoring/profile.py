"""
Conservative climate profile for cultivar matching.

Buckets enriched daily records into calendar years and winter campaigns and
reduces each per-period series to a percentile on its unfavourable side:
P10 for chill and heat accumulation, P90 for frost, heat stress, extreme cold
and water deficit. A grower plans for a bad year, not the average one.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from ..algorithms import stats
from ..core import constants
from ..core.date_utils import DateUtils
from ..core.windows import (
    WindowClassifier,
    CHILL_WINDOW_DAYS,
    GDD_WINDOW_DAYS,
    SPRING_FROST_WINDOW_DAYS,
    SUMMER_WINDOW_DAYS,
    YEAR_DAYS,
)
from ..models.profile import CampaignBreakdown, ClimateProfile
from ..models.weather import EnrichedDailyRecord
from ..processing.validator import DataValidator

INSUFFICIENT_DATA_WARNING = (
    "Datos insuficientes: se requiere al menos 1 campaña completa (≥300 días) "
    "para recomendar variedades."
)

FAVOURABLE_PERCENTILE = 0.10
ADVERSE_PERCENTILE = 0.90


@dataclass
class _WindowSeries:
    """Per-period values for one window plus the days observed in each period."""

    values: Dict[int, float]
    days: Dict[int, int]

    @classmethod
    def empty(cls) -> "_WindowSeries":
        return cls(values={}, days={})

    def add(self, period: int, value: float) -> None:
        self.values[period] = self.values.get(period, 0.0) + value
        self.days[period] = self.days.get(period, 0) + 1

    def select(self, nominal_days: int, min_coverage: float) -> Dict[int, float]:
        return stats.complete_periods(self.values, self.days, nominal_days, min_coverage)

    def select_campaigns(self, nominal_days: int, min_coverage: float) -> Dict[int, float]:
        return stats.complete_or_merged_periods(self.values, self.days, nominal_days, min_coverage)


class ClimateProfileBuilder:
    """Build a percentile-based ClimateProfile from enriched daily records."""

    def __init__(
        self,
        min_days: int = constants.MIN_PROFILE_DAYS,
        min_coverage: float = constants.MIN_WINDOW_COVERAGE,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize climate profile builder.

        Args:
            min_days: Minimum valid days; below it the profile is degraded
            min_coverage: Fraction of a window's days that makes a period complete
            logger: Logger instance
        """
        self.min_days = min_days
        self.min_coverage = min_coverage
        self.logger = logger or logging.getLogger(__name__)
        self.validator = DataValidator(self.logger)

    def build_profile(self, records: Sequence[EnrichedDailyRecord]) -> ClimateProfile:
        """
        Build the conservative profile.

        Args:
            records: Enriched daily records (any order)

        Returns:
            ClimateProfile; ``is_sufficient`` is False when fewer than
            ``min_days`` valid days were given
        """
        dated = self._dated(records)

        if not self.validator.check_data_completeness([r for _, r in dated], self.min_days):
            return ClimateProfile(
                total_days=len(dated),
                is_sufficient=False,
                data_warning=INSUFFICIENT_DATA_WARNING,
            )

        chill = _WindowSeries.empty()
        extreme_cold = _WindowSeries.empty()
        gdd = _WindowSeries.empty()
        season_etc = _WindowSeries.empty()
        season_precip = _WindowSeries.empty()
        frost_days = _WindowSeries.empty()
        frost_hours = _WindowSeries.empty()
        heat_stress = _WindowSeries.empty()
        annual_precip = _WindowSeries.empty()

        for day, record in dated:
            year = day.year
            annual_precip.add(year, max(0.0, record.precipitation))

            if WindowClassifier.is_chill_window(day):
                campaign = WindowClassifier.winter_campaign_year(day)
                chill.add(campaign, max(0.0, record.chill_hours))
                extreme_cold.add(
                    campaign, 1.0 if record.temperature_min < constants.EXTREME_COLD_TEMPERATURE else 0.0
                )

            if WindowClassifier.is_gdd_window(day):
                gdd.add(year, max(0.0, record.gdd))
                season_etc.add(year, max(0.0, record.etc))
                season_precip.add(year, max(0.0, record.precipitation))

            if WindowClassifier.is_spring_frost_window(day):
                hours = max(0.0, record.frost_hours)
                frost_hours.add(year, hours)
                frost_days.add(year, 1.0 if hours > 0 else 0.0)

            if WindowClassifier.is_summer(day):
                heat_stress.add(
                    year, 1.0 if record.temperature_max > constants.HEAT_STRESS_TEMPERATURE else 0.0
                )

        deficit = _WindowSeries(
            values={
                y: max(0.0, season_etc.values[y] - season_precip.values.get(y, 0.0))
                for y in season_etc.values
            },
            days=season_etc.days,
        )

        chill_sel = chill.select_campaigns(CHILL_WINDOW_DAYS, self.min_coverage)
        cold_sel = extreme_cold.select_campaigns(CHILL_WINDOW_DAYS, self.min_coverage)
        gdd_sel = gdd.select(GDD_WINDOW_DAYS, self.min_coverage)
        deficit_sel = deficit.select(GDD_WINDOW_DAYS, self.min_coverage)
        frost_days_sel = frost_days.select(SPRING_FROST_WINDOW_DAYS, self.min_coverage)
        frost_hours_sel = frost_hours.select(SPRING_FROST_WINDOW_DAYS, self.min_coverage)
        heat_sel = heat_stress.select(SUMMER_WINDOW_DAYS, self.min_coverage)
        precip_sel = annual_precip.select(YEAR_DAYS, self.min_coverage)

        temps_avg = [r.temperature_avg for _, r in dated]
        campaigns = CampaignBreakdown(
            years=sorted(annual_precip.values),
            chill_by_campaign={k: round(v) for k, v in sorted(chill_sel.items())},
            gdd_by_year={k: round(v) for k, v in sorted(gdd_sel.items())},
            spring_frost_days_by_year={k: int(v) for k, v in sorted(frost_days_sel.items())},
            spring_frost_hours_by_year={k: round(v, 1) for k, v in sorted(frost_hours_sel.items())},
            heat_stress_days_by_year={k: int(v) for k, v in sorted(heat_sel.items())},
            extreme_cold_days_by_campaign={k: int(v) for k, v in sorted(cold_sel.items())},
            water_deficit_by_year={k: round(v) for k, v in sorted(deficit_sel.items())},
            precipitation_by_year={k: round(v, 1) for k, v in sorted(precip_sel.items())},
        )

        profile = ClimateProfile(
            avg_temperature=round(stats.mean(temps_avg), 1),
            min_temperature=round(min(r.temperature_min for _, r in dated), 1),
            max_temperature=round(max(r.temperature_max for _, r in dated), 1),
            total_chill_hours=round(stats.percentile(list(chill_sel.values()), FAVOURABLE_PERCENTILE)),
            total_gdd=round(stats.percentile(list(gdd_sel.values()), FAVOURABLE_PERCENTILE)),
            frost_days=round(stats.percentile(list(frost_days_sel.values()), ADVERSE_PERCENTILE)),
            total_frost_hours=round(stats.percentile(list(frost_hours_sel.values()), ADVERSE_PERCENTILE)),
            total_precipitation=round(stats.median(list(precip_sel.values()))),
            water_deficit=round(stats.percentile(list(deficit_sel.values()), ADVERSE_PERCENTILE)),
            heat_stress_days=round(stats.percentile(list(heat_sel.values()), ADVERSE_PERCENTILE)),
            extreme_cold_days=round(stats.percentile(list(cold_sel.values()), ADVERSE_PERCENTILE)),
            total_days=len(dated),
            is_sufficient=True,
            campaigns=campaigns,
        )

        self.logger.info(
            f"Climate profile over {len(campaigns.years)} years: "
            f"chill P10={profile.total_chill_hours}h, GDD P10={profile.total_gdd}, "
            f"spring frost P90={profile.frost_days}d, deficit P90={profile.water_deficit}mm"
        )
        return profile

    def _dated(self, records: Sequence[EnrichedDailyRecord]) -> List[Tuple[date, EnrichedDailyRecord]]:
        dated = []
        for record in records:
            day = getattr(record, "day", None) or DateUtils.parse_date(record.date)
            if day is None:
                self.logger.warning(f"Ignoring record with unparseable date: {record.date!r}")
                continue
            dated.append((day, record))
        return dated
