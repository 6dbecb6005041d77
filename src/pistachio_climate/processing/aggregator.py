"""
Seasonal aggregation module.

Summarizes enriched daily records into a SeasonalSummary. A single season is
summed directly inside its windows; a multi-year series is annualized
(per-year sums, then the mean across years) so that a 20-year request reports
typical annual totals instead of 20-year totals.
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
    YEAR_DAYS,
)
from ..models.summary import SeasonalSummary
from ..models.weather import EnrichedDailyRecord


@dataclass
class _YearAggregate:
    days: int = 0
    temp_sum: float = 0.0
    gdd_days: int = 0
    gdd: float = 0.0
    frost_hours: float = 0.0
    frost_days: int = 0
    eto: float = 0.0
    etc: float = 0.0
    precipitation: float = 0.0


def _clamp0(value: float) -> float:
    return value if value > 0 else 0.0


class SeasonalAggregator:
    """Aggregate enriched daily records into a seasonal or annualized summary."""

    def __init__(
        self,
        min_coverage: float = constants.MIN_WINDOW_COVERAGE,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize seasonal aggregator.

        Args:
            min_coverage: Fraction of a window's days that makes a year or
                          campaign complete in the multi-year path
            logger: Logger instance
        """
        self.min_coverage = min_coverage
        self.logger = logger or logging.getLogger(__name__)

    def summarize(self, records: Sequence[EnrichedDailyRecord]) -> SeasonalSummary:
        """
        Summarize a series of enriched daily records.

        Args:
            records: Enriched daily records (any order)

        Returns:
            SeasonalSummary; annualized when more than one calendar year is present
        """
        dated = self._dated(records)
        years = {day.year for day, _ in dated}

        if len(years) <= 1:
            self.logger.info(f"Summarizing single season ({len(dated)} days)")
            return self._summarize_single(dated, len(years))

        self.logger.info(f"Annualizing {len(dated)} days over {len(years)} calendar years")
        return self._summarize_multi_year(dated, len(years))

    # =========================================================================
    # Single season
    # =========================================================================

    def _summarize_single(
        self,
        dated: List[Tuple[date, EnrichedDailyRecord]],
        years_count: int
    ) -> SeasonalSummary:
        total_gdd = 0.0
        total_chill = 0.0
        total_frost = 0.0
        frost_days = 0
        total_eto = 0.0
        total_etc = 0.0
        total_precip = 0.0
        temp_sum = 0.0

        for day, record in dated:
            if WindowClassifier.is_gdd_window(day):
                total_gdd += _clamp0(record.gdd)
            if WindowClassifier.is_chill_window(day):
                total_chill += _clamp0(record.chill_hours)

            frost = _clamp0(record.frost_hours)
            total_frost += frost
            if frost > 0:
                frost_days += 1

            total_eto += _clamp0(record.eto)
            total_etc += _clamp0(record.etc)
            total_precip += _clamp0(record.precipitation)
            temp_sum += record.temperature_avg

        avg_temperature = temp_sum / len(dated) if dated else 0.0

        return SeasonalSummary(
            total_days=len(dated),
            avg_temperature=round(avg_temperature, 1),
            total_gdd=round(total_gdd, 1),
            total_chill_hours=round(total_chill, 1),
            total_frost_hours=round(total_frost, 1),
            frost_days=frost_days,
            total_eto=round(total_eto, 1),
            total_etc=round(total_etc, 1),
            total_precipitation=round(total_precip, 1),
            water_deficit=round(max(0.0, total_etc - total_precip), 1),
            years_count=years_count,
            is_annualized=False,
        )

    # =========================================================================
    # Multi-year (annualized)
    # =========================================================================

    def _summarize_multi_year(
        self,
        dated: List[Tuple[date, EnrichedDailyRecord]],
        years_count: int
    ) -> SeasonalSummary:
        by_year: Dict[int, _YearAggregate] = {}
        chill_by_campaign: Dict[int, float] = {}
        chill_days_by_campaign: Dict[int, int] = {}

        for day, record in dated:
            agg = by_year.setdefault(day.year, _YearAggregate())
            agg.days += 1
            agg.temp_sum += record.temperature_avg

            if WindowClassifier.is_gdd_window(day):
                agg.gdd_days += 1
                agg.gdd += _clamp0(record.gdd)

            frost = _clamp0(record.frost_hours)
            agg.frost_hours += frost
            if frost > 0:
                agg.frost_days += 1

            agg.eto += _clamp0(record.eto)
            agg.etc += _clamp0(record.etc)
            agg.precipitation += _clamp0(record.precipitation)

            if WindowClassifier.is_chill_window(day):
                campaign = WindowClassifier.winter_campaign_year(day)
                chill_by_campaign[campaign] = chill_by_campaign.get(campaign, 0.0) + _clamp0(record.chill_hours)
                chill_days_by_campaign[campaign] = chill_days_by_campaign.get(campaign, 0) + 1

        year_days = {y: a.days for y, a in by_year.items()}
        selected_years = sorted(stats.complete_periods(
            {y: float(a.days) for y, a in by_year.items()}, year_days, YEAR_DAYS, self.min_coverage
        ))
        selected = [by_year[y] for y in selected_years]

        gdd_by_year = stats.complete_periods(
            {y: a.gdd for y, a in by_year.items() if a.gdd_days},
            {y: a.gdd_days for y, a in by_year.items()},
            GDD_WINDOW_DAYS,
            self.min_coverage,
        )
        chill = stats.complete_or_merged_periods(
            chill_by_campaign, chill_days_by_campaign, CHILL_WINDOW_DAYS, self.min_coverage
        )

        self.logger.debug(
            f"Annual means over years {selected_years}, "
            f"GDD seasons {sorted(gdd_by_year)}, chill campaigns {sorted(chill)}"
        )

        annual_etc = stats.mean([a.etc for a in selected])
        annual_precip = stats.mean([a.precipitation for a in selected])

        return SeasonalSummary(
            total_days=len(dated),
            avg_temperature=round(stats.mean([a.temp_sum / a.days for a in selected]), 1),
            total_gdd=round(stats.mean(list(gdd_by_year.values())), 1),
            total_chill_hours=round(stats.mean(list(chill.values())), 1),
            total_frost_hours=round(stats.mean([a.frost_hours for a in selected]), 1),
            frost_days=round(stats.mean([a.frost_days for a in selected]), 1),
            total_eto=round(stats.mean([a.eto for a in selected]), 1),
            total_etc=round(annual_etc, 1),
            total_precipitation=round(annual_precip, 1),
            # Deficit of the annual means, not a mean of yearly deficits
            water_deficit=round(max(0.0, annual_etc - annual_precip), 1),
            years_count=years_count,
            is_annualized=True,
        )

    def summarize_by_year(self, records: Sequence[EnrichedDailyRecord]) -> Dict[int, SeasonalSummary]:
        """
        Single-season summary for each calendar year in the series.

        Args:
            records: Enriched daily records

        Returns:
            Mapping of year to its SeasonalSummary, sorted by year
        """
        grouped: Dict[int, List[Tuple[date, EnrichedDailyRecord]]] = {}
        for day, record in self._dated(records):
            grouped.setdefault(day.year, []).append((day, record))

        return {year: self._summarize_single(grouped[year], 1) for year in sorted(grouped)}

    def chill_by_campaign(self, records: Sequence[EnrichedDailyRecord]) -> Dict[int, float]:
        """
        Chill hours of each complete winter campaign.

        Args:
            records: Enriched daily records

        Returns:
            Mapping of campaign year to its chill hours, sorted by campaign;
            partial campaigns at either end of the series are left out
        """
        chill: Dict[int, float] = {}
        days: Dict[int, int] = {}
        for day, record in self._dated(records):
            if WindowClassifier.is_chill_window(day):
                campaign = WindowClassifier.winter_campaign_year(day)
                chill[campaign] = chill.get(campaign, 0.0) + _clamp0(record.chill_hours)
                days[campaign] = days.get(campaign, 0) + 1

        required = CHILL_WINDOW_DAYS * self.min_coverage
        return {c: round(chill[c], 1) for c in sorted(chill) if days[c] >= required}

    def _dated(self, records: Sequence[EnrichedDailyRecord]) -> List[Tuple[date, EnrichedDailyRecord]]:
        """Pair each record with its parsed date, dropping unparseable ones."""
        dated = []
        for record in records:
            day = getattr(record, "day", None) or DateUtils.parse_date(record.date)
            if day is None:
                self.logger.warning(f"Ignoring record with unparseable date: {record.date!r}")
                continue
            dated.append((day, record))
        return dated
