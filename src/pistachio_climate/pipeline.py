"""
Analysis pipeline.

Wires the components together:

    raw rows -> RecordNormalizer / HourlyAggregator -> DailyMetricDeriver
        -> SeasonalAggregator -> SuitabilityScorer (+ trends, irrigation)
        -> ClimateProfileBuilder -> VarietyRankingEngine -> detailed report

and returns plain dictionaries ready for JSON.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from . import catalog as catalog_module
from .algorithms import DailyMetricDeriver
from .core import Config, LoggerContext
from .models.variety import Location, PistachioVariety
from .models.weather import DailyWeatherRecord, EnrichedDailyRecord
from .processing import DataProcessor, SeasonalAggregator
from .scoring import (
    ClimateProfileBuilder,
    HistoricalTrendAnalyzer,
    SuitabilityScorer,
    VarietyRankingEngine,
    generate_detailed_report,
)


class ClimateAnalysisPipeline:
    """End-to-end pistachio climate analysis for one site."""

    def __init__(
        self,
        config: Optional[Config] = None,
        catalog: Optional[Sequence[PistachioVariety]] = None,
        source_units: Optional[Dict[str, str]] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize pipeline.

        Args:
            config: Configuration (defaults when None)
            catalog: Cultivar catalog; loaded from ``config.catalog_file`` or built-in when None
            source_units: Provider units of the raw daily rows
            logger: Logger instance
        """
        self.config = config or Config()
        self.logger = logger or logging.getLogger(__name__)

        if catalog is None:
            catalog_file = self.config.catalog_file
            catalog = catalog_module.load_catalog(catalog_file) if catalog_file else catalog_module.VARIETIES
        self.catalog = tuple(catalog)

        self.processor = DataProcessor(self.config.timezone, source_units, self.logger)
        self.deriver = DailyMetricDeriver(self.config.crop_parameters, self.logger)
        self.aggregator = SeasonalAggregator(logger=self.logger)
        self.scorer = SuitabilityScorer(self.logger)
        self.trend_analyzer = HistoricalTrendAnalyzer(self.aggregator, self.logger)
        self.profile_builder = ClimateProfileBuilder(min_days=self.config.min_profile_days, logger=self.logger)
        self.ranking = VarietyRankingEngine(self.catalog, logger=self.logger)

    def prepare(self, rows: Iterable[Any], hourly: bool = False) -> List[DailyWeatherRecord]:
        """Normalize raw daily rows, or aggregate hourly observations to days."""
        if hourly:
            return self.processor.prepare_hourly(rows)
        return self.processor.prepare_daily(rows)

    def enrich(self, records: Iterable[DailyWeatherRecord], latitude: float) -> List[EnrichedDailyRecord]:
        return self.deriver.derive_all(records, latitude)

    def analyze_site(self, records: Sequence[EnrichedDailyRecord]) -> Dict[str, Any]:
        """
        Site-level verdict for enriched records.

        Returns:
            Dictionary with ``summary``, ``suitability``, ``trends`` and ``irrigation``
        """
        with LoggerContext(self.logger, "seasonal summary"):
            summary = self.aggregator.summarize(records)
            suitability = self.scorer.score(summary)

        with LoggerContext(self.logger, "historical trends"):
            trends = self.trend_analyzer.analyze(records)
            irrigation = self.trend_analyzer.irrigation_plan(trends, summary)

        return {
            "summary": summary.to_dict(),
            "suitability": suitability.to_dict(),
            "trends": trends.to_dict(),
            "irrigation": irrigation.to_dict(),
        }

    def recommend_varieties(
        self,
        records: Sequence[EnrichedDailyRecord],
        location: Location
    ) -> Dict[str, Any]:
        """
        Cultivar-level verdict for enriched records.

        Returns:
            Dictionary with ``profile``, ``recommendations`` and ``report``
        """
        with LoggerContext(self.logger, "cultivar ranking"):
            profile = self.profile_builder.build_profile(records)
            recommendations = self.ranking.rank(
                catalog_module.female_varieties(self.catalog), profile, location
            )
            report = generate_detailed_report(recommendations, profile, location)

        return {
            "profile": profile.to_dict(),
            "recommendations": [r.to_dict() for r in recommendations],
            "report": report.to_dict(),
        }

    def run(self, rows: Iterable[Any], location: Location, hourly: bool = False) -> Dict[str, Any]:
        """
        Full analysis from raw rows.

        Args:
            rows: Raw daily rows, or hourly observations when ``hourly``
            location: Site coordinates
            hourly: Whether ``rows`` are hourly observations

        Returns:
            JSON-ready result
        """
        daily = self.prepare(rows, hourly)
        enriched = self.enrich(daily, location.latitude)
        self.logger.info(f"Analyzing {len(enriched)} days at ({location.latitude}, {location.longitude})")

        return {
            "location": {"latitude": location.latitude, "longitude": location.longitude},
            "days": len(enriched),
            "site": self.analyze_site(enriched),
            "varieties": self.recommend_varieties(enriched, location),
        }
