"""
Data processing module for pistachio climate analysis.

Provides normalization, unit conversion, validation, hourly aggregation and
seasonal aggregation of weather records.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from ..models.weather import DailyWeatherRecord
from .aggregator import SeasonalAggregator
from .converter import UnitConverter
from .hourly import HourlyAggregator
from .normalizer import RecordNormalizer
from .validator import DataValidator


class DataProcessor:
    """
    Unified data processor combining normalization, hourly aggregation and validation.

    This class provides a convenient interface to the input-side operations.
    """

    def __init__(
        self,
        timezone: str = "UTC",
        source_units: Optional[Dict[str, str]] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize data processor.

        Args:
            timezone: Site timezone for hourly data
            source_units: Provider units for daily rows
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.normalizer = RecordNormalizer(source_units, self.logger)
        self.hourly = HourlyAggregator(timezone, self.logger)
        self.validator = DataValidator(self.logger)

    def prepare_daily(self, rows: Iterable[Any]) -> List[DailyWeatherRecord]:
        """
        Normalize raw daily rows and log suspicious values.

        Args:
            rows: Raw provider rows

        Returns:
            Normalized daily records
        """
        records = self.normalizer.normalize(rows)
        self.validator.validate_records(records)
        return records

    def prepare_hourly(self, observations: Iterable[Any]) -> List[DailyWeatherRecord]:
        """
        Aggregate hourly observations to daily records and log suspicious values.

        Args:
            observations: Hourly observations

        Returns:
            Daily records flagged ``precomputed``
        """
        records = self.hourly.aggregate(observations)
        self.validator.validate_records(records)
        return records


__all__ = [
    "SeasonalAggregator",
    "UnitConverter",
    "HourlyAggregator",
    "RecordNormalizer",
    "DataValidator",
    "DataProcessor",
]
