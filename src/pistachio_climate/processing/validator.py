"""
Data validation module.

Checks normalized daily records for physical plausibility and series length.
Problems are reported, not fixed: the deriver already coerces bad values.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from ..core import constants
from ..models.weather import DailyWeatherRecord


class DataValidator:
    """Validate daily weather records."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize data validator.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def validate_record(self, record: DailyWeatherRecord) -> Tuple[bool, List[str]]:
        """
        Validate that a record's values are in plausible ranges.

        Args:
            record: Daily weather record

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors = []

        if record.temperature_min > record.temperature_max:
            errors.append(
                f"temperature_min ({record.temperature_min}) cannot be greater than "
                f"temperature_max ({record.temperature_max})"
            )

        if not (0 <= record.humidity <= 100):
            errors.append(f"Invalid humidity: {record.humidity} (must be 0-100)")

        if record.precipitation < 0:
            errors.append(f"Invalid precipitation: {record.precipitation} (must be >= 0)")

        if record.wind_speed < 0:
            errors.append(f"Invalid wind_speed: {record.wind_speed} (must be >= 0)")

        is_valid = len(errors) == 0
        return is_valid, errors

    def validate_records(self, records: Sequence[DailyWeatherRecord]) -> int:
        """
        Validate a series and log the problems found.

        Args:
            records: Daily weather records

        Returns:
            Number of records with at least one problem
        """
        invalid = 0
        for record in records:
            is_valid, errors = self.validate_record(record)
            if not is_valid:
                invalid += 1
                self.logger.debug(f"{record.date}: {'; '.join(errors)}")

        if invalid:
            self.logger.warning(f"{invalid} of {len(records)} records have suspicious values")

        return invalid

    def check_data_completeness(
        self,
        records: Sequence[DailyWeatherRecord],
        min_days: int = constants.MIN_PROFILE_DAYS
    ) -> bool:
        """
        Check if the series is long enough for climate profiling.

        Args:
            records: Daily weather records
            min_days: Minimum number of days required

        Returns:
            True if enough data is present, False otherwise
        """
        if len(records) < min_days:
            self.logger.warning(f"Insufficient data: {len(records)} days (need at least {min_days})")
            return False

        return True
