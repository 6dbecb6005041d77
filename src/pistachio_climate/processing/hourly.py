"""
Hourly to daily aggregation.

Collapses hourly observations into DailyWeatherRecord objects with exact
chill and frost hour counts, assigning each hour to its local calendar day.
"""

import logging
import math
import statistics
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from ..core import constants
from ..core.date_utils import DateUtils
from ..models.weather import DailyWeatherRecord, HourlyObservation
from .converter import W_M2_TO_MJ_DAY
from .normalizer import to_number


def _is_finite(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


class HourlyAggregator:
    """Aggregate hourly observations into daily records."""

    def __init__(
        self,
        timezone: str = constants.DEFAULT_TIMEZONE,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize hourly aggregator.

        Args:
            timezone: Site timezone; naive timestamps are taken as local to it

        Raises:
            ValueError: If the timezone is invalid
        """
        self.logger = logger or logging.getLogger(__name__)
        self.date_utils = DateUtils(self.logger)
        # Fail fast on an unknown zone
        DateUtils.parse_timezone(timezone)
        self.timezone = timezone

    def aggregate(self, hourly: Iterable[Any]) -> List[DailyWeatherRecord]:
        """
        Aggregate hourly observations into one record per local day.

        Args:
            hourly: HourlyObservation objects or dicts with the same keys

        Returns:
            Daily records sorted by date, flagged ``precomputed``
        """
        by_day: Dict[date, List[HourlyObservation]] = {}
        skipped = 0
        no_temperature = 0

        for item in hourly:
            observation = self._to_observation(item)
            dt = self.date_utils.parse_datetime(observation.datetime) if observation else None
            if dt is None:
                skipped += 1
                continue
            # A missing reading is not 0 °C; it would count as a frost and chill hour
            if not _is_finite(observation.temperature):
                no_temperature += 1
                continue
            day = self.date_utils.local_date(dt, self.timezone)
            by_day.setdefault(day, []).append(observation)

        if skipped:
            self.logger.warning(f"Skipped {skipped} hourly observations without a valid timestamp")
        if no_temperature:
            self.logger.warning(f"Skipped {no_temperature} hourly observations without a numeric temperature")

        records = [self._daily_record(day, by_day[day]) for day in sorted(by_day)]
        self.logger.info(f"Aggregated hourly data into {len(records)} days ({self.timezone})")
        return records

    def _daily_record(self, day: date, hours: List[HourlyObservation]) -> DailyWeatherRecord:
        temps = [h.temperature for h in hours]
        t_mean = statistics.fmean(temps)

        return DailyWeatherRecord(
            date=day.isoformat(),
            temperature_max=max(temps),
            temperature_min=min(temps),
            temperature_avg=t_mean,
            humidity=statistics.fmean(h.humidity for h in hours),
            precipitation=sum(max(0.0, h.precipitation) for h in hours),
            wind_speed=statistics.fmean(h.wind_speed for h in hours),
            # Mean irradiance over the observed hours, as a daily total
            solar_radiation=statistics.fmean(h.solar_radiation for h in hours) * W_M2_TO_MJ_DAY,
            chill_hours=float(sum(1 for t in temps if t <= constants.CHILL_THRESHOLD)),
            frost_hours=float(sum(1 for t in temps if t <= constants.FROST_THRESHOLD)),
            gdd=max(0.0, t_mean - constants.GDD_BASE_TEMPERATURE),
            precomputed=True,
        )

    @staticmethod
    def _to_observation(item: Any) -> Optional[HourlyObservation]:
        if isinstance(item, HourlyObservation):
            return item
        if not isinstance(item, dict):
            return None

        timestamp = item.get("datetime") or item.get("time") or item.get("timestamp")
        return HourlyObservation(
            datetime=timestamp,
            temperature=to_number(item.get("temperature", item.get("temperature_2m")), fallback=math.nan),
            humidity=to_number(item.get("humidity", item.get("relative_humidity_2m"))),
            wind_speed=to_number(item.get("wind_speed", item.get("wind_speed_10m"))),
            precipitation=to_number(item.get("precipitation")),
            solar_radiation=to_number(item.get("solar_radiation", item.get("shortwave_radiation"))),
        )
