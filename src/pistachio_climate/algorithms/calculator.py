"""
Daily metric derivation facade.

Turns a raw DailyWeatherRecord into an EnrichedDailyRecord with ETo, ETc,
GDD, chill hours and frost hours, delegating the physics to the
evapotranspiration and thermal modules.
"""

import logging
import math
from typing import Iterable, List, Optional

from ..core import constants
from ..core.date_utils import DateUtils
from ..core.windows import WindowClassifier
from ..models.crop import CropParameters
from ..models.weather import DailyWeatherRecord, EnrichedDailyRecord
from . import thermal
from .evapotranspiration import EvapotranspirationCalculator


def _safe(value: float) -> float:
    """Finite float or 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _clamp0(value: float) -> float:
    return max(0.0, _safe(value))


def _sanitize_daily_et(value: float) -> float:
    """Daily ET is physically bounded to [0, 20] mm."""
    return min(constants.MAX_DAILY_ET, _clamp0(value))


class DailyMetricDeriver:
    """
    High-level deriver for per-day agronomic metrics.

    Pure transform: inputs are never mutated and no state is kept between
    calls.
    """

    def __init__(
        self,
        crop: Optional[CropParameters] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize daily metric deriver.

        Args:
            crop: Crop coefficient curve; pistachio defaults when None
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.et_calculator = EvapotranspirationCalculator(crop or CropParameters())

    def derive(self, record: DailyWeatherRecord, latitude: float) -> Optional[EnrichedDailyRecord]:
        """
        Derive ETo, ETc, GDD, chill and frost hours for one day.

        Positive incoming ETo/ETc are kept. Records flagged ``precomputed``
        keep their GDD/chill/frost (clamped to ≥ 0, chill zeroed outside
        Nov–Feb); the rest get the Tmin/Tmax estimates.

        Args:
            record: Raw daily record
            latitude: Site latitude (degrees)

        Returns:
            Enriched record, or None if the record's date cannot be parsed
        """
        day = DateUtils.parse_date(record.date)
        if day is None:
            self.logger.warning(f"Skipping record with unparseable date: {record.date!r}")
            return None

        day_number = DateUtils.day_of_year(day)
        lat = _safe(latitude)
        t_max = _safe(record.temperature_max)
        t_min = _safe(record.temperature_min)

        components = self.et_calculator.calculate_with_components(t_max, t_min, lat, day_number)

        incoming_eto = _sanitize_daily_et(record.eto)
        incoming_etc = _sanitize_daily_et(record.etc)
        eto = incoming_eto if incoming_eto > 0 else _sanitize_daily_et(components.eto)
        etc = incoming_etc if incoming_etc > 0 else _sanitize_daily_et(eto * components.kc)

        in_chill_window = WindowClassifier.is_chill_window(day)

        if record.precomputed:
            gdd = _clamp0(record.gdd)
            chill = _clamp0(record.chill_hours)
            frost = _clamp0(record.frost_hours)
        else:
            gdd = thermal.growing_degree_days(t_max, t_min)
            chill = thermal.chill_hours(t_max, t_min)
            frost = thermal.frost_hours(t_max, t_min)

        return EnrichedDailyRecord(
            date=day.isoformat(),
            temperature_max=t_max,
            temperature_min=t_min,
            temperature_avg=_safe(record.temperature_avg),
            humidity=_safe(record.humidity),
            precipitation=_clamp0(record.precipitation),
            wind_speed=_clamp0(record.wind_speed),
            solar_radiation=_clamp0(record.solar_radiation),
            eto=eto,
            etc=etc,
            gdd=gdd,
            chill_hours=chill if in_chill_window else 0.0,
            frost_hours=frost,
            precomputed=record.precomputed,
            kc=components.kc,
            day=day,
        )

    def derive_all(
        self,
        records: Iterable[DailyWeatherRecord],
        latitude: float
    ) -> List[EnrichedDailyRecord]:
        """
        Derive metrics for a series, skipping records with unparseable dates.

        Args:
            records: Raw daily records
            latitude: Site latitude (degrees)

        Returns:
            Enriched records in input order
        """
        enriched = []
        skipped = 0
        for record in records:
            result = self.derive(record, latitude)
            if result is None:
                skipped += 1
                continue
            enriched.append(result)

        if skipped:
            self.logger.warning(f"Skipped {skipped} records with unparseable dates")
        self.logger.debug(f"Derived daily metrics for {len(enriched)} records")

        return enriched
