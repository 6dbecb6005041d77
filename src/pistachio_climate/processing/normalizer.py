"""
Input boundary normalization.

Weather providers name the same quantity in many ways (Open-Meteo, NASA
POWER, SIAR, ERA5 exports, hand-made CSVs). Raw payload rows are mapped once,
here, into the strict DailyWeatherRecord shape; nothing downstream branches on
alternative field names.
"""

import logging
import math
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..core.date_utils import DateUtils
from ..models.weather import DailyWeatherRecord
from .converter import UnitConverter

# Canonical field -> accepted spellings (first match wins)
FIELD_ALIASES: Dict[str, tuple] = {
    "date": ("date", "fecha", "Fecha", "day", "time", "datetime"),
    "temperature_max": (
        "temperature_max", "tmax", "t_max", "temperature_2m_max", "T2M_MAX", "TempMax", "tempMax",
    ),
    "temperature_min": (
        "temperature_min", "tmin", "t_min", "temperature_2m_min", "T2M_MIN", "TempMin", "tempMin",
    ),
    "temperature_avg": (
        "temperature_avg", "tavg", "tmed", "t_mean", "temperature_2m_mean", "T2M", "TempMedia", "tempMedia",
    ),
    "humidity": (
        "humidity", "rh", "relative_humidity_2m_mean", "RH2M", "HumedadMedia", "humedadMedia",
    ),
    "precipitation": (
        "precipitation", "prec", "precipitation_sum", "PRECTOTCORR", "Precipitacion", "precipitacion",
        "total_precipitation",
    ),
    "wind_speed": (
        "wind_speed", "wind", "wind_speed_10m_mean", "WS2M", "VelViento", "velViento", "velmedia",
    ),
    "solar_radiation": (
        "solar_radiation", "radiation", "shortwave_radiation_sum", "ALLSKY_SFC_SW_DWN", "Radiacion", "radiacion",
    ),
    "eto": ("eto", "et0", "et0_fao_evapotranspiration", "EtPMon", "etPMon"),
    "etc": ("etc",),
    "frost_hours": ("frost_hours", "frostHours"),
    "chill_hours": ("chill_hours", "chillHours"),
    "gdd": ("gdd", "GDD"),
}

PRECOMPUTED_FLAGS = ("precomputed", "computedChillHeat", "computedFromHourly")


def to_number(value: Any, fallback: float = 0.0) -> float:
    """
    Coerce a raw value to a finite float.

    None, empty strings, NaN, infinities and non-numeric text become
    ``fallback``. Decimal commas ("12,5") are accepted.
    """
    if value is None or isinstance(value, bool):
        return fallback
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
        if not value:
            return fallback
    try:
        number = float(value)
    except (TypeError, ValueError):
        return fallback
    return number if math.isfinite(number) else fallback


class RecordNormalizer:
    """Normalize raw provider rows into DailyWeatherRecord objects."""

    def __init__(
        self,
        source_units: Optional[Dict[str, str]] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize record normalizer.

        Args:
            source_units: Unit per quantity for this series (see UnitConverter.convert_record)
            logger: Logger instance
        """
        self.source_units = source_units or {}
        self.logger = logger or logging.getLogger(__name__)
        self.converter = UnitConverter(self.logger)

    def normalize(self, rows: Iterable[Any]) -> List[DailyWeatherRecord]:
        """
        Normalize a batch of raw rows.

        DailyWeatherRecord instances pass through (with numeric coercion).
        Rows whose date cannot be parsed are dropped and counted.

        Args:
            rows: Raw rows (mappings or DailyWeatherRecord)

        Returns:
            Normalized records
        """
        records = []
        dropped = 0
        for row in rows:
            record = self.normalize_row(row)
            if record is None:
                dropped += 1
                continue
            records.append(record)

        if dropped:
            self.logger.warning(f"Dropped {dropped} rows without a valid date")
        self.logger.info(f"Normalized {len(records)} daily records")
        return records

    def normalize_row(self, row: Any) -> Optional[DailyWeatherRecord]:
        """
        Normalize a single row.

        Args:
            row: Mapping or DailyWeatherRecord

        Returns:
            DailyWeatherRecord, or None if the row has no parseable date
        """
        if isinstance(row, DailyWeatherRecord):
            row = row.to_dict()
        if not isinstance(row, Mapping):
            self.logger.debug(f"Ignoring non-mapping row: {type(row).__name__}")
            return None

        day = DateUtils.parse_date(self._pick(row, "date"))
        if day is None:
            return None

        present = {}
        for field in FIELD_ALIASES:
            if field == "date":
                continue
            raw = self._pick(row, field)
            if raw is not None:
                present[field] = to_number(raw)

        values = self.converter.convert_record(present, self.source_units)

        t_max = values.get("temperature_max", 0.0)
        t_min = values.get("temperature_min", 0.0)
        if "temperature_avg" not in values:
            values["temperature_avg"] = (t_max + t_min) / 2

        return DailyWeatherRecord(
            date=day.isoformat(),
            temperature_max=t_max,
            temperature_min=t_min,
            temperature_avg=values["temperature_avg"],
            humidity=values.get("humidity", 0.0),
            precipitation=values.get("precipitation", 0.0),
            wind_speed=values.get("wind_speed", 0.0),
            solar_radiation=values.get("solar_radiation", 0.0),
            eto=values.get("eto", 0.0),
            etc=values.get("etc", 0.0),
            frost_hours=values.get("frost_hours", 0.0),
            chill_hours=values.get("chill_hours", 0.0),
            gdd=values.get("gdd", 0.0),
            precomputed=any(bool(row.get(flag)) for flag in PRECOMPUTED_FLAGS),
        )

    @staticmethod
    def _pick(row: Mapping, field: str) -> Any:
        for alias in FIELD_ALIASES[field]:
            if alias in row and row[alias] is not None:
                return row[alias]
        return None
