"""
Unit conversion module.

Converts provider units into the units the core works in:
°C, m/s, mm and MJ m⁻² day⁻¹.
"""

import logging
from typing import Dict, Optional

# W/m² averaged over a day -> MJ m⁻² day⁻¹ (86400 s / 1e6)
W_M2_TO_MJ_DAY = 0.0864
# kWh m⁻² day⁻¹ -> MJ m⁻² day⁻¹
KWH_TO_MJ = 3.6


class UnitConverter:
    """Convert between different meteorological units."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize unit converter.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def convert_record(self, values: Dict[str, float], source_units: Dict[str, str]) -> Dict[str, float]:
        """
        Convert the unit-bearing fields of a normalized record.

        Args:
            values: Field name -> value, already using canonical field names
            source_units: Unit per quantity ("temperature", "wind_speed",
                          "solar_radiation", "precipitation")

        Returns:
            Dictionary with converted values
        """
        converted = values.copy()

        temperature_unit = source_units.get("temperature", "celsius")
        for field in ("temperature_max", "temperature_min", "temperature_avg"):
            if field in converted:
                converted[field] = self.convert_temperature(converted[field], temperature_unit)

        if "wind_speed" in converted:
            converted["wind_speed"] = self.convert_wind_speed(
                converted["wind_speed"], source_units.get("wind_speed", "m/s")
            )

        if "solar_radiation" in converted:
            converted["solar_radiation"] = self.convert_radiation(
                converted["solar_radiation"], source_units.get("solar_radiation", "MJ/m2/day")
            )

        if "precipitation" in converted:
            converted["precipitation"] = self.convert_precipitation(
                converted["precipitation"], source_units.get("precipitation", "mm")
            )

        return converted

    def convert_temperature(self, value: float, from_unit: str) -> float:
        """
        Convert temperature to Celsius.

        Args:
            value: Temperature value
            from_unit: Source unit (celsius, fahrenheit, kelvin)

        Returns:
            Temperature in °C
        """
        unit = from_unit.lower()
        if unit in ["fahrenheit", "f", "°f"]:
            return (value - 32) * 5 / 9
        if unit in ["kelvin", "k"]:
            return value - 273.15
        return value

    def convert_wind_speed(self, value: float, from_unit: str) -> float:
        """
        Convert wind speed to m/s.

        Args:
            value: Wind speed value
            from_unit: Source unit (m/s, km/h, mph, knots)

        Returns:
            Wind speed in m/s
        """
        unit = from_unit.lower()
        if unit in ["km/h", "kmh", "kph"]:
            return value / 3.6
        if unit in ["mph", "mi/h"]:
            return value * 0.44704
        if unit in ["knots", "kt"]:
            return value * 0.514444
        return value

    def convert_radiation(self, value: float, from_unit: str) -> float:
        """
        Convert daily solar radiation to MJ m⁻² day⁻¹.

        Args:
            value: Radiation value
            from_unit: Source unit (MJ/m2/day, W/m2 daily mean, kWh/m2/day)

        Returns:
            Radiation in MJ m⁻² day⁻¹
        """
        unit = from_unit.lower().replace("²", "2").replace(" ", "")
        if unit in ["w/m2", "wm-2", "w"]:
            return value * W_M2_TO_MJ_DAY
        if unit in ["kwh/m2/day", "kwh/m2", "kwh"]:
            return value * KWH_TO_MJ
        if unit not in ["mj/m2/day", "mj/m2", "mj"]:
            self.logger.warning(f"Unknown radiation unit '{from_unit}', assuming MJ/m2/day")
        return value

    def convert_precipitation(self, value: float, from_unit: str) -> float:
        """Convert precipitation to mm (inches and cm supported)."""
        unit = from_unit.lower()
        if unit in ["in", "inch", "inches"]:
            return value * 25.4
        if unit in ["cm"]:
            return value * 10
        return value
