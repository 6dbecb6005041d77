"""
Evapotranspiration calculation module.

Implements reference evapotranspiration (ETo) with the Hargreaves-Samani
equation and crop evapotranspiration (ETc) for pistachio with a four-stage
crop coefficient curve, following the FAO-56 methodology.

Hargreaves-Samani only needs daily extreme temperatures and the
extraterrestrial radiation for the site, so it works for every weather source
regardless of which humidity/wind/radiation fields it provides.

Reference:
    Allen, R.G., Pereira, L.S., Raes, D., Smith, M. (1998). Crop
    evapotranspiration. FAO Irrigation and Drainage Paper 56, Rome.
"""

import math
from dataclasses import dataclass
from typing import Tuple

from ..core import constants
from ..models.crop import CropParameters


@dataclass
class EvapotranspirationComponents:
    """Container for ET calculation components and intermediate values."""

    eto: float  # mm/day
    etc: float  # mm/day
    kc: float  # dimensionless

    tmean: float  # °C
    temperature_range: float  # °C
    solar_declination: float  # radians
    sunset_hour_angle: float  # radians
    ra: float  # Extraterrestrial radiation (MJ m⁻² day⁻¹)


class EvapotranspirationCalculator:
    """
    Calculator for daily ETo/ETc.

    Stateless apart from the crop parameters, so one instance can be shared
    across threads and requests.
    """

    def __init__(self, crop: CropParameters = CropParameters()):
        self.crop = crop

    def calculate_with_components(
        self,
        t_max: float,
        t_min: float,
        latitude: float,
        day_number: int
    ) -> EvapotranspirationComponents:
        """
        Calculate ETo and ETc with intermediate values.

        Args:
            t_max: Daily maximum temperature (°C)
            t_min: Daily minimum temperature (°C)
            latitude: Site latitude (degrees, -90 to 90)
            day_number: Julian day of the year (1-365/366)

        Returns:
            EvapotranspirationComponents
        """
        # SECTION 1: Solar geometry
        solar_decl = self._calculate_solar_declination(day_number)
        ra, omega_s = self._calculate_extraterrestrial_radiation(latitude, day_number)

        # SECTION 2: Reference evapotranspiration
        tmean = (t_max + t_min) / 2
        eto = self.calculate_eto(t_max, t_min, latitude, day_number)

        # SECTION 3: Crop evapotranspiration
        kc = self.crop_coefficient(day_number)
        etc = eto * kc

        return EvapotranspirationComponents(
            eto=eto,
            etc=etc,
            kc=kc,
            tmean=tmean,
            temperature_range=abs(t_max - t_min),
            solar_declination=solar_decl,
            sunset_hour_angle=omega_s,
            ra=ra,
        )

    # =========================================================================
    # SECTION 1: Solar geometry
    # =========================================================================

    @staticmethod
    def _calculate_solar_declination(day_number: int) -> float:
        """
        Calculate solar declination for a given day of the year.

        Args:
            day_number: Julian day of the year (1-365/366)

        Returns:
            Solar declination (radians)
        """
        return constants.SOLAR_DECLINATION_AMPLITUDE * math.sin(
            (2 * math.pi / constants.DAYS_PER_YEAR) * day_number - constants.SOLAR_DECLINATION_PHASE
        )

    @staticmethod
    def _calculate_extraterrestrial_radiation(
        latitude: float,
        day_number: int
    ) -> Tuple[float, float]:
        """
        Calculate extraterrestrial radiation.

        Ra = (24·60/π)·Gsc·[ωs·sinφ·sinδ + cosφ·cosδ·sinωs]

        Args:
            latitude: Latitude (degrees)
            day_number: Julian day of the year (1-365/366)

        Returns:
            Tuple of (Ra, omega_s):
                - Ra: Extraterrestrial radiation (MJ m⁻² day⁻¹), never negative
                - omega_s: Sunset hour angle (radians)
        """
        phi = math.radians(latitude)
        solar_decl = EvapotranspirationCalculator._calculate_solar_declination(day_number)

        # Clamped for polar day (ωs = π) and polar night (ωs = 0)
        x = -math.tan(phi) * math.tan(solar_decl)
        omega_s = math.acos(max(-1.0, min(1.0, x)))

        ra = (24 * 60 / math.pi) * constants.SOLAR_CONSTANT * (
            omega_s * math.sin(phi) * math.sin(solar_decl) +
            math.cos(phi) * math.cos(solar_decl) * math.sin(omega_s)
        )

        return max(0.0, ra), omega_s

    # =========================================================================
    # SECTION 2: Reference evapotranspiration
    # =========================================================================

    @staticmethod
    def calculate_eto(
        t_max: float,
        t_min: float,
        latitude: float,
        day_number: int
    ) -> float:
        """
        Hargreaves-Samani reference evapotranspiration.

        ETo = 0.0023 · (Tmean + 17.8) · sqrt(|Tmax − Tmin|) · Ra

        Args:
            t_max: Daily maximum temperature (°C)
            t_min: Daily minimum temperature (°C)
            latitude: Latitude (degrees)
            day_number: Julian day of the year (1-365/366)

        Returns:
            ETo (mm/day), clamped at 0
        """
        tmean = (t_max + t_min) / 2
        ra, _ = EvapotranspirationCalculator._calculate_extraterrestrial_radiation(latitude, day_number)

        eto = (
            constants.HARGREAVES_COEF
            * (tmean + constants.HARGREAVES_TEMP_OFFSET)
            * math.sqrt(abs(t_max - t_min))
            * ra
        )
        return max(0.0, eto)

    # =========================================================================
    # SECTION 3: Crop coefficient
    # =========================================================================

    def crop_coefficient(self, day_number: int) -> float:
        """
        Pistachio Kc for a day of the year.

        Constant ``kc_initial`` before bud-break, then linear ramps
        initial → development (to flowering), development → mid (to fruit
        development) and mid → late (to harvest), constant ``kc_late`` after.

        Args:
            day_number: Julian day of the year (1-365/366)

        Returns:
            Crop coefficient (dimensionless)
        """
        crop = self.crop

        if day_number < crop.bud_break:
            return crop.kc_initial

        stages = (
            (crop.bud_break, crop.flowering, crop.kc_initial, crop.kc_development),
            (crop.flowering, crop.fruit_development, crop.kc_development, crop.kc_mid),
            (crop.fruit_development, crop.harvest, crop.kc_mid, crop.kc_late),
        )
        for start, end, kc_start, kc_end in stages:
            if day_number < end:
                progress = (day_number - start) / (end - start)
                return kc_start + progress * (kc_end - kc_start)

        return crop.kc_late
