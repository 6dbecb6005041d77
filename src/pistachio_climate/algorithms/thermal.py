"""
Thermal index estimators.

Growing degree days plus chill and frost hours estimated from daily extremes.
Without sub-daily data, the fraction of the day below a threshold is
approximated by linear interpolation between Tmin and Tmax:

    hours = 24 · (threshold − Tmin) / (Tmax − Tmin), clamped to [0, 24]
"""

import math

from ..core import constants


def _finite(value: float) -> float:
    return value if isinstance(value, (int, float)) and math.isfinite(value) else 0.0


def hours_below_threshold(t_max: float, t_min: float, threshold: float) -> float:
    """
    Estimate hours of the day spent below ``threshold``.

    Args:
        t_max: Daily maximum temperature (°C)
        t_min: Daily minimum temperature (°C)
        threshold: Temperature threshold (°C)

    Returns:
        Hours in [0, 24]
    """
    t_max = _finite(t_max)
    t_min = _finite(t_min)

    if t_max <= threshold:
        return constants.HOURS_PER_DAY
    if t_min >= threshold:
        return 0.0

    span = t_max - t_min
    if span == 0:
        return constants.HOURS_PER_DAY if t_max < threshold else 0.0

    hours = constants.HOURS_PER_DAY * (threshold - t_min) / span
    return max(0.0, min(constants.HOURS_PER_DAY, hours))


def chill_hours(t_max: float, t_min: float) -> float:
    """Hours below 7.2 °C."""
    return hours_below_threshold(t_max, t_min, constants.CHILL_THRESHOLD)


def frost_hours(t_max: float, t_min: float) -> float:
    """Hours below 0 °C."""
    return hours_below_threshold(t_max, t_min, constants.FROST_THRESHOLD)


def growing_degree_days(
    t_max: float,
    t_min: float,
    base_temperature: float = constants.GDD_BASE_TEMPERATURE
) -> float:
    """
    Daily growing degree days, ``max(0, Tmean − base)``.

    Args:
        t_max: Daily maximum temperature (°C)
        t_min: Daily minimum temperature (°C)
        base_temperature: Base temperature (°C), 7 °C for pistachio

    Returns:
        GDD (°C·day)
    """
    t_mean = (_finite(t_max) + _finite(t_min)) / 2
    return max(0.0, t_mean - base_temperature)
