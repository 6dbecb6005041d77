"""
Statistics over per-year series.
"""

import math
import statistics
from typing import Dict, Mapping, Sequence, TypeVar

K = TypeVar("K")


def percentile(values: Sequence[float], p: float) -> float:
    """
    Interpolated percentile (R-7 / spreadsheet PERCENTILE definition).

    The rank ``(n − 1) · p`` is interpolated linearly between its floor and
    ceiling in the sorted series.

    Args:
        values: Sample values
        p: Fraction in [0, 1] (0.1 for P10, 0.9 for P90)

    Returns:
        Percentile value, 0 for an empty sample
    """
    if not values:
        return 0.0

    ordered = sorted(values)
    idx = (len(ordered) - 1) * p
    lo = math.floor(idx)
    hi = math.ceil(idx)
    if lo == hi:
        return float(ordered[lo])

    weight = idx - lo
    return ordered[lo] * (1 - weight) + ordered[hi] * weight


def mean(values: Sequence[float]) -> float:
    return statistics.fmean(values) if values else 0.0


def median(values: Sequence[float]) -> float:
    return float(statistics.median(values)) if values else 0.0


def linear_trend(values: Sequence[float]) -> float:
    """
    Least-squares slope of ``values`` against their index.

    Returns:
        Slope per step, 0 for fewer than two values
    """
    n = len(values)
    if n < 2:
        return 0.0

    x_sum = n * (n - 1) / 2
    y_sum = sum(values)
    xy_sum = sum(i * v for i, v in enumerate(values))
    x2_sum = sum(i * i for i in range(n))

    denom = n * x2_sum - x_sum * x_sum
    if denom == 0:
        return 0.0

    return (n * xy_sum - x_sum * y_sum) / denom


def coefficient_of_variation(values: Sequence[float]) -> float:
    """Population coefficient of variation, in percent."""
    if not values:
        return 0.0
    avg = statistics.fmean(values)
    if avg == 0:
        return 0.0
    return statistics.pstdev(values) / abs(avg) * 100


def complete_periods(
    values: Mapping[K, float],
    day_counts: Mapping[K, int],
    nominal_days: int,
    min_coverage: float
) -> Dict[K, float]:
    """
    Keep the periods (years, campaigns) that cover enough of their window.

    A series that starts on 1 January still has a half winter campaign at each
    end; averaging it with the full ones would understate chill. Partial
    periods are dropped whenever at least one complete period exists, and all
    periods are kept otherwise.

    Args:
        values: Value per period
        day_counts: Days observed in the window per period
        nominal_days: Days in a full window
        min_coverage: Fraction of ``nominal_days`` that makes a period complete

    Returns:
        The selected subset of ``values``
    """
    required = nominal_days * min_coverage
    complete = {k: v for k, v in values.items() if day_counts.get(k, 0) >= required}
    return complete if complete else dict(values)


def complete_or_merged_periods(
    values: Mapping[K, float],
    day_counts: Mapping[K, int],
    nominal_days: int,
    min_coverage: float
) -> Dict[K, float]:
    """
    Complete periods, or every fragment summed into one period.

    Meant for winter campaigns. A January to December series holds two half
    campaigns and no complete one; taken separately each fragment shows
    about half a winter. Merged, they add up to one winter, the same total
    the single-season summary reports.

    Args:
        values: Value per period
        day_counts: Days observed in the window per period
        nominal_days: Days in a full window
        min_coverage: Fraction of ``nominal_days`` that makes a period complete

    Returns:
        The complete periods, or ``{latest_period: sum_of_values}`` when none
        is complete (empty for empty input)
    """
    if not values:
        return {}

    required = nominal_days * min_coverage
    complete = {k: v for k, v in values.items() if day_counts.get(k, 0) >= required}
    if complete:
        return complete

    return {max(values): sum(values.values())}
