"""
Agronomic calendar windows for pistachio.

Every component that buckets days by season goes through this module, so the
aggregator and the profile builder always agree on which winter a November
day belongs to.

Windows:
    - Chill window: November to February (1 Nov up to, not including, 1 Mar)
    - GDD / growing-season window: April to October, inclusive
    - Spring frost window: March and April (flowering)
    - Summer: June to August
"""

from datetime import date

CHILL_MONTHS = frozenset({11, 12, 1, 2})
GDD_MONTHS = frozenset(range(4, 11))
SPRING_FROST_MONTHS = frozenset({3, 4})
SUMMER_MONTHS = frozenset({6, 7, 8})

# Nominal window lengths (non-leap year), used to tell complete years from partial ones
CHILL_WINDOW_DAYS = 120
GDD_WINDOW_DAYS = 214
SPRING_FROST_WINDOW_DAYS = 61
SUMMER_WINDOW_DAYS = 92
YEAR_DAYS = 365


class WindowClassifier:
    """Pure predicates over a calendar date."""

    @staticmethod
    def month_of(day: date) -> int:
        """Calendar month, 1 (January) to 12 (December)."""
        return day.month

    @classmethod
    def is_chill_window(cls, day: date) -> bool:
        return cls.month_of(day) in CHILL_MONTHS

    @classmethod
    def is_gdd_window(cls, day: date) -> bool:
        return cls.month_of(day) in GDD_MONTHS

    @classmethod
    def is_spring_frost_window(cls, day: date) -> bool:
        return cls.month_of(day) in SPRING_FROST_MONTHS

    @classmethod
    def is_summer(cls, day: date) -> bool:
        return cls.month_of(day) in SUMMER_MONTHS

    @classmethod
    def winter_campaign_year(cls, day: date) -> int:
        """
        Campaign a winter day belongs to.

        November and December are labelled with the following year, so
        Nov/Dec 2023 and Jan/Feb 2024 are all campaign 2024.
        """
        return day.year + 1 if cls.month_of(day) >= 11 else day.year
