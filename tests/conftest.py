"""
Pytest configuration and shared fixtures for all tests.
"""

import math
import sys
from datetime import date, timedelta
from pathlib import Path

import pytest

# Add the project root to sys.path so we can import from src
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from src.pistachio_climate.models import DailyWeatherRecord, EnrichedDailyRecord  # noqa: E402


def daterange(start: date, end: date):
    """Dates from ``start`` to ``end``, inclusive."""
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def synthetic_record(day: date) -> DailyWeatherRecord:
    """Mediterranean-like day: cold January, hot July, rain in the cool months only."""
    doy = day.timetuple().tm_yday
    t_mean = 15.0 - 10.0 * math.cos(2 * math.pi * (doy - 15) / 365)
    wet_season = day.month in (1, 2, 3, 4, 10, 11, 12)
    return DailyWeatherRecord(
        date=day.isoformat(),
        temperature_max=t_mean + 7.0,
        temperature_min=t_mean - 7.0,
        temperature_avg=t_mean,
        humidity=60.0,
        precipitation=3.0 if wet_season and doy % 4 == 0 else 0.0,
        wind_speed=2.0,
        solar_radiation=18.0,
    )


@pytest.fixture
def synthetic_series():
    """Factory for a synthetic daily series between two dates (inclusive)."""
    def build(start: date, end: date):
        return [synthetic_record(day) for day in daterange(start, end)]
    return build


@pytest.fixture
def enriched_day():
    """Factory for an EnrichedDailyRecord with explicit derived values."""
    def build(day: date, **values):
        defaults = {
            "temperature_max": 20.0,
            "temperature_min": 10.0,
            "temperature_avg": 15.0,
        }
        defaults.update(values)
        return EnrichedDailyRecord(date=day.isoformat(), day=day, **defaults)
    return build


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test running the full pipeline"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as unit test (no external dependencies)"
    )
