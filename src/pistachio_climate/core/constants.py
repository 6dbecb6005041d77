"""
Application-wide constants for pistachio climate analysis.

This module defines default values and constants used throughout the application.
Scoring thresholds specific to a component are defined next to that component.
"""

# Physical Constants
SOLAR_CONSTANT = 0.0820  # MJ m⁻² min⁻¹

# Solar Geometry Constants
SOLAR_DECLINATION_AMPLITUDE = 0.409
SOLAR_DECLINATION_PHASE = 1.39  # radians
DAYS_PER_YEAR = 365

# Hargreaves-Samani
HARGREAVES_COEF = 0.0023
HARGREAVES_TEMP_OFFSET = 17.8  # °C

# Daily ET sanity range (mm/day)
MAX_DAILY_ET = 20.0

# Thermal thresholds
GDD_BASE_TEMPERATURE = 7.0  # °C
CHILL_THRESHOLD = 7.2  # °C
FROST_THRESHOLD = 0.0  # °C
HOURS_PER_DAY = 24.0
HEAT_STRESS_TEMPERATURE = 40.0  # °C, Tmax above this is a heat-stress day
EXTREME_COLD_TEMPERATURE = -5.0  # °C, Tmin below this is an extreme-cold day

# Default crop coefficients (FAO-56 style four-stage curve)
DEFAULT_KC_INITIAL = 0.45
DEFAULT_KC_DEVELOPMENT = 0.75
DEFAULT_KC_MID = 1.10
DEFAULT_KC_LATE = 0.85

# Phenology breakpoints (day of year)
DEFAULT_BUD_BREAK_DOY = 90
DEFAULT_FLOWERING_DOY = 120
DEFAULT_FRUIT_DEVELOPMENT_DOY = 180
DEFAULT_HARVEST_DOY = 270

# Data completeness
# Minimum valid days before a cultivar profile is considered reliable
MIN_PROFILE_DAYS = 300
# Fraction of a window's nominal days required to treat a year/campaign as complete
MIN_WINDOW_COVERAGE = 0.8

# Default processing timezone for hourly data
DEFAULT_TIMEZONE = "UTC"
