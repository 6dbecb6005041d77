"""
Core utilities for the pistachio climate analysis system.

Provides configuration, logging, calendar windows and date handling.
"""

from .config import Config
from .logger import setup_logger, LoggerContext
from . import constants
from .date_utils import DateUtils
from .windows import WindowClassifier

__all__ = [
    "Config",
    "setup_logger",
    "LoggerContext",
    "constants",
    "DateUtils",
    "WindowClassifier",
]
