"""
Date and timezone utilities.

Centralizes parsing of record dates and the local-day assignment of hourly
observations, with proper timezone handling.
"""

import logging
from datetime import date, datetime
from typing import Any, Optional

import pytz
from pytz.tzinfo import BaseTzInfo


class DateUtils:
    """Utilities for date and timezone handling."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize date utilities.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def parse_date(value: Any) -> Optional[date]:
        """
        Parse a record date.

        Accepts ``date``/``datetime`` objects and ISO strings, with or without
        a time part (``2024-01-15`` or ``2024-01-15T00:00:00``).

        Args:
            value: Raw date value

        Returns:
            Calendar date, or None if the value cannot be parsed
        """
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if not isinstance(value, str):
            return None

        text = value.strip()
        if not text:
            return None

        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None

    @staticmethod
    def day_of_year(day: date) -> int:
        """Day of year (1-365/366)."""
        return day.timetuple().tm_yday

    @staticmethod
    def parse_timezone(timezone_str: str) -> BaseTzInfo:
        """
        Parse timezone string to pytz timezone object.

        Args:
            timezone_str: Timezone string (e.g., 'Europe/Madrid', 'UTC')

        Returns:
            pytz timezone object

        Raises:
            ValueError: If timezone is invalid
        """
        try:
            return pytz.timezone(timezone_str)
        except pytz.exceptions.UnknownTimeZoneError:
            raise ValueError(f"Invalid timezone: {timezone_str}")

    def parse_datetime(self, value: Any) -> Optional[datetime]:
        """
        Parse an hourly timestamp.

        Args:
            value: ``datetime`` or ISO string (``2024-01-15T13:00``, optional offset or ``Z``)

        Returns:
            Datetime (naive or aware as given), or None if unparseable
        """
        if isinstance(value, datetime):
            return value
        if not isinstance(value, str) or not value.strip():
            return None

        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"

        try:
            return datetime.fromisoformat(text)
        except ValueError:
            self.logger.debug(f"Unparseable timestamp: {value!r}")
            return None

    def local_date(self, dt: datetime, timezone_str: str) -> date:
        """
        Calendar date of a timestamp in the given timezone.

        Naive timestamps are assumed to already be local to ``timezone_str``;
        aware timestamps are converted into it.

        Args:
            dt: Timestamp
            timezone_str: Timezone string

        Returns:
            Local calendar date
        """
        tz = self.parse_timezone(timezone_str)

        if dt.tzinfo is None:
            local = tz.localize(dt)
        else:
            local = dt.astimezone(tz)

        return local.date()
