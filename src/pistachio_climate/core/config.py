"""
Configuration module for the pistachio climate analysis system.

Loads configuration from a JSON file and environment variables, on top of
built-in defaults so the analysis runs without any file at all.
"""

import copy
import json
import os
from typing import Dict, Any, Optional
from pathlib import Path

from . import constants
from .date_utils import DateUtils


DEFAULTS: Dict[str, Any] = {
    "crop": {
        "kc_initial": constants.DEFAULT_KC_INITIAL,
        "kc_development": constants.DEFAULT_KC_DEVELOPMENT,
        "kc_mid": constants.DEFAULT_KC_MID,
        "kc_late": constants.DEFAULT_KC_LATE,
        "bud_break": constants.DEFAULT_BUD_BREAK_DOY,
        "flowering": constants.DEFAULT_FLOWERING_DOY,
        "fruit_development": constants.DEFAULT_FRUIT_DEVELOPMENT_DOY,
        "harvest": constants.DEFAULT_HARVEST_DOY,
    },
    "processing": {
        "timezone": constants.DEFAULT_TIMEZONE,
        "min_profile_days": constants.MIN_PROFILE_DAYS,
    },
    "units": {
        "temperature": "celsius",
        "wind_speed": "m/s",
        "solar_radiation": "MJ/m2/day",
        "precipitation": "mm",
    },
    "logging": {
        "level": "INFO",
        "to_file": False,
    },
    "catalog": {
        "file": None,
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """Configuration manager for the application."""

    def __init__(self, config_file: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration JSON file. If None, uses CONFIG_FILE env var
                        or 'config.json' when present. An explicitly requested file must exist.
            overrides: Extra settings applied after the file (mainly for tests)
        """
        explicit = config_file or os.getenv("CONFIG_FILE")
        self.config_file = explicit or "config.json"
        self.config: Dict[str, Any] = copy.deepcopy(DEFAULTS)
        self._load_config(required=explicit is not None)
        if overrides:
            self.config = _merge(self.config, overrides)
        self._override_from_env()
        self._validate_config()

    def _load_config(self, required: bool) -> None:
        """Load configuration from JSON file."""
        config_path = Path(self.config_file)
        if not config_path.exists():
            if required:
                raise FileNotFoundError(f"Configuration file not found: {self.config_file}")
            return

        with open(config_path, "r", encoding="utf-8") as f:
            self.config = _merge(self.config, json.load(f))

    def _override_from_env(self) -> None:
        """Override configuration with environment variables."""
        if os.getenv("PISTACHIO_TIMEZONE"):
            self.config["processing"]["timezone"] = os.getenv("PISTACHIO_TIMEZONE")

        if os.getenv("PISTACHIO_MIN_PROFILE_DAYS"):
            try:
                self.config["processing"]["min_profile_days"] = int(os.getenv("PISTACHIO_MIN_PROFILE_DAYS"))
            except ValueError:
                raise ValueError("PISTACHIO_MIN_PROFILE_DAYS must be an integer")

        if os.getenv("PISTACHIO_LOG_LEVEL"):
            self.config["logging"]["level"] = os.getenv("PISTACHIO_LOG_LEVEL")

        if os.getenv("PISTACHIO_CATALOG_FILE"):
            self.config["catalog"]["file"] = os.getenv("PISTACHIO_CATALOG_FILE")

    def _validate_config(self) -> None:
        """Validate crop parameters and processing settings."""
        crop = self.config.get("crop", {})

        missing_keys = [f"crop.{key}" for key in DEFAULTS["crop"] if key not in crop]
        if missing_keys:
            raise ValueError(
                f"Missing required configuration keys: {', '.join(missing_keys)}"
            )

        for key in ("kc_initial", "kc_development", "kc_mid", "kc_late"):
            if not isinstance(crop[key], (int, float)) or crop[key] <= 0:
                raise ValueError(f"Invalid crop.{key}: {crop[key]} (must be a positive number)")

        stages = [crop["bud_break"], crop["flowering"], crop["fruit_development"], crop["harvest"]]
        if not all(isinstance(s, int) and 1 <= s <= 366 for s in stages):
            raise ValueError(f"Invalid phenology stages: {stages} (must be days of year 1-366)")
        if stages != sorted(stages) or len(set(stages)) != len(stages):
            raise ValueError(
                f"Phenology stages must be strictly increasing "
                f"(bud_break < flowering < fruit_development < harvest): {stages}"
            )

        min_days = self.config["processing"].get("min_profile_days")
        if not isinstance(min_days, int) or min_days < 1:
            raise ValueError(f"Invalid processing.min_profile_days: {min_days}")

        # Raises ValueError for an unknown zone
        DateUtils.parse_timezone(self.config["processing"].get("timezone") or "")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key (supports dot notation).

        Args:
            key: Configuration key (e.g., 'crop.kc_mid')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    @property
    def crop_parameters(self) -> "CropParameters":
        """Crop coefficient curve and phenology breakpoints."""
        from ..models.crop import CropParameters

        crop = self.config["crop"]
        return CropParameters(
            kc_initial=float(crop["kc_initial"]),
            kc_development=float(crop["kc_development"]),
            kc_mid=float(crop["kc_mid"]),
            kc_late=float(crop["kc_late"]),
            bud_break=crop["bud_break"],
            flowering=crop["flowering"],
            fruit_development=crop["fruit_development"],
            harvest=crop["harvest"],
        )

    @property
    def timezone(self) -> str:
        """Timezone used to assign hourly observations to local days."""
        return self.get("processing.timezone", constants.DEFAULT_TIMEZONE)

    @property
    def min_profile_days(self) -> int:
        """Minimum number of valid days before building a cultivar profile."""
        return self.get("processing.min_profile_days", constants.MIN_PROFILE_DAYS)

    @property
    def log_level(self) -> str:
        return self.get("logging.level", "INFO")

    @property
    def log_to_file(self) -> bool:
        return bool(self.get("logging.to_file", False))

    @property
    def catalog_file(self) -> Optional[str]:
        """Optional JSON file replacing the built-in cultivar catalog."""
        return self.get("catalog.file")

    def __repr__(self) -> str:
        """String representation of config."""
        return f"Config(file={self.config_file}, timezone={self.timezone})"
