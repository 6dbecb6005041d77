"""
Crop parameter models.

Contains the pistachio crop coefficient curve and phenology breakpoints.
"""

from dataclasses import dataclass

from ..core import constants


@dataclass(frozen=True)
class CropParameters:
    """Four-stage Kc curve anchored at phenology days of year."""

    kc_initial: float = constants.DEFAULT_KC_INITIAL
    kc_development: float = constants.DEFAULT_KC_DEVELOPMENT
    kc_mid: float = constants.DEFAULT_KC_MID
    kc_late: float = constants.DEFAULT_KC_LATE

    bud_break: int = constants.DEFAULT_BUD_BREAK_DOY
    flowering: int = constants.DEFAULT_FLOWERING_DOY
    fruit_development: int = constants.DEFAULT_FRUIT_DEVELOPMENT_DOY
    harvest: int = constants.DEFAULT_HARVEST_DOY
