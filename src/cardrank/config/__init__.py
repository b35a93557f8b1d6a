"""Configuration helpers for position profiles and runtime settings."""

from .positions import (
    FIELDING_POSITIONS,
    OUT_OF_POSITION_FACTORS,
    SECONDARY_POSITION_FACTOR,
    PositionProfile,
    get_profile,
    iter_profiles,
    normalize_weights,
)
from .settings import Settings

__all__ = [
    "FIELDING_POSITIONS",
    "OUT_OF_POSITION_FACTORS",
    "SECONDARY_POSITION_FACTOR",
    "PositionProfile",
    "Settings",
    "get_profile",
    "iter_profiles",
    "normalize_weights",
]
