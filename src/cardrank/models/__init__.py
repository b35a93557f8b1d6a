"""Card models shared across ingestion, scoring and API layers."""

from .card import (
    ATTRIBUTE_KEYS,
    HITTER_ATTRIBUTES,
    PITCHER_ATTRIBUTES,
    PITCHER_POSITIONS,
    NormalizedItem,
    Pitch,
    RawCardItem,
    Role,
    normalize_position,
    normalize_quirk_name,
    parse_height_inches,
    parse_number,
)

__all__ = [
    "ATTRIBUTE_KEYS",
    "HITTER_ATTRIBUTES",
    "PITCHER_ATTRIBUTES",
    "PITCHER_POSITIONS",
    "NormalizedItem",
    "Pitch",
    "RawCardItem",
    "Role",
    "normalize_position",
    "normalize_quirk_name",
    "parse_height_inches",
    "parse_number",
]
