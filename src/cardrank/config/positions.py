"""Position weight profiles for the eight fielding positions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional


# Attribute ceilings used when pinning a synthetic best-possible card.
BATTING_MAX = 125.0
FIELDING_MAX = 99.0

BATTING_ATTRIBUTES = frozenset(
    {
        "contact_left",
        "contact_right",
        "power_left",
        "power_right",
        "plate_vision",
        "plate_discipline",
        "batting_clutch",
    }
)


def normalize_weights(weights: Mapping[str, float]) -> Dict[str, float]:
    """Scale positive weights to sum to 1; non-positive entries become 0."""

    total = sum(value for value in weights.values() if value > 0)
    if total <= 0:
        return dict(weights)
    return {key: (value / total if value > 0 else 0.0) for key, value in weights.items()}


def attribute_ceiling(feature: str) -> float:
    return BATTING_MAX if feature in BATTING_ATTRIBUTES else FIELDING_MAX


@dataclass(frozen=True)
class PositionProfile:
    position: str
    weights: Mapping[str, float]
    defense_multiplier: float
    switch_bonus: float = 0.85
    left_bonus: float = -0.5
    height_slope: float = -0.75 / 12

    def max_card(self) -> Dict[str, float]:
        """Every listed attribute pinned to its legal maximum."""

        return {
            feature: attribute_ceiling(feature)
            for feature, weight in self.weights.items()
            if weight > 0
        }


_ZERO_TAIL = {
    "baserunning_aggression": 0.0,
    "blocking": 0.0,
    "hitting_durability": 0.0,
    "fielding_durability": 0.0,
}


def _profile(position: str, raw_weights: Mapping[str, float], **tuning: float) -> PositionProfile:
    weights = {**_ZERO_TAIL, **raw_weights}
    return PositionProfile(position=position, weights=normalize_weights(weights), **tuning)


_POSITION_PROFILES: Dict[str, PositionProfile] = {
    "C": _profile(
        "C",
        {
            "blocking": 1.3, "arm_strength": 1.1, "fielding_ability": 0.7, "arm_accuracy": 0.6,
            "reaction_time": 0.7, "speed": 0.7, "baserunning_ability": 0.2,
            "contact_left": 1.1, "contact_right": 1.1, "power_left": 1.3, "power_right": 1.3,
            "plate_vision": 0.9, "plate_discipline": 0.2, "batting_clutch": 1.2,
            "bunting_ability": 0.05, "drag_bunting_ability": 0.05,
        },
        defense_multiplier=1.0,
    ),
    "1B": _profile(
        "1B",
        {
            "power_left": 1.3, "power_right": 1.3, "contact_left": 1.2, "contact_right": 1.2,
            "batting_clutch": 1.1, "plate_vision": 1.0, "plate_discipline": 0.3,
            "fielding_ability": 1.15, "reaction_time": 1.05, "arm_strength": 0.3, "arm_accuracy": 0.3,
            "speed": 1.0, "baserunning_ability": 0.2,
            "bunting_ability": 0.05, "drag_bunting_ability": 0.05,
        },
        defense_multiplier=0.6,
    ),
    "2B": _profile(
        "2B",
        {
            "fielding_ability": 1.2, "reaction_time": 1.3, "arm_accuracy": 1.1, "arm_strength": 0.6,
            "speed": 1.1, "baserunning_ability": 0.8,
            "contact_left": 1.2, "contact_right": 1.2, "power_left": 1.1, "power_right": 1.1,
            "plate_vision": 1.1, "plate_discipline": 0.5, "batting_clutch": 1.0,
            "bunting_ability": 0.05, "drag_bunting_ability": 0.05,
        },
        defense_multiplier=0.9,
        height_slope=0.5 / 12,
    ),
    "3B": _profile(
        "3B",
        {
            "reaction_time": 1.4, "fielding_ability": 1.2, "arm_strength": 1.3, "arm_accuracy": 1.0,
            "power_left": 1.5, "power_right": 1.5, "contact_left": 1.1, "contact_right": 1.1,
            "plate_vision": 0.9, "plate_discipline": 0.3, "batting_clutch": 1.0,
            "speed": 0.8, "baserunning_ability": 0.3,
            "bunting_ability": 0.05, "drag_bunting_ability": 0.05,
        },
        defense_multiplier=0.8,
    ),
    "SS": _profile(
        "SS",
        {
            "fielding_ability": 1.6, "reaction_time": 1.6, "arm_accuracy": 1.2, "arm_strength": 1.1,
            "speed": 1.2, "baserunning_ability": 1.1,
            "contact_left": 1.2, "contact_right": 1.2, "power_left": 1.0, "power_right": 1.0,
            "plate_vision": 1.0, "plate_discipline": 0.5, "batting_clutch": 1.0,
            "bunting_ability": 0.05, "drag_bunting_ability": 0.05,
        },
        defense_multiplier=1.2,
        height_slope=0.5 / 12,
    ),
    "LF": _profile(
        "LF",
        {
            "power_left": 1.4, "power_right": 1.4, "contact_left": 1.25, "contact_right": 1.25,
            "batting_clutch": 1.5, "plate_vision": 1.0, "plate_discipline": 0.3,
            "fielding_ability": 0.9, "reaction_time": 1.0, "arm_strength": 0.5, "arm_accuracy": 0.6,
            "speed": 0.8, "baserunning_ability": 0.2,
            "bunting_ability": 0.05, "drag_bunting_ability": 0.05,
        },
        defense_multiplier=0.7,
    ),
    "CF": _profile(
        "CF",
        {
            "reaction_time": 1.5, "fielding_ability": 1.4, "arm_strength": 1.0, "arm_accuracy": 1.0,
            "speed": 1.6, "baserunning_ability": 0.8,
            "contact_left": 1.2, "contact_right": 1.2, "power_left": 1.0, "power_right": 1.0,
            "plate_vision": 1.1, "plate_discipline": 0.5, "batting_clutch": 1.0,
            "bunting_ability": 0.05, "drag_bunting_ability": 0.05,
        },
        defense_multiplier=1.1,
        switch_bonus=0.9,
    ),
    "RF": _profile(
        "RF",
        {
            "arm_strength": 1.5, "arm_accuracy": 1.3, "fielding_ability": 1.0, "reaction_time": 1.0,
            "power_left": 1.5, "power_right": 1.5, "contact_left": 1.1, "contact_right": 1.1,
            "plate_vision": 1.0, "plate_discipline": 0.5, "batting_clutch": 1.2,
            "speed": 0.8, "baserunning_ability": 0.2,
            "bunting_ability": 0.05, "drag_bunting_ability": 0.05,
        },
        defense_multiplier=0.9,
    ),
}

FIELDING_POSITIONS: tuple[str, ...] = tuple(_POSITION_PROFILES)

# Defensive rating penalty applied when a card is scored away from its primary spot.
SECONDARY_POSITION_FACTOR = 0.95

OUT_OF_POSITION_FACTORS: Mapping[str, Mapping[str, float]] = {
    "C": {"1B": 0.85},
    "1B": {"3B": 0.90},
    "2B": {"1B": 0.85, "SS": 0.90},
    "SS": {"1B": 0.85, "2B": 0.90, "3B": 0.85, "LF": 0.85, "CF": 0.85, "RF": 0.85},
    "3B": {"1B": 0.90},
    "CF": {"LF": 0.90, "RF": 0.90},
    "LF": {"RF": 0.90},
    "RF": {"LF": 0.90},
}


def iter_profiles() -> Iterable[PositionProfile]:
    """Return an iterator over all configured position profiles."""

    return _POSITION_PROFILES.values()


def get_profile(position: Optional[str]) -> Optional[PositionProfile]:
    """Profile for a position code, or None for DH, pitchers and unknown labels."""

    if not position:
        return None
    return _POSITION_PROFILES.get(position.strip().upper())
