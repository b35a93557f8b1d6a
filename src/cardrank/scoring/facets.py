"""Narrow skill facets on the same 0-125 scale as Meta Overall."""

from __future__ import annotations

from typing import Dict, Literal, Mapping, Optional, get_args

from cardrank.config.positions import BATTING_MAX, normalize_weights
from cardrank.models import RawCardItem, Role, normalize_position
from cardrank.scoring.core import score
from cardrank.scoring.profiles import PositionProfileTable


Facet = Literal["power", "contact", "vs_left", "vs_right", "bunting", "baserunning", "defense"]
FACETS: tuple[str, ...] = get_args(Facet)

_FACET_BOOSTS: Mapping[str, Mapping[str, float]] = {
    "power": {"power_left": 4.0, "power_right": 4.0, "contact_left": 1.0, "contact_right": 1.0},
    "contact": {"contact_left": 4.0, "contact_right": 4.0, "power_left": 1.0, "power_right": 1.0},
    "vs_left": {"contact_left": 2.0, "power_left": 2.0, "contact_right": 2.0, "power_right": 2.0},
    "vs_right": {"contact_left": 2.0, "power_left": 2.0, "contact_right": 2.0, "power_right": 2.0},
    "baserunning": {"speed": 15.0, "baserunning_ability": 15.0},
    "defense": {"fielding_ability": 10.0, "reaction_time": 10.0, "arm_strength": 10.0, "arm_accuracy": 10.0},
}

# Off-side split attributes overwritten with the on-side value, per facet.
_SPLIT_MIRRORS: Mapping[str, Mapping[str, str]] = {
    "vs_left": {"contact_right": "contact_left", "power_right": "power_left"},
    "vs_right": {"contact_left": "contact_right", "power_left": "power_right"},
}

BUNT_WEIGHTS: Mapping[str, float] = {
    "drag_bunting_ability": 0.55,
    "bunting_ability": 0.35,
    "speed": 0.10,
}


def facet_weights(base: Mapping[str, float], facet: str, position: str) -> Dict[str, float]:
    weights = dict(base)
    for key, mult in _FACET_BOOSTS.get(facet, {}).items():
        weights[key] = weights.get(key, 0.0) * mult
    if facet == "defense" and position == "C":
        weights["blocking"] = weights.get("blocking", 0.0) * 10.0
    if facet == "baserunning":
        weights["baserunning_aggression"] = weights.get("baserunning_aggression", 0.0) + 1.0
    return normalize_weights(weights)


def bunting_composite(attributes: Mapping[str, float]) -> float:
    composite = sum(weight * attributes.get(key, 0.0) for key, weight in BUNT_WEIGHTS.items())
    return min(composite, BATTING_MAX)


class FacetComputer:
    def __init__(self, profiles: PositionProfileTable):
        self._profiles = profiles

    def compute(self, attributes: Mapping[str, float], position: Optional[str], facet: str) -> Optional[float]:
        """Facet value for attributes scored at ``position``; None off the field."""

        if facet not in FACETS:
            raise ValueError(f"Unknown facet {facet!r}")
        profile = self._profiles.profile(position)
        if profile is None:
            return None
        scale = self._profiles.calibration_scale(profile.position)
        if scale is None:
            return None

        if facet == "bunting":
            return bunting_composite(attributes)

        scored = dict(attributes)
        for target, source in _SPLIT_MIRRORS.get(facet, {}).items():
            if source in attributes:
                scored[target] = attributes[source]

        y = score(
            scored,
            self._profiles.repository.get_model(Role.HITTER),
            position=profile.position,
            scales=facet_weights(profile.weights, facet, profile.position),
            include_position_dummies=False,
            only_listed=True,
        )
        if y is None:
            return None
        return min(y * scale, BATTING_MAX)

    def compute_for_item(self, item: RawCardItem, facet: str) -> Optional[float]:
        """Facet at the display position, falling back to the primary position."""

        if item.is_pitcher:
            return None
        value = self.compute(item.attributes, normalize_position(item.display_position), facet)
        if value is not None:
            return value
        primary = normalize_position(item.primary_position)
        if primary is None:
            return None
        return self.compute(item.attributes, primary, facet)

    def compute_all(self, item: RawCardItem) -> Dict[str, Optional[float]]:
        return {facet: self.compute_for_item(item, facet) for facet in FACETS}
