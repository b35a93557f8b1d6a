"""Position-recalibrated, quirk-adjusted Meta Overall."""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from cardrank.config.positions import BATTING_MAX, PositionProfile
from cardrank.models import RawCardItem, Role, normalize_position, parse_height_inches
from cardrank.scoring.core import score
from cardrank.scoring.profiles import PositionProfileTable
from cardrank.scoring.quirks import adjusted as apply_quirks, blend_headroom


logger = logging.getLogger(__name__)

BASE_HEIGHT_IN = 72
MIN_HEIGHT_IN = 60
MAX_HEIGHT_IN = 84

# Designated hitters and other unprofiled spots use the base model minus these.
FALLBACK_ZERO_SCALES: Mapping[str, float] = {
    "hitting_durability": 0.0,
    "fielding_durability": 0.0,
    "baserunning_aggression": 0.0,
}
FALLBACK_SWITCH_BONUS = 1.0
FALLBACK_LEFT_BONUS = -0.5
FALLBACK_HEIGHT_SLOPE = -0.75 / 12


def defense_tier_bonus(fielding_ability: Optional[float]) -> float:
    value = fielding_ability or 0.0
    if value >= 85:
        return 1.0
    if value >= 80:
        return 0.7
    if value >= 75:
        return 0.4
    if value >= 65:
        return 0.2
    return 0.0


def handedness_bonus(bat_hand: Optional[str], *, switch: float, left: float) -> float:
    hand = (bat_hand or "").upper()
    if hand == "S":
        return switch
    if hand == "L":
        return left
    return 0.0


def height_bonus(height: Optional[str], slope: float) -> float:
    inches = parse_height_inches(height)
    if inches is None:
        return 0.0
    clamped = max(MIN_HEIGHT_IN, min(MAX_HEIGHT_IN, inches))
    return (clamped - BASE_HEIGHT_IN) * slope


class MetaScorer:
    """Meta Overall for hitters; pitchers pass their True Overall through."""

    def __init__(self, profiles: PositionProfileTable):
        self._profiles = profiles

    def compute(self, item: RawCardItem, true_ovr: Optional[float]) -> Optional[float]:
        if item.role is Role.PITCHER:
            return true_ovr
        profile = self._profiles.profile(normalize_position(item.display_position))
        if profile is None:
            return self._fallback(item, true_ovr)
        return self._profiled(item, profile, true_ovr)

    def _profiled(self, item: RawCardItem, profile: PositionProfile, true_ovr: Optional[float]) -> Optional[float]:
        core0 = self._profiles.core_score(item.attributes, profile)
        scale = self._profiles.calibration_scale(profile.position)
        if core0 is None or scale is None:
            logger.debug("No %s profile score for %s; keeping true overall", profile.position, item.item_id)
            return true_ovr
        y = core0 * scale

        adjusted = apply_quirks(item.attributes, item.quirks)
        core_q = self._profiles.core_score(adjusted, profile)
        if core_q is not None:
            y = blend_headroom(y, (core_q - core0) * scale)

        flat = (
            defense_tier_bonus(adjusted.get("fielding_ability")) * profile.defense_multiplier
            + handedness_bonus(item.bat_hand, switch=profile.switch_bonus, left=profile.left_bonus)
            + height_bonus(item.height, profile.height_slope)
        )
        y = blend_headroom(y, flat)
        return min(y, BATTING_MAX)

    def _fallback(self, item: RawCardItem, true_ovr: Optional[float]) -> Optional[float]:
        adjusted = apply_quirks(item.attributes, item.quirks)
        y = score(
            adjusted,
            self._profiles.repository.get_model(Role.HITTER),
            position=item.position,
            scales=FALLBACK_ZERO_SCALES,
        )
        if y is None:
            return true_ovr
        y += handedness_bonus(item.bat_hand, switch=FALLBACK_SWITCH_BONUS, left=FALLBACK_LEFT_BONUS)
        y += height_bonus(item.height, FALLBACK_HEIGHT_SLOPE)
        return min(y, BATTING_MAX)
