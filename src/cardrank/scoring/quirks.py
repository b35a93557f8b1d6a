"""Quirk-driven attribute adjustments and headroom blending."""

from __future__ import annotations

from typing import Dict, Iterable, Mapping, Tuple

from cardrank.config.positions import BATTING_MAX
from cardrank.models import normalize_quirk_name


CONTACT = ("contact_left", "contact_right")
POWER = ("power_left", "power_right")

# (attributes, delta) pairs applied when the quirk's trigger condition holds.
# Targets the card does not carry are left absent rather than created.
QUIRK_BOOSTS: Mapping[str, Tuple[Tuple[Tuple[str, ...], float], ...]] = {
    "dead red": ((CONTACT, 4.0), (POWER, 4.0)),
    "breaking ball hitter": ((CONTACT, 4.0), (POWER, 4.0)),
    "bad ball hitter": ((("plate_vision",), 6.0), (CONTACT, 2.0)),
    "first pitch hitter": ((CONTACT, 3.0), (POWER, 2.0)),
    "unfazed": ((("plate_vision",), 4.0), (CONTACT, 3.0)),
    "rally monkey": ((("batting_clutch",), 4.0), (CONTACT, 2.0)),
    "situational hitter": ((("batting_clutch",), 4.0),),
    "fighter": ((("batting_clutch",), 2.0),),
    "table setter": ((CONTACT, 2.0), (("plate_discipline",), 1.0)),
    "pinch hitter": ((("batting_clutch",), 4.0), (CONTACT, 3.0)),
    "day player": ((CONTACT, 1.0),),
    "night player": ((CONTACT, 1.0),),
    "homebody": ((CONTACT, 1.0),),
    "road warrior": ((CONTACT, 1.0),),
}

# Tax magnitude per quirk when its condition is not met.
QUIRK_INACTIVE_TAX: Mapping[str, float] = {
    "first pitch hitter": 0.2,
    "unfazed": 0.2,
    "rally monkey": 0.1,
    "situational hitter": 0.1,
    "fighter": 0.1,
    "table setter": 0.2,
    "day player": 0.1,
    "night player": 0.1,
    "homebody": 0.1,
    "road warrior": 0.1,
}

# Per-attribute multipliers of the tax magnitude; larger for the primary attribute.
QUIRK_TAX_SPREAD: Mapping[str, Tuple[Tuple[Tuple[str, ...], float], ...]] = {
    "first pitch hitter": ((CONTACT, 5.0), (POWER, 4.0)),
    "unfazed": ((("plate_vision",), 5.0), (CONTACT, 3.0)),
    "rally monkey": ((("batting_clutch",), 5.0), (CONTACT, 3.0)),
    "situational hitter": ((("batting_clutch",), 5.0),),
    "fighter": ((("batting_clutch",), 4.0),),
    "table setter": ((CONTACT, 5.0), (("plate_discipline",), 3.0)),
    "day player": ((CONTACT, 5.0),),
    "night player": ((CONTACT, 5.0),),
    "homebody": ((CONTACT, 5.0),),
    "road warrior": ((CONTACT, 5.0),),
}


def _add(target: Dict[str, float], keys: Iterable[str], delta: float) -> None:
    # Absent attributes stay absent so they never enter the renormalization sums.
    for key in keys:
        if key in target:
            target[key] = max(0.0, target[key] + delta)


def boosted(attributes: Mapping[str, float], quirks: Iterable[str]) -> Dict[str, float]:
    """Copy of ``attributes`` with every known quirk's active boost applied."""

    out = dict(attributes)
    for quirk in quirks:
        for keys, delta in QUIRK_BOOSTS.get(normalize_quirk_name(quirk), ()):
            _add(out, keys, delta)
    return out


def taxed(attributes: Mapping[str, float], quirks: Iterable[str]) -> Dict[str, float]:
    """Copy of ``attributes`` with the inactive-condition tax applied."""

    out = dict(attributes)
    for quirk in quirks:
        name = normalize_quirk_name(quirk)
        tax = QUIRK_INACTIVE_TAX.get(name)
        if not tax:
            continue
        for keys, weight in QUIRK_TAX_SPREAD.get(name, ()):
            _add(out, keys, -(tax * weight))
    return out


def adjusted(attributes: Mapping[str, float], quirks: Iterable[str]) -> Dict[str, float]:
    """Boosts followed by taxes: the net effect of a card's quirks."""

    names = list(quirks)
    return taxed(boosted(attributes, names), names)


def headroom(current: float, cap: float = BATTING_MAX) -> float:
    return max(0.0, 1.0 - current / cap)


def blend_headroom(current: float, delta: float, cap: float = BATTING_MAX) -> float:
    """Add ``delta`` scaled by the remaining distance to ``cap``."""

    return current + delta * headroom(current, cap)
