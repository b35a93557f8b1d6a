"""Turn raw catalog records into scored, deduplicated ranking items."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, TypeVar

from pydantic import ValidationError

from cardrank.config.positions import (
    FIELDING_POSITIONS,
    OUT_OF_POSITION_FACTORS,
    SECONDARY_POSITION_FACTOR,
)
from cardrank.models import (
    NormalizedItem,
    RawCardItem,
    normalize_position,
    parse_height_inches,
)
from cardrank.scoring.core import true_overall
from cardrank.scoring.facets import FacetComputer
from cardrank.scoring.meta import MetaScorer
from cardrank.scoring.profiles import PositionProfileTable


logger = logging.getLogger(__name__)

T = TypeVar("T")

# Defensive attributes discounted when a card is scored away from its primary spot.
DEFENSIVE_KEYS = ("fielding_ability", "reaction_time", "arm_accuracy")

_PASSTHROUGH_ATTRIBUTES = (
    "contact_left",
    "contact_right",
    "power_left",
    "power_right",
    "bunting_ability",
    "drag_bunting_ability",
    "speed",
    "baserunning_ability",
    "baserunning_aggression",
    "fielding_ability",
    "arm_strength",
    "arm_accuracy",
    "reaction_time",
    "blocking",
)


def dedupe(items: Iterable[T], key: Callable[[T], Optional[str]]) -> List[T]:
    """Keep the first item per non-empty identity, preserving order."""

    seen: Dict[str, T] = {}
    for item in items:
        ident = key(item)
        if not ident or ident in seen:
            continue
        seen[ident] = item
    return list(seen.values())


def raw_identity(payload: Mapping) -> Optional[str]:
    for field in ("uuid", "id", "name"):
        value = payload.get(field)
        if value is not None and str(value) != "":
            return str(value)
    return None


def parse_raw_items(payloads: Iterable[Mapping]) -> List[RawCardItem]:
    items: List[RawCardItem] = []
    for payload in payloads:
        try:
            items.append(RawCardItem.model_validate(payload))
        except ValidationError as exc:
            logger.debug("Skipping catalog record %s: %s", raw_identity(payload), exc)
    return items


def pick_top_by_position(items: Sequence[RawCardItem], per_position: int) -> List[RawCardItem]:
    """Keep the ``per_position`` highest base-OVR cards for each display position."""

    groups: Dict[str, List[RawCardItem]] = {}
    for item in items:
        if not item.position:
            continue
        groups.setdefault(item.position, []).append(item)
    selected: List[RawCardItem] = []
    for group in groups.values():
        group.sort(key=lambda it: it.ovr if it.ovr is not None else float("-inf"), reverse=True)
        selected.extend(group[:per_position])
    return selected


def secondary_positions(item: RawCardItem) -> List[str]:
    """Listed secondary fielding positions other than the display position."""

    text = (item.secondary_positions or "").strip()
    if not text:
        return []
    primary = normalize_position(item.display_position)
    out: List[str] = []
    for chunk in text.split(","):
        for token in chunk.split("/"):
            pos = normalize_position(token)
            if pos and pos in FIELDING_POSITIONS and pos != primary and pos not in out:
                out.append(pos)
    return out


class ItemNormalizer:
    """Score raw cards and map them to :class:`NormalizedItem` payloads."""

    def __init__(self, profiles: PositionProfileTable):
        self.profiles = profiles
        self.meta = MetaScorer(profiles)
        self.facets = FacetComputer(profiles)

    def normalize(self, item: RawCardItem) -> NormalizedItem:
        base_ovr = item.ovr
        true_ovr = true_overall(item, self.profiles.repository)
        if true_ovr is None:
            true_ovr = base_ovr
        meta_ovr = self.meta.compute(item, true_ovr)
        if meta_ovr is None:
            meta_ovr = true_ovr
        facets = self.facets.compute_all(item)

        return NormalizedItem(
            id=item.item_id,
            name=item.name or None,
            rarity=item.rarity,
            team=item.team,
            display_position=item.display_position,
            primary_position=(item.primary_position or item.display_position or "").upper() or None,
            ovr=base_ovr,
            image=item.image,
            type=item.card_type,
            is_hitter=not item.is_pitcher,
            bat_hand=item.bat_hand,
            throw_hand=item.throw_hand,
            height=item.height,
            height_in=parse_height_inches(item.height),
            series=item.series,
            true_ovr=true_ovr,
            meta_ovr=meta_ovr,
            **{key: item.attributes.get(key) for key in _PASSTHROUGH_ATTRIBUTES},
            **facets,
        )

    def expand(self, item: RawCardItem, *, allow_secondaries: bool = False) -> List[NormalizedItem]:
        """Primary rendition plus, optionally, secondary and out-of-position variants."""

        primary_key = item.primary_key
        out = [self.normalize(item.with_overrides(primary_position=primary_key))]
        if not allow_secondaries or item.is_pitcher:
            return out

        listed = secondary_positions(item)
        variants = [(pos, SECONDARY_POSITION_FACTOR) for pos in listed]
        for pos, factor in OUT_OF_POSITION_FACTORS.get(primary_key or "", {}).items():
            if pos not in listed:
                variants.append((pos, factor))

        for pos, factor in variants:
            attributes = dict(item.attributes)
            for key in DEFENSIVE_KEYS:
                if key in attributes:
                    attributes[key] = attributes[key] * factor
            variant = item.with_overrides(
                item_id=f"{item.item_id}|{pos}",
                display_position=pos,
                primary_position=primary_key or pos,
                attributes=attributes,
            )
            out.append(self.normalize(variant))
        return out
