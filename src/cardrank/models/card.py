"""Canonical card models shared across ingestion, scoring and API layers."""

from __future__ import annotations

import math
import re
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.config import ConfigDict


HITTER_ATTRIBUTES: tuple[str, ...] = (
    "contact_left",
    "contact_right",
    "power_left",
    "power_right",
    "plate_vision",
    "plate_discipline",
    "batting_clutch",
    "bunting_ability",
    "drag_bunting_ability",
    "hitting_durability",
    "fielding_durability",
    "fielding_ability",
    "arm_strength",
    "arm_accuracy",
    "reaction_time",
    "blocking",
    "speed",
    "baserunning_ability",
    "baserunning_aggression",
)

PITCHER_ATTRIBUTES: tuple[str, ...] = (
    "stamina",
    "pitching_clutch",
    "hits_per_bf",
    "k_per_bf",
    "bb_per_bf",
    "hr_per_bf",
    "pitch_velocity",
    "pitch_control",
    "pitch_movement",
)

ATTRIBUTE_KEYS: frozenset[str] = frozenset(HITTER_ATTRIBUTES + PITCHER_ATTRIBUTES)

PITCHER_POSITIONS: frozenset[str] = frozenset({"SP", "RP", "CP"})

_POSITION_ALIASES: Mapping[str, str] = {
    "CATCHER": "C",
    "FIRST BASE": "1B",
    "SECOND BASE": "2B",
    "THIRD BASE": "3B",
    "SHORTSTOP": "SS",
    "LEFT FIELD": "LF",
    "CENTER FIELD": "CF",
    "RIGHT FIELD": "RF",
}
_KNOWN_POSITIONS = frozenset({"C", "1B", "2B", "3B", "SS", "LF", "CF", "RF", "DH"}) | PITCHER_POSITIONS

_HEIGHT_RE = re.compile(r"^(\d+)\s*'\s*(\d+)?")


class Role(str, Enum):
    HITTER = "hitter"
    PITCHER = "pitcher"


def parse_number(value: Any) -> Optional[float]:
    """Best-effort numeric coercion; returns None for anything unparseable."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None
    text = re.sub(r"[^0-9.\-]", "", str(value))
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def parse_height_inches(value: Any) -> Optional[int]:
    """Convert a height like ``6'2"`` into inches."""

    match = _HEIGHT_RE.match(str(value or "").strip())
    if not match:
        return None
    feet = int(match.group(1))
    inches = int(match.group(2) or 0)
    return feet * 12 + inches


def normalize_position(value: Any) -> Optional[str]:
    """Map a raw position label (``"Shortstop"``, ``"ss/2b"``) to its short code."""

    text = str(value or "").strip().upper()
    first = re.split(r"[/,]", text)[0].strip()
    first = _POSITION_ALIASES.get(first, first)
    return first if first in _KNOWN_POSITIONS else None


def normalize_quirk_name(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", " ", name.lower()).strip()


def _hand(value: Any) -> Optional[str]:
    text = str(value or "").strip().upper()
    return text or None


def _first_text(payload: Mapping[str, Any], *keys: str) -> Optional[str]:
    for key in keys:
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
        if value is not None and not isinstance(value, str):
            return str(value)
    return None


class Pitch(BaseModel):
    name: str = ""
    speed: Optional[float] = None

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("speed", mode="before")
    @classmethod
    def _coerce_speed(cls, value: Any) -> Optional[float]:
        return parse_number(value)


class RawCardItem(BaseModel):
    """Upstream catalog record with attributes coerced into a closed key set."""

    item_id: str = Field(..., min_length=1)
    name: str = ""
    rarity: Optional[str] = None
    team: Optional[str] = None
    display_position: Optional[str] = None
    primary_position: Optional[str] = None
    secondary_positions: Optional[str] = None
    bat_hand: Optional[str] = None
    throw_hand: Optional[str] = None
    height: Optional[str] = None
    ovr: Optional[float] = None
    image: Optional[str] = None
    card_type: Optional[str] = None
    series: Optional[str] = None
    role: Role = Role.HITTER
    attributes: Dict[str, float] = Field(default_factory=dict)
    quirks: List[str] = Field(default_factory=list)
    pitches: List[Pitch] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _from_upstream(cls, data: Any) -> Any:
        if not isinstance(data, Mapping) or "item_id" in data:
            return data
        return cls.upstream_fields(data)

    @staticmethod
    def upstream_fields(payload: Mapping[str, Any]) -> dict[str, Any]:
        display = str(payload.get("display_position") or "").strip().upper() or None
        is_hitter = payload.get("is_hitter")
        if isinstance(is_hitter, bool):
            role = Role.HITTER if is_hitter else Role.PITCHER
        else:
            role = Role.PITCHER if display in PITCHER_POSITIONS else Role.HITTER

        attributes: dict[str, float] = {}
        for key in HITTER_ATTRIBUTES + PITCHER_ATTRIBUTES:
            value = parse_number(payload.get(key))
            if value is not None:
                attributes[key] = value

        quirks: list[str] = []
        for entry in payload.get("quirks") or []:
            if isinstance(entry, Mapping):
                entry = entry.get("name")
            if entry:
                name = normalize_quirk_name(str(entry))
                if name:
                    quirks.append(name)

        pitches = [p for p in payload.get("pitches") or [] if isinstance(p, Mapping)]
        base_ovr = payload.get("ovr")
        if base_ovr is None:
            base_ovr = payload.get("new_rank")

        return {
            "item_id": _first_text(payload, "uuid", "id", "name") or "",
            "name": str(payload.get("name") or ""),
            "rarity": _first_text(payload, "rarity"),
            "team": _first_text(payload, "team_short_name", "team"),
            "display_position": display,
            "primary_position": _first_text(payload, "primary_position"),
            "secondary_positions": _first_text(payload, "display_secondary_positions"),
            "bat_hand": _hand(payload.get("bat_hand")),
            "throw_hand": _hand(payload.get("throw_hand")),
            "height": _first_text(payload, "height"),
            "ovr": parse_number(base_ovr),
            "image": _first_text(payload, "baked_img", "img"),
            "card_type": _first_text(payload, "type"),
            "series": _first_text(payload, "series", "set_name", "program"),
            "role": role,
            "attributes": attributes,
            "quirks": quirks,
            "pitches": pitches,
        }

    @property
    def is_pitcher(self) -> bool:
        return self.role is Role.PITCHER

    @property
    def position(self) -> str:
        return (self.display_position or "").upper()

    @property
    def primary_key(self) -> Optional[str]:
        return normalize_position(self.primary_position) or normalize_position(self.display_position)

    def with_overrides(self, **changes: Any) -> "RawCardItem":
        return self.model_copy(update=changes)


class NormalizedItem(BaseModel):
    """Scored card as served by the rankings endpoint."""

    id: Optional[str]
    name: Optional[str]
    rarity: Optional[str] = None
    team: Optional[str] = None
    display_position: Optional[str] = None
    primary_position: Optional[str] = None
    ovr: Optional[float] = None
    image: Optional[str] = None
    type: Optional[str] = None
    is_hitter: bool
    bat_hand: Optional[str] = None
    throw_hand: Optional[str] = None
    height: Optional[str] = None
    height_in: Optional[int] = None
    series: Optional[str] = None

    true_ovr: Optional[float] = None
    meta_ovr: Optional[float] = None

    contact_left: Optional[float] = None
    contact_right: Optional[float] = None
    power_left: Optional[float] = None
    power_right: Optional[float] = None
    bunting_ability: Optional[float] = None
    drag_bunting_ability: Optional[float] = None
    speed: Optional[float] = None
    baserunning_ability: Optional[float] = None
    baserunning_aggression: Optional[float] = None
    fielding_ability: Optional[float] = None
    arm_strength: Optional[float] = None
    arm_accuracy: Optional[float] = None
    reaction_time: Optional[float] = None
    blocking: Optional[float] = None

    power: Optional[float] = None
    contact: Optional[float] = None
    vs_left: Optional[float] = None
    vs_right: Optional[float] = None
    bunting: Optional[float] = None
    baserunning: Optional[float] = None
    defense: Optional[float] = None

    model_config = ConfigDict(frozen=True)
