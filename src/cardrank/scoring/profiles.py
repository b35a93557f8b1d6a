"""Per-position calibration against a synthetic best-possible card."""

from __future__ import annotations

import logging
import threading
from typing import Dict, Mapping, Optional

from cardrank.config.positions import BATTING_MAX, PositionProfile, get_profile, iter_profiles
from cardrank.models import Role
from cardrank.scoring.core import score
from cardrank.scoring.model import ModelRepository


logger = logging.getLogger(__name__)

META_CAP = BATTING_MAX


class _OnceCell:
    """Single-assignment slot filled by the first caller of ``get_or_init``."""

    __slots__ = ("_value", "_ready", "_lock")

    def __init__(self) -> None:
        self._value: Optional[float] = None
        self._ready = False
        self._lock = threading.Lock()

    def get_or_init(self, factory) -> Optional[float]:
        if self._ready:
            return self._value
        with self._lock:
            if not self._ready:
                self._value = factory()
                self._ready = True
        return self._value


class PositionProfileTable:
    """Position weight profiles bound to a model, with memoized reference maxima."""

    def __init__(self, repository: ModelRepository):
        self._repository = repository
        self._cells: Dict[str, _OnceCell] = {profile.position: _OnceCell() for profile in iter_profiles()}

    @property
    def repository(self) -> ModelRepository:
        return self._repository

    def profile(self, position: Optional[str]) -> Optional[PositionProfile]:
        return get_profile(position)

    def core_score(self, attributes: Mapping[str, float], profile: PositionProfile) -> Optional[float]:
        """Score attributes with a profile's weights as the only listed features."""

        return score(
            attributes,
            self._repository.get_model(Role.HITTER),
            position=profile.position,
            scales=profile.weights,
            include_position_dummies=False,
            only_listed=True,
        )

    def reference_max(self, position: Optional[str]) -> Optional[float]:
        profile = get_profile(position)
        if profile is None:
            return None
        return self._cells[profile.position].get_or_init(lambda: self._compute_reference(profile))

    def calibration_scale(self, position: Optional[str]) -> Optional[float]:
        reference = self.reference_max(position)
        if not reference or reference <= 0:
            return None
        return META_CAP / reference

    def _compute_reference(self, profile: PositionProfile) -> float:
        reference = self.core_score(profile.max_card(), profile)
        if reference is None:
            logger.warning("Reference card for %s could not be scored; using %.1f", profile.position, META_CAP)
            return META_CAP
        logger.debug("Reference max for %s: %.4f", profile.position, reference)
        return reference
