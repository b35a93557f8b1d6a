"""Weighted linear-model evaluation with present-only renormalization."""

from __future__ import annotations

from typing import Mapping, Optional

from cardrank.models import RawCardItem
from cardrank.scoring.model import POSITION_PREFIX, LinearModel, ModelRepository


def score(
    attributes: Mapping[str, float],
    model: Optional[LinearModel],
    *,
    position: str = "",
    scales: Mapping[str, float] | None = None,
    include_position_dummies: bool = True,
    only_listed: bool = False,
    hand_bonus: float = 0.0,
) -> Optional[float]:
    """Evaluate ``model`` against an attribute mapping.

    Each continuous coefficient contributes ``weight * scale * value``. ``scale``
    comes from ``scales`` and defaults to 1, or to 0 when ``only_listed`` is set
    and the feature is not in ``scales``; zero-scaled features are skipped.

    The continuous dot product is divided by ``sum|w*scale| / sum|w|`` taken over
    the features present on the card, so per-feature scales shift emphasis
    without changing overall magnitude. Absent attributes add nothing to the dot
    product and stay out of both sums.

    Returns None without a model or when no scored feature is present.
    """

    if model is None:
        return None
    scales = scales or {}
    wanted = position.strip().upper()

    dummy_term = 0.0
    dot = 0.0
    sum_abs = 0.0
    sum_abs_scaled = 0.0
    any_present = False

    for feature, weight in model.coefficients.items():
        if feature.startswith(POSITION_PREFIX):
            if include_position_dummies and feature[len(POSITION_PREFIX):].upper() == wanted:
                dummy_term += weight
            continue
        if feature in scales:
            scale = scales[feature]
        else:
            scale = 0.0 if only_listed else 1.0
        if scale == 0:
            continue
        value = attributes.get(feature)
        if value is None:
            continue
        dot += weight * scale * value
        any_present = True
        sum_abs += abs(weight)
        sum_abs_scaled += abs(weight * scale)

    if not any_present or sum_abs == 0 or sum_abs_scaled == 0:
        return None
    return model.intercept + dummy_term + dot / (sum_abs_scaled / sum_abs) + hand_bonus


def true_overall(item: RawCardItem, repository: ModelRepository) -> Optional[float]:
    """Unscaled True Overall for a card using its role's model."""

    return score(item.attributes, repository.get_model(item.role), position=item.position)
