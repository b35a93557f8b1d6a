"""True Overall / Meta Overall scoring engine."""

from .core import score, true_overall
from .facets import FACETS, FacetComputer
from .meta import MetaScorer
from .model import LinearModel, ModelArtifactError, ModelRepository
from .profiles import META_CAP, PositionProfileTable

__all__ = [
    "FACETS",
    "META_CAP",
    "FacetComputer",
    "LinearModel",
    "MetaScorer",
    "ModelArtifactError",
    "ModelRepository",
    "PositionProfileTable",
    "score",
    "true_overall",
]
