"""Load the pre-fit True Overall regression artifact."""

from __future__ import annotations

import json
import logging
import math
import threading
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from cardrank.models import Role


logger = logging.getLogger(__name__)

POSITION_PREFIX = "pos_"
SUPPORTED_WINNER = "linear"


class ModelArtifactError(RuntimeError):
    """Raised when the model artifact cannot be read or parsed."""


class LinearModel(BaseModel):
    intercept: float
    coefficients: Dict[str, float] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    def position_terms(self) -> Dict[str, float]:
        """One-hot positional indicators keyed by upper-case position code."""

        return {
            key[len(POSITION_PREFIX):].upper(): weight
            for key, weight in self.coefficients.items()
            if key.startswith(POSITION_PREFIX)
        }

    def continuous_terms(self) -> Dict[str, float]:
        return {key: weight for key, weight in self.coefficients.items() if not key.startswith(POSITION_PREFIX)}


def _finite_coefficients(raw: Mapping[str, Any]) -> Dict[str, float]:
    coefficients: Dict[str, float] = {}
    for key, value in raw.items():
        if isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value):
            coefficients[key] = float(value)
    return coefficients


def parse_role_model(payload: Mapping[str, Any] | None) -> Optional[LinearModel]:
    """Extract the linear variant from one role's artifact section."""

    if not payload or payload.get("winner") != SUPPORTED_WINNER:
        return None
    linear = payload.get("linear")
    if not isinstance(linear, Mapping):
        return None
    intercept = linear.get("intercept")
    if not isinstance(intercept, (int, float)) or not math.isfinite(intercept):
        return None
    return LinearModel(
        intercept=float(intercept),
        coefficients=_finite_coefficients(linear.get("coefficients") or {}),
    )


class ModelRepository:
    """Load-once holder for per-role linear models."""

    def __init__(self, path: Path | str | None = None, *, artifact: Mapping[str, Any] | None = None):
        if path is None and artifact is None:
            raise ValueError("ModelRepository needs an artifact path or payload")
        self._path = Path(path) if path is not None else None
        self._artifact = artifact
        self._models: Optional[Dict[Role, Optional[LinearModel]]] = None
        self._lock = threading.Lock()

    @classmethod
    def from_payload(cls, artifact: Mapping[str, Any]) -> "ModelRepository":
        return cls(artifact=artifact)

    def _read_artifact(self) -> Mapping[str, Any]:
        if self._artifact is not None:
            return self._artifact
        assert self._path is not None
        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ModelArtifactError(f"Unable to read model artifact {self._path}: {exc}") from exc
        try:
            # NaN/Infinity tokens in exported artifacts load as absent coefficients.
            data = json.loads(text, parse_constant=lambda _token: None)
        except json.JSONDecodeError as exc:
            raise ModelArtifactError(f"Model artifact {self._path} is not valid JSON: {exc}") from exc
        if not isinstance(data, Mapping):
            raise ModelArtifactError(f"Model artifact {self._path} must be a JSON object")
        return data

    def _load(self) -> Dict[Role, Optional[LinearModel]]:
        with self._lock:
            if self._models is not None:
                return self._models
            sections = self._read_artifact().get("models") or {}
            models = {role: parse_role_model(sections.get(role.value)) for role in Role}
            for role, model in models.items():
                if model is None:
                    logger.warning("No linear model available for role %s", role.value)
            self._models = models
            return models

    def get_model(self, role: Role | str) -> Optional[LinearModel]:
        try:
            key = Role(role)
        except ValueError:
            return None
        return self._load().get(key)
