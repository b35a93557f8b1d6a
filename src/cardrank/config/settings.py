"""Environment-driven runtime settings."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


logger = logging.getLogger(__name__)

DEFAULT_UPSTREAM_URL = "https://mlb25.theshow.com/apis/items.json"
DEFAULT_CARD_TYPE = "mlb_card"
DEFAULT_CACHE_TTL_SECONDS = 60 * 60
DEFAULT_CONCURRENCY = 10
DEFAULT_PER_POSITION_LIMIT = 250
DEFAULT_HTTP_TIMEOUT = 30.0
DEFAULT_MODEL_PATH = Path(__file__).resolve().parents[1] / "data" / "true_ovr_model.json"

_UPSTREAM_URL_ENV = "CARDRANK_UPSTREAM_URL"
_CARD_TYPE_ENV = "CARDRANK_CARD_TYPE"
_CACHE_TTL_ENV = "CARDRANK_CACHE_TTL"
_CONCURRENCY_ENV = "CARDRANK_CONCURRENCY"
_PER_POSITION_LIMIT_ENV = "CARDRANK_PER_POSITION_LIMIT"
_HTTP_TIMEOUT_ENV = "CARDRANK_HTTP_TIMEOUT"
_MODEL_PATH_ENV = "CARDRANK_MODEL_PATH"


def _env_float(name: str, default: float, *, clamp_min: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    return value


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


@dataclass(frozen=True)
class Settings:
    upstream_url: str = DEFAULT_UPSTREAM_URL
    card_type: str = DEFAULT_CARD_TYPE
    cache_ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS
    concurrency: int = DEFAULT_CONCURRENCY
    per_position_limit: int = DEFAULT_PER_POSITION_LIMIT
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    model_path: Path = DEFAULT_MODEL_PATH

    @classmethod
    def from_env(cls, *, model_path: Optional[Path] = None) -> "Settings":
        env_model = os.getenv(_MODEL_PATH_ENV)
        return cls(
            upstream_url=os.getenv(_UPSTREAM_URL_ENV, DEFAULT_UPSTREAM_URL),
            card_type=os.getenv(_CARD_TYPE_ENV, DEFAULT_CARD_TYPE),
            cache_ttl_seconds=_env_float(_CACHE_TTL_ENV, DEFAULT_CACHE_TTL_SECONDS, clamp_min=0.0),
            concurrency=_env_int(_CONCURRENCY_ENV, DEFAULT_CONCURRENCY, min_value=1),
            per_position_limit=_env_int(_PER_POSITION_LIMIT_ENV, DEFAULT_PER_POSITION_LIMIT, min_value=1),
            http_timeout=_env_float(_HTTP_TIMEOUT_ENV, DEFAULT_HTTP_TIMEOUT, clamp_min=1.0),
            model_path=model_path or (Path(env_model) if env_model else DEFAULT_MODEL_PATH),
        )
