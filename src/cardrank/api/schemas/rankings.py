from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict

from cardrank.models import NormalizedItem


class RankingsMeta(BaseModel):
    cached: bool
    fetched_at: int
    pages: int
    count: int
    total_raw: int
    primary_selected: int
    allow_secondaries: bool
    per_pos_limit: int
    failed_pages: List[int] = []
    pitch_names: List[str] = []

    model_config = ConfigDict(extra="allow")


class RankingsResponse(BaseModel):
    items: List[NormalizedItem]
    meta: RankingsMeta


class ErrorResponse(BaseModel):
    error: str
