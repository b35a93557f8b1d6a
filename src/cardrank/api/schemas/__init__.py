"""Pydantic models for API I/O."""

from .rankings import ErrorResponse, RankingsMeta, RankingsResponse

__all__ = [
    "ErrorResponse",
    "RankingsMeta",
    "RankingsResponse",
]
