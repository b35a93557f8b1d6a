"""Ranking service, result cache and export helpers."""

from .cache import CacheEntry, ResultCache
from .export import RankingExportError, export_rankings_to_csv, sort_items
from .service import RankingResult, RankingService, cache_key

__all__ = [
    "CacheEntry",
    "RankingExportError",
    "RankingResult",
    "RankingService",
    "ResultCache",
    "cache_key",
    "export_rankings_to_csv",
    "sort_items",
]
