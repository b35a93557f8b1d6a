"""Catalog download and normalization adapters."""

from .catalog import CatalogFetcher, CatalogResult, UpstreamError
from .normalize import (
    ItemNormalizer,
    dedupe,
    parse_raw_items,
    pick_top_by_position,
    raw_identity,
    secondary_positions,
)

__all__ = [
    "CatalogFetcher",
    "CatalogResult",
    "ItemNormalizer",
    "UpstreamError",
    "dedupe",
    "parse_raw_items",
    "pick_top_by_position",
    "raw_identity",
    "secondary_positions",
]
