"""Fetch, score and cache the ranked card catalog."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from cardrank.config.settings import Settings
from cardrank.ingest import (
    CatalogFetcher,
    ItemNormalizer,
    dedupe,
    parse_raw_items,
    pick_top_by_position,
    raw_identity,
)
from cardrank.models import NormalizedItem, RawCardItem
from cardrank.rankings.cache import ResultCache
from cardrank.scoring import ModelRepository, PositionProfileTable


logger = logging.getLogger("uvicorn.error")


@dataclass
class RankingResult:
    items: List[NormalizedItem]
    meta: Dict[str, Any] = field(default_factory=dict)


def cache_key(*, card_type: str, allow_secondaries: bool, per_position_limit: int) -> str:
    variant = "withsec" if allow_secondaries else "nosec"
    return f"items:{card_type}:meta+facets:{variant}:top{per_position_limit}"


def collect_pitch_names(items: List[RawCardItem]) -> List[str]:
    names = {pitch.name.strip() for item in items if item.is_pitcher for pitch in item.pitches}
    return sorted(name for name in names if name)


class RankingService:
    """Owns the model, position calibration, fetcher and cache for one process."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        repository: Optional[ModelRepository] = None,
        fetcher: Optional[CatalogFetcher] = None,
        cache: Optional[ResultCache] = None,
    ):
        self.settings = settings or Settings.from_env()
        self.repository = repository or ModelRepository(self.settings.model_path)
        self.profiles = PositionProfileTable(self.repository)
        self.normalizer = ItemNormalizer(self.profiles)
        self.fetcher = fetcher or CatalogFetcher(
            self.settings.upstream_url,
            card_type=self.settings.card_type,
            concurrency=self.settings.concurrency,
            timeout=self.settings.http_timeout,
        )
        self.cache = cache or ResultCache(self.settings.cache_ttl_seconds)

    def score_catalog(
        self,
        raw_items: List[dict],
        *,
        allow_secondaries: bool = False,
    ) -> RankingResult:
        """Dedupe, select, expand and score raw catalog records."""

        unique_raw = dedupe(raw_items, raw_identity)
        cards = parse_raw_items(unique_raw)
        selected = pick_top_by_position(cards, self.settings.per_position_limit)

        expanded: List[NormalizedItem] = []
        for card in selected:
            expanded.extend(self.normalizer.expand(card, allow_secondaries=allow_secondaries))
        items = dedupe(expanded, lambda it: it.id or it.name)

        meta = {
            "total_raw": len(unique_raw),
            "primary_selected": len(selected),
            "count": len(items),
            "allow_secondaries": allow_secondaries,
            "per_pos_limit": self.settings.per_position_limit,
            "pitch_names": collect_pitch_names(cards),
        }
        return RankingResult(items=items, meta=meta)

    async def _compute(self, allow_secondaries: bool) -> Dict[str, Any]:
        catalog = await self.fetcher.fetch_all()
        result = self.score_catalog(catalog.items, allow_secondaries=allow_secondaries)
        meta = {
            "pages": catalog.pages,
            "failed_pages": catalog.failed_pages,
            **result.meta,
        }
        logger.info(
            "Ranked %s items from %s raw records (%s pages, secondaries=%s)",
            meta["count"],
            meta["total_raw"],
            catalog.pages,
            allow_secondaries,
        )
        return {"items": result.items, "meta": meta}

    async def rankings(self, *, force: bool = False, allow_secondaries: bool = False) -> Dict[str, Any]:
        """Ranked items plus fetch metadata; served from cache while fresh."""

        key = cache_key(
            card_type=self.settings.card_type,
            allow_secondaries=allow_secondaries,
            per_position_limit=self.settings.per_position_limit,
        )
        entry, cached = await self.cache.get_or_compute(
            key,
            lambda: self._compute(allow_secondaries),
            force=force,
        )
        meta = {
            **entry.payload["meta"],
            "cached": cached,
            "fetched_at": int(entry.timestamp * 1000),
        }
        return {"items": entry.payload["items"], "meta": meta}
