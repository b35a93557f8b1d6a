"""In-memory TTL cache for computed ranking payloads."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    timestamp: float
    payload: Any


class ResultCache:
    """Timestamp-based freshness map with one in-flight computation per key."""

    def __init__(self, ttl_seconds: float = 3600.0, *, clock: Callable[[], float] = time.time):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._inflight: Dict[str, asyncio.Future] = {}

    def get(self, key: str) -> Optional[CacheEntry]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.timestamp >= self.ttl_seconds:
            return None
        return entry

    def put(self, key: str, payload: Any) -> CacheEntry:
        entry = CacheEntry(timestamp=self._clock(), payload=payload)
        self._entries[key] = entry
        return entry

    def clear(self) -> None:
        self._entries.clear()

    async def get_or_compute(
        self,
        key: str,
        compute: Callable[[], Awaitable[Any]],
        *,
        force: bool = False,
    ) -> Tuple[CacheEntry, bool]:
        """Return ``(entry, cached)``; concurrent misses share one computation.

        The computation runs in its own task, so a caller that is cancelled
        while waiting leaves it running for the others.
        """

        if not force:
            entry = self.get(key)
            if entry is not None:
                logger.info("Cache hit for %s", key)
                return entry, True

        pending = self._inflight.get(key)
        if pending is None:
            pending = asyncio.ensure_future(self._compute_and_store(key, compute))
            pending.add_done_callback(_consume_result)
            self._inflight[key] = pending
        else:
            logger.info("Joining in-flight computation for %s", key)
        return await asyncio.shield(pending), False

    async def _compute_and_store(self, key: str, compute: Callable[[], Awaitable[Any]]) -> CacheEntry:
        try:
            return self.put(key, await compute())
        finally:
            self._inflight.pop(key, None)


def _consume_result(task: asyncio.Future) -> None:
    # Mark retrieved so a failure nobody awaited does not log "exception never retrieved".
    if not task.cancelled():
        task.exception()
