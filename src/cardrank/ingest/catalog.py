"""Paginated catalog download with a bounded worker pool."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

import httpx

from cardrank.models import parse_number


logger = logging.getLogger(__name__)


class UpstreamError(RuntimeError):
    """Raised when the first catalog page cannot be retrieved."""


@dataclass
class CatalogResult:
    items: List[dict]
    pages: int
    failed_pages: List[int] = field(default_factory=list)


class CatalogFetcher:
    """Fetch every page of ``<base_url>?type=<card_type>&page=<n>``.

    Page 1 is fetched first to learn ``total_pages``; its failure raises
    :class:`UpstreamError`. Remaining pages are pulled by ``concurrency``
    workers sharing one page cursor, and a page that fails contributes no items.
    """

    def __init__(
        self,
        base_url: str,
        *,
        card_type: str = "mlb_card",
        concurrency: int = 10,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.card_type = card_type
        self.concurrency = max(1, concurrency)
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            transport=self._transport,
            headers={"accept": "application/json"},
        )

    async def _get_page(self, client: httpx.AsyncClient, page: int) -> dict:
        resp = await client.get(self.base_url, params={"type": self.card_type, "page": page})
        resp.raise_for_status()
        payload = resp.json()
        if not isinstance(payload, dict):
            raise ValueError(f"page {page} payload is not an object")
        return payload

    async def fetch_all(self) -> CatalogResult:
        async with self._client() as client:
            try:
                first = await self._get_page(client, 1)
            except (httpx.HTTPError, ValueError) as exc:
                raise UpstreamError(f"Upstream page 1 failed: {exc}") from exc

            total_pages = _total_pages(first.get("total_pages"))
            pages = list(range(2, total_pages + 1))
            results: List[List[dict]] = [[] for _ in pages]
            failed: List[int] = []
            cursor = 0

            async def worker() -> None:
                nonlocal cursor
                while cursor < len(pages):
                    index = cursor
                    cursor += 1
                    page = pages[index]
                    try:
                        payload = await self._get_page(client, page)
                    except (httpx.HTTPError, ValueError) as exc:
                        logger.warning("Catalog page %s failed: %s", page, exc)
                        failed.append(page)
                        continue
                    results[index] = _page_items(payload)

            workers = [worker() for _ in range(min(self.concurrency, len(pages)))]
            await asyncio.gather(*workers)

        items = _page_items(first)
        for page_items in results:
            items.extend(page_items)
        logger.info(
            "Fetched %s catalog items across %s pages (%s failed)",
            len(items),
            total_pages,
            len(failed),
        )
        return CatalogResult(items=items, pages=total_pages, failed_pages=sorted(failed))


def _total_pages(raw: Any) -> int:
    value = parse_number(raw)
    if value is None:
        return 1
    return max(1, int(value))


def _page_items(payload: dict) -> List[dict]:
    items = payload.get("items")
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, dict)]
