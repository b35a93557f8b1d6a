import httpx
import pytest

from cardrank.ingest import CatalogFetcher, UpstreamError
from cardrank.ingest.catalog import _total_pages

from tests.factories import hitter_payload


BASE_URL = "https://catalog.test/apis/items.json"


def _page_handler(pages: dict[int, list[dict]], *, failing: set[int] = frozenset(), seen: list | None = None):
    def handler(request: httpx.Request) -> httpx.Response:
        page = int(request.url.params["page"])
        if seen is not None:
            seen.append((request.url.params["type"], page))
        if page in failing:
            return httpx.Response(500, json={"error": "boom"})
        return httpx.Response(200, json={"page": page, "total_pages": len(pages), "items": pages[page]})

    return handler


def _pages(count: int, per_page: int = 2) -> dict[int, list[dict]]:
    return {
        page: [hitter_payload(f"p{page}-{n}") for n in range(per_page)]
        for page in range(1, count + 1)
    }


@pytest.mark.anyio
async def test_fetch_all_collects_pages_in_order():
    seen: list = []
    fetcher = CatalogFetcher(
        BASE_URL,
        card_type="mlb_card",
        concurrency=2,
        transport=httpx.MockTransport(_page_handler(_pages(5), seen=seen)),
    )
    result = await fetcher.fetch_all()
    assert result.pages == 5
    assert result.failed_pages == []
    assert [item["uuid"] for item in result.items][:4] == ["p1-0", "p1-1", "p2-0", "p2-1"]
    assert result.items[-1]["uuid"] == "p5-1"
    assert len(result.items) == 10
    assert sorted(page for _, page in seen) == [1, 2, 3, 4, 5]
    assert {card_type for card_type, _ in seen} == {"mlb_card"}


@pytest.mark.anyio
async def test_failed_middle_page_is_skipped():
    fetcher = CatalogFetcher(
        BASE_URL,
        transport=httpx.MockTransport(_page_handler(_pages(3), failing={2})),
    )
    result = await fetcher.fetch_all()
    assert [item["uuid"] for item in result.items] == ["p1-0", "p1-1", "p3-0", "p3-1"]
    assert result.failed_pages == [2]
    assert result.pages == 3


@pytest.mark.anyio
async def test_first_page_failure_raises_upstream_error():
    fetcher = CatalogFetcher(
        BASE_URL,
        transport=httpx.MockTransport(_page_handler(_pages(3), failing={1})),
    )
    with pytest.raises(UpstreamError):
        await fetcher.fetch_all()


@pytest.mark.anyio
async def test_invalid_json_on_first_page_raises_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>maintenance</html>")

    fetcher = CatalogFetcher(BASE_URL, transport=httpx.MockTransport(handler))
    with pytest.raises(UpstreamError):
        await fetcher.fetch_all()


@pytest.mark.anyio
async def test_single_page_catalog_without_total_pages():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"items": [hitter_payload("only"), "junk"]})

    fetcher = CatalogFetcher(BASE_URL, transport=httpx.MockTransport(handler))
    result = await fetcher.fetch_all()
    assert result.pages == 1
    assert [item["uuid"] for item in result.items] == ["only"]


@pytest.mark.anyio
async def test_string_total_pages_still_fetches_every_page():
    pages = _pages(3)

    def handler(request: httpx.Request) -> httpx.Response:
        page = int(request.url.params["page"])
        return httpx.Response(200, json={"total_pages": "3.0", "items": pages[page]})

    fetcher = CatalogFetcher(BASE_URL, transport=httpx.MockTransport(handler))
    result = await fetcher.fetch_all()
    assert result.pages == 3
    assert len(result.items) == 6


@pytest.mark.parametrize(("raw", "expected"), [("3.0", 3), ("12", 12), (2.7, 2), (None, 1), ("n/a", 1), (0, 1)])
def test_total_pages_parsing(raw, expected):
    assert _total_pages(raw) == expected
