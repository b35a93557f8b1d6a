"""Command-line interface for ranking the card catalog."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Sequence

from cardrank.config import Settings
from cardrank.ingest import UpstreamError
from cardrank.models import NormalizedItem
from cardrank.rankings import RankingExportError, RankingService, export_rankings_to_csv


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Rank MLB The Show cards by meta value")
    subparsers = parser.add_subparsers(dest="command", required=True)

    rankings = subparsers.add_parser("rankings", help="Fetch the live catalog and rank it")
    rankings.add_argument("--force", action="store_true", help="Ignore any cached result")
    rankings.add_argument(
        "--allow-secondaries",
        action="store_true",
        help="Also emit secondary and out-of-position renditions of hitters",
    )

    score = subparsers.add_parser("score", help="Rank a local catalog dump without network access")
    score.add_argument("catalog", type=Path, help="JSON file: a list of items or upstream pages")
    score.add_argument(
        "--allow-secondaries",
        action="store_true",
        help="Also emit secondary and out-of-position renditions of hitters",
    )

    for sub in (rankings, score):
        sub.add_argument("--output", type=Path, default=None, help="CSV path (stdout if omitted)")
        sub.add_argument("--json", dest="json_path", type=Path, default=None, help="Optional JSON dump path")
        sub.add_argument("--limit", type=int, default=None, help="Only export the top N items")
        sub.add_argument("--model", type=Path, default=None, help="Override the model artifact path")
    return parser.parse_args(argv)


def load_catalog_dump(path: Path) -> list[dict]:
    """Accept a bare item list, one upstream page, or a list of pages."""

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise SystemExit(f"Unable to read catalog {path}: {exc}") from exc

    pages = payload if isinstance(payload, list) else [payload]
    items: list[dict] = []
    for entry in pages:
        if isinstance(entry, dict) and isinstance(entry.get("items"), list):
            items.extend(item for item in entry["items"] if isinstance(item, dict))
        elif isinstance(entry, dict):
            items.append(entry)
    return items


def _write_outputs(args: argparse.Namespace, items: list[NormalizedItem], meta: dict[str, Any]) -> None:
    try:
        csv_text = export_rankings_to_csv(items, limit=args.limit)
    except RankingExportError as exc:
        raise SystemExit(str(exc)) from exc

    if args.output:
        args.output.write_text(csv_text, encoding="utf-8", newline="")
        print(f"Wrote {meta.get('count', len(items))} ranked items to {args.output}")
    else:
        sys.stdout.write(csv_text)

    if args.json_path:
        document = {"items": [item.model_dump() for item in items], "meta": meta}
        args.json_path.write_text(json.dumps(document, indent=2), encoding="utf-8")
        print(f"Wrote JSON payload to {args.json_path}")


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    settings = Settings.from_env(model_path=args.model)
    service = RankingService(settings)

    if args.command == "score":
        raw_items = load_catalog_dump(args.catalog)
        result = service.score_catalog(raw_items, allow_secondaries=args.allow_secondaries)
        _write_outputs(args, result.items, result.meta)
        return

    try:
        payload = asyncio.run(
            service.rankings(force=args.force, allow_secondaries=args.allow_secondaries)
        )
    except UpstreamError as exc:
        raise SystemExit(f"Upstream catalog unavailable: {exc}") from exc
    meta = payload["meta"]
    if meta.get("failed_pages"):
        print(f"Warning: {len(meta['failed_pages'])} catalog pages failed", file=sys.stderr)
    _write_outputs(args, payload["items"], meta)


if __name__ == "__main__":
    main()
