"""Lightweight REST client for the cardrank API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the cardrank REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("--force", action="store_true", help="Bypass the server-side cache")
    parser.add_argument("--allow-secondaries", action="store_true", help="Include secondary position renditions")
    parser.add_argument("--top", type=int, default=25, help="Number of items to print")
    parser.add_argument("--export-path", type=Path, help="Download the CSV export to this path")
    parser.add_argument("--timeout", type=float, default=120.0, help="Request timeout in seconds")
    args = parser.parse_args()

    params = {
        "force": str(args.force).lower(),
        "allow_secondaries": str(args.allow_secondaries).lower(),
    }

    with httpx.Client(base_url=args.base_url, timeout=args.timeout) as client:
        if args.export_path:
            resp = client.get("/rankings/export.csv", params={"allow_secondaries": params["allow_secondaries"]})
            resp.raise_for_status()
            args.export_path.write_text(resp.text)
            print(f"CSV export saved to {args.export_path}")
            return

        resp = client.get("/rankings", params=params)
        if resp.status_code >= 500:
            raise SystemExit(f"server error {resp.status_code}: {resp.json().get('error')}")
        resp.raise_for_status()
        payload = resp.json()

    meta = payload["meta"]
    print("Meta:", json.dumps({k: v for k, v in meta.items() if k != "pitch_names"}, indent=2))
    ranked = sorted(
        payload["items"],
        key=lambda item: item.get("meta_ovr") if item.get("meta_ovr") is not None else float("-inf"),
        reverse=True,
    )
    for item in ranked[: max(0, args.top)]:
        meta_ovr = item.get("meta_ovr")
        true_ovr = item.get("true_ovr")
        print(
            "{:<28} {:<4} meta={:>6} true={:>6}".format(
                (item.get("name") or "?")[:28],
                item.get("display_position") or "-",
                "-" if meta_ovr is None else f"{meta_ovr:.1f}",
                "-" if true_ovr is None else f"{true_ovr:.1f}",
            )
        )


if __name__ == "__main__":
    main()
