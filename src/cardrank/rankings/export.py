"""CSV export helpers for ranked items."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Literal, Sequence

from cardrank.models import NormalizedItem


class RankingExportError(RuntimeError):
    """Raised when ranked items cannot be exported."""


RANKING_COLUMNS: tuple[str, ...] = (
    "id",
    "name",
    "team",
    "display_position",
    "primary_position",
    "is_hitter",
    "bat_hand",
    "ovr",
    "true_ovr",
    "meta_ovr",
    "power",
    "contact",
    "vs_left",
    "vs_right",
    "bunting",
    "baserunning",
    "defense",
)

SortKey = Literal["meta_ovr", "true_ovr", "ovr"]


def _format(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, float):
        return f"{value:.2f}"
    return str(value)


def sort_items(items: Sequence[NormalizedItem], key: SortKey = "meta_ovr") -> list[NormalizedItem]:
    """Highest rating first; items without a rating sink to the bottom."""

    if key not in RANKING_COLUMNS:
        raise RankingExportError(f"Unknown sort key {key!r}")
    return sorted(
        items,
        key=lambda item: (getattr(item, key) is None, -(getattr(item, key) or 0.0), item.name or ""),
    )


def export_rankings_to_csv(
    items: Sequence[NormalizedItem],
    *,
    columns: Sequence[str] = RANKING_COLUMNS,
    sort_by: SortKey | None = "meta_ovr",
    limit: int | None = None,
) -> str:
    """Render ranked items as CSV text."""

    unknown = [column for column in columns if column not in NormalizedItem.model_fields]
    if unknown:
        raise RankingExportError(f"Unknown export columns: {', '.join(unknown)}")
    if limit is not None and limit < 0:
        raise RankingExportError("limit must be non-negative")

    rows = sort_items(items, sort_by) if sort_by else list(items)
    if limit is not None:
        rows = rows[:limit]

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(columns)
    for item in rows:
        writer.writerow([_format(getattr(item, column)) for column in columns])
    return buffer.getvalue()


__all__ = [
    "RANKING_COLUMNS",
    "RankingExportError",
    "export_rankings_to_csv",
    "sort_items",
]
