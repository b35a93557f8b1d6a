import csv
from io import StringIO

import pytest

from cardrank.models import NormalizedItem
from cardrank.rankings import RankingExportError, export_rankings_to_csv, sort_items


def _item(ident: str, meta: float | None, **extra) -> NormalizedItem:
    return NormalizedItem(id=ident, name=ident.upper(), is_hitter=True, meta_ovr=meta, true_ovr=meta, **extra)


def test_sort_puts_missing_ratings_last():
    items = [_item("a", 80.0), _item("b", None), _item("c", 95.5)]
    assert [item.id for item in sort_items(items)] == ["c", "a", "b"]


def test_export_formats_rows():
    items = [_item("a", 80.0, bat_hand="S"), _item("b", 101.256)]
    text = export_rankings_to_csv(items, columns=("id", "meta_ovr", "is_hitter", "bat_hand"))
    rows = list(csv.reader(StringIO(text)))
    assert rows == [
        ["id", "meta_ovr", "is_hitter", "bat_hand"],
        ["b", "101.26", "1", ""],
        ["a", "80.00", "1", "S"],
    ]


def test_export_limit_and_unsorted():
    items = [_item("a", 80.0), _item("b", 90.0), _item("c", 70.0)]
    text = export_rankings_to_csv(items, columns=("id",), sort_by=None, limit=2)
    assert text.split() == ["id", "a", "b"]


def test_export_rejects_bad_arguments():
    with pytest.raises(RankingExportError):
        export_rankings_to_csv([], columns=("id", "salary"))
    with pytest.raises(RankingExportError):
        export_rankings_to_csv([], limit=-1)
    with pytest.raises(RankingExportError):
        sort_items([], key="salary")  # type: ignore[arg-type]
