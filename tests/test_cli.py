import csv
import json

from cardrank import cli

from tests.factories import hitter_payload, pitcher_payload


def test_score_command_writes_csv_and_json(tmp_path, capsys):
    catalog = tmp_path / "catalog.json"
    catalog.write_text(
        json.dumps(
            [
                {"page": 1, "total_pages": 2, "items": [hitter_payload("h1"), pitcher_payload("p1")]},
                {"page": 2, "total_pages": 2, "items": [hitter_payload("h1"), hitter_payload("h2", display_position="CF")]},
            ]
        ),
        encoding="utf-8",
    )
    output = tmp_path / "out.csv"
    dump = tmp_path / "out.json"

    cli.main(["score", str(catalog), "--output", str(output), "--json", str(dump)])

    with output.open(newline="", encoding="utf-8") as handle:
        rows = list(csv.DictReader(handle))
    assert {row["id"] for row in rows} == {"h1", "h2", "p1"}
    document = json.loads(dump.read_text(encoding="utf-8"))
    assert document["meta"]["count"] == 3
    assert document["meta"]["total_raw"] == 3
    assert "Wrote 3 ranked items" in capsys.readouterr().out


def test_score_command_accepts_bare_item_list(tmp_path, capsys):
    catalog = tmp_path / "items.json"
    catalog.write_text(json.dumps([hitter_payload("h1"), hitter_payload("h2")]), encoding="utf-8")

    cli.main(["score", str(catalog), "--limit", "1", "--allow-secondaries"])

    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[0].startswith("id,")
    assert len(lines) == 2


def test_load_catalog_dump_single_page(tmp_path):
    catalog = tmp_path / "page.json"
    catalog.write_text(json.dumps({"items": [hitter_payload("h1"), "junk"]}), encoding="utf-8")
    assert [item["uuid"] for item in cli.load_catalog_dump(catalog)] == ["h1"]
