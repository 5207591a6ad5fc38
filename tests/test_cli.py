"""CLI commands run against a temp-directory DataStore."""

import json

import pytest

from pricebook import cli


@pytest.fixture
def loaded(store, milk_receipts, monkeypatch):
    for r in milk_receipts:
        store.add_receipt(r)
    monkeypatch.setattr(cli, "DataStore", lambda: store)
    return store


def test_items_lists_latest_price(loaded, capsys):
    cli.main(["items"])
    out = capsys.readouterr().out
    assert "ITEMS (1)" in out
    assert "$     3.50/gal" in out


def test_items_search_no_match(loaded, capsys):
    cli.main(["items", "--search", "bread"])
    assert "No items found" in capsys.readouterr().out


def test_item_json(loaded, capsys):
    cli.main(["item", "MILK", "--json"])
    out = capsys.readouterr().out
    data = json.loads(out[out.index("{"):])
    assert data["item"]["name"] == "Milk"
    assert data["statistics"]["trend"] == "up"


def test_item_store_filter(loaded, capsys):
    cli.main(["item", "milk", "--store", "Kroger"])
    assert "No data for the selected stores" in capsys.readouterr().out


def test_item_not_found(loaded):
    with pytest.raises(SystemExit) as exc:
        cli.main(["item", "eggs"])
    assert exc.value.code == 1


def test_stores(loaded, capsys):
    cli.main(["stores"])
    out = capsys.readouterr().out
    assert "STORES (2)" in out
    assert "Costco" in out


def test_rename(loaded):
    cli.main(["rename", "milk", "Whole Milk"])
    assert loaded.item("whole milk") is not None


def test_export_csv(loaded, tmp_path):
    out = tmp_path / "receipts.csv"
    cli.main(["export", "--format", "csv", "--output", str(out)])
    assert out.read_text(encoding="utf-8").startswith("ID,Store")


def test_export_xlsx(loaded, tmp_path):
    out = tmp_path / "book.xlsx"
    cli.main(["export", "--format", "xlsx", "--output", str(out)])
    assert out.read_bytes()[:2] == b"PK"
