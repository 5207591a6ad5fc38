"""API tests against a DataStore rooted in a temp directory."""

import json

import pytest
from fastapi.testclient import TestClient

from pricebook.api.dependencies import set_store
from pricebook.config import STORE_PALETTE
from pricebook.data.normalize import receipt_to_dict
from pricebook.data.store import DataStore
from pricebook.main import create_app


@pytest.fixture
def client(store, milk_receipts):
    for r in milk_receipts:
        store.add_receipt(r)
    set_store(store)
    # no context manager: the lifespan would load the configured data folder instead
    yield TestClient(create_app())
    set_store(None)


def receipt_payload(receipt_id="new1", store="Kroger", items=None):
    return {
        "id": receipt_id,
        "storeNameSelected": store,
        "billingDate": "2024-03-10",
        "uploadDate": "2024-03-10",
        "extractedData": {
            "items": items if items is not None else [{"name": "Milk", "quantity": 1, "totalPrice": 2.75}],
            "total": 2.75,
        },
    }


class TestMeta:
    def test_health(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "receipts": 4, "items": 1, "stores": 2}

    def test_not_loaded_returns_503(self, data_dirs):
        set_store(DataStore(data_dirs["receipts"], data_dirs["stores"], data_dirs["units"]))
        try:
            assert TestClient(create_app()).get("/api/health").status_code == 503
        finally:
            set_store(None)

    def test_stores_with_colors(self, client):
        data = client.get("/api/stores").json()
        assert data["stores"] == ["Costco", "Target"]
        assert data["colors"] == {"Costco": "#0066B2", "Target": "#CC0000"}
        assert "Walmart" in data["catalog"]

    def test_reload(self, client):
        assert client.post("/api/reload").json() == {"status": "reloaded", "receipts": 4}


class TestItems:
    def test_list(self, client):
        data = client.get("/api/items").json()
        assert data["count"] == 1
        assert data["items"][0]["name"] == "Milk"
        assert data["items"][0]["entries"] == 3

    def test_search(self, client):
        assert client.get("/api/items", params={"q": "bread"}).json()["count"] == 0
        assert client.get("/api/items", params={"q": "MIL"}).json()["count"] == 1

    def test_names(self, client):
        assert client.get("/api/items/names").json() == {"names": ["Milk"]}

    def test_detail_case_insensitive(self, client):
        data = client.get("/api/items/MILK").json()
        assert data["latest_price"] == 3.5
        assert [e["receipt_id"] for e in data["price_history"]] == ["r4", "r3", "r1"]

    def test_detail_not_found(self, client):
        assert client.get("/api/items/eggs").status_code == 404

    def test_statistics(self, client):
        data = client.get("/api/items/milk/statistics").json()
        assert data["trend"] == "up"
        assert data["cheapest_store"] == "Target"
        assert data["total_purchases"] == 3

    def test_statistics_store_filter(self, client):
        resp = client.get("/api/items/milk/statistics", params=[("store", "Costco")])
        assert resp.json()["total_purchases"] == 2
        resp = client.get("/api/items/milk/statistics", params=[("store", "all")])
        assert resp.json()["total_purchases"] == 3

    def test_statistics_no_data_for_store(self, client):
        resp = client.get("/api/items/milk/statistics", params=[("store", "Kroger")])
        assert resp.status_code == 404

    def test_chart(self, client):
        data = client.get("/api/items/milk/chart").json()
        assert data["item"] == "Milk"
        assert data["stores"] == ["Costco", "Target"]
        assert data["points"][0] == {"date": "2024-03-01", "label": "Mar 1", "Costco": 3.0}
        assert [s["store"] for s in data["series"]] == ["Costco", "Target"]

    def test_chart_colors_by_first_seen_store(self, client):
        client.post("/api/receipts", json=receipt_payload("a1", "Alpha Grocer", [{"name": "Eggs", "totalPrice": 3.0}]))
        client.post("/api/receipts", json=receipt_payload("z1", "Zeta Mart", [{"name": "Eggs", "totalPrice": 3.0}]))
        data = client.get("/api/items/eggs/chart").json()
        assert data["stores"] == ["Zeta Mart", "Alpha Grocer"]
        assert data["colors"] == {"Zeta Mart": STORE_PALETTE[0], "Alpha Grocer": STORE_PALETTE[1]}

    def test_rename(self, client):
        resp = client.post("/api/items/milk/rename", json={"new_name": "Whole Milk"})
        assert resp.json() == {"old_name": "Milk", "new_name": "Whole Milk", "receipts_updated": 4}
        assert client.get("/api/items/milk").status_code == 404
        assert client.get("/api/items/whole milk").status_code == 200

    def test_rename_blank(self, client):
        assert client.post("/api/items/milk/rename", json={"new_name": " "}).status_code == 400


class TestReceipts:
    def test_list(self, client):
        assert len(client.get("/api/receipts").json()["receipts"]) == 4

    def test_create(self, client):
        resp = client.post("/api/receipts", json=receipt_payload())
        assert resp.status_code == 201
        assert resp.json()["receipt"]["timestamp"]
        item = client.get("/api/items/milk").json()
        assert item["latest_store"] == "Kroger"
        assert item["latest_price"] == 2.75

    def test_create_missing_fields(self, client):
        payload = receipt_payload()
        del payload["storeNameSelected"]
        assert client.post("/api/receipts", json=payload).status_code == 400

    def test_create_duplicate(self, client):
        assert client.post("/api/receipts", json=receipt_payload("r1")).status_code == 400

    def test_update(self, client):
        resp = client.patch("/api/receipts/r1", json={"updates": {"storeNameSelected": "Aldi"}})
        assert resp.json()["receipt"]["storeNameSelected"] == "Aldi"
        assert "Aldi" in client.get("/api/stores").json()["stores"]

    def test_update_with_malformed_extracted_data(self, client):
        resp = client.patch("/api/receipts/r1", json={"updates": {"extractedData": "oops"}})
        assert resp.status_code == 200
        assert resp.json()["receipt"]["extractedData"]["items"] == []

    def test_update_missing(self, client):
        assert client.patch("/api/receipts/nope", json={"updates": {}}).status_code == 404

    def test_delete(self, client):
        assert client.delete("/api/receipts/r4").status_code == 200
        assert client.get("/api/items/milk").json()["latest_price"] == 3.0
        assert client.delete("/api/receipts/r4").status_code == 404

    def test_export_csv(self, client):
        resp = client.get("/api/receipts/export", params={"format": "csv"})
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/csv")
        assert resp.text.splitlines()[0].startswith("ID,Store")

    def test_export_json(self, client, milk_receipts):
        resp = client.get("/api/receipts/export")
        assert json.loads(resp.text) == [receipt_to_dict(r) for r in milk_receipts]

    def test_export_bad_format(self, client):
        assert client.get("/api/receipts/export", params={"format": "xml"}).status_code == 400


class TestCatalog:
    def test_add_and_delete_store(self, client):
        assert "Aldi" in client.post("/api/catalog/stores", json={"store": "Aldi"}).json()["values"]
        assert client.post("/api/catalog/stores", json={"store": "aldi"}).status_code == 400
        assert "Aldi" not in client.delete("/api/catalog/stores/Aldi").json()["values"]
        assert client.delete("/api/catalog/stores/Aldi").status_code == 404

    def test_add_blank_store(self, client):
        assert client.post("/api/catalog/stores", json={"store": "  "}).status_code == 400

    def test_units(self, client):
        assert "gal" in client.post("/api/catalog/units", json={"unit": "GAL"}).json()["values"]
        assert "gal" not in client.delete("/api/catalog/units/gal").json()["values"]

    def test_discover_units(self, client):
        assert "gal" in client.get("/api/catalog/units/discover").json()["values"]
        assert "gal" in client.get("/api/catalog/units").json()["values"]


class TestReports:
    def test_price_book_json(self, client):
        data = client.get("/api/reports/price-book").json()
        assert data["totals"]["items"] == 1
        assert data["totals"]["rising"] == 1

    def test_price_book_excel(self, client):
        resp = client.get("/api/reports/price-book.xlsx")
        assert resp.status_code == 200
        assert resp.content[:2] == b"PK"
