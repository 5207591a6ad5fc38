"""Tests for wire-format parsing and price observation derivation."""

import datetime as dt

import pytest

from pricebook.data.normalize import (
    normalize_item_name,
    parse_line_item,
    parse_receipt,
    parse_timestamp,
    receipt_to_dict,
    to_price_entry,
)
from pricebook.data.schemas import LineItem


class TestNormalizeItemName:
    def test_trims_and_lowercases(self):
        assert normalize_item_name("  Whole Milk ") == "whole milk"

    def test_none_is_empty(self):
        assert normalize_item_name(None) == ""

    def test_inner_whitespace_kept(self):
        assert normalize_item_name("Whole  Milk") == "whole  milk"


class TestToPriceEntry:
    def test_price_is_total_over_quantity(self, make_receipt):
        receipt = make_receipt("r1", "Costco", "2024-03-01", 0, [("Eggs", 3, 7.5, "ea")])
        entry = to_price_entry(receipt, receipt.items[0])
        assert entry.price == 7.5 / 3
        assert entry.store == "Costco"
        assert entry.unit == "ea"
        assert entry.date == "2024-03-01"
        assert entry.receipt_id == "r1"
        assert entry.timestamp == receipt.timestamp

    def test_zero_quantity_counts_as_one(self, make_receipt):
        receipt = make_receipt("r1", "Costco", "2024-03-01", 0, [("Eggs", 0, 4.0)])
        assert to_price_entry(receipt, receipt.items[0]).price == 4.0

    def test_unit_price_field_ignored(self, make_receipt):
        receipt = make_receipt("r1", "Costco", "2024-03-01", 0, [])
        item = LineItem(name="Eggs", quantity=2, unit_price=9.99, total_price=5.0)
        assert to_price_entry(receipt, item).price == 2.5


class TestParseTimestamp:
    def test_first_parseable_wins(self):
        ts = parse_timestamp(None, "not a date", "2024-03-05T10:00:00Z")
        assert ts == dt.datetime(2024, 3, 5, 10, 0, tzinfo=dt.timezone.utc)

    def test_naive_values_become_utc(self):
        ts = parse_timestamp("2024-03-05")
        assert ts.tzinfo is not None
        assert ts.utcoffset() == dt.timedelta(0)

    def test_falls_back_to_epoch(self):
        assert parse_timestamp(None, "", "garbage").year == 1970


class TestParseReceipt:
    def test_partial_line_item_defaults(self):
        item = parse_line_item({"name": "Bread"})
        assert item.quantity == 1.0
        assert item.total_price == 0.0
        assert item.unit_price is None
        assert item.unit is None

    def test_bad_numbers_use_defaults(self):
        item = parse_line_item({"name": "Bread", "quantity": "two", "totalPrice": "abc", "unit": "  "})
        assert item.quantity == 1.0
        assert item.total_price == 0.0
        assert item.unit is None

    def test_maps_camel_case_fields(self):
        receipt = parse_receipt({
            "id": "abc",
            "storeNameSelected": "Target",
            "storeNameScanned": "TARGET #123",
            "uploadDate": "2024-03-02",
            "timestamp": "2024-03-02T09:30:00Z",
            "extractedData": {
                "receiptDate": "2024-03-01",
                "total": "12.50",
                "items": [{"name": "Milk", "quantity": 2, "unitPrice": 3.0, "totalPrice": 6.0, "unit": "gal"}],
            },
        })
        assert receipt.id == "abc"
        assert receipt.store_name_selected == "Target"
        assert receipt.billing_date == "2024-03-01"
        assert receipt.total == 12.5
        assert receipt.items[0].unit_price == 3.0
        assert receipt.items[0].unit == "gal"
        assert receipt.timestamp.hour == 9

    def test_billing_date_preferred_over_receipt_date(self):
        receipt = parse_receipt({"billingDate": "2024-04-01", "extractedData": {"receiptDate": "2024-03-01"}})
        assert receipt.billing_date == "2024-04-01"

    def test_timestamp_falls_back_to_upload_then_billing_date(self):
        receipt = parse_receipt({"uploadDate": "2024-03-02", "billingDate": "2024-03-01"})
        assert receipt.timestamp.date() == dt.date(2024, 3, 2)
        receipt = parse_receipt({"billingDate": "2024-03-01"})
        assert receipt.timestamp.date() == dt.date(2024, 3, 1)

    def test_non_dict_items_skipped(self):
        receipt = parse_receipt({"extractedData": {"items": ["junk", {"name": "Milk", "totalPrice": 3}]}})
        assert [i.name for i in receipt.items] == ["Milk"]

    def test_wire_format_survives_save_and_reload(self, make_receipt):
        receipt = make_receipt("r1", "Costco", "2024-03-01", 5, [("Milk", 2, 6.0, "gal")], total=6.0)
        assert parse_receipt(receipt_to_dict(receipt)) == receipt

    def test_malformed_extracted_data_ignored(self):
        receipt = parse_receipt({"id": "x", "billingDate": "2024-03-01", "extractedData": "oops"})
        assert receipt.items == []
        assert receipt.total == 0.0
        assert receipt.billing_date == "2024-03-01"

    def test_non_list_items_ignored(self):
        receipt = parse_receipt({"extractedData": {"items": {"name": "Milk"}, "total": 3}})
        assert receipt.items == []
        assert receipt.total == 3.0

    @pytest.mark.parametrize("missing", ["id", "storeNameSelected"])
    def test_missing_strings_are_empty(self, missing):
        raw = {"id": "x", "storeNameSelected": "Target"}
        raw.pop(missing)
        receipt = parse_receipt(raw)
        assert getattr(receipt, "id" if missing == "id" else "store_name_selected") == ""
