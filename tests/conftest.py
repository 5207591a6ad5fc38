"""Shared fixtures: receipt builders and a DataStore rooted in a temp directory."""

import datetime as dt

import pytest

from pricebook.data.schemas import LineItem, Receipt
from pricebook.data.store import DataStore

BASE_TS = dt.datetime(2024, 3, 1, 12, 0, tzinfo=dt.timezone.utc)


def ts(minutes: int) -> dt.datetime:
    return BASE_TS + dt.timedelta(minutes=minutes)


@pytest.fixture
def make_receipt():
    """Factory: make_receipt("r1", "Costco", "2024-03-01", minutes, [("Milk", 1, 3.0), ...])."""
    def _make(receipt_id, store, billing_date, minutes, lines, **kwargs):
        items = []
        for line in lines:
            name, qty, total = line[:3]
            unit = line[3] if len(line) > 3 else None
            items.append(LineItem(name=name, quantity=qty, total_price=total, unit=unit))
        return Receipt(
            id=receipt_id,
            store_name_selected=store,
            billing_date=billing_date,
            timestamp=ts(minutes),
            items=items,
            **kwargs,
        )
    return _make


@pytest.fixture
def data_dirs(tmp_path):
    dirs = {name: tmp_path / name for name in ("receipts", "stores", "units")}
    for d in dirs.values():
        d.mkdir()
    return dirs


@pytest.fixture
def store(data_dirs):
    return DataStore(data_dirs["receipts"], data_dirs["stores"], data_dirs["units"]).load()


@pytest.fixture
def milk_receipts(make_receipt):
    """Milk at Costco $3.00, Costco $3.00, Target $3.00, Costco $3.50, in that order."""
    return [
        make_receipt("r1", "Costco", "2024-03-01", 0, [("Milk", 1, 3.0, "gal")]),
        make_receipt("r2", "Costco", "2024-03-02", 10, [("milk", 1, 3.0, "gal")]),
        make_receipt("r3", "Target", "2024-03-03", 20, [("MILK ", 1, 3.0, "gal")]),
        make_receipt("r4", "Costco", "2024-03-04", 30, [("Milk", 2, 7.0, "gal")]),
    ]
