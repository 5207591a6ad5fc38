"""
Wire-format mapping, item-name canonicalisation, price observation derivation.
"""
from __future__ import annotations

import datetime as dt
import math

import pandas as pd

from pricebook.data.schemas import LineItem, PriceEntry, Receipt

_EPOCH = dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)


# ---------------------------------------------------------------------------
# Canonical identity
# ---------------------------------------------------------------------------

def normalize_item_name(name: str | None) -> str:
    """Case-insensitive, trimmed form of an item name. Exact match only."""
    return (name or "").strip().lower()


# ---------------------------------------------------------------------------
# Price observation
# ---------------------------------------------------------------------------

def to_price_entry(receipt: Receipt, item: LineItem) -> PriceEntry:
    """Derive the per-unit price observation for one line item.

    Always total / quantity (quantity <= 0 counts as 1); the extracted
    unit price is ignored because edits can leave it inconsistent.
    """
    quantity = item.quantity if item.quantity and item.quantity > 0 else 1
    return PriceEntry(
        store=receipt.store_name_selected,
        price=(item.total_price or 0.0) / quantity,
        unit=item.unit,
        date=receipt.billing_date,
        receipt_id=receipt.id,
        timestamp=receipt.timestamp,
    )


# ---------------------------------------------------------------------------
# JSON wire format <-> records
# ---------------------------------------------------------------------------

def _to_float(value, default: float | None = 0.0) -> float | None:
    if value is None or value == "":
        return default
    try:
        f = float(value)
    except (TypeError, ValueError):
        return default
    return default if math.isnan(f) or math.isinf(f) else f


def _to_unit(value) -> str | None:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def parse_timestamp(*candidates) -> dt.datetime:
    """First parseable candidate as an aware UTC datetime, else the epoch."""
    for raw in candidates:
        if not raw:
            continue
        ts = pd.to_datetime(raw, utc=True, errors="coerce")
        if not pd.isna(ts):
            return ts.to_pydatetime()
    return _EPOCH


def parse_line_item(raw: dict) -> LineItem:
    """Map an extracted line item dict, filling safe defaults."""
    quantity = _to_float(raw.get("quantity"), 1.0)
    return LineItem(
        name=str(raw.get("name") or ""),
        quantity=quantity if quantity else 1.0,
        unit_price=_to_float(raw.get("unitPrice"), None),
        total_price=_to_float(raw.get("totalPrice"), 0.0),
        unit=_to_unit(raw.get("unit")),
    )


def parse_receipt(raw: dict) -> Receipt:
    """Map one stored receipt (camelCase JSON) onto a Receipt record."""
    extracted = raw.get("extractedData")
    if not isinstance(extracted, dict):
        extracted = {}
    lines = extracted.get("items")
    if not isinstance(lines, list):
        lines = []
    billing_date = str(raw.get("billingDate") or extracted.get("receiptDate") or "")
    upload_date = str(raw.get("uploadDate") or "")
    return Receipt(
        id=str(raw.get("id") or ""),
        store_name_selected=str(raw.get("storeNameSelected") or ""),
        store_name_scanned=str(raw.get("storeNameScanned") or extracted.get("storeNameScanned") or ""),
        billing_date=billing_date,
        upload_date=upload_date,
        timestamp=parse_timestamp(raw.get("timestamp"), upload_date, billing_date),
        items=[parse_line_item(i) for i in lines if isinstance(i, dict)],
        total=_to_float(extracted.get("total"), 0.0),
    )


def line_item_to_dict(item: LineItem) -> dict:
    d = {
        "name": item.name,
        "quantity": item.quantity,
        "totalPrice": item.total_price,
    }
    if item.unit_price is not None:
        d["unitPrice"] = item.unit_price
    if item.unit is not None:
        d["unit"] = item.unit
    return d


def receipt_to_dict(receipt: Receipt) -> dict:
    """Inverse of parse_receipt: the on-disk and API wire format."""
    return {
        "id": receipt.id,
        "storeNameScanned": receipt.store_name_scanned,
        "storeNameSelected": receipt.store_name_selected,
        "billingDate": receipt.billing_date,
        "uploadDate": receipt.upload_date,
        "timestamp": receipt.timestamp.isoformat(),
        "extractedData": {
            "items": [line_item_to_dict(i) for i in receipt.items],
            "total": receipt.total,
            "storeNameScanned": receipt.store_name_scanned,
            "receiptDate": receipt.billing_date,
        },
    }
