"""
Receipt export: the raw snapshot as JSON (wire format) or a one-row-per-receipt CSV.
"""
from __future__ import annotations

import json

import pandas as pd

from pricebook.config import EXPORT_CSV_COLUMNS
from pricebook.data.normalize import receipt_to_dict
from pricebook.data.schemas import Receipt

EXPORT_FORMATS = ("json", "csv")


def receipts_frame(receipts: list[Receipt]) -> pd.DataFrame:
    """One row per receipt with the CSV export columns."""
    return pd.DataFrame(
        [
            [r.id, r.store_name_selected, r.billing_date, r.upload_date, r.total, len(r.items)]
            for r in receipts
        ],
        columns=EXPORT_CSV_COLUMNS,
    )


def export_receipts(receipts: list[Receipt], fmt: str = "json") -> str:
    """Serialize receipts. CSV of an empty list is an empty string."""
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unknown export format: {fmt}. Valid: {list(EXPORT_FORMATS)}")

    if fmt == "json":
        return json.dumps([receipt_to_dict(r) for r in receipts], indent=2)

    if not receipts:
        return ""
    return receipts_frame(receipts).to_csv(index=False, lineterminator="\n")
