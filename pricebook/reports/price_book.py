"""
Price Book — every tracked item with its latest price, range and trend, plus the
full filtered price history, as JSON or a styled Excel workbook.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import pandas as pd

from pricebook.data.store import DataStore
from pricebook.analytics.common import sanitize_for_json
from pricebook.analytics.prices import calculate_statistics, filter_history
from pricebook.excel.writer import ExcelWriter


ITEM_COLS = [
    ("name", "text", "Item"),
    ("latest_price", "currency", "Latest Price"),
    ("latest_unit", "text", "Unit"),
    ("latest_store", "text", "Latest Store"),
    ("latest_date", "text", "Latest Date"),
    ("entries", "number", "Price Points"),
    ("min_price", "currency", "Lowest"),
    ("avg_price", "currency", "Average"),
    ("max_price", "currency", "Highest"),
    ("cheapest_store", "text", "Cheapest At"),
    ("price_change", "percent", "Change"),
    ("trend", "text", "Trend"),
]

HISTORY_COLS = [
    ("item", "text", "Item"),
    ("date", "text", "Billing Date"),
    ("store", "text", "Store"),
    ("price", "currency", "Unit Price"),
    ("unit", "text", "Unit"),
    ("receipt_id", "text", "Receipt"),
]


def generate_json(store: DataStore, stores: Optional[list[str]] = None) -> dict:
    """Item rows + history rows, restricted to the given stores when set."""
    item_rows = []
    history_rows = []

    for item in store.items():
        stats = calculate_statistics(item, stores)
        if stats is None:
            continue
        item_rows.append({
            "name": item.name,
            "latest_price": item.latest_price,
            "latest_unit": item.latest_unit,
            "latest_store": item.latest_store,
            "latest_date": item.latest_date,
            "entries": stats.total_purchases,
            "min_price": stats.cheapest_price,
            "avg_price": stats.average_price,
            "max_price": stats.most_expensive_price,
            "cheapest_store": stats.cheapest_store,
            "price_change": stats.price_change,
            "trend": stats.trend.value,
        })
        for entry in filter_history(item, stores):
            history_rows.append({
                "item": item.name,
                "date": entry.date,
                "store": entry.store,
                "price": entry.price,
                "unit": entry.unit,
                "receipt_id": entry.receipt_id,
            })

    trends = pd.Series([r["trend"] for r in item_rows], dtype="object")
    return sanitize_for_json({
        "date_range": store.date_range(),
        "stores": stores or store.stores(),
        "totals": {
            "receipts": store.receipt_count(),
            "items": len(item_rows),
            "price_points": len(history_rows),
            "rising": int((trends == "up").sum()),
            "falling": int((trends == "down").sum()),
        },
        "items": item_rows,
        "history": history_rows,
    })


def _movers(items: list[dict], n: int = 5) -> pd.DataFrame:
    """Items with the largest absolute price change."""
    df = pd.DataFrame(items)
    if df.empty or "price_change" not in df.columns:
        return df
    df["price_change"] = pd.to_numeric(df["price_change"], errors="coerce")
    df = df.dropna(subset=["price_change"])
    df = df[df["trend"] != "stable"]
    return df.reindex(df["price_change"].abs().sort_values(ascending=False).index).head(n)


def build_workbook(store: DataStore, stores: Optional[list[str]] = None) -> ExcelWriter:
    data = generate_json(store, stores)
    t = data["totals"]
    ew = ExcelWriter()

    ws = ew.add_sheet("Summary")
    ew.write_title(ws, "PRICE BOOK",
                   f"{data['date_range']}  |  Stores: {', '.join(data['stores']) or 'none'}  |  "
                   f"Generated {pd.Timestamp.now():%B %d, %Y}")

    row = ew.write_section(ws, 5, "OVERVIEW")
    row = ew.write_kpi_row(ws, row, [
        (t["receipts"], "RECEIPTS", "number"),
        (t["items"], "ITEMS TRACKED", "number"),
        (t["price_points"], "PRICE POINTS", "number"),
        (t["rising"], "PRICES RISING", "number"),
        (t["falling"], "PRICES FALLING", "number"),
    ])

    row = ew.write_section(ws, row, "BIGGEST MOVERS")
    movers = _movers(data["items"])
    if movers.empty:
        ew.write_insight(ws, row, "No price movement yet",
                         "Every tracked item is within 5% of its first recorded price.")
    else:
        for _, m in movers.iterrows():
            direction = "up" if m["price_change"] > 0 else "down"
            row = ew.write_insight(
                ws, row, f"{m['name']}: {direction} {abs(m['price_change']):.1f}%",
                f"Now ${m['latest_price']:,.2f} at {m['latest_store']} "
                f"(range ${m['min_price']:,.2f} to ${m['max_price']:,.2f})",
            )

    ws_items = ew.add_sheet("Items")
    ew.write_table(ws_items, 1, ITEM_COLS, data["items"],
                   highlight_fn=lambda _, r: r["trend"] if r["trend"] != "stable" else None)

    ws_hist = ew.add_sheet("Price History")
    ew.write_table(ws_hist, 1, HISTORY_COLS, data["history"])

    return ew


def generate_excel(
    store: DataStore,
    output_path: str | Path,
    stores: Optional[list[str]] = None,
) -> Path:
    return build_workbook(store, stores).save(output_path)
