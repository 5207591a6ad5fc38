#!/usr/bin/env python3
"""
Pricebook CLI — item price lookups, renames, exports, and the API server.

USAGE:
  python -m pricebook.cli items                          # All tracked items
  python -m pricebook.cli items --search milk            # Substring search
  python -m pricebook.cli item "Milk"                    # History + statistics
  python -m pricebook.cli item "Milk" --store Costco --store Target
  python -m pricebook.cli stores                         # Stores seen on receipts
  python -m pricebook.cli rename "whole milk" "Milk"     # Rename across all receipts

  python -m pricebook.cli export --format xlsx           # Price book workbook
  python -m pricebook.cli export --format csv --output receipts.csv

  python -m pricebook.cli serve --port 8000              # Start API server
"""
from __future__ import annotations

import argparse
import json
import os
import sys
from datetime import datetime
from pathlib import Path

from pricebook.config import REPORTS_FOLDER
from pricebook.data.store import DataStore
from pricebook.analytics.common import sanitize_for_json
from pricebook.analytics.prices import calculate_statistics, filter_history


def cmd_items(args):
    """List tracked items with their latest price."""
    store = DataStore().load()
    items = store.search(args.search) if args.search else store.items()
    if not items:
        print("  No items found.")
        return

    print(f"\nITEMS ({len(items)}):\n")
    for i, item in enumerate(items, 1):
        unit = f"/{item.latest_unit}" if item.latest_unit else ""
        print(f"{i:<4}{item.name[:40]:<42}${item.latest_price:>9,.2f}{unit:<6}  "
              f"{item.latest_store[:20]:<22}{item.latest_date}")


def cmd_item(args):
    """Show one item's filtered price history and statistics."""
    store = DataStore().load()
    item = store.item(args.name)
    if item is None:
        print(f"  Item not found: '{args.name}'")
        sys.exit(1)

    stores = args.store or None
    stats = calculate_statistics(item, stores)

    if args.json:
        data = {
            "item": item.to_dict(),
            "statistics": stats.to_dict() if stats else None,
        }
        print(json.dumps(sanitize_for_json(data), indent=2))
        return

    print("\n" + "=" * 70)
    print(f"  {item.name}")
    print("=" * 70)
    for entry in filter_history(item, stores):
        unit = f"/{entry.unit}" if entry.unit else ""
        print(f"  {entry.date:<12}{entry.store[:28]:<30}${entry.price:>9,.2f}{unit}")

    if stats is None:
        print("\n  No data for the selected stores.")
        return

    change = "n/a" if stats.price_change is None else f"{stats.price_change:+.1f}%"
    print(f"\n  Cheapest:   ${stats.cheapest_price:,.2f} at {stats.cheapest_store} ({stats.cheapest_date})")
    print(f"  Highest:    ${stats.most_expensive_price:,.2f} at {stats.most_expensive_store} ({stats.most_expensive_date})")
    print(f"  Average:    ${stats.average_price:,.2f} over {stats.total_purchases} price point(s)")
    print(f"  Trend:      {stats.trend.value} ({change})\n")


def cmd_stores(args):
    store = DataStore().load()
    stores = store.stores()
    print(f"\nSTORES ({len(stores)}):\n")
    for s in stores:
        print(f"  {s}")


def cmd_rename(args):
    store = DataStore().load()
    if store.item(args.old) is None:
        print(f"  Item not found: '{args.old}'")
        sys.exit(1)
    if store.item(args.new) is not None:
        print(f"  Note: '{args.new}' already exists, histories will be merged")
    try:
        store.rename_item(args.old, args.new)
    except ValueError as exc:
        print(f"  {exc}")
        sys.exit(1)


def cmd_export(args):
    """Export receipts (json/csv) or the price book workbook (xlsx)."""
    store = DataStore().load()
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    if args.format == "xlsx":
        from pricebook.reports.price_book import generate_excel
        out = Path(args.output) if args.output else REPORTS_FOLDER / f"Price_Book_{stamp}.xlsx"
        generate_excel(store, out, args.store or None)
    else:
        from pricebook.reports.receipt_export import export_receipts
        out = Path(args.output) if args.output else REPORTS_FOLDER / f"receipts_{stamp}.{args.format}"
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(export_receipts(store.receipts(), args.format), encoding="utf-8")

    print(f"\n  Saved: {out}\n")


def cmd_serve(args):
    """Start the API server."""
    import uvicorn
    print(f"\nStarting Pricebook API on port {args.port}...")
    uvicorn.run("pricebook.main:app", host="0.0.0.0", port=args.port, reload=args.reload,
                timeout_keep_alive=65)


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        description="Pricebook — receipt price tracking",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    items_parser = subparsers.add_parser("items", help="List tracked items")
    items_parser.add_argument("--search", help="Substring of the item name")
    items_parser.set_defaults(func=cmd_items)

    item_parser = subparsers.add_parser("item", help="Show one item's price history")
    item_parser.add_argument("name", help="Item name (case-insensitive)")
    item_parser.add_argument("--store", action="append", help="Only include this store (repeatable)")
    item_parser.add_argument("--json", action="store_true", help="JSON output")
    item_parser.set_defaults(func=cmd_item)

    stores_parser = subparsers.add_parser("stores", help="List stores seen on receipts")
    stores_parser.set_defaults(func=cmd_stores)

    rename_parser = subparsers.add_parser("rename", help="Rename an item on every receipt")
    rename_parser.add_argument("old", help="Current item name")
    rename_parser.add_argument("new", help="New item name")
    rename_parser.set_defaults(func=cmd_rename)

    export_parser = subparsers.add_parser("export", help="Export receipts or the price book")
    export_parser.add_argument("--format", choices=["json", "csv", "xlsx"], default="json")
    export_parser.add_argument("--output", help="Output path (default: reports folder)")
    export_parser.add_argument("--store", action="append", help="Price book store filter (xlsx only)")
    export_parser.set_defaults(func=cmd_export)

    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return

    args.func(args)


if __name__ == "__main__":
    main()
