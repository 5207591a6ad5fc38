"""
DataStore — in-memory receipt snapshot backed by a single JSON file.

Loaded once at startup, queried on every request. Every read recomputes the
item timelines from the current snapshot; writes rewrite the file and swap
the snapshot atomically.
"""
from __future__ import annotations

import json
import threading
from dataclasses import replace
from pathlib import Path
from typing import Optional

from pricebook.config import RECEIPTS_FOLDER, RECEIPTS_FILE, STORES_FOLDER, UNITS_FOLDER
from pricebook.data.catalog import load_catalog, save_catalog
from pricebook.data.normalize import parse_receipt, receipt_to_dict
from pricebook.data.schemas import Catalog, ProcessedItem, Receipt
from pricebook.analytics.items import (
    get_item_by_name,
    get_item_names_for_analytics,
    process_items_from_receipts,
    rename_item,
    search_items,
)
from pricebook.analytics.prices import get_unique_stores


class DataStore:
    """Receipt snapshot plus reference catalog, with item-level accessors."""

    def __init__(
        self,
        receipts_dir: Path = RECEIPTS_FOLDER,
        stores_dir: Path = STORES_FOLDER,
        units_dir: Path = UNITS_FOLDER,
    ) -> None:
        self.receipts_path = Path(receipts_dir) / RECEIPTS_FILE
        self.stores_dir = Path(stores_dir)
        self.units_dir = Path(units_dir)
        self.catalog = Catalog()
        self._receipts: list[Receipt] = []
        self._lock = threading.Lock()
        self._loaded = False

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> "DataStore":
        """(Re)read receipts and the reference catalog from disk."""
        print("Loading receipts...")
        receipts = self._read_receipts()
        catalog = load_catalog(self.stores_dir, self.units_dir)
        with self._lock:
            self._receipts = receipts
            self.catalog = catalog
            self._loaded = True
        print(f"  {len(receipts):,} receipts, {len(catalog.stores)} catalog stores, {len(catalog.units)} units")
        return self

    def _read_receipts(self) -> list[Receipt]:
        if not self.receipts_path.exists():
            print(f"  No receipt file at {self.receipts_path}, starting empty")
            return []
        try:
            raw = json.loads(self.receipts_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            print(f"  Warning: could not read {self.receipts_path.name}: {exc}")
            return []
        if not isinstance(raw, list):
            print(f"  Warning: {self.receipts_path.name} is not a list, ignoring")
            return []

        receipts = []
        for entry in raw:
            if not isinstance(entry, dict):
                print("  Warning: skipping non-object receipt entry")
                continue
            receipts.append(parse_receipt(entry))
        return receipts

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def _commit(self, receipts: list[Receipt]) -> None:
        """Persist and swap the snapshot. Caller holds the lock."""
        self.receipts_path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.receipts_path.with_suffix(".json.tmp")
        tmp.write_text(
            json.dumps([receipt_to_dict(r) for r in receipts], indent=2),
            encoding="utf-8",
        )
        tmp.replace(self.receipts_path)
        self._receipts = receipts

    def add_receipt(self, receipt: Receipt) -> None:
        with self._lock:
            self._commit([*self._receipts, receipt])
        print(f"  Saved receipt {receipt.id}")

    def update_receipt(self, receipt_id: str, updates: dict) -> Receipt | None:
        """Merge wire-format updates into a stored receipt. None if not found."""
        with self._lock:
            for idx, current in enumerate(self._receipts):
                if current.id != receipt_id:
                    continue
                merged = {**receipt_to_dict(current), **updates, "id": receipt_id}
                updated = parse_receipt(merged)
                receipts = list(self._receipts)
                receipts[idx] = updated
                self._commit(receipts)
                print(f"  Updated receipt {receipt_id}")
                return updated
        return None

    def delete_receipt(self, receipt_id: str) -> bool:
        with self._lock:
            kept = [r for r in self._receipts if r.id != receipt_id]
            if len(kept) == len(self._receipts):
                return False
            self._commit(kept)
        print(f"  Deleted receipt {receipt_id}")
        return True

    def rename_item(self, old_name: str, new_name: str) -> int:
        """Rename an item across all receipts. Returns how many receipts changed."""
        with self._lock:
            renamed = rename_item(self._receipts, old_name, new_name)
            changed = sum(1 for a, b in zip(self._receipts, renamed) if a is not b)
            if changed:
                self._commit(renamed)
        print(f"  Renamed '{old_name}' -> '{new_name}' on {changed} receipt(s)")
        return changed

    def set_catalog(self, catalog: Catalog) -> Catalog:
        with self._lock:
            save_catalog(catalog, self.stores_dir, self.units_dir)
            self.catalog = catalog
        return catalog

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def receipts(self) -> list[Receipt]:
        """The current snapshot. Treat as read-only."""
        return self._receipts

    def receipt(self, receipt_id: str) -> Optional[Receipt]:
        return next((r for r in self._receipts if r.id == receipt_id), None)

    def items(self) -> list[ProcessedItem]:
        return process_items_from_receipts(self._receipts)

    def item(self, name: str) -> Optional[ProcessedItem]:
        return get_item_by_name(self._receipts, name)

    def search(self, term: str) -> list[ProcessedItem]:
        return search_items(self._receipts, term)

    def item_names(self) -> list[str]:
        return get_item_names_for_analytics(self._receipts)

    def stores(self) -> list[str]:
        """Stores that actually appear on receipts."""
        return get_unique_stores(self._receipts)

    def receipt_count(self) -> int:
        return len(self._receipts)

    def date_range(self) -> str:
        """Human-readable billing date range."""
        dates = sorted(r.billing_date for r in self._receipts if r.billing_date)
        if not dates:
            return "N/A"
        return f"{dates[0]} to {dates[-1]}"
