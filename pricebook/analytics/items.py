"""
Item reconciliation: merge line items across receipts into one price timeline
per item, and drop same-store repeats that don't change the price.
"""
from __future__ import annotations

from dataclasses import replace

from pricebook.config import PRICE_TOLERANCE
from pricebook.data.normalize import normalize_item_name, to_price_entry
from pricebook.data.schemas import PriceEntry, ProcessedItem, Receipt


# ---------------------------------------------------------------------------
# Timeline building
# ---------------------------------------------------------------------------

def build_timelines(
    receipts: list[Receipt],
) -> tuple[dict[str, list[PriceEntry]], dict[str, str]]:
    """Group every price observation by canonical item identity.

    Returns (entries by normalized name, display name by normalized name).
    The display name is the first line item seen for that identity in
    receipt iteration order. Entries are left unsorted.
    """
    timelines: dict[str, list[PriceEntry]] = {}
    display_names: dict[str, str] = {}

    for receipt in receipts:
        for item in receipt.items:
            key = normalize_item_name(item.name)
            if key not in timelines:
                timelines[key] = []
                display_names[key] = item.name.strip()
            timelines[key].append(to_price_entry(receipt, item))

    return timelines, display_names


# ---------------------------------------------------------------------------
# Variation filter
# ---------------------------------------------------------------------------

def apply_price_variation_rules(entries: list[PriceEntry]) -> list[PriceEntry]:
    """Keep the observations that are real history, oldest first.

    Expects entries sorted ascending by receipt timestamp.
    - the first observation is always kept
    - first observation at a store is always kept, even at an equal price
    - later observations at a store are kept only if the price moved by
      more than PRICE_TOLERANCE from the last kept one at that store
    """
    result: list[PriceEntry] = []
    last_by_store: dict[str, PriceEntry] = {}

    for entry in entries:
        prior = last_by_store.get(entry.store)

        if result and prior is not None and abs(entry.price - prior.price) <= PRICE_TOLERANCE:
            continue

        result.append(entry)
        last_by_store[entry.store] = entry

    return result


def _build_item(normalized_name: str, display_name: str, entries: list[PriceEntry]) -> ProcessedItem | None:
    # sorted() is stable: same-timestamp entries keep receipt order
    ordered = sorted(entries, key=lambda e: e.timestamp)
    history = apply_price_variation_rules(ordered)
    if not history:
        return None

    latest = history[-1]
    return ProcessedItem(
        name=display_name or normalized_name,
        normalized_name=normalized_name,
        latest_price=latest.price,
        latest_store=latest.store,
        latest_date=latest.date,
        latest_unit=latest.unit,
        price_history=list(reversed(history)),
    )


# ---------------------------------------------------------------------------
# Public item operations
# ---------------------------------------------------------------------------

def process_items_from_receipts(receipts: list[Receipt]) -> list[ProcessedItem]:
    """Every item with its filtered price history, sorted by normalized name."""
    timelines, display_names = build_timelines(receipts)

    items = []
    for key, entries in timelines.items():
        item = _build_item(key, display_names[key], entries)
        if item is not None:
            items.append(item)

    return sorted(items, key=lambda i: i.normalized_name)


def get_item_by_name(receipts: list[Receipt], name: str) -> ProcessedItem | None:
    """Case-insensitive exact lookup on canonical identity."""
    target = normalize_item_name(name)
    timelines, display_names = build_timelines(receipts)
    if target not in timelines:
        return None
    return _build_item(target, display_names[target], timelines[target])


def search_items(receipts: list[Receipt], term: str) -> list[ProcessedItem]:
    """Items whose normalized name contains the term. Blank term returns all."""
    items = process_items_from_receipts(receipts)
    needle = normalize_item_name(term)
    if not needle:
        return items
    return [i for i in items if needle in i.normalized_name]


def get_item_names_for_analytics(receipts: list[Receipt]) -> list[str]:
    """Display names, sorted case-insensitively."""
    items = process_items_from_receipts(receipts)
    return sorted((i.name for i in items), key=str.lower)


def rename_item(receipts: list[Receipt], old_name: str, new_name: str) -> list[Receipt]:
    """Rewrite every line item matching old_name's identity to new_name.

    Receipts without a match are returned unchanged (same objects). If
    new_name is already an item, the two histories merge from now on.
    """
    new_name = (new_name or "").strip()
    if not new_name:
        raise ValueError("New item name must not be blank")

    target = normalize_item_name(old_name)
    renamed: list[Receipt] = []
    for receipt in receipts:
        if not any(normalize_item_name(i.name) == target for i in receipt.items):
            renamed.append(receipt)
            continue
        items = [
            replace(i, name=new_name) if normalize_item_name(i.name) == target else i
            for i in receipt.items
        ]
        renamed.append(replace(receipt, items=items))
    return renamed
