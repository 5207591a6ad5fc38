"""
Store and unit reference lists: pure list edits plus JSON load/save seeding.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from pricebook.config import (
    DEFAULT_STORES, DEFAULT_UNITS,
    STORES_FOLDER, UNITS_FOLDER, STORES_FILE, UNITS_FILE,
)
from pricebook.data.schemas import Catalog, Receipt


def clean_stores(stores: Iterable[str]) -> list[str]:
    """Trimmed, non-empty, unique, sorted store names."""
    return sorted({s.strip() for s in stores if s and s.strip()})


def clean_units(units: Iterable[str]) -> list[str]:
    """Lower-cased, trimmed, non-empty, unique, sorted units."""
    return sorted({u.strip().lower() for u in units if u and u.strip()})


def default_catalog() -> Catalog:
    return Catalog(stores=clean_stores(DEFAULT_STORES), units=clean_units(DEFAULT_UNITS))


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------

def add_store(catalog: Catalog, name: str) -> Catalog | None:
    """Return a catalog with the store added, or None if blank or already present."""
    trimmed = (name or "").strip()
    if not trimmed:
        return None
    if any(s.lower() == trimmed.lower() for s in catalog.stores):
        return None
    return Catalog(stores=clean_stores([*catalog.stores, trimmed]), units=list(catalog.units))


def delete_store(catalog: Catalog, name: str) -> Catalog | None:
    """Case-insensitive removal. None if the store isn't listed."""
    target = (name or "").strip().lower()
    kept = [s for s in catalog.stores if s.lower() != target]
    if len(kept) == len(catalog.stores):
        return None
    return Catalog(stores=clean_stores(kept), units=list(catalog.units))


# ---------------------------------------------------------------------------
# Units
# ---------------------------------------------------------------------------

def add_unit(catalog: Catalog, unit: str) -> Catalog | None:
    trimmed = (unit or "").strip().lower()
    if not trimmed or trimmed in catalog.units:
        return None
    return Catalog(stores=list(catalog.stores), units=clean_units([*catalog.units, trimmed]))


def delete_unit(catalog: Catalog, unit: str) -> Catalog | None:
    target = (unit or "").strip().lower()
    kept = [u for u in catalog.units if u != target]
    if len(kept) == len(catalog.units):
        return None
    return Catalog(stores=list(catalog.stores), units=clean_units(kept))


def discover_units(catalog: Catalog, receipts: list[Receipt]) -> Catalog:
    """Merge every unit seen on a line item into the unit list."""
    found = [item.unit for r in receipts for item in r.items if item.unit]
    return Catalog(stores=list(catalog.stores), units=clean_units([*catalog.units, *found]))


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------

def _read_list(path: Path, default: list[str]) -> list[str] | None:
    """Read a JSON string list. None means 'missing, seed it'."""
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        print(f"  Warning: could not read {path.name}: {exc}")
        return list(default)
    if not isinstance(data, list):
        print(f"  Warning: {path.name} is not a list, using defaults")
        return list(default)
    return [str(x) for x in data]


def _write_list(path: Path, values: list[str]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(values, indent=2), encoding="utf-8")


def load_catalog(stores_dir: Path = STORES_FOLDER, units_dir: Path = UNITS_FOLDER) -> Catalog:
    """Load reference lists, writing the defaults for any file that doesn't exist yet."""
    stores_path = stores_dir / STORES_FILE
    units_path = units_dir / UNITS_FILE

    stores = _read_list(stores_path, DEFAULT_STORES)
    if stores is None:
        stores = clean_stores(DEFAULT_STORES)
        _write_list(stores_path, stores)

    units = _read_list(units_path, DEFAULT_UNITS)
    if units is None:
        units = clean_units(DEFAULT_UNITS)
        _write_list(units_path, units)

    return Catalog(stores=clean_stores(stores), units=clean_units(units))


def save_catalog(
    catalog: Catalog,
    stores_dir: Path = STORES_FOLDER,
    units_dir: Path = UNITS_FOLDER,
) -> None:
    _write_list(stores_dir / STORES_FILE, clean_stores(catalog.stores))
    _write_list(units_dir / UNITS_FILE, clean_units(catalog.units))
