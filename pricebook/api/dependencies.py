"""
FastAPI dependencies: DataStore singleton, store-filter parsing.
"""
from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, Query

from pricebook.data.store import DataStore

# ---------------------------------------------------------------------------
# Global store singleton (set during startup)
# ---------------------------------------------------------------------------
_store: DataStore | None = None


def set_store(store: DataStore | None) -> None:
    global _store
    _store = store


def get_store() -> DataStore:
    if _store is None or not _store.is_loaded:
        raise HTTPException(503, "Data not loaded yet")
    return _store


# ---------------------------------------------------------------------------
# Store allow-list from query params: ?store=A&store=B
# ---------------------------------------------------------------------------

def parse_store_filter(
    store: Optional[list[str]] = Query(None, description="Store name(s) to include; omit for all"),
) -> list[str] | None:
    """Drop blanks and the 'all' sentinel the dashboard sends."""
    if not store:
        return None
    cleaned = [s.strip() for s in store if s and s.strip()]
    cleaned = [s for s in cleaned if s.lower() not in ("all", "null", "none")]
    return cleaned or None
