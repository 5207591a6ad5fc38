"""
Meta endpoints: health, stores, reload.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from pricebook.data.store import DataStore
from pricebook.analytics.prices import get_store_color
from pricebook.api.dependencies import get_store
from pricebook.api.response_models import HealthResponse, StoresResponse

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(store: DataStore = Depends(get_store)):
    return HealthResponse(
        status="ok",
        receipts=store.receipt_count(),
        items=len(store.items()),
        stores=len(store.stores()),
    )


@router.get("/stores", response_model=StoresResponse)
def list_stores(store: DataStore = Depends(get_store)):
    """Stores seen on receipts (with chart colors) plus the configured store list."""
    stores = store.stores()
    return StoresResponse(
        stores=stores,
        colors={s: get_store_color(s, i) for i, s in enumerate(stores)},
        catalog=store.catalog.stores,
    )


@router.post("/reload")
def reload_data(store: DataStore = Depends(get_store)):
    """Re-read receipts and reference lists from disk."""
    store.load()
    return {"status": "reloaded", "receipts": store.receipt_count()}
