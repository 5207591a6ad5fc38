"""
Reference-list endpoints: configured stores and units.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from pricebook.data.store import DataStore
from pricebook.data.catalog import add_store, add_unit, delete_store, delete_unit, discover_units
from pricebook.api.dependencies import get_store
from pricebook.api.response_models import CatalogListResponse, StoreRequest, UnitRequest

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


@router.get("/stores", response_model=CatalogListResponse)
def list_catalog_stores(store: DataStore = Depends(get_store)):
    return CatalogListResponse(values=store.catalog.stores)


@router.post("/stores", response_model=CatalogListResponse)
def create_catalog_store(req: StoreRequest, store: DataStore = Depends(get_store)):
    if not req.store.strip():
        raise HTTPException(400, "Store name is required")
    catalog = add_store(store.catalog, req.store)
    if catalog is None:
        raise HTTPException(400, f"Store already exists: {req.store.strip()}")
    return CatalogListResponse(values=store.set_catalog(catalog).stores)


@router.delete("/stores/{name}", response_model=CatalogListResponse)
def remove_catalog_store(name: str, store: DataStore = Depends(get_store)):
    catalog = delete_store(store.catalog, name)
    if catalog is None:
        raise HTTPException(404, f"Store not found: {name}")
    return CatalogListResponse(values=store.set_catalog(catalog).stores)


@router.get("/units", response_model=CatalogListResponse)
def list_catalog_units(store: DataStore = Depends(get_store)):
    return CatalogListResponse(values=store.catalog.units)


@router.get("/units/discover", response_model=CatalogListResponse)
def discover_catalog_units(store: DataStore = Depends(get_store)):
    """Merge units found on receipt line items into the unit list."""
    catalog = discover_units(store.catalog, store.receipts())
    if catalog.units != store.catalog.units:
        store.set_catalog(catalog)
    return CatalogListResponse(values=catalog.units)


@router.post("/units", response_model=CatalogListResponse)
def create_catalog_unit(req: UnitRequest, store: DataStore = Depends(get_store)):
    if not req.unit.strip():
        raise HTTPException(400, "Unit is required")
    catalog = add_unit(store.catalog, req.unit)
    if catalog is None:
        raise HTTPException(400, f"Unit already exists: {req.unit.strip().lower()}")
    return CatalogListResponse(values=store.set_catalog(catalog).units)


@router.delete("/units/{unit}", response_model=CatalogListResponse)
def remove_catalog_unit(unit: str, store: DataStore = Depends(get_store)):
    catalog = delete_unit(store.catalog, unit)
    if catalog is None:
        raise HTTPException(404, f"Unit not found: {unit}")
    return CatalogListResponse(values=store.set_catalog(catalog).units)
