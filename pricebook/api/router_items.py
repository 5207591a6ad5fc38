"""
Item endpoints: list/search, detail, statistics, chart data, rename.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from pricebook.data.store import DataStore
from pricebook.data.schemas import ProcessedItem
from pricebook.analytics.common import sanitize_for_json
from pricebook.analytics.prices import (
    calculate_statistics,
    chart_series,
    chart_stores,
    get_store_color,
    prepare_chart_data,
)
from pricebook.api.dependencies import get_store, parse_store_filter
from pricebook.api.response_models import (
    ChartResponse,
    ItemResponse,
    ItemsResponse,
    ItemSummary,
    RenameRequest,
    RenameResponse,
    StatisticsResponse,
)

router = APIRouter(prefix="/api/items", tags=["items"])


def _require_item(store: DataStore, name: str) -> ProcessedItem:
    item = store.item(name)
    if item is None:
        raise HTTPException(404, f"Item not found: {name}")
    return item


@router.get("", response_model=ItemsResponse)
def list_items(
    q: Optional[str] = Query(None, description="Substring of the item name"),
    store: DataStore = Depends(get_store),
):
    items = store.search(q) if q else store.items()
    return ItemsResponse(
        items=[
            ItemSummary(
                name=i.name,
                normalized_name=i.normalized_name,
                latest_price=i.latest_price,
                latest_store=i.latest_store,
                latest_date=i.latest_date,
                latest_unit=i.latest_unit,
                entries=len(i.price_history),
            )
            for i in items
        ],
        count=len(items),
    )


@router.get("/names")
def list_item_names(store: DataStore = Depends(get_store)):
    """Display names for the analytics item picker."""
    return {"names": store.item_names()}


@router.get("/{name}", response_model=ItemResponse)
def item_detail(name: str, store: DataStore = Depends(get_store)):
    return ItemResponse(**_require_item(store, name).to_dict())


@router.get("/{name}/statistics", response_model=StatisticsResponse)
def item_statistics(
    name: str,
    store: DataStore = Depends(get_store),
    stores: list[str] | None = Depends(parse_store_filter),
):
    stats = calculate_statistics(_require_item(store, name), stores)
    if stats is None:
        raise HTTPException(404, "No data for the selected stores")
    return StatisticsResponse(**stats.to_dict())


@router.get("/{name}/chart", response_model=ChartResponse)
def item_chart(
    name: str,
    store: DataStore = Depends(get_store),
    stores: list[str] | None = Depends(parse_store_filter),
):
    """Chart rows (one per billing date) and the same data as per-store series."""
    item = _require_item(store, name)
    seen = chart_stores(item, stores)
    return ChartResponse(**sanitize_for_json({
        "item": item.name,
        "stores": seen,
        "colors": {s: get_store_color(s, i) for i, s in enumerate(seen)},
        "points": prepare_chart_data(item, stores),
        "series": chart_series(item, stores),
    }))


@router.post("/{name}/rename", response_model=RenameResponse)
def rename(name: str, req: RenameRequest, store: DataStore = Depends(get_store)):
    """Rewrite the item name on every receipt. Renaming onto an existing item merges them."""
    item = _require_item(store, name)
    if not req.new_name.strip():
        raise HTTPException(400, "New name is required")
    count = store.rename_item(item.name, req.new_name)
    return RenameResponse(old_name=item.name, new_name=req.new_name.strip(), receipts_updated=count)
