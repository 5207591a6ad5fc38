"""
Pydantic request/response schemas for the API.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class HealthResponse(BaseModel):
    status: str
    receipts: int
    items: int
    stores: int


class StoresResponse(BaseModel):
    stores: list[str]
    colors: dict[str, str]
    catalog: list[str]


class CatalogListResponse(BaseModel):
    values: list[str]


class StoreRequest(BaseModel):
    store: str


class UnitRequest(BaseModel):
    unit: str


class PriceEntryModel(BaseModel):
    store: str
    price: float
    unit: Optional[str] = None
    date: str
    receipt_id: str
    timestamp: str


class ItemResponse(BaseModel):
    name: str
    normalized_name: str
    latest_price: float
    latest_store: str
    latest_date: str
    latest_unit: Optional[str] = None
    price_history: list[PriceEntryModel]


class ItemSummary(BaseModel):
    name: str
    normalized_name: str
    latest_price: float
    latest_store: str
    latest_date: str
    latest_unit: Optional[str] = None
    entries: int


class ItemsResponse(BaseModel):
    items: list[ItemSummary]
    count: int


class StatisticsResponse(BaseModel):
    cheapest_store: str
    cheapest_price: float
    cheapest_date: str
    most_expensive_store: str
    most_expensive_price: float
    most_expensive_date: str
    average_price: float
    total_purchases: int
    price_change: Optional[float] = None
    trend: str


class ChartResponse(BaseModel):
    item: str
    stores: list[str]
    colors: dict[str, str]
    points: list[dict[str, Any]]
    series: list[dict[str, Any]]


class RenameRequest(BaseModel):
    new_name: str


class RenameResponse(BaseModel):
    old_name: str
    new_name: str
    receipts_updated: int


class ReceiptPayload(BaseModel):
    """Receipt in the stored JSON wire format. Extra keys pass through."""
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    storeNameSelected: Optional[str] = None
    storeNameScanned: Optional[str] = None
    billingDate: Optional[str] = None
    uploadDate: Optional[str] = None
    timestamp: Optional[str] = None
    extractedData: Optional[dict[str, Any]] = None


class ReceiptUpdateRequest(BaseModel):
    updates: dict[str, Any]
