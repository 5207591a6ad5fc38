"""
Receipt, price-observation and item records shared by the engine and the API.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


@dataclass(frozen=True)
class LineItem:
    """One line of a receipt, as extracted or edited by the user."""
    name: str
    quantity: float = 1
    unit_price: Optional[float] = None
    total_price: float = 0.0
    unit: Optional[str] = None


@dataclass(frozen=True)
class Receipt:
    """One purchase event. Never mutated by the engine."""
    id: str
    store_name_selected: str
    billing_date: str                    # YYYY-MM-DD printed on the receipt
    timestamp: dt.datetime               # when the receipt was saved
    items: list[LineItem] = field(default_factory=list)
    store_name_scanned: str = ""
    upload_date: str = ""
    total: float = 0.0


@dataclass(frozen=True)
class PriceEntry:
    """A per-unit price observation derived from one line item."""
    store: str
    price: float
    unit: Optional[str]
    date: str                            # billing date
    receipt_id: str
    timestamp: dt.datetime               # processing order

    def to_dict(self) -> dict:
        return {
            "store": self.store,
            "price": self.price,
            "unit": self.unit,
            "date": self.date,
            "receipt_id": self.receipt_id,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class ProcessedItem:
    """Canonical price timeline for one item identity."""
    name: str
    normalized_name: str
    latest_price: float
    latest_store: str
    latest_date: str
    latest_unit: Optional[str]
    price_history: list[PriceEntry] = field(default_factory=list)   # newest first

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "normalized_name": self.normalized_name,
            "latest_price": self.latest_price,
            "latest_store": self.latest_store,
            "latest_date": self.latest_date,
            "latest_unit": self.latest_unit,
            "price_history": [e.to_dict() for e in self.price_history],
        }


@dataclass
class PriceStatistics:
    """Summary statistics over a (store-filtered) price history."""
    cheapest_store: str
    cheapest_price: float
    cheapest_date: str
    most_expensive_store: str
    most_expensive_price: float
    most_expensive_date: str
    average_price: float
    total_purchases: int
    price_change: Optional[float]        # percent, oldest -> newest
    trend: Trend = Trend.STABLE

    def to_dict(self) -> dict:
        return {
            "cheapest_store": self.cheapest_store,
            "cheapest_price": self.cheapest_price,
            "cheapest_date": self.cheapest_date,
            "most_expensive_store": self.most_expensive_store,
            "most_expensive_price": self.most_expensive_price,
            "most_expensive_date": self.most_expensive_date,
            "average_price": self.average_price,
            "total_purchases": self.total_purchases,
            "price_change": self.price_change,
            "trend": self.trend.value,
        }


@dataclass
class Catalog:
    """Store and unit reference lists, passed explicitly to whoever needs them."""
    stores: list[str] = field(default_factory=list)
    units: list[str] = field(default_factory=list)
