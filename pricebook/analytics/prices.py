"""
Price analytics: statistics, trend and chart series over an item's price history.

Everything here is a pure function of its inputs. The history handed in is the
already-filtered one on a ProcessedItem (newest first).
"""
from __future__ import annotations

from typing import Optional

import pandas as pd

from pricebook.config import STORE_BRAND_COLORS, STORE_PALETTE, TREND_DEADBAND_PCT
from pricebook.data.schemas import PriceEntry, PriceStatistics, ProcessedItem, Receipt, Trend
from pricebook.analytics.common import pct_change


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def filter_history(
    item: ProcessedItem | None,
    stores: Optional[list[str]] = None,
) -> list[PriceEntry]:
    """Price history restricted to the given stores (None/empty = all stores)."""
    if item is None:
        return []
    if not stores:
        return list(item.price_history)
    allowed = set(stores)
    return [e for e in item.price_history if e.store in allowed]


def _history_frame(history: list[PriceEntry]) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "store": [e.store for e in history],
            "price": [float(e.price) for e in history],
            "date": [e.date for e in history],
        }
    )


def classify_trend(change: float | None) -> Trend:
    """Fixed ±TREND_DEADBAND_PCT deadband around zero."""
    if change is None or abs(change) <= TREND_DEADBAND_PCT:
        return Trend.STABLE
    return Trend.UP if change > 0 else Trend.DOWN


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------

def calculate_statistics(
    item: ProcessedItem | None,
    stores: Optional[list[str]] = None,
) -> PriceStatistics | None:
    """Cheapest, most expensive, average and oldest->newest trend.

    None when there is no item or the store filter leaves nothing.
    Ties on cheapest/most expensive go to the first entry in the list.
    """
    history = filter_history(item, stores)
    if not history:
        return None

    df = _history_frame(history)
    # idxmin/idxmax return the first occurrence
    cheapest = df.loc[df["price"].idxmin()]
    priciest = df.loc[df["price"].idxmax()]

    oldest = history[-1].price
    newest = history[0].price
    change = pct_change(newest, oldest)

    return PriceStatistics(
        cheapest_store=str(cheapest["store"]),
        cheapest_price=float(cheapest["price"]),
        cheapest_date=str(cheapest["date"]),
        most_expensive_store=str(priciest["store"]),
        most_expensive_price=float(priciest["price"]),
        most_expensive_date=str(priciest["date"]),
        average_price=float(df["price"].mean()),
        total_purchases=len(history),
        price_change=change,
        trend=classify_trend(change),
    )


# ---------------------------------------------------------------------------
# Chart data
# ---------------------------------------------------------------------------

def _daily_store_means(history: list[PriceEntry]) -> pd.Series:
    """Mean price per (day, store), ascending by day. Unparseable dates are dropped."""
    df = _history_frame(history)
    # billing dates may carry a time; group on the calendar day
    df["day"] = pd.to_datetime(df["date"], errors="coerce", utc=True, format="mixed").dt.normalize()
    df = df.dropna(subset=["day"])
    if df.empty:
        return pd.Series(dtype=float)
    return df.groupby(["day", "store"], sort=True)["price"].mean()


def chart_stores(
    item: ProcessedItem | None,
    stores: Optional[list[str]] = None,
) -> list[str]:
    """Stores in the order they first appear in the newest-first history.

    The position in this list is the palette index used for store colors.
    """
    return list(dict.fromkeys(e.store for e in filter_history(item, stores)))


def _day_label(day: pd.Timestamp) -> str:
    return f"{day:%b} {day.day}"


def prepare_chart_data(
    item: ProcessedItem | None,
    stores: Optional[list[str]] = None,
) -> list[dict]:
    """One point per billing date, oldest first: {date, label, <store>: price}.

    Same-store, same-day observations are averaged. A store with no
    purchase on a date has no key on that point; gaps are left as gaps.
    """
    means = _daily_store_means(filter_history(item, stores))
    if means.empty:
        return []

    points = []
    for day, group in means.groupby(level=0, sort=True):
        point: dict = {"date": day.date().isoformat(), "label": _day_label(day)}
        for (_, store), price in group.items():
            point[store] = float(price)
        points.append(point)
    return points


def chart_series(
    item: ProcessedItem | None,
    stores: Optional[list[str]] = None,
) -> list[dict]:
    """The chart data pivoted into one sparse series per store, with colors."""
    means = _daily_store_means(filter_history(item, stores))
    if means.empty:
        return []

    charted = set(means.index.get_level_values("store"))
    series = []
    for idx, store in enumerate(chart_stores(item, stores)):
        if store not in charted:
            continue
        per_store = means.xs(store, level="store")
        series.append({
            "store": store,
            "color": get_store_color(store, idx),
            "points": [
                {"date": day.date().isoformat(), "price": float(price)}
                for day, price in per_store.items()
            ],
        })
    return series


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------

def get_unique_stores(receipts: list[Receipt]) -> list[str]:
    """Selected store names across receipts, unique and sorted.

    Receipts with a blank store name are left out.
    """
    return sorted({r.store_name_selected for r in receipts if r.store_name_selected})


def get_store_color(store: str, index: int) -> str:
    """Brand color for known chains, otherwise the palette entry at index."""
    lowered = (store or "").lower()
    for needle, color in STORE_BRAND_COLORS:
        if needle in lowered:
            return color
    return STORE_PALETTE[index % len(STORE_PALETTE)]
