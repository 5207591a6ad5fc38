"""
Pricebook — FastAPI app factory with startup data loading.
"""
from __future__ import annotations

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pricebook import __version__
from pricebook.data.store import DataStore
from pricebook.api.dependencies import set_store
from pricebook.api.router_meta import router as meta_router
from pricebook.api.router_catalog import router as catalog_router
from pricebook.api.router_items import router as items_router
from pricebook.api.router_receipts import router as receipts_router
from pricebook.api.router_reports import router as reports_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load receipts and reference lists at startup."""
    from pricebook.config import RECEIPTS_FOLDER, STORES_FOLDER, UNITS_FOLDER
    for d in [RECEIPTS_FOLDER, STORES_FOLDER, UNITS_FOLDER]:
        d.mkdir(parents=True, exist_ok=True)

    print(f"  PRICEBOOK_DATA_DIR = {os.environ.get('PRICEBOOK_DATA_DIR', '(not set)')}")
    print(f"  RECEIPTS_FOLDER = {RECEIPTS_FOLDER}")

    store = DataStore(RECEIPTS_FOLDER, STORES_FOLDER, UNITS_FOLDER)
    store.load()
    set_store(store)

    if store.receipt_count() > 0:
        print(f"\nPricebook ready — {store.receipt_count():,} receipts, "
              f"{len(store.items()):,} items, {len(store.stores())} stores\n")
    else:
        print("\nPricebook ready — no receipts yet.\n")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Pricebook API",
        description="Receipt price tracking: item price history, trends, chart data",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(catalog_router)
    app.include_router(items_router)
    app.include_router(receipts_router)
    app.include_router(reports_router)

    return app


app = create_app()
