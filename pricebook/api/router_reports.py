"""
Report endpoints: price book as JSON or an Excel download.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response

from pricebook.data.store import DataStore
from pricebook.api.dependencies import get_store, parse_store_filter
from pricebook.reports import price_book

router = APIRouter(prefix="/api/reports", tags=["reports"])

_XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("/price-book")
def price_book_json(
    store: DataStore = Depends(get_store),
    stores: list[str] | None = Depends(parse_store_filter),
):
    return JSONResponse(content=price_book.generate_json(store, stores))


@router.get("/price-book.xlsx")
def price_book_excel(
    store: DataStore = Depends(get_store),
    stores: list[str] | None = Depends(parse_store_filter),
):
    content = price_book.build_workbook(store, stores).to_bytes()
    return Response(
        content=content,
        media_type=_XLSX,
        headers={"Content-Disposition": 'attachment; filename="Price_Book.xlsx"'},
    )
