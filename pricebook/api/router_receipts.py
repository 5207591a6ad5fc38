"""
Receipt endpoints: list, add, update, delete, export.
"""
from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from pricebook.data.store import DataStore
from pricebook.data.normalize import parse_receipt, receipt_to_dict
from pricebook.api.dependencies import get_store
from pricebook.api.response_models import ReceiptPayload, ReceiptUpdateRequest
from pricebook.reports.receipt_export import EXPORT_FORMATS, export_receipts

router = APIRouter(prefix="/api/receipts", tags=["receipts"])

_MEDIA_TYPES = {"json": "application/json", "csv": "text/csv"}


@router.get("")
def list_receipts(store: DataStore = Depends(get_store)):
    return {"receipts": [receipt_to_dict(r) for r in store.receipts()]}


@router.get("/export")
def export(
    format: str = Query("json", description="json|csv"),
    store: DataStore = Depends(get_store),
):
    if format not in EXPORT_FORMATS:
        raise HTTPException(400, f"Invalid format: {format}")
    body = export_receipts(store.receipts(), format)
    filename = f"receipts_{dt.date.today().isoformat()}.{format}"
    return Response(
        content=body,
        media_type=_MEDIA_TYPES[format],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("", status_code=201)
def create_receipt(payload: ReceiptPayload, store: DataStore = Depends(get_store)):
    if not payload.id or not payload.storeNameSelected or payload.extractedData is None:
        raise HTTPException(400, "Missing required fields: id, storeNameSelected, extractedData")
    if store.receipt(payload.id) is not None:
        raise HTTPException(400, f"Receipt already exists: {payload.id}")

    raw = payload.model_dump(exclude_none=True)
    raw.setdefault("timestamp", dt.datetime.now(dt.timezone.utc).isoformat())
    receipt = parse_receipt(raw)
    store.add_receipt(receipt)
    return {"status": "saved", "receipt": receipt_to_dict(receipt)}


@router.patch("/{receipt_id}")
def update_receipt(receipt_id: str, req: ReceiptUpdateRequest, store: DataStore = Depends(get_store)):
    updated = store.update_receipt(receipt_id, req.updates)
    if updated is None:
        raise HTTPException(404, f"Receipt not found: {receipt_id}")
    return {"status": "updated", "receipt": receipt_to_dict(updated)}


@router.delete("/{receipt_id}")
def delete_receipt(receipt_id: str, store: DataStore = Depends(get_store)):
    if not store.delete_receipt(receipt_id):
        raise HTTPException(404, f"Receipt not found: {receipt_id}")
    return {"status": "deleted", "id": receipt_id}
