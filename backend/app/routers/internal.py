"""
Internal invoice endpoints used by the ingestion pipeline and maintenance
scripts. Every route here is restricted to loopback callers.
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import logging

from app.database import get_db
from app.schemas.invoice import InvoiceCreate, InvoiceDetailResponse, InvoiceUpdate
from app.security import require_localhost
from app.services.invoice_service import InvoiceNotFoundError, invoice_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/internal/invoices",
    tags=["internal"],
    dependencies=[Depends(require_localhost)],
    include_in_schema=False,
)


@router.post("", response_model=InvoiceDetailResponse, status_code=201)
def create_invoice(payload: InvoiceCreate, db: Session = Depends(get_db)):
    """Store an extracted invoice with its line items"""
    return invoice_service.create_invoice(db, payload)


@router.patch("/{invoice_id}", response_model=InvoiceDetailResponse)
def update_invoice(invoice_id: int, payload: InvoiceUpdate, db: Session = Depends(get_db)):
    try:
        return invoice_service.update_invoice(db, invoice_id, payload)
    except InvoiceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{invoice_id}")
def delete_invoice(invoice_id: int, db: Session = Depends(get_db)):
    if not invoice_service.delete_invoice(db, invoice_id):
        raise HTTPException(status_code=404, detail=f"Invoice with ID {invoice_id} not found")
    return {"success": True, "message": "Invoice deleted"}
