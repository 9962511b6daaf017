from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from datetime import date
import logging

from app.database import get_db
from app.schemas.invoice import (
    ApproveInvoiceRequest,
    InvoiceActionResponse,
    InvoiceDetailResponse,
    PaginatedInvoices,
)
from app.services.invoice_service import InvoiceNotFoundError, invoice_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


def _page(run):
    """Run a paginated query, turning bad page parameters into 400s."""
    try:
        return run()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("", response_model=PaginatedInvoices)
def list_invoices(
    page: int = Query(1, description="Page number (starts at 1)"),
    page_size: int = Query(20, description="Items per page (max 100)"),
    db: Session = Depends(get_db)
):
    """List invoices, newest first"""
    return _page(lambda: invoice_service.list_invoices(db, page, page_size))


@router.get("/vehicle/{vehicle_id}", response_model=PaginatedInvoices)
def list_invoices_by_vehicle(
    vehicle_id: str,
    page: int = Query(1),
    page_size: int = Query(20),
    db: Session = Depends(get_db)
):
    """List invoices for one vehicle"""
    if not vehicle_id.strip():
        raise HTTPException(status_code=400, detail="Vehicle ID is required")
    return _page(lambda: invoice_service.list_invoices_by_vehicle(db, vehicle_id, page, page_size))


@router.get("/date/{day}", response_model=PaginatedInvoices)
def list_invoices_by_date(
    day: date,
    page: int = Query(1),
    page_size: int = Query(20),
    db: Session = Depends(get_db)
):
    """List invoices dated on a given day (YYYY-MM-DD)"""
    return _page(lambda: invoice_service.list_invoices_by_date(db, day, page, page_size))


@router.get("/{invoice_id}", response_model=InvoiceDetailResponse)
def get_invoice(invoice_id: int, db: Session = Depends(get_db)):
    """Get invoice detail with line items"""
    invoice = invoice_service.get_invoice(db, invoice_id)
    if not invoice:
        raise HTTPException(status_code=404, detail=f"Invoice with ID {invoice_id} not found")
    return invoice


@router.post("/{invoice_id}/approve", response_model=InvoiceActionResponse)
def approve_invoice(invoice_id: int, request: ApproveInvoiceRequest, db: Session = Depends(get_db)):
    """Approve an invoice for payment"""
    try:
        result = invoice_service.approve_invoice(db, invoice_id, request.approved_by)
    except InvoiceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    if not result.success:
        raise HTTPException(status_code=409, detail=result.message)
    return result


@router.post("/{invoice_id}/reject", response_model=InvoiceActionResponse)
def reject_invoice(invoice_id: int, db: Session = Depends(get_db)):
    """Reject an invoice; it is permanently deleted along with its lines"""
    try:
        return invoice_service.reject_invoice(db, invoice_id)
    except InvoiceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
