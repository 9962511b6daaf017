"""
Invoice Service - Reads and writes invoice headers and their line items.

Constraint violations raised by the database (negative amounts, duplicate
invoice numbers, duplicate line numbers, ...) are not caught here; they
propagate to the caller as ``sqlalchemy.exc.IntegrityError`` after the
session has been rolled back.
"""
import logging
import math
from datetime import date, datetime, timedelta
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from app.models.invoice_header import InvoiceHeader
from app.models.invoice_line import InvoiceLine
from app.schemas.invoice import (
    InvoiceActionResponse,
    InvoiceCreate,
    InvoiceSummaryResponse,
    InvoiceUpdate,
    PaginatedInvoices,
)

logger = logging.getLogger(__name__)


class InvoiceNotFoundError(LookupError):
    """Raised when an operation targets an invoice id that does not exist."""

    def __init__(self, invoice_id: int):
        super().__init__(f"Invoice with ID {invoice_id} not found")
        self.invoice_id = invoice_id


class InvoiceService:
    """Service for querying and maintaining stored invoices"""

    def list_invoices(self, db: Session, page: int = 1, page_size: int = 20) -> PaginatedInvoices:
        """All invoices, newest first."""
        return self._paginate(db, None, page, page_size)

    def list_invoices_by_vehicle(
        self, db: Session, vehicle_id: str, page: int = 1, page_size: int = 20
    ) -> PaginatedInvoices:
        return self._paginate(db, InvoiceHeader.vehicle_id == vehicle_id, page, page_size)

    def list_invoices_by_date(
        self, db: Session, day: date, page: int = 1, page_size: int = 20
    ) -> PaginatedInvoices:
        """Invoices whose invoice date falls on ``day`` (any time of day)."""
        start = datetime.combine(day, datetime.min.time())
        end = start + timedelta(days=1)
        criteria = (InvoiceHeader.invoice_date >= start) & (InvoiceHeader.invoice_date < end)
        return self._paginate(db, criteria, page, page_size)

    def get_invoice(self, db: Session, invoice_id: int) -> Optional[InvoiceHeader]:
        return (
            db.query(InvoiceHeader)
            .options(selectinload(InvoiceHeader.lines))
            .filter(InvoiceHeader.invoice_id == invoice_id)
            .first()
        )

    def create_invoice(self, db: Session, data: InvoiceCreate) -> InvoiceHeader:
        """
        Persist a header and all of its lines in one transaction.

        Args:
            db: Database session
            data: Validated invoice payload

        Returns:
            The stored InvoiceHeader, refreshed with server defaults
        """
        header_fields = data.model_dump(exclude={"lines"})
        invoice = InvoiceHeader(**header_fields)
        invoice.lines = [InvoiceLine(**line.model_dump()) for line in data.lines]

        db.add(invoice)
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(invoice)

        logger.info(
            f"Created invoice {invoice.invoice_number} (ID: {invoice.invoice_id}) "
            f"for vehicle {invoice.vehicle_id} with {len(data.lines)} line items"
        )
        return invoice

    def update_invoice(self, db: Session, invoice_id: int, data: InvoiceUpdate) -> InvoiceHeader:
        invoice = db.get(InvoiceHeader, invoice_id)
        if invoice is None:
            logger.warning(f"Invoice {invoice_id} not found for update")
            raise InvoiceNotFoundError(invoice_id)

        changes = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            setattr(invoice, field, value)

        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(invoice)

        logger.info(f"Updated invoice {invoice_id}: {sorted(changes)}")
        return invoice

    def approve_invoice(self, db: Session, invoice_id: int, approved_by: str) -> InvoiceActionResponse:
        """
        Mark an invoice approved for payment.

        Approving an already-approved invoice changes nothing and reports
        ``success=False`` with the first approval's details.
        """
        logger.info(f"Attempting to approve Invoice ID: {invoice_id} by: {approved_by}")

        invoice = db.get(InvoiceHeader, invoice_id)
        if invoice is None:
            logger.warning(f"Invoice {invoice_id} not found for approval")
            raise InvoiceNotFoundError(invoice_id)

        if invoice.approved:
            logger.warning(f"Invoice {invoice_id} is already approved")
            return InvoiceActionResponse(
                success=False,
                message=f"Invoice {invoice.invoice_number} is already approved.",
                invoice_id=invoice_id,
                action="approved",
                action_timestamp=invoice.approved_at,
                action_by=invoice.approved_by,
            )

        invoice.approved = True
        invoice.approved_at = datetime.now()
        invoice.approved_by = approved_by
        db.commit()

        logger.info(f"Invoice {invoice_id} approved successfully by {approved_by} at {invoice.approved_at}")

        return InvoiceActionResponse(
            success=True,
            message=f"Invoice {invoice.invoice_number} has been approved successfully.",
            invoice_id=invoice_id,
            action="approved",
            action_timestamp=invoice.approved_at,
            action_by=invoice.approved_by,
        )

    def reject_invoice(self, db: Session, invoice_id: int) -> InvoiceActionResponse:
        """Reject an invoice: the header and all of its lines are deleted."""
        logger.info(f"Attempting to reject (delete) Invoice ID: {invoice_id}")

        invoice = db.get(InvoiceHeader, invoice_id)
        if invoice is None:
            logger.warning(f"Invoice {invoice_id} not found for rejection")
            raise InvoiceNotFoundError(invoice_id)

        invoice_number = invoice.invoice_number
        self._delete(db, invoice)

        return InvoiceActionResponse(
            success=True,
            message=f"Invoice {invoice_number} has been rejected and permanently deleted.",
            invoice_id=invoice_id,
            action="rejected",
            action_timestamp=datetime.now(),
        )

    def delete_invoice(self, db: Session, invoice_id: int) -> bool:
        """Delete an invoice and its lines. Returns False if it did not exist."""
        invoice = db.get(InvoiceHeader, invoice_id)
        if invoice is None:
            return False
        self._delete(db, invoice)
        return True

    def _delete(self, db: Session, invoice: InvoiceHeader) -> None:
        invoice_id = invoice.invoice_id
        # Lines go with the header (ORM cascade + ON DELETE CASCADE)
        db.delete(invoice)
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"Invoice {invoice_id} deleted from database")

    def _paginate(self, db: Session, criteria, page: int, page_size: int) -> PaginatedInvoices:
        if page < 1:
            raise ValueError("Page number must be greater than 0")
        if page_size < 1 or page_size > 100:
            raise ValueError("Page size must be between 1 and 100")

        count_query = select(func.count()).select_from(InvoiceHeader)
        query = db.query(InvoiceHeader).options(selectinload(InvoiceHeader.lines))
        if criteria is not None:
            count_query = count_query.where(criteria)
            query = query.filter(criteria)

        total_count = db.execute(count_query).scalar_one()
        invoices = (
            query.order_by(InvoiceHeader.created_at.desc(), InvoiceHeader.invoice_id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all()
        )

        items = []
        for invoice in invoices:
            summary = InvoiceSummaryResponse.model_validate(invoice)
            summary.line_item_count = len(invoice.lines)
            items.append(summary)

        total_pages = math.ceil(total_count / page_size)
        return PaginatedInvoices(
            items=items,
            total_count=total_count,
            page_number=page,
            page_size=page_size,
            total_pages=total_pages,
            has_previous=page > 1,
            has_next=page < total_pages,
        )


invoice_service = InvoiceService()
