from app.schemas.invoice import (
    InvoiceCreate,
    InvoiceUpdate,
    InvoiceLineCreate,
    InvoiceLineResponse,
    InvoiceSummaryResponse,
    InvoiceDetailResponse,
    PaginatedInvoices,
    ApproveInvoiceRequest,
    InvoiceActionResponse,
)

__all__ = [
    "InvoiceCreate",
    "InvoiceUpdate",
    "InvoiceLineCreate",
    "InvoiceLineResponse",
    "InvoiceSummaryResponse",
    "InvoiceDetailResponse",
    "PaginatedInvoices",
    "ApproveInvoiceRequest",
    "InvoiceActionResponse",
]
