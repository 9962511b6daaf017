from app.models.invoice_header import InvoiceHeader
from app.models.invoice_line import InvoiceLine

__all__ = ["InvoiceHeader", "InvoiceLine"]
