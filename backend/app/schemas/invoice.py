from pydantic import BaseModel, Field
from typing import Annotated, Optional, List
from datetime import datetime
from decimal import Decimal

# Field bounds mirror the storage-level check constraints so bad payloads
# are rejected before they reach the database.
Money = Annotated[Decimal, Field(ge=0, max_digits=18, decimal_places=2)]
Confidence = Annotated[Decimal, Field(ge=0, le=100, max_digits=5, decimal_places=2)]


class InvoiceLineCreate(BaseModel):
    line_number: int = Field(..., gt=0)
    description: str = Field(..., min_length=1, max_length=500)
    unit_cost: Money
    quantity: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    total_line_cost: Money
    part_number: Optional[str] = Field(None, max_length=100)
    category: Optional[str] = Field(None, max_length=100)
    confidence_score: Optional[Confidence] = None


class InvoiceLineResponse(BaseModel):
    line_id: int
    line_number: int
    description: str
    unit_cost: Decimal
    quantity: Decimal
    total_line_cost: Decimal
    part_number: Optional[str]
    category: Optional[str]
    confidence_score: Optional[Decimal]

    class Config:
        from_attributes = True


class InvoiceCreate(BaseModel):
    vehicle_id: str = Field(..., min_length=1, max_length=50)
    odometer: Optional[int] = Field(None, ge=0)
    invoice_number: str = Field(..., min_length=1, max_length=50)
    invoice_date: datetime
    total_cost: Money
    total_parts_cost: Money
    total_labor_cost: Money
    blob_file_url: Optional[str] = Field(None, max_length=255)
    extracted_data: Optional[str] = None
    confidence_score: Optional[Confidence] = None
    lines: List[InvoiceLineCreate] = []


class InvoiceUpdate(BaseModel):
    """Partial update of header fields; lines are not touched."""
    vehicle_id: Optional[str] = Field(None, min_length=1, max_length=50)
    odometer: Optional[int] = Field(None, ge=0)
    invoice_number: Optional[str] = Field(None, min_length=1, max_length=50)
    invoice_date: Optional[datetime] = None
    total_cost: Optional[Money] = None
    total_parts_cost: Optional[Money] = None
    total_labor_cost: Optional[Money] = None
    blob_file_url: Optional[str] = Field(None, max_length=255)
    extracted_data: Optional[str] = None
    confidence_score: Optional[Confidence] = None


class InvoiceSummaryResponse(BaseModel):
    invoice_id: int
    vehicle_id: str
    invoice_number: str
    invoice_date: datetime
    total_cost: Decimal
    total_parts_cost: Decimal
    total_labor_cost: Decimal
    confidence_score: Optional[Decimal]
    created_at: datetime
    approved: bool
    approved_at: Optional[datetime]
    approved_by: Optional[str]
    line_item_count: int = 0

    class Config:
        from_attributes = True


class InvoiceDetailResponse(BaseModel):
    invoice_id: int
    vehicle_id: str
    odometer: Optional[int]
    invoice_number: str
    invoice_date: datetime
    total_cost: Decimal
    total_parts_cost: Decimal
    total_labor_cost: Decimal
    blob_file_url: Optional[str]
    confidence_score: Optional[Decimal]
    created_at: datetime
    approved: bool
    approved_at: Optional[datetime]
    approved_by: Optional[str]
    lines: List[InvoiceLineResponse] = []

    class Config:
        from_attributes = True


class PaginatedInvoices(BaseModel):
    items: List[InvoiceSummaryResponse] = []
    total_count: int
    page_number: int
    page_size: int
    total_pages: int
    has_previous: bool
    has_next: bool


class ApproveInvoiceRequest(BaseModel):
    approved_by: str = Field(..., min_length=1, max_length=100)


class InvoiceActionResponse(BaseModel):
    success: bool
    message: str
    invoice_id: int
    action: str = Field(..., pattern="^(approved|rejected)$")
    action_timestamp: Optional[datetime] = None
    action_by: Optional[str] = None
