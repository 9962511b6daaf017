from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    false,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class InvoiceHeader(Base):
    """Summary record of one maintenance invoice for a vehicle."""

    __tablename__ = "InvoiceHeader"

    invoice_id = Column("InvoiceID", Integer, primary_key=True)
    vehicle_id = Column("VehicleID", String(50), nullable=False)
    odometer = Column("Odometer", Integer, nullable=True)
    invoice_number = Column("InvoiceNumber", String(50), nullable=False)
    invoice_date = Column("InvoiceDate", DateTime, nullable=False)
    total_cost = Column("TotalCost", Numeric(18, 2), nullable=False)
    total_parts_cost = Column("TotalPartsCost", Numeric(18, 2), nullable=False)
    total_labor_cost = Column("TotalLaborCost", Numeric(18, 2), nullable=False)
    blob_file_url = Column("BlobFileUrl", String(255), nullable=True)  # Source document location
    extracted_data = Column("ExtractedData", Text, nullable=True)  # Raw extraction JSON
    confidence_score = Column("ConfidenceScore", Numeric(5, 2), nullable=True)  # 0-100
    created_at = Column("CreatedAt", DateTime(timezone=True), nullable=False, server_default=func.now())
    approved = Column("Approved", Boolean, nullable=False, default=False, server_default=false())
    approved_at = Column("ApprovedAt", DateTime, nullable=True)
    approved_by = Column("ApprovedBy", String(100), nullable=True)

    # Relationships
    lines = relationship(
        "InvoiceLine",
        back_populates="invoice",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="InvoiceLine.line_number",
    )

    __table_args__ = (
        Index("IX_InvoiceHeader_VehicleID", "VehicleID"),
        Index("IX_InvoiceHeader_InvoiceDate", "InvoiceDate"),
        Index("IX_InvoiceHeader_InvoiceNumber", "InvoiceNumber", unique=True),
        Index("IX_InvoiceHeader_CreatedAt", "CreatedAt"),
        CheckConstraint('"TotalCost" >= 0', name="CK_InvoiceHeader_TotalCost"),
        CheckConstraint('"TotalPartsCost" >= 0', name="CK_InvoiceHeader_TotalPartsCost"),
        CheckConstraint('"TotalLaborCost" >= 0', name="CK_InvoiceHeader_TotalLaborCost"),
        CheckConstraint('"Odometer" IS NULL OR "Odometer" >= 0', name="CK_InvoiceHeader_Odometer"),
        CheckConstraint(
            '"ConfidenceScore" IS NULL OR ("ConfidenceScore" >= 0 AND "ConfidenceScore" <= 100)',
            name="CK_InvoiceHeader_ConfidenceScore",
        ),
    )

    def __repr__(self):
        return f"<InvoiceHeader {self.invoice_id} {self.invoice_number!r}>"
