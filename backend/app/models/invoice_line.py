from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class InvoiceLine(Base):
    __tablename__ = "InvoiceLines"

    line_id = Column("LineID", Integer, primary_key=True)
    invoice_id = Column(
        "InvoiceID",
        Integer,
        ForeignKey("InvoiceHeader.InvoiceID", ondelete="CASCADE"),
        nullable=False,
    )
    line_number = Column("LineNumber", Integer, nullable=False)
    description = Column("Description", String(500), nullable=False)
    unit_cost = Column("UnitCost", Numeric(18, 2), nullable=False)
    quantity = Column("Quantity", Numeric(10, 2), nullable=False)
    total_line_cost = Column("TotalLineCost", Numeric(18, 2), nullable=False)  # Stored as extracted, not recomputed
    part_number = Column("PartNumber", String(100), nullable=True)
    category = Column("Category", String(100), nullable=True)  # Parts, Labor, Tax, Fee, ...
    confidence_score = Column("ConfidenceScore", Numeric(5, 2), nullable=True)
    created_at = Column("CreatedAt", DateTime(timezone=True), nullable=False, server_default=func.now())

    # Relationships
    invoice = relationship("InvoiceHeader", back_populates="lines")

    __table_args__ = (
        Index("IX_InvoiceLines_InvoiceID", "InvoiceID"),
        Index("IX_InvoiceLines_InvoiceID_LineNumber", "InvoiceID", "LineNumber", unique=True),
        Index("IX_InvoiceLines_Category", "Category"),
        Index("IX_InvoiceLines_PartNumber", "PartNumber"),
        CheckConstraint('"UnitCost" >= 0', name="CK_InvoiceLines_UnitCost"),
        CheckConstraint('"Quantity" > 0', name="CK_InvoiceLines_Quantity"),
        CheckConstraint('"TotalLineCost" >= 0', name="CK_InvoiceLines_TotalLineCost"),
        CheckConstraint('"LineNumber" > 0', name="CK_InvoiceLines_LineNumber"),
        CheckConstraint(
            '"ConfidenceScore" IS NULL OR ("ConfidenceScore" >= 0 AND "ConfidenceScore" <= 100)',
            name="CK_InvoiceLines_ConfidenceScore",
        ),
    )
