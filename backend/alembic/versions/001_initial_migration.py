"""Initial migration

Revision ID: 001_initial
Revises: 
Create Date: 2025-08-19 10:38:44.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create InvoiceHeader table
    op.create_table(
        'InvoiceHeader',
        sa.Column('InvoiceID', sa.Integer(), nullable=False),
        sa.Column('VehicleID', sa.String(length=50), nullable=False),
        sa.Column('Odometer', sa.Integer(), nullable=True),
        sa.Column('InvoiceNumber', sa.String(length=50), nullable=False),
        sa.Column('InvoiceDate', sa.DateTime(), nullable=False),
        sa.Column('TotalCost', sa.Numeric(18, 2), nullable=False),
        sa.Column('TotalPartsCost', sa.Numeric(18, 2), nullable=False),
        sa.Column('TotalLaborCost', sa.Numeric(18, 2), nullable=False),
        sa.Column('BlobFileUrl', sa.String(length=255), nullable=True),
        sa.Column('ExtractedData', sa.Text(), nullable=True),
        sa.Column('ConfidenceScore', sa.Numeric(5, 2), nullable=True),
        sa.Column('CreatedAt', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('Approved', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('ApprovedAt', sa.DateTime(), nullable=True),
        sa.Column('ApprovedBy', sa.String(length=100), nullable=True),
        sa.CheckConstraint('"TotalCost" >= 0', name='CK_InvoiceHeader_TotalCost'),
        sa.CheckConstraint('"TotalPartsCost" >= 0', name='CK_InvoiceHeader_TotalPartsCost'),
        sa.CheckConstraint('"TotalLaborCost" >= 0', name='CK_InvoiceHeader_TotalLaborCost'),
        sa.CheckConstraint('"Odometer" IS NULL OR "Odometer" >= 0', name='CK_InvoiceHeader_Odometer'),
        sa.CheckConstraint(
            '"ConfidenceScore" IS NULL OR ("ConfidenceScore" >= 0 AND "ConfidenceScore" <= 100)',
            name='CK_InvoiceHeader_ConfidenceScore'
        ),
        sa.PrimaryKeyConstraint('InvoiceID')
    )
    op.create_index('IX_InvoiceHeader_VehicleID', 'InvoiceHeader', ['VehicleID'], unique=False)
    op.create_index('IX_InvoiceHeader_InvoiceDate', 'InvoiceHeader', ['InvoiceDate'], unique=False)
    op.create_index('IX_InvoiceHeader_InvoiceNumber', 'InvoiceHeader', ['InvoiceNumber'], unique=True)
    op.create_index('IX_InvoiceHeader_CreatedAt', 'InvoiceHeader', ['CreatedAt'], unique=False)

    # Create InvoiceLines table
    op.create_table(
        'InvoiceLines',
        sa.Column('LineID', sa.Integer(), nullable=False),
        sa.Column('InvoiceID', sa.Integer(), nullable=False),
        sa.Column('LineNumber', sa.Integer(), nullable=False),
        sa.Column('Description', sa.String(length=500), nullable=False),
        sa.Column('UnitCost', sa.Numeric(18, 2), nullable=False),
        sa.Column('Quantity', sa.Numeric(10, 2), nullable=False),
        sa.Column('TotalLineCost', sa.Numeric(18, 2), nullable=False),
        sa.Column('PartNumber', sa.String(length=100), nullable=True),
        sa.Column('Category', sa.String(length=100), nullable=True),
        sa.Column('ConfidenceScore', sa.Numeric(5, 2), nullable=True),
        sa.Column('CreatedAt', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.CheckConstraint('"UnitCost" >= 0', name='CK_InvoiceLines_UnitCost'),
        sa.CheckConstraint('"Quantity" > 0', name='CK_InvoiceLines_Quantity'),
        sa.CheckConstraint('"TotalLineCost" >= 0', name='CK_InvoiceLines_TotalLineCost'),
        sa.CheckConstraint('"LineNumber" > 0', name='CK_InvoiceLines_LineNumber'),
        sa.CheckConstraint(
            '"ConfidenceScore" IS NULL OR ("ConfidenceScore" >= 0 AND "ConfidenceScore" <= 100)',
            name='CK_InvoiceLines_ConfidenceScore'
        ),
        sa.ForeignKeyConstraint(['InvoiceID'], ['InvoiceHeader.InvoiceID'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('LineID')
    )
    op.create_index('IX_InvoiceLines_InvoiceID', 'InvoiceLines', ['InvoiceID'], unique=False)
    op.create_index('IX_InvoiceLines_InvoiceID_LineNumber', 'InvoiceLines', ['InvoiceID', 'LineNumber'], unique=True)
    op.create_index('IX_InvoiceLines_Category', 'InvoiceLines', ['Category'], unique=False)
    op.create_index('IX_InvoiceLines_PartNumber', 'InvoiceLines', ['PartNumber'], unique=False)


def downgrade() -> None:
    op.drop_index('IX_InvoiceLines_PartNumber', table_name='InvoiceLines')
    op.drop_index('IX_InvoiceLines_Category', table_name='InvoiceLines')
    op.drop_index('IX_InvoiceLines_InvoiceID_LineNumber', table_name='InvoiceLines')
    op.drop_index('IX_InvoiceLines_InvoiceID', table_name='InvoiceLines')
    op.drop_table('InvoiceLines')
    op.drop_index('IX_InvoiceHeader_CreatedAt', table_name='InvoiceHeader')
    op.drop_index('IX_InvoiceHeader_InvoiceNumber', table_name='InvoiceHeader')
    op.drop_index('IX_InvoiceHeader_InvoiceDate', table_name='InvoiceHeader')
    op.drop_index('IX_InvoiceHeader_VehicleID', table_name='InvoiceHeader')
    op.drop_table('InvoiceHeader')
