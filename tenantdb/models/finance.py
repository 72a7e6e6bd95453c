"""
Finance models: suppliers, costs and invoices.
"""

from sqlalchemy import Boolean, Column, Date, JSON, Numeric, String, Text
from sqlalchemy.orm import relationship

from tenantdb.models.base import Base, TimestampMixin, UTCDateTime, fk_column, id_column


class FinanceSupplier(TimestampMixin, Base):
    __tablename__ = "finance_suppliers"

    id = id_column()
    name = Column(String(255), nullable=False)
    contact_name = Column(String(255))
    email = Column(String(255))
    phone = Column(String(64))
    bank_details = Column(JSON)
    is_active = Column(Boolean, default=True, nullable=False)
    start_date = Column(Date, nullable=False)

    costs = relationship("FinanceCost", back_populates="supplier", passive_deletes=True)


class FinanceCost(TimestampMixin, Base):
    __tablename__ = "finance_costs"

    id = id_column()
    cost_centre = Column(String(64), nullable=False)
    description = Column(Text)
    amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False)
    category = Column(String(64), nullable=False)
    timestamp = Column(UTCDateTime(), nullable=False)
    supplier_id = fk_column("finance_suppliers.id", nullable=True)

    supplier = relationship("FinanceSupplier", back_populates="costs")


class FinanceInvoice(TimestampMixin, Base):
    """
    Invoice issued to either a user or a company.

    Attributes:
        billing_type (str): USER or COMPANY
        billing_id (str): id of the billed user or company, not a foreign key
        invoice_number (str): Unique human facing number
        status (str): DRAFT, SENT, PAID, OVERDUE or VOID
    """
    __tablename__ = "finance_invoices"

    id = id_column()
    billing_type = Column(String(16), nullable=False)
    billing_id = Column(String(36), nullable=False, index=True)
    invoice_number = Column(String(64), unique=True, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    vat_amount = Column(Numeric(12, 2), nullable=False, default=0)
    currency = Column(String(3), nullable=False)
    issue_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=False)
    status = Column(String(16), nullable=False, default="DRAFT")
    is_active = Column(Boolean, default=True, nullable=False)
    ended_at = Column(UTCDateTime())

    user_billings = relationship("UserBilling", back_populates="invoice", passive_deletes=True)
    company_billings = relationship("CompanyBilling", back_populates="invoice", passive_deletes=True)
