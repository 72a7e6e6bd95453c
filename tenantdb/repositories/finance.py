"""
Repositories for suppliers, costs and invoices.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import load_only

from tenantdb.models import FinanceCost, FinanceInvoice, FinanceSupplier
from tenantdb.repositories.base import BaseRepository, Relation

INVOICE_SUMMARY_COLUMNS = (
    FinanceInvoice.id,
    FinanceInvoice.invoice_number,
    FinanceInvoice.billing_type,
    FinanceInvoice.billing_id,
    FinanceInvoice.amount,
    FinanceInvoice.vat_amount,
    FinanceInvoice.currency,
    FinanceInvoice.issue_date,
    FinanceInvoice.due_date,
    FinanceInvoice.status,
)


class FinanceSupplierRepository(BaseRepository[FinanceSupplier]):
    model = FinanceSupplier
    label = "supplier"
    relations = {"costs": Relation("costs", ("amount", "currency", "category", "timestamp"))}
    filter_fields = ("name", "email", "is_active", "start_date")
    sort_fields = ("name", "start_date", "created_at")


class FinanceCostRepository(BaseRepository[FinanceCost]):
    model = FinanceCost
    label = "cost"
    relations = {"supplier": Relation("supplier", ("name", "email"))}
    filter_fields = ("cost_centre", "category", "currency", "supplier_id", "timestamp", "amount")
    sort_fields = ("timestamp", "amount", "created_at")


class FinanceInvoiceRepository(BaseRepository[FinanceInvoice]):
    """Repository for invoices issued to users and companies."""

    model = FinanceInvoice
    label = "invoice"
    relations = {
        "user_billings": Relation("user_billings", ("user_id", "amount_due", "status")),
        "company_billings": Relation("company_billings", ("company_id", "amount_due", "status")),
    }
    filter_fields = (
        "billing_type", "billing_id", "status", "currency", "is_active",
        "issue_date", "due_date", "amount",
    )
    sort_fields = ("invoice_number", "issue_date", "due_date", "amount", "created_at")

    async def find_by_invoice_number(self, invoice_number: str) -> Optional[FinanceInvoice]:
        """Get an invoice summary by its unique number."""
        statement = (
            select(FinanceInvoice)
            .where(FinanceInvoice.invoice_number == invoice_number)
            .options(load_only(*INVOICE_SUMMARY_COLUMNS))
        )
        return await self._one(statement)
