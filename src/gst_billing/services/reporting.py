"""Invoice list filtering, summaries and dashboard figures"""

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional, Sequence

from gst_billing.calculations.tax_engine import round_currency
from gst_billing.models.customer import Customer
from gst_billing.models.invoice import Invoice, InvoiceStatus
from gst_billing.models.product import Product

RECENT_INVOICE_COUNT = 5


@dataclass
class InvoiceSummary:
    """Footer figures for an invoice list"""
    count: int = 0
    total_amount: float = 0.0
    paid_amount: float = 0.0
    outstanding_amount: float = 0.0


@dataclass
class DashboardStats:
    """Headline numbers for the dashboard"""
    total_invoices: int = 0
    total_customers: int = 0
    total_products: int = 0
    total_revenue: float = 0.0
    monthly_revenue: float = 0.0
    recent_invoices: List[Invoice] = field(default_factory=list)


def invoice_date(invoice: Invoice) -> Optional[date]:
    """Parse the invoice date (a timestamp suffix is ignored); None if unparseable"""
    try:
        return date.fromisoformat(invoice.date[:10])
    except ValueError:
        return None


def filter_invoices(
    invoices: Iterable[Invoice],
    search_term: Optional[str] = None,
    status: Optional[InvoiceStatus] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> List[Invoice]:
    """
    Narrow an invoice list the way the list screen does

    Args:
        invoices: Invoices to filter (order is preserved)
        search_term: Case-insensitive match on number, customer name or GSTIN
        status: Keep only this status
        date_from: Inclusive lower bound on the invoice date
        date_to: Inclusive upper bound on the invoice date

    Returns:
        Matching invoices
    """
    needle = search_term.lower() if search_term else None
    result: List[Invoice] = []

    for invoice in invoices:
        if needle and not (
            needle in invoice.invoice_number.lower()
            or needle in invoice.customer_name.lower()
            or needle in (invoice.customer_gstin or "").lower()
        ):
            continue

        if status is not None and invoice.status != status:
            continue

        if date_from is not None or date_to is not None:
            billed_on = invoice_date(invoice)
            if billed_on is None:
                continue
            if date_from is not None and billed_on < date_from:
                continue
            if date_to is not None and billed_on > date_to:
                continue

        result.append(invoice)

    return result


def summarize_invoices(invoices: Sequence[Invoice]) -> InvoiceSummary:
    """Count, grand total, paid and outstanding (everything not PAID)"""
    paid = sum(i.total_amount for i in invoices if i.status == InvoiceStatus.PAID)
    outstanding = sum(i.total_amount for i in invoices if i.status != InvoiceStatus.PAID)

    return InvoiceSummary(
        count=len(invoices),
        total_amount=round_currency(paid + outstanding),
        paid_amount=round_currency(paid),
        outstanding_amount=round_currency(outstanding),
    )


def dashboard_stats(
    invoices: Sequence[Invoice],
    customers: Sequence[Customer],
    products: Sequence[Product],
    today: Optional[date] = None,
) -> DashboardStats:
    """
    Totals, revenue for the current calendar month and the latest invoices

    Args:
        invoices: All invoices of the account
        customers: All customers
        products: All products
        today: Reference date for the current month (defaults to today)
    """
    today = today or date.today()

    monthly = 0.0
    for invoice in invoices:
        billed_on = invoice_date(invoice)
        if billed_on and (billed_on.year, billed_on.month) == (today.year, today.month):
            monthly += invoice.total_amount

    recent = sorted(
        invoices, key=lambda i: invoice_date(i) or date.min, reverse=True
    )[:RECENT_INVOICE_COUNT]

    return DashboardStats(
        total_invoices=len(invoices),
        total_customers=len(customers),
        total_products=len(products),
        total_revenue=round_currency(sum(i.total_amount for i in invoices)),
        monthly_revenue=round_currency(monthly),
        recent_invoices=list(recent),
    )
