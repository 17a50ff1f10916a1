"""Services module initialization"""

from gst_billing.services.numbering import InvoiceNumberAllocator
from gst_billing.services.reporting import (
    DashboardStats,
    InvoiceSummary,
    dashboard_stats,
    filter_invoices,
    summarize_invoices,
)
from gst_billing.services.invoice_service import InvoiceService, line_item_from_product

__all__ = [
    "InvoiceNumberAllocator",
    "InvoiceService",
    "line_item_from_product",
    "DashboardStats",
    "InvoiceSummary",
    "dashboard_stats",
    "filter_invoices",
    "summarize_invoices",
]
