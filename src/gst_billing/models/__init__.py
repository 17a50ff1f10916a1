"""Models module initialization"""

from gst_billing.models.company import Address, Company, ContactDetails
from gst_billing.models.customer import Customer
from gst_billing.models.product import Product
from gst_billing.models.invoice import (
    Invoice,
    InvoiceDraft,
    InvoiceItem,
    InvoiceStatus,
    InvoiceTotals,
    LineItem,
    coerce_status,
)
from gst_billing.models.numbering import InvoiceNumberState, ParsedInvoiceNumber
from gst_billing.models.vehicle import Vehicle
from gst_billing.models.tax import (
    GST_RATES,
    INDIAN_STATES,
    Jurisdiction,
    TaxCalculation,
)

__all__ = [
    "Address",
    "Company",
    "ContactDetails",
    "Customer",
    "Product",
    "Invoice",
    "InvoiceDraft",
    "InvoiceItem",
    "InvoiceStatus",
    "InvoiceTotals",
    "LineItem",
    "coerce_status",
    "InvoiceNumberState",
    "ParsedInvoiceNumber",
    "Vehicle",
    "GST_RATES",
    "INDIAN_STATES",
    "Jurisdiction",
    "TaxCalculation",
]
