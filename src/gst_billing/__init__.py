"""
GST Billing core for Python

GST tax computation, amount-in-words rendering and invoice numbering
for small-business invoicing, with a hosted REST persistence adapter
"""

from gst_billing.exceptions import (
    BillingError,
    BillingErrorCategory,
    ValidationError,
    NetworkError,
    ConfigError,
    StorageError,
)

# Calculations
from gst_billing.calculations import (
    amount_to_words,
    compute_invoice_totals,
    compute_line_items,
    compute_line_tax,
    default_invoice_number,
    determine_jurisdiction,
    get_state_code,
    is_inter_state,
    parse_invoice_number,
    round_currency,
)

# HTTP Client
from gst_billing.client import (
    HttpClient,
    HttpRequestOptions,
    HttpResponse,
    HttpAuditEntry,
    CircuitState,
    CircuitBreakerConfig,
)

# Configuration
from gst_billing.config import (
    BillingConfig,
    ConfigLoader,
    ConfigValidator,
    ENV_VAR_MAPPING,
    ConfigDefaults,
)

# Models
from gst_billing.models import (
    Address,
    Company,
    ContactDetails,
    Customer,
    Product,
    Invoice,
    InvoiceDraft,
    InvoiceItem,
    InvoiceStatus,
    InvoiceTotals,
    LineItem,
    coerce_status,
    InvoiceNumberState,
    ParsedInvoiceNumber,
    Vehicle,
    Jurisdiction,
    TaxCalculation,
    GST_RATES,
    INDIAN_STATES,
)

# Persistence
from gst_billing.repository import (
    BillingRepository,
    InMemoryRepository,
    SupabaseRepository,
)

# Services
from gst_billing.services import (
    InvoiceNumberAllocator,
    InvoiceService,
    InvoiceSummary,
    DashboardStats,
    dashboard_stats,
    filter_invoices,
    summarize_invoices,
)

from gst_billing.utils import format_currency, format_indian_number
from gst_billing.validation import InvoiceValidator

__version__ = "0.1.0"

__all__ = [
    # Exceptions
    "BillingError",
    "BillingErrorCategory",
    "ValidationError",
    "NetworkError",
    "ConfigError",
    "StorageError",
    # Calculations
    "amount_to_words",
    "compute_invoice_totals",
    "compute_line_items",
    "compute_line_tax",
    "default_invoice_number",
    "determine_jurisdiction",
    "get_state_code",
    "is_inter_state",
    "parse_invoice_number",
    "round_currency",
    # HTTP Client
    "HttpClient",
    "HttpRequestOptions",
    "HttpResponse",
    "HttpAuditEntry",
    "CircuitState",
    "CircuitBreakerConfig",
    # Configuration
    "BillingConfig",
    "ConfigLoader",
    "ConfigValidator",
    "ENV_VAR_MAPPING",
    "ConfigDefaults",
    # Models
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
    "Jurisdiction",
    "TaxCalculation",
    "GST_RATES",
    "INDIAN_STATES",
    # Persistence
    "BillingRepository",
    "InMemoryRepository",
    "SupabaseRepository",
    # Services
    "InvoiceNumberAllocator",
    "InvoiceService",
    "InvoiceSummary",
    "DashboardStats",
    "dashboard_stats",
    "filter_invoices",
    "summarize_invoices",
    # Utilities
    "format_currency",
    "format_indian_number",
    "InvoiceValidator",
]
