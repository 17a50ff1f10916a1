"""Pure GST calculations: tax engine, amount in words, invoice numbers"""

from gst_billing.calculations.tax_engine import (
    compute_invoice_totals,
    compute_line_items,
    compute_line_tax,
    determine_jurisdiction,
    get_state_code,
    is_inter_state,
    round_currency,
)
from gst_billing.calculations.amount_words import amount_to_words
from gst_billing.calculations.invoice_number import (
    DEFAULT_LAST_NUMBER,
    DEFAULT_PREFIX,
    INVOICE_NUMBER_PATTERN,
    default_invoice_number,
    parse_invoice_number,
)

__all__ = [
    "compute_invoice_totals",
    "compute_line_items",
    "compute_line_tax",
    "determine_jurisdiction",
    "get_state_code",
    "is_inter_state",
    "round_currency",
    "amount_to_words",
    "DEFAULT_LAST_NUMBER",
    "DEFAULT_PREFIX",
    "INVOICE_NUMBER_PATTERN",
    "default_invoice_number",
    "parse_invoice_number",
]
