"""Utilities module initialization"""

from gst_billing.utils.formatting import format_currency, format_indian_number

__all__ = ["format_currency", "format_indian_number"]
