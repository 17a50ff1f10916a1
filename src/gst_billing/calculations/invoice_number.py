"""
Invoice number formatting and parsing

An invoice number is a prefix of letters/hyphens followed by a
sequence number, e.g. "INV-1001".
"""

import re
from typing import Optional

from gst_billing.models.numbering import ParsedInvoiceNumber

DEFAULT_PREFIX = "INV-"
DEFAULT_LAST_NUMBER = 1000

# ASCII digits only; other Unicode digits do not parse
INVOICE_NUMBER_PATTERN = re.compile(r"^([A-Za-z\-]+)(\d+)$", re.ASCII)
INVOICE_PREFIX_PATTERN = re.compile(r"[A-Za-z\-]+", re.ASCII)


def default_invoice_number(prefix: str, last_number: int) -> str:
    """Next number after last_number: ("INV-", 1000) gives INV-1001"""
    return f"{prefix}{last_number + 1}"


def parse_invoice_number(value: Optional[str]) -> Optional[ParsedInvoiceNumber]:
    """
    Split a user-entered invoice number into prefix and number

    The whole string must match; a purely numeric value or one with
    letters after the digits does not.

    Args:
        value: Invoice number as entered

    Returns:
        ParsedInvoiceNumber, or None when the value does not match
    """
    if not value:
        return None

    match = INVOICE_NUMBER_PATTERN.fullmatch(value)
    if match is None:
        return None

    return ParsedInvoiceNumber(prefix=match.group(1), number=int(match.group(2)))
