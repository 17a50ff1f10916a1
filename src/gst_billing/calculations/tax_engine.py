"""
GST tax engine
Jurisdiction, per-line tax split and invoice totals

Everything here is pure and total: no I/O, no exceptions for any
numeric input. Rounding happens once, on the six invoice aggregates.
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Sequence

from gst_billing.models.invoice import InvoiceItem, InvoiceTotals, LineItem
from gst_billing.models.tax import Jurisdiction, TaxCalculation


_CENT = Decimal("0.01")


def round_currency(value: float) -> float:
    """
    Round to 2 decimal places, half away from zero

    The value is rounded from its shortest decimal repr, so 1.005
    rounds to 1.01 rather than suffering binary representation error.

    Args:
        value: Amount to round

    Returns:
        Rounded amount (non-finite values are returned unchanged)
    """
    if not math.isfinite(value):
        return value
    return float(Decimal(repr(float(value))).quantize(_CENT, rounding=ROUND_HALF_UP))


def get_state_code(gstin: Optional[str]) -> str:
    """Return the 2-character state code of a GSTIN, or "" if too short"""
    if not gstin or len(gstin) < 2:
        return ""
    return gstin[:2]


def determine_jurisdiction(
    supplier_gstin: Optional[str], customer_gstin: Optional[str] = None
) -> Jurisdiction:
    """
    Classify a supply as intra-state or inter-state

    A missing customer GSTIN is a consumer (B2C) sale, which is always
    billed as intra-state. Otherwise the first two characters of both
    GSTINs are compared as-is; they are not checked to be digits.

    Args:
        supplier_gstin: Supplier GSTIN
        customer_gstin: Customer GSTIN (optional)

    Returns:
        Jurisdiction with the compared state codes
    """
    supplier_state = get_state_code(supplier_gstin)

    if not customer_gstin:
        return Jurisdiction(
            inter_state=False,
            supplier_state_code=supplier_state,
            customer_state_code="",
        )

    customer_state = get_state_code(customer_gstin)
    return Jurisdiction(
        inter_state=supplier_state != customer_state,
        supplier_state_code=supplier_state,
        customer_state_code=customer_state,
    )


def is_inter_state(
    supplier_gstin: Optional[str], customer_gstin: Optional[str] = None
) -> bool:
    """Shortcut for determine_jurisdiction(...).inter_state"""
    return determine_jurisdiction(supplier_gstin, customer_gstin).inter_state


def compute_line_tax(
    taxable_value: float, gst_rate: float, inter_state: bool
) -> TaxCalculation:
    """
    Split GST for one taxable value

    Inter-state supplies carry the whole tax as IGST. Intra-state
    supplies split it into exact CGST/SGST halves with no rounding.

    Args:
        taxable_value: Amount after discount (may be negative)
        gst_rate: GST rate in percent
        inter_state: Whether IGST applies

    Returns:
        TaxCalculation for the line
    """
    gross_tax = taxable_value * gst_rate / 100

    if inter_state:
        return TaxCalculation(
            taxable_value=taxable_value,
            cgst=0.0,
            sgst=0.0,
            igst=gross_tax,
            total_tax=gross_tax,
            total_amount=taxable_value + gross_tax,
        )

    half = gross_tax / 2
    return TaxCalculation(
        taxable_value=taxable_value,
        cgst=half,
        sgst=half,
        igst=0.0,
        total_tax=gross_tax,
        total_amount=taxable_value + gross_tax,
    )


def _taxable_value(item: LineItem) -> float:
    return item.quantity * item.rate - (item.discount or 0)


def compute_line_items(
    items: Sequence[LineItem],
    supplier_gstin: Optional[str],
    customer_gstin: Optional[str] = None,
) -> List[InvoiceItem]:
    """
    Compute the per-line tax fields stored on an invoice snapshot

    One jurisdiction is determined for the whole invoice. Line values
    are left unrounded.
    """
    inter_state = is_inter_state(supplier_gstin, customer_gstin)
    computed: List[InvoiceItem] = []

    for item in items:
        tax = compute_line_tax(_taxable_value(item), item.gst_rate, inter_state)
        computed.append(InvoiceItem(
            **item.model_dump(include=set(LineItem.model_fields)),
            taxable_value=tax.taxable_value,
            cgst=tax.cgst,
            sgst=tax.sgst,
            igst=tax.igst,
            total_amount=tax.total_amount,
        ))

    return computed


def compute_invoice_totals(
    items: Sequence[LineItem],
    supplier_gstin: Optional[str],
    customer_gstin: Optional[str] = None,
) -> InvoiceTotals:
    """
    Compute invoice-level totals from the authoritative item list

    Args:
        items: Line items; an empty list gives all-zero totals
        supplier_gstin: Supplier GSTIN
        customer_gstin: Customer GSTIN (optional, absent for B2C)

    Returns:
        InvoiceTotals with every field rounded independently
    """
    inter_state = is_inter_state(supplier_gstin, customer_gstin)

    subtotal = 0.0
    total_taxable_value = 0.0
    total_cgst = 0.0
    total_sgst = 0.0
    total_igst = 0.0
    total_amount = 0.0

    for item in items:
        item_gross = item.quantity * item.rate
        taxable_value = item_gross - (item.discount or 0)
        tax = compute_line_tax(taxable_value, item.gst_rate, inter_state)

        subtotal += item_gross
        total_taxable_value += taxable_value
        total_cgst += tax.cgst
        total_sgst += tax.sgst
        total_igst += tax.igst
        total_amount += tax.total_amount

    return InvoiceTotals(
        subtotal=round_currency(subtotal),
        total_taxable_value=round_currency(total_taxable_value),
        total_cgst=round_currency(total_cgst),
        total_sgst=round_currency(total_sgst),
        total_igst=round_currency(total_igst),
        total_amount=round_currency(total_amount),
    )
