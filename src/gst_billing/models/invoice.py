"""Invoice models"""

from enum import Enum
from typing import Any, List, Optional
from pydantic import BaseModel, Field

from gst_billing.models.company import Address


class InvoiceStatus(str, Enum):
    """Persisted invoice status"""
    CREDIT = "CREDIT"
    PAID = "PAID"


def coerce_status(value: Any) -> InvoiceStatus:
    """
    Map any status label onto the persisted two-state enumeration

    Only an exact "PAID" is kept; every other label (DRAFT, SENT,
    lower-case variants, None) becomes CREDIT.
    """
    if isinstance(value, InvoiceStatus):
        return value
    if value == InvoiceStatus.PAID.value:
        return InvoiceStatus.PAID
    return InvoiceStatus.CREDIT


class LineItem(BaseModel):
    """Invoice line as entered; values are not range-checked here"""

    id: Optional[str] = Field(None, description="Line ID")
    product_id: Optional[str] = Field(None, description="Source product ID")
    product_name: str = Field("", description="Product name")
    hsn_sac_code: str = Field("", description="HSN/SAC code")
    quantity: float = Field(..., description="Quantity")
    rate: float = Field(..., description="Unit rate")
    discount: Optional[float] = Field(0.0, description="Flat discount amount")
    gst_rate: float = Field(..., description="GST rate in percent")


class InvoiceItem(LineItem):
    """Line item with its computed (unrounded) tax fields"""

    taxable_value: float = Field(..., description="quantity * rate - discount")
    cgst: float = Field(0.0, description="Central GST")
    sgst: float = Field(0.0, description="State GST")
    igst: float = Field(0.0, description="Integrated GST")
    total_amount: float = Field(..., description="Taxable value plus tax")


class InvoiceTotals(BaseModel):
    """Aggregate invoice amounts, each rounded to 2 decimals"""

    subtotal: float = Field(0.0, description="Sum of quantity * rate before discount")
    total_taxable_value: float = Field(0.0, description="Sum of taxable values")
    total_cgst: float = Field(0.0, description="Total central GST")
    total_sgst: float = Field(0.0, description="Total state GST")
    total_igst: float = Field(0.0, description="Total integrated GST")
    total_amount: float = Field(0.0, description="Grand total")


class InvoiceDraft(BaseModel):
    """Invoice as collected by the form, before computation"""

    id: Optional[str] = Field(None, description="Existing invoice ID when editing")
    invoice_number: Optional[str] = Field(None, description="User-entered invoice number")
    date: Optional[str] = Field(None, description="Invoice date (YYYY-MM-DD)")
    customer_id: Optional[str] = Field(None, description="Selected customer ID")
    vehicle_id: Optional[str] = Field(None, description="Selected vehicle ID")
    items: List[LineItem] = Field(default_factory=list, description="Line items")
    notes: Optional[str] = Field(None, description="Free-text notes")
    status: Optional[str] = Field("CREDIT", description="Status label from the form")


class Invoice(BaseModel):
    """Persisted invoice snapshot"""

    id: str = Field(..., description="Invoice ID")
    invoice_number: str = Field(..., description="Invoice number")
    date: str = Field(..., description="Invoice date (YYYY-MM-DD)")
    customer_id: str = Field(..., description="Customer ID")
    customer_name: str = Field(..., description="Customer name at time of billing")
    customer_gstin: Optional[str] = Field(None, description="Customer GSTIN at time of billing")
    customer_address: Address = Field(..., description="Customer billing address")
    vehicle_id: Optional[str] = Field(None, description="Dispatch vehicle ID")
    items: List[InvoiceItem] = Field(default_factory=list, description="Computed line items")
    subtotal: float = Field(..., description="Sum of quantity * rate before discount")
    total_taxable_value: float = Field(..., description="Sum of taxable values")
    total_cgst: float = Field(..., description="Total central GST")
    total_sgst: float = Field(..., description="Total state GST")
    total_igst: float = Field(..., description="Total integrated GST")
    total_amount: float = Field(..., description="Grand total")
    amount_in_words: str = Field(..., description="Grand total in words, rendered at save time")
    notes: Optional[str] = Field(None, description="Free-text notes")
    status: InvoiceStatus = Field(InvoiceStatus.CREDIT, description="CREDIT or PAID")
    created_at: Optional[str] = Field(None, description="Creation timestamp (ISO 8601)")
    updated_at: Optional[str] = Field(None, description="Last update timestamp (ISO 8601)")

    @property
    def totals(self) -> InvoiceTotals:
        """Stored aggregate amounts"""
        return InvoiceTotals(
            subtotal=self.subtotal,
            total_taxable_value=self.total_taxable_value,
            total_cgst=self.total_cgst,
            total_sgst=self.total_sgst,
            total_igst=self.total_igst,
            total_amount=self.total_amount,
        )
