"""Invoice numbering models"""

from typing import Optional
from pydantic import BaseModel, Field


class InvoiceNumberState(BaseModel):
    """Stored prefix/counter pair for an account; either half may be unset"""

    account_id: str = Field(..., description="Owning account (user) ID")
    prefix: Optional[str] = Field(None, description="Invoice number prefix, e.g. 'INV-'")
    last_number: Optional[int] = Field(None, description="Last used sequence number")


class ParsedInvoiceNumber(BaseModel):
    """Prefix and sequence number split out of an invoice number"""

    prefix: str = Field(..., description="Leading letters and hyphens")
    number: int = Field(..., description="Trailing digit run as an integer")
