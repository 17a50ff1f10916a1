"""Customer model"""

from typing import Literal, Optional
from pydantic import BaseModel, Field

from gst_billing.models.company import Address, ContactDetails


class Customer(BaseModel):
    """Customer master record"""

    id: str = Field(..., description="Customer ID")
    name: str = Field(..., description="Customer name")
    type: Literal["B2B", "B2C"] = Field("B2C", description="Business or consumer customer")
    gstin: Optional[str] = Field(None, description="Customer GSTIN (B2B only)")
    billing_address: Address = Field(..., description="Billing address")
    shipping_address: Optional[Address] = Field(None, description="Shipping address")
    contact: ContactDetails = Field(default_factory=ContactDetails, description="Contact details")
    created_at: Optional[str] = Field(None, description="Creation timestamp (ISO 8601)")
    updated_at: Optional[str] = Field(None, description="Last update timestamp (ISO 8601)")
