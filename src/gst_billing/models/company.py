"""Company and address models"""

from typing import Optional
from pydantic import BaseModel, Field


class Address(BaseModel):
    """Postal address"""

    line1: str = Field(..., description="Address line 1")
    line2: Optional[str] = Field(None, description="Address line 2")
    city: str = Field(..., description="City")
    state: str = Field(..., description="State name")
    pincode: str = Field(..., description="6-digit postal code")


class ContactDetails(BaseModel):
    """Phone/email contact"""

    phone: Optional[str] = Field(None, description="Phone number")
    email: Optional[str] = Field(None, description="Email address")
    website: Optional[str] = Field(None, description="Website")


class Company(BaseModel):
    """Supplier profile; its GSTIN drives the tax jurisdiction"""

    id: str = Field(..., description="Company ID")
    business_name: str = Field(..., description="Registered business name")
    address: Address = Field(..., description="Registered address")
    gstin: str = Field(..., description="Supplier GSTIN")
    contact: ContactDetails = Field(default_factory=ContactDetails, description="Contact details")
    logo: Optional[str] = Field(None, description="Logo URL or data URI")
    invoice_prefix: Optional[str] = Field(None, description="Stored invoice number prefix")
    last_invoice_number: Optional[int] = Field(None, description="Last used invoice sequence number")
    created_at: Optional[str] = Field(None, description="Creation timestamp (ISO 8601)")
    updated_at: Optional[str] = Field(None, description="Last update timestamp (ISO 8601)")
