"""Product model"""

from typing import Literal, Optional
from pydantic import BaseModel, Field


class Product(BaseModel):
    """Product or service master record"""

    id: str = Field(..., description="Product ID")
    name: str = Field(..., description="Product name")
    description: Optional[str] = Field(None, description="Description")
    hsn_sac_code: str = Field(..., description="HSN (goods) or SAC (services) code")
    gst_rate: float = Field(..., description="GST rate in percent")
    unit_of_measurement: str = Field("NOS", description="Unit of measurement")
    price: float = Field(..., description="Default unit rate")
    type: Literal["GOODS", "SERVICES"] = Field("GOODS", description="Goods or services")
    created_at: Optional[str] = Field(None, description="Creation timestamp (ISO 8601)")
    updated_at: Optional[str] = Field(None, description="Last update timestamp (ISO 8601)")
