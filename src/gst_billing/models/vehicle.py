"""Vehicle model"""

from typing import Optional
from pydantic import BaseModel, Field


class Vehicle(BaseModel):
    """Vehicle an invoice's goods were dispatched on"""

    id: str = Field(..., description="Vehicle ID")
    vehicle_number: str = Field(..., min_length=1, description="Registration number")
    created_at: Optional[str] = Field(None, description="Creation timestamp (ISO 8601)")

    model_config = {
        "str_strip_whitespace": True,
    }
