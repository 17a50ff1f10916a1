"""Tax models and reference tables"""

from typing import Dict, List
from pydantic import BaseModel, Field


# Standard GST slabs offered by the product form. The engine accepts any rate.
GST_RATES: List[float] = [0, 5, 12, 18, 28]

# Indian states and union territories with their GSTIN state codes
INDIAN_STATES: Dict[str, str] = {
    "Andhra Pradesh": "37",
    "Arunachal Pradesh": "12",
    "Assam": "18",
    "Bihar": "10",
    "Chhattisgarh": "22",
    "Goa": "30",
    "Gujarat": "24",
    "Haryana": "06",
    "Himachal Pradesh": "02",
    "Jharkhand": "20",
    "Karnataka": "29",
    "Kerala": "32",
    "Madhya Pradesh": "23",
    "Maharashtra": "27",
    "Manipur": "14",
    "Meghalaya": "17",
    "Mizoram": "15",
    "Nagaland": "13",
    "Odisha": "21",
    "Punjab": "03",
    "Rajasthan": "08",
    "Sikkim": "11",
    "Tamil Nadu": "33",
    "Telangana": "36",
    "Tripura": "16",
    "Uttar Pradesh": "09",
    "Uttarakhand": "05",
    "West Bengal": "19",
    "Andaman and Nicobar Islands": "35",
    "Chandigarh": "04",
    "Dadra and Nagar Haveli and Daman and Diu": "26",
    "Delhi": "07",
    "Jammu and Kashmir": "01",
    "Ladakh": "38",
    "Lakshadweep": "31",
    "Puducherry": "34",
}


class Jurisdiction(BaseModel):
    """Supply classification for a supplier/customer pair"""

    inter_state: bool = Field(..., description="True when IGST applies")
    supplier_state_code: str = Field("", description="State code taken from supplier GSTIN")
    customer_state_code: str = Field("", description="State code taken from customer GSTIN")


class TaxCalculation(BaseModel):
    """GST split for a single taxable value"""

    taxable_value: float = Field(..., description="Amount after discount, before tax")
    cgst: float = Field(0.0, description="Central GST")
    sgst: float = Field(0.0, description="State GST")
    igst: float = Field(0.0, description="Integrated GST")
    total_tax: float = Field(0.0, description="cgst + sgst + igst")
    total_amount: float = Field(..., description="Taxable value plus tax")
