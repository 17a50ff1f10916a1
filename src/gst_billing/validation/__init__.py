"""Validation module initialization"""

from gst_billing.validation.result import (
    FieldValidation,
    ValidationErrorDetail,
    ValidationResult,
)
from gst_billing.validation.fields import (
    validate_amount,
    validate_email,
    validate_gstin,
    validate_hsn_sac_code,
    validate_pan,
    validate_phone,
    validate_pincode,
    validate_quantity,
)
from gst_billing.validation.invoice_validator import InvoiceValidator

__all__ = [
    "FieldValidation",
    "ValidationErrorDetail",
    "ValidationResult",
    "validate_amount",
    "validate_email",
    "validate_gstin",
    "validate_hsn_sac_code",
    "validate_pan",
    "validate_phone",
    "validate_pincode",
    "validate_quantity",
    "InvoiceValidator",
]
