"""
Field validators for master data and invoice entry

These run in front of the tax engine; the engine itself trusts its
inputs and never rejects anything.
"""

import re
from typing import Optional

from gst_billing.models.tax import INDIAN_STATES
from gst_billing.validation.result import FieldValidation

GSTIN_PATTERN = re.compile(r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][1-9A-Z]Z[0-9A-Z]$")
PAN_PATTERN = re.compile(r"^[A-Z]{5}[0-9]{4}[A-Z]$")
HSN_SAC_PATTERN = re.compile(r"^\d{4,8}$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MAX_AMOUNT = 99999999.99
MAX_QUANTITY = 999999

_VALID_STATE_CODES = frozenset(INDIAN_STATES.values())


def _strip_spaces(value: str) -> str:
    return re.sub(r"\s", "", value)


def _digits_only(value: str) -> str:
    return re.sub(r"\D", "", value)


def validate_gstin(gstin: Optional[str]) -> FieldValidation:
    """
    Validate a GSTIN

    Spaces are ignored and letters are upper-cased before checking
    the length, the format and the state code.
    """
    if not gstin:
        return FieldValidation(False, "GSTIN is required")

    clean = _strip_spaces(gstin).upper()

    if len(clean) != 15:
        return FieldValidation(False, "GSTIN must be exactly 15 characters")

    if not GSTIN_PATTERN.match(clean):
        return FieldValidation(False, "Invalid GSTIN format")

    if clean[:2] not in _VALID_STATE_CODES:
        return FieldValidation(False, "Invalid state code in GSTIN")

    return FieldValidation(True)


def validate_hsn_sac_code(code: Optional[str]) -> FieldValidation:
    """HSN/SAC codes are 4 to 8 digits"""
    if not code:
        return FieldValidation(False, "HSN/SAC code is required")

    if not HSN_SAC_PATTERN.match(_strip_spaces(code)):
        return FieldValidation(False, "HSN/SAC code must be 4-8 digits")

    return FieldValidation(True)


def validate_pan(pan: Optional[str]) -> FieldValidation:
    if not pan:
        return FieldValidation(False, "PAN is required")

    clean = _strip_spaces(pan).upper()

    if len(clean) != 10:
        return FieldValidation(False, "PAN must be exactly 10 characters")

    if not PAN_PATTERN.match(clean):
        return FieldValidation(False, "Invalid PAN format")

    return FieldValidation(True)


def validate_email(email: Optional[str]) -> FieldValidation:
    """Email is optional; when given it must look like an address"""
    if not email:
        return FieldValidation(True)

    if not EMAIL_PATTERN.match(email):
        return FieldValidation(False, "Invalid email format")

    return FieldValidation(True)


def validate_phone(phone: Optional[str]) -> FieldValidation:
    """Phone is optional; when given it must have 10 digits"""
    if not phone:
        return FieldValidation(True)

    if len(_digits_only(phone)) != 10:
        return FieldValidation(False, "Phone number must be 10 digits")

    return FieldValidation(True)


def validate_pincode(pincode: Optional[str]) -> FieldValidation:
    if not pincode:
        return FieldValidation(False, "Pincode is required")

    if len(_digits_only(pincode)) != 6:
        return FieldValidation(False, "Pincode must be 6 digits")

    return FieldValidation(True)


def validate_amount(amount: float) -> FieldValidation:
    if amount < 0:
        return FieldValidation(False, "Amount cannot be negative")

    if amount > MAX_AMOUNT:
        return FieldValidation(False, "Amount is too large")

    return FieldValidation(True)


def validate_quantity(quantity: float) -> FieldValidation:
    if quantity <= 0:
        return FieldValidation(False, "Quantity must be greater than 0")

    if quantity > MAX_QUANTITY:
        return FieldValidation(False, "Quantity is too large")

    return FieldValidation(True)
