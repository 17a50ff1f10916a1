"""
Invoice Validator
Checks an invoice draft before it reaches the tax engine
"""

from dataclasses import asdict
from typing import List

from gst_billing.exceptions import ValidationError
from gst_billing.models.invoice import InvoiceDraft
from gst_billing.validation.fields import validate_amount, validate_quantity
from gst_billing.validation.result import ValidationErrorDetail, ValidationResult


class InvoiceValidator:
    """
    InvoiceValidator class
    Mirrors the checks the invoice form runs on submit
    """

    def __init__(self) -> None:
        self._errors: List[ValidationErrorDetail] = []

    def validate(self, draft: InvoiceDraft) -> ValidationResult:
        """
        Validate an invoice draft

        Args:
            draft: Invoice draft to validate

        Returns:
            ValidationResult with any errors; item errors use
            field names like "item_0_quantity"
        """
        self._errors = []

        if not draft.customer_id:
            self._errors.append(ValidationErrorDetail(
                field="customer",
                message="Please select a customer"
            ))

        if not draft.items:
            self._errors.append(ValidationErrorDetail(
                field="items",
                message="Please add at least one item"
            ))

        for index, item in enumerate(draft.items):
            if not item.product_name.strip():
                self._errors.append(ValidationErrorDetail(
                    field=f"item_{index}_name",
                    message="Product name is required",
                    value=item.product_name
                ))

            quantity_check = validate_quantity(item.quantity)
            if not quantity_check.is_valid:
                self._errors.append(ValidationErrorDetail(
                    field=f"item_{index}_quantity",
                    message=quantity_check.error or "",
                    value=item.quantity
                ))

            rate_check = validate_amount(item.rate)
            if not rate_check.is_valid:
                self._errors.append(ValidationErrorDetail(
                    field=f"item_{index}_rate",
                    message=rate_check.error or "",
                    value=item.rate
                ))

        return ValidationResult(
            valid=len(self._errors) == 0,
            errors=self._errors.copy()
        )

    def validate_or_raise(self, draft: InvoiceDraft) -> None:
        """
        Validate and raise if invalid

        Raises:
            ValidationError: If the draft is invalid
        """
        result = self.validate(draft)
        if not result.valid:
            raise ValidationError(
                f"Invoice validation failed: {result.error_message()}",
                field=result.errors[0].field,
                details={"errors": [asdict(e) for e in result.errors]},
            )
