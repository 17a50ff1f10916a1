"""
Configuration Validator
Validates billing configuration with clear error messages
"""

from typing import Any, Dict, List

from gst_billing.calculations.invoice_number import INVOICE_PREFIX_PATTERN
from gst_billing.validation.result import ValidationErrorDetail, ValidationResult


class ConfigValidator:
    """
    ConfigValidator class
    Provides comprehensive validation for billing configuration
    """

    def __init__(self) -> None:
        self._errors: List[ValidationErrorDetail] = []

    def validate(self, config: Dict[str, Any]) -> ValidationResult:
        """
        Validate the entire configuration dictionary

        Args:
            config: Configuration dictionary to validate

        Returns:
            ValidationResult with any errors
        """
        self._errors = []

        self._validate_required(config)
        self._validate_formats(config)
        self._validate_ranges(config)
        self._validate_numbering(config)

        return ValidationResult(
            valid=len(self._errors) == 0,
            errors=self._errors.copy()
        )

    def validate_or_raise(self, config: Dict[str, Any]) -> None:
        """
        Validate and raise if invalid

        Args:
            config: Configuration dictionary to validate

        Raises:
            ValidationError: If configuration is invalid
        """
        from gst_billing.exceptions import ValidationError

        result = self.validate(config)
        if not result.valid:
            raise ValidationError(
                f"Configuration validation failed: {result.error_message()}",
                field=result.errors[0].field,
            )

    def _validate_required(self, config: Dict[str, Any]) -> None:
        """Validate required fields are present and non-empty"""
        required_fields = [
            "supabase_url",
            "supabase_anon_key",
        ]

        for field_name in required_fields:
            value = config.get(field_name)
            if value is None:
                self._errors.append(ValidationErrorDetail(
                    field=field_name,
                    message=f"{field_name} is required"
                ))
            elif isinstance(value, str) and value.strip() == "":
                self._errors.append(ValidationErrorDetail(
                    field=field_name,
                    message=f"{field_name} cannot be empty",
                    value=value
                ))

    def _validate_formats(self, config: Dict[str, Any]) -> None:
        """Validate field formats"""
        supabase_url = config.get("supabase_url")
        if isinstance(supabase_url, str) and supabase_url.strip() != "":
            if not supabase_url.strip().startswith(("http://", "https://")):
                self._errors.append(ValidationErrorDetail(
                    field="supabase_url",
                    message="supabase_url must be a valid HTTP/HTTPS URL",
                    value=supabase_url
                ))

        for str_field in ["access_token", "account_id"]:
            value = config.get(str_field)
            if value is not None and not isinstance(value, str):
                self._errors.append(ValidationErrorDetail(
                    field=str_field,
                    message=f"{str_field} must be a string",
                    value="[REDACTED]" if str_field == "access_token" else value
                ))

    def _validate_ranges(self, config: Dict[str, Any]) -> None:
        """Validate numeric ranges"""
        timeout = config.get("timeout")
        if timeout is not None:
            if not isinstance(timeout, (int, float)) or timeout <= 0:
                self._errors.append(ValidationErrorDetail(
                    field="timeout",
                    message="timeout must be a positive number (milliseconds)",
                    value=timeout
                ))
            elif timeout < 1000:
                self._errors.append(ValidationErrorDetail(
                    field="timeout",
                    message="timeout should be at least 1000ms for reliable operation",
                    value=timeout
                ))
            elif timeout > 300000:
                self._errors.append(ValidationErrorDetail(
                    field="timeout",
                    message="timeout should not exceed 300000ms (5 minutes)",
                    value=timeout
                ))

        retry_attempts = config.get("retry_attempts")
        if retry_attempts is not None:
            if not isinstance(retry_attempts, int) or retry_attempts < 0:
                self._errors.append(ValidationErrorDetail(
                    field="retry_attempts",
                    message="retry_attempts must be a non-negative integer",
                    value=retry_attempts
                ))
            elif retry_attempts > 10:
                self._errors.append(ValidationErrorDetail(
                    field="retry_attempts",
                    message="retry_attempts should not exceed 10",
                    value=retry_attempts
                ))

        retry_delay = config.get("retry_delay")
        if retry_delay is not None:
            if not isinstance(retry_delay, (int, float)) or retry_delay <= 0:
                self._errors.append(ValidationErrorDetail(
                    field="retry_delay",
                    message="retry_delay must be a positive number (milliseconds)",
                    value=retry_delay
                ))
            elif retry_delay > 60000:
                self._errors.append(ValidationErrorDetail(
                    field="retry_delay",
                    message="retry_delay should not exceed 60000ms (1 minute)",
                    value=retry_delay
                ))

    def _validate_numbering(self, config: Dict[str, Any]) -> None:
        """Validate invoice numbering defaults"""
        prefix = config.get("default_invoice_prefix")
        if prefix is not None:
            if not isinstance(prefix, str) or prefix.strip() == "":
                self._errors.append(ValidationErrorDetail(
                    field="default_invoice_prefix",
                    message="default_invoice_prefix must be a non-empty string",
                    value=prefix
                ))
            elif not INVOICE_PREFIX_PATTERN.fullmatch(prefix):
                # Any other prefix could never be parsed back
                self._errors.append(ValidationErrorDetail(
                    field="default_invoice_prefix",
                    message=(
                        "default_invoice_prefix may contain only ASCII letters and hyphens"
                    ),
                    value=prefix
                ))

        last_number = config.get("default_last_invoice_number")
        if last_number is not None:
            if (
                not isinstance(last_number, int)
                or isinstance(last_number, bool)
                or last_number < 0
            ):
                self._errors.append(ValidationErrorDetail(
                    field="default_last_invoice_number",
                    message="default_last_invoice_number must be a non-negative integer",
                    value=last_number
                ))
