"""
Configuration module
"""

from gst_billing.config.billing_config import (
    BillingConfig,
    ENV_VAR_MAPPING,
    ConfigDefaults,
)
from gst_billing.config.config_loader import ConfigLoader
from gst_billing.config.config_validator import ConfigValidator
from gst_billing.validation.result import (
    ValidationResult,
    ValidationErrorDetail,
)

__all__ = [
    "BillingConfig",
    "ENV_VAR_MAPPING",
    "ConfigDefaults",
    "ConfigLoader",
    "ConfigValidator",
    "ValidationResult",
    "ValidationErrorDetail",
]
