"""
GST Billing Configuration Types and Schema
Type-safe configuration objects for the billing backend
"""

from typing import Optional
from pydantic import BaseModel, Field, field_validator


class ConfigDefaults:
    """Default configuration values"""
    TIMEOUT = 30000
    RETRY_ATTEMPTS = 3
    RETRY_DELAY = 1000
    ENABLE_AUDIT_LOG = True
    INVOICE_PREFIX = "INV-"
    LAST_INVOICE_NUMBER = 1000


# Environment variable mapping
ENV_VAR_MAPPING = {
    "SUPABASE_URL": "supabase_url",
    "SUPABASE_ANON_KEY": "supabase_anon_key",
    "SUPABASE_ACCESS_TOKEN": "access_token",
    "GST_BILLING_ACCOUNT_ID": "account_id",
    "GST_BILLING_TIMEOUT": "timeout",
    "GST_BILLING_RETRY_ATTEMPTS": "retry_attempts",
    "GST_BILLING_RETRY_DELAY": "retry_delay",
    "GST_BILLING_ENABLE_AUDIT_LOG": "enable_audit_log",
    "GST_BILLING_INVOICE_PREFIX": "default_invoice_prefix",
    "GST_BILLING_LAST_INVOICE_NUMBER": "default_last_invoice_number",
}


class BillingConfig(BaseModel):
    """
    Main billing configuration class
    Backend connection settings plus invoice numbering defaults
    """

    # Required - Backend connection
    supabase_url: str = Field(
        ...,
        description="Base URL of the hosted database/auth backend",
        min_length=1
    )
    supabase_anon_key: str = Field(
        ...,
        description="Public (anon) API key of the backend project",
        min_length=1
    )

    # Optional - Session
    access_token: Optional[str] = Field(
        default=None,
        description="Signed-in user's access token (JWT)"
    )
    account_id: Optional[str] = Field(
        default=None,
        description="Default account (user) ID for numbering and row ownership"
    )

    # Optional - Transport settings
    timeout: int = Field(
        default=ConfigDefaults.TIMEOUT,
        description="Request timeout in milliseconds",
        ge=1000,
        le=300000
    )
    retry_attempts: int = Field(
        default=ConfigDefaults.RETRY_ATTEMPTS,
        description="Number of retry attempts",
        ge=0,
        le=10
    )
    retry_delay: int = Field(
        default=ConfigDefaults.RETRY_DELAY,
        description="Base delay between retries in milliseconds",
        ge=1,
        le=60000
    )

    # Optional - Audit logging
    enable_audit_log: bool = Field(
        default=ConfigDefaults.ENABLE_AUDIT_LOG,
        description="Enable audit logging of backend requests"
    )

    # Optional - Invoice numbering
    default_invoice_prefix: str = Field(
        default=ConfigDefaults.INVOICE_PREFIX,
        description="Prefix used when no numbering state is stored"
    )
    default_last_invoice_number: int = Field(
        default=ConfigDefaults.LAST_INVOICE_NUMBER,
        description="Last number assumed when no numbering state is stored",
        ge=0
    )

    model_config = {
        "str_strip_whitespace": True,
        "validate_assignment": True,
    }

    @field_validator("supabase_url")
    @classmethod
    def validate_supabase_url(cls, v: str) -> str:
        """Validate supabase_url is a valid URL and drop any trailing slash"""
        if not v.startswith(("http://", "https://")):
            raise ValueError("supabase_url must be a valid HTTP/HTTPS URL")
        return v.rstrip("/")

    def get_rest_url(self) -> str:
        """Get the REST (PostgREST) endpoint root"""
        return f"{self.supabase_url}/rest/v1"
