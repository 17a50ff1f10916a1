"""
HTTP Client module for the hosted billing backend
"""

from gst_billing.client.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerConfig,
    CircuitState,
)
from gst_billing.client.http_client import (
    HttpAuditEntry,
    HttpClient,
    HttpRequestOptions,
    HttpResponse,
)

__all__ = [
    "HttpClient",
    "HttpRequestOptions",
    "HttpResponse",
    "HttpAuditEntry",
    "CircuitBreaker",
    "CircuitState",
    "CircuitBreakerConfig",
]
