"""Exception classes for the GST billing package"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class BillingErrorCategory(str, Enum):
    """Billing error category codes"""
    VALIDATION = "VAL"
    NETWORK = "NET"
    CONFIG = "CONFIG"
    STORAGE = "STORAGE"
    UNKNOWN = "UNKNOWN"


class BillingError(Exception):
    """
    Base exception for billing errors

    All errors raised by the package extend from this class.
    The tax engine, the words converter and the invoice number parser
    never raise; errors only come from validation, configuration
    and the persistence layer.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.status_code = status_code
        self.cause = cause
        self.details = details
        self.timestamp = datetime.utcnow()
        self.category = self._determine_category(code)

    def _determine_category(self, code: Optional[str]) -> BillingErrorCategory:
        """Determine error category from code"""
        if not code:
            return BillingErrorCategory.UNKNOWN

        if code.startswith("VAL"):
            return BillingErrorCategory.VALIDATION
        if code.startswith("NET"):
            return BillingErrorCategory.NETWORK
        if code.startswith("CONFIG"):
            return BillingErrorCategory.CONFIG
        if code.startswith("STORAGE"):
            return BillingErrorCategory.STORAGE

        return BillingErrorCategory.UNKNOWN

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary"""
        return {
            "name": self.__class__.__name__,
            "message": str(self),
            "code": self.code,
            "status_code": self.status_code,
            "category": self.category.value,
            "timestamp": self.timestamp.isoformat() + "Z",
            "details": self.details,
        }

    def has_code(self, code: str) -> bool:
        """Check if error has a specific code"""
        return self.code == code

    def is_category(self, category: BillingErrorCategory) -> bool:
        """Check if error belongs to a category"""
        return self.category == category

    def get_description(self) -> str:
        """Get human-readable error description"""
        parts = [str(self)]

        if self.code:
            parts.insert(0, f"[{self.code}]")

        if self.status_code:
            parts.append(f"(HTTP {self.status_code})")

        return " ".join(parts)


class ValidationError(BillingError):
    """Validation error"""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code="VALIDATION_ERROR", details=details)
        self.field = field


class NetworkError(BillingError):
    """
    Network error for HTTP transport layer failures
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        network_code: str = "NET10",
        retryable: bool = True,
    ) -> None:
        super().__init__(message, code=network_code, status_code=status_code)
        self.network_code = network_code
        self.retryable = retryable

    @classmethod
    def timeout(cls, message: str = "Request timed out") -> "NetworkError":
        """Create a timeout error"""
        return cls(message, status_code=408, network_code="NET01", retryable=True)

    @classmethod
    def connection_refused(
        cls, message: str = "Connection refused"
    ) -> "NetworkError":
        """Create a connection refused error"""
        return cls(message, network_code="NET02", retryable=True)

    @classmethod
    def circuit_breaker_open(cls, retry_after_seconds: int) -> "NetworkError":
        """Create a circuit breaker open error"""
        return cls(
            f"Circuit breaker is open. Retry after {retry_after_seconds} seconds",
            status_code=503,
            network_code="NET05",
            retryable=False,
        )


class ConfigError(BillingError):
    """Configuration error"""

    def __init__(
        self,
        message: str,
        code: str = "CONFIG01",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code=code, details=details)


class StorageError(BillingError):
    """Persistence layer error (missing record, rejected write)"""

    def __init__(
        self,
        message: str,
        code: str = "STORAGE01",
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message, code=code, status_code=status_code, details=details
        )

    @classmethod
    def not_found(cls, entity: str, key: str) -> "StorageError":
        """Create a record-not-found error"""
        return cls(
            f"{entity} not found: {key}",
            code="STORAGE_NOT_FOUND",
            details={"entity": entity, "key": key},
        )
