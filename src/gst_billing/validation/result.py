"""Validation result types shared by the config and invoice validators"""

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class ValidationErrorDetail:
    """Validation error detail"""
    field: str
    message: str
    value: Optional[Any] = None


@dataclass
class ValidationResult:
    """Validation result"""
    valid: bool
    errors: List[ValidationErrorDetail] = field(default_factory=list)

    def error_message(self) -> str:
        """Join all errors as "field: message" pairs"""
        return "; ".join(f"{e.field}: {e.message}" for e in self.errors)


@dataclass
class FieldValidation:
    """Outcome of a single field check"""
    is_valid: bool
    error: Optional[str] = None
