"""Exception hierarchy for mdc_validator."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .validator import ValidationResult


class ValidationException(Exception):
    """Base error for the library."""


class SchemaBuilderError(ValidationException):
    """Raised when the fluent builder is used out of order."""


class ValidationFailedError(ValidationException):
    """Raised when an invalid result is escalated with ``raise_for_errors``."""

    def __init__(self, result: "ValidationResult"):
        fields = ", ".join(result.errors)
        super().__init__(f"Validation failed for: {fields}")
        self.result = result
