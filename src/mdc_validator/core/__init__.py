"""Core validation primitives for mdc_validator."""

from .converter import SchemaConverter
from .exceptions import SchemaBuilderError, ValidationException, ValidationFailedError
from .schema import UNSET, ConditionalRule, Kind, Rule, SchemaBuilder
from .validator import ValidationResult, Validator

__all__ = [
    "UNSET",
    "ConditionalRule",
    "Kind",
    "Rule",
    "SchemaBuilder",
    "SchemaBuilderError",
    "SchemaConverter",
    "ValidationException",
    "ValidationFailedError",
    "ValidationResult",
    "Validator",
]
