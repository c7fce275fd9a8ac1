"""Public interface for the mdc_validator package."""

from .core.converter import SchemaConverter
from .core.exceptions import (
    SchemaBuilderError,
    ValidationException,
    ValidationFailedError,
)
from .core.schema import (
    UNSET,
    ConditionalRule,
    Kind,
    Rule,
    SchemaBuilder,
)
from .core.validator import (
    ValidationResult,
    Validator,
)
from .utils.reporting import ValidationReporter

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
    "ValidationReporter",
    "ValidationResult",
    "Validator",
]

__version__ = "0.1.0"
