from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from pydantic import BaseModel
from rich.console import Console
from rich.table import Table

from .checks import check_value, strict_equals
from .exceptions import ValidationFailedError
from .schema import Rule, SchemaBuilder

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Validation outcome returned by Validator.validate."""

    is_valid: bool
    errors: Dict[str, str] = field(default_factory=dict)

    def raise_for_errors(self) -> None:
        if not self.is_valid:
            raise ValidationFailedError(self)

    def to_dict(self) -> Dict[str, Any]:
        return {"is_valid": self.is_valid, "errors": dict(self.errors)}


class Validator(SchemaBuilder):
    """Fluent schema builder that validates one record at a time.

    >>> result = Validator().field("name").string().required().min(3).validate({"name": "Al"})
    >>> result.errors
    {'name': 'La valeur minimale est 3'}

    A ``when_field`` override is written into the stored rule when it applies,
    so it keeps affecting later ``validate`` calls on the same instance. Pass
    ``persist_conditionals=False`` to resolve overrides per call instead.

    Instances are not thread-safe; build one per thread or lock around use.
    """

    def __init__(
        self,
        *,
        persist_conditionals: bool = True,
        console: Console | None = None,
    ) -> None:
        super().__init__()
        self.persist_conditionals = persist_conditionals
        self._console = console

    def validate(
        self,
        data: Mapping[str, Any] | BaseModel,
        *,
        console: Console | None = None,
    ) -> ValidationResult:
        record = self._prepare_payload(data)
        errors: Dict[str, str] = {}

        for name, rule in self._rules.items():
            value = record.get(name)
            if rule.transform is not None:
                value = rule.transform(value)

            effective = self._resolve_rule(name, rule, record)
            message = check_value(value, effective)
            if message is not None:
                errors[name] = message

        result = ValidationResult(is_valid=not errors, errors=errors)
        logger.debug("Validated %d field(s): %d error(s)", len(self._rules), len(errors))

        display_console = console or self._console
        if display_console is not None:
            self._render_console(display_console, result)

        return result

    def _prepare_payload(self, data: Mapping[str, Any] | BaseModel) -> Mapping[str, Any]:
        if isinstance(data, Mapping):
            return data
        if isinstance(data, BaseModel):
            return data.model_dump()
        raise TypeError("Unsupported data payload provided to validate()")

    def _resolve_rule(self, name: str, rule: Rule, record: Mapping[str, Any]) -> Rule:
        conditional = rule.when_field
        if conditional is None:
            return rule

        if strict_equals(record.get(conditional.field), conditional.is_):
            overrides = conditional.then
        else:
            overrides = conditional.otherwise
        if overrides is None:
            return rule

        logger.debug("Applying conditional override on %r from %r: %s", name, conditional.field, dict(overrides))
        if self.persist_conditionals:
            rule.update(overrides)
            return rule
        return rule.merged(overrides)

    def _render_console(self, console: Console, result: ValidationResult) -> None:
        table = Table(title="Validation Result", expand=True)
        table.add_column("Field")
        table.add_column("Message")
        if result.is_valid:
            table.add_row("status", "Validation passed")
        else:
            table.add_row("status", "Validation failed")
        for name, message in result.errors.items():
            table.add_row(name, message)
        console.print(table)
