from __future__ import annotations

import logging
import re
from dataclasses import dataclass, fields, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Mapping, Tuple, TypeVar, Union

from .exceptions import SchemaBuilderError

logger = logging.getLogger(__name__)

# Type aliases for callbacks
CustomCheck = Callable[[Any], Any]
Transform = Callable[[Any], Any]
PatternLike = Union[str, re.Pattern[str]]
BuilderT = TypeVar("BuilderT", bound="SchemaBuilder")


class Kind(str, Enum):
    """Runtime type a field value must have."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"

    def __str__(self) -> str:
        return self.value


class _Unset:
    """Marker for rule attributes that accept ``None`` as a real value."""

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass(frozen=True)
class ConditionalRule:
    """Rule override selected at validation time from another field's value."""

    field: str
    is_: Any
    then: Mapping[str, Any]
    otherwise: Mapping[str, Any] | None = None


@dataclass
class Rule:
    """Constraints attached to one schema field."""

    kind: Kind | None = None
    required: bool = False
    min: float | int | None = None
    max: float | int | None = None
    pattern: re.Pattern[str] | None = None
    equals: Any = UNSET
    not_equals: Any = UNSET
    is_in: Tuple[Any, ...] | None = None
    not_in: Tuple[Any, ...] | None = None
    custom: CustomCheck | None = None
    transform: Transform | None = None
    when_field: ConditionalRule | None = None
    date_format: str | None = None
    future: bool = False
    past: bool = False

    def update(self, overrides: Mapping[str, Any]) -> None:
        """Write ``overrides`` into this rule in place."""
        for name, value in overrides.items():
            setattr(self, name, value)

    def merged(self, overrides: Mapping[str, Any]) -> "Rule":
        """Return a copy of this rule with ``overrides`` applied."""
        return replace(self, **dict(overrides))

    def to_dict(self) -> Dict[str, Any]:
        """Configured attributes only, for inspection and debugging."""
        result: Dict[str, Any] = {}
        for attr in fields(self):
            value = getattr(self, attr.name)
            if value is UNSET or value is None or value is False:
                continue
            if isinstance(value, Kind):
                value = value.value
            elif isinstance(value, re.Pattern):
                value = value.pattern
            result[attr.name] = value
        return result


OVERRIDABLE_ATTRIBUTES = frozenset(attr.name for attr in fields(Rule)) - {"when_field"}


def normalize_overrides(overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Validate and coerce a ``when_field`` override mapping."""
    unknown = set(overrides) - OVERRIDABLE_ATTRIBUTES
    if unknown:
        names = ", ".join(sorted(unknown))
        raise SchemaBuilderError(f"Unknown rule attribute(s) in override: {names}")

    normalized: Dict[str, Any] = dict(overrides)
    if "kind" in normalized and normalized["kind"] is not None:
        normalized["kind"] = Kind(normalized["kind"])
    if normalized.get("pattern") is not None:
        normalized["pattern"] = _compile(normalized["pattern"])
    for name in ("is_in", "not_in"):
        if normalized.get(name) is not None:
            normalized[name] = tuple(normalized[name])
    return normalized


def _compile(pattern: PatternLike) -> re.Pattern[str]:
    if isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(pattern)


class SchemaBuilder:
    """Fluent API accumulating field rules in insertion order.

    Type calls (``string``, ``number``, ``boolean``, ``date``) append a rule.
    Every other call modifies the most recently inserted rule, whatever name
    was last passed to ``field``.
    """

    def __init__(self) -> None:
        self._rules: Dict[str, Rule] = {}
        self._pending: str | None = None

    @property
    def schema(self) -> Mapping[str, Rule]:
        """Read-only view of the accumulated rules."""
        return MappingProxyType(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def field(self: BuilderT, name: str) -> BuilderT:
        """Name the field declared by the next type call."""
        self._pending = name
        return self

    def string(self: BuilderT) -> BuilderT:
        return self._add_rule(Kind.STRING)

    def number(self: BuilderT) -> BuilderT:
        return self._add_rule(Kind.NUMBER)

    def boolean(self: BuilderT) -> BuilderT:
        return self._add_rule(Kind.BOOLEAN)

    def date(self: BuilderT) -> BuilderT:
        return self._add_rule(Kind.DATE)

    def required(self: BuilderT) -> BuilderT:
        self._active_rule().required = True
        return self

    def min(self: BuilderT, value: float | int) -> BuilderT:
        self._active_rule().min = value
        return self

    def max(self: BuilderT, value: float | int) -> BuilderT:
        self._active_rule().max = value
        return self

    def pattern(self: BuilderT, regex: PatternLike) -> BuilderT:
        self._active_rule().pattern = _compile(regex)
        return self

    def custom(self: BuilderT, fn: CustomCheck) -> BuilderT:
        """Attach a check returning True, an error message, or anything else for a generic failure."""
        self._active_rule().custom = fn
        return self

    def equals(self: BuilderT, value: Any) -> BuilderT:
        self._active_rule().equals = value
        return self

    def not_equals(self: BuilderT, value: Any) -> BuilderT:
        self._active_rule().not_equals = value
        return self

    def is_in(self: BuilderT, values: Iterable[Any]) -> BuilderT:
        self._active_rule().is_in = tuple(values)
        return self

    def not_in(self: BuilderT, values: Iterable[Any]) -> BuilderT:
        self._active_rule().not_in = tuple(values)
        return self

    def transform(self: BuilderT, fn: Transform) -> BuilderT:
        """Apply ``fn`` to the raw value before any check runs."""
        self._active_rule().transform = fn
        return self

    def when_field(
        self: BuilderT,
        field: str,
        is_: Any,
        then: Mapping[str, Any],
        otherwise: Mapping[str, Any] | None = None,
    ) -> BuilderT:
        """Override rule attributes when ``data[field]`` equals ``is_``.

        ``then`` and ``otherwise`` map rule attribute names (``required``,
        ``min``, ``pattern``...) to the values used for that validation.
        """
        rule = self._active_rule()
        rule.when_field = ConditionalRule(
            field=field,
            is_=is_,
            then=MappingProxyType(normalize_overrides(then)),
            otherwise=MappingProxyType(normalize_overrides(otherwise)) if otherwise is not None else None,
        )
        return self

    def date_format(self: BuilderT, fmt: str) -> BuilderT:
        # Stored for callers; parsing never consults it.
        self._active_rule().date_format = fmt
        return self

    def future(self: BuilderT) -> BuilderT:
        self._active_rule().future = True
        return self

    def past(self: BuilderT) -> BuilderT:
        self._active_rule().past = True
        return self

    def _add_rule(self: BuilderT, kind: Kind) -> BuilderT:
        name = self._pending or f"field_{len(self._rules)}"
        self._rules[name] = Rule(kind=kind)
        self._pending = None
        logger.debug("Declared field %r as %s", name, kind)
        return self

    def _active_rule(self) -> Rule:
        if not self._rules:
            raise SchemaBuilderError("No field declared yet: call string(), number(), boolean() or date() first")
        return self._rules[next(reversed(self._rules))]
