"""Evaluation of a single field value against its rule.

Checks run in a fixed order and each failure overwrites the previous message,
so the message returned is the one from the last failing check. Only a
missing required value and a type mismatch stop evaluation early.
"""

from __future__ import annotations

import datetime as dt
import math
import warnings
from collections.abc import Sized
from typing import Any, Callable, Dict, Iterable

import pandas as pd

from .schema import UNSET, Kind, Rule

MSG_REQUIRED = "Ce champ est requis"
MSG_INVALID_DATE = "Le format de date est invalide"
MSG_TYPE = "Le type doit être {kind}"
MSG_EQUALS = "La valeur doit être égale à {value}"
MSG_NOT_EQUALS = "La valeur ne doit pas être égale à {value}"
MSG_IS_IN = "La valeur doit être l'une des suivantes: {values}"
MSG_NOT_IN = "La valeur ne doit pas être l'une des suivantes: {values}"
MSG_FUTURE = "La date doit être dans le futur"
MSG_PAST = "La date doit être dans le passé"
MSG_MIN = "La valeur minimale est {value}"
MSG_MAX = "La valeur maximale est {value}"
MSG_PATTERN = "La valeur ne correspond pas au format requis"
MSG_CUSTOM = "Validation personnalisée échouée"

# Relative keywords pandas resolves against the clock.
DATE_KEYWORDS = frozenset({"now", "today"})


def parse_date(value: Any) -> pd.Timestamp | None:
    """Parse ``value`` into a timestamp, or None when it is not a date."""
    if isinstance(value, bool):
        return None
    if not isinstance(value, (str, int, float, dt.date)):
        return None
    if isinstance(value, str) and value.strip().lower() in DATE_KEYWORDS:
        return None
    try:
        with warnings.catch_warnings():
            # Free-form strings trigger a format inference warning per call.
            warnings.simplefilter("ignore", UserWarning)
            parsed = pd.to_datetime(value, errors="coerce")
    except (TypeError, ValueError, OverflowError):
        return None
    if parsed is None or pd.isna(parsed):
        return None
    return parsed


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


TYPE_CHECKS: Dict[Kind, Callable[[Any], bool]] = {
    Kind.STRING: lambda value: isinstance(value, str),
    Kind.NUMBER: _is_number,
    Kind.BOOLEAN: lambda value: isinstance(value, bool),
    Kind.DATE: lambda value: parse_date(value) is not None,
}


def strict_equals(left: Any, right: Any) -> bool:
    """Equality that never treats booleans as numbers."""
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    try:
        return bool(left == right)
    except (TypeError, ValueError):
        return False


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def contains(values: Iterable[Any], value: Any) -> bool:
    """Membership where NaN matches NaN, unlike ``strict_equals``."""
    if _is_nan(value):
        return any(_is_nan(candidate) for candidate in values)
    return any(strict_equals(candidate, value) for candidate in values)


def format_value(value: Any) -> str:
    """Render a literal the way messages display it (``true``, ``null``, ``3``)."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(format_value(item) for item in value)
    return str(value)


def join_values(values: Iterable[Any]) -> str:
    return ", ".join(format_value(value) for value in values)


def _measure(value: Any) -> float | int | None:
    # Sized values are bounded by length, numbers by magnitude.
    if isinstance(value, Sized):
        return len(value)
    if isinstance(value, (int, float)):
        return value
    return None


def _now_for(moment: pd.Timestamp) -> pd.Timestamp:
    if moment.tzinfo is not None:
        return pd.Timestamp.now(tz=moment.tzinfo)
    return pd.Timestamp.now()


def is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def check_value(value: Any, rule: Rule) -> str | None:
    """Return the error message for ``value`` under ``rule``, or None if it passes.

    ``value`` is expected to be already transformed and ``rule`` already
    resolved against any conditional override.
    """
    if rule.required and is_missing(value):
        return MSG_REQUIRED

    if value is None:
        return None

    if rule.kind is not None and not TYPE_CHECKS[rule.kind](value):
        if rule.kind is Kind.DATE:
            return MSG_INVALID_DATE
        return MSG_TYPE.format(kind=rule.kind.value)

    error: str | None = None

    if rule.equals is not UNSET and not strict_equals(value, rule.equals):
        error = MSG_EQUALS.format(value=format_value(rule.equals))

    if rule.not_equals is not UNSET and strict_equals(value, rule.not_equals):
        error = MSG_NOT_EQUALS.format(value=format_value(rule.not_equals))

    if rule.is_in is not None and not contains(rule.is_in, value):
        error = MSG_IS_IN.format(values=join_values(rule.is_in))

    if rule.not_in is not None and contains(rule.not_in, value):
        error = MSG_NOT_IN.format(values=join_values(rule.not_in))

    if rule.kind is Kind.DATE and (rule.future or rule.past):
        moment = parse_date(value)
        if moment is not None:
            if rule.future and moment <= _now_for(moment):
                error = MSG_FUTURE
            if rule.past and moment >= _now_for(moment):
                error = MSG_PAST

    measure = _measure(value)
    if rule.min is not None and measure is not None and measure < rule.min:
        error = MSG_MIN.format(value=format_value(rule.min))

    if rule.max is not None and measure is not None and measure > rule.max:
        error = MSG_MAX.format(value=format_value(rule.max))

    if rule.pattern is not None:
        text = value if isinstance(value, str) else format_value(value)
        if rule.pattern.search(text) is None:
            error = MSG_PATTERN

    if rule.custom is not None:
        outcome = rule.custom(value)
        if outcome is not True:
            error = outcome if isinstance(outcome, str) else MSG_CUSTOM

    return error
